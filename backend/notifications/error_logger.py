"""
Error logging utility for verse dispatch.

Writes dispatch failures to timestamped report files so an operator can
diagnose individual subscriber failures after a run.
"""

import os
from datetime import datetime
from typing import Any

from shared.settings import DEFAULT_ERROR_LOG_DIR


def log_dispatch_error(
    error_type: str,
    error_message: str,
    context: dict[str, Any] | None = None,
    log_dir: str = DEFAULT_ERROR_LOG_DIR,
) -> str:
    """
    Log a dispatch error to a timestamped file.

    Args:
        error_type: Type of error (e.g., 'content', 'destination', 'sending', 'logging')
        error_message: The error message
        context: Optional dictionary with additional context (subscriber_id, contact, etc.)
        log_dir: Directory the report is written to (created if missing)

    Returns:
        Path to the log file created
    """
    os.makedirs(log_dir, exist_ok=True)

    # Microseconds keep reports from the same second apart
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    filename = os.path.join(log_dir, f"dispatch_error_{error_type}_{timestamp}.txt")

    with open(filename, "w", encoding="utf-8") as f:
        f.write(f"Dispatch Error Report - {datetime.now()}\n")
        f.write("=" * 60 + "\n\n")
        f.write(f"Error Type: {error_type}\n")
        f.write(f"Error Message: {error_message}\n\n")

        if context:
            f.write("Context:\n")
            f.write("-" * 60 + "\n")
            for key, value in context.items():
                f.write(f"{key}: {value}\n")

    return filename
