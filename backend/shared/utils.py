from models.delivery import RunSummary


def print_run_summary(summary: RunSummary, frequency_filter: str) -> None:
    """Print dispatch run summary."""
    print(f"\n{'=' * 60}")
    print(f"[{summary.timestamp.isoformat()}] Dispatch Complete ({frequency_filter})")
    print(f"{'=' * 60}")
    print(f"Processed: {summary.processed}")
    print(f"✓ Sent:    {summary.sent}")
    print(f"✗ Failed:  {summary.failed}")
    print(f"⊘ Skipped (not due): {summary.skipped}")
    print(f"{'=' * 60}\n")
