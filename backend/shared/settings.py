"""
Application settings loaded from environment variables.

Values are read once at startup (after loading a local .env file) and passed
explicitly to the clients that need them.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

DEFAULT_ERROR_LOG_DIR = str(Path(__file__).resolve().parent.parent / "logs")


class ConfigurationError(Exception):
    """Raised when required settings are missing or malformed."""


class Settings(BaseModel):
    """Runtime configuration for the dispatcher and the HTTP app."""

    model_config = ConfigDict(frozen=True)

    supabase_url: str | None = None
    supabase_service_key: str | None = None
    resend_api_key: str | None = None
    from_email: str = "Bible Verse <noreply@bibletext.app>"
    app_base_url: str = "http://localhost:8000"
    cron_secret: str | None = None
    unsubscribe_secret_key: str | None = None
    bible_api_base_url: str = "https://bible-api.com"
    http_timeout_seconds: float = Field(10.0, gt=0)
    content_max_retries: int = Field(2, ge=1)
    send_interval_seconds: float = Field(0.1, ge=0)
    error_log_dir: str = DEFAULT_ERROR_LOG_DIR


# Environment variable -> Settings field
ENV_VARS = {
    "SUPABASE_URL": "supabase_url",
    "SUPABASE_SERVICE_KEY": "supabase_service_key",
    "RESEND_API_KEY": "resend_api_key",
    "FROM_EMAIL": "from_email",
    "APP_BASE_URL": "app_base_url",
    "CRON_SECRET": "cron_secret",
    "UNSUBSCRIBE_SECRET_KEY": "unsubscribe_secret_key",
    "BIBLE_API_BASE_URL": "bible_api_base_url",
    "HTTP_TIMEOUT_SECONDS": "http_timeout_seconds",
    "CONTENT_MAX_RETRIES": "content_max_retries",
    "SEND_INTERVAL_SECONDS": "send_interval_seconds",
    "ERROR_LOG_DIR": "error_log_dir",
}


def load_settings() -> Settings:
    """
    Build Settings from the environment.

    Empty variables are treated as unset so defaults apply.

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If a variable holds a value of the wrong type
    """
    load_dotenv()

    values = {}
    for env_name, field_name in ENV_VARS.items():
        raw = os.getenv(env_name)
        if raw:
            values[field_name] = raw

    if "app_base_url" in values:
        values["app_base_url"] = values["app_base_url"].rstrip("/")

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
