"""
Centralized configuration with environment variable overrides.

Agency details, form endpoint settings, and transport limits are
configurable here. Nothing is hardcoded in form or transport logic.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from celebrity_booking.schemas.form_schema import FIELD_NAMES

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class AgencyConfig:
    """Agency and talent details shown around the form."""

    name: str = os.getenv("AGENCY_NAME", "William Morris Endeavor (WME)")
    artist_name: str = os.getenv("ARTIST_NAME", "Kid Rock")
    response_window_hours: int = _safe_int("RESPONSE_WINDOW_HOURS", "48")


@dataclass(frozen=True)
class FormConfig:
    """Static-site form handler settings."""

    form_name: str = os.getenv("FORM_NAME", "celebrity-booking")
    honeypot_field: str = os.getenv("HONEYPOT_FIELD", "bot-field")
    site_url: str = os.getenv("SITE_URL", "http://localhost:8888")
    submit_path: str = os.getenv("SUBMIT_PATH", "/__forms.html")


@dataclass(frozen=True)
class TransportConfig:
    """Limits for the submission transport."""

    submit_timeout_sec: float = _safe_float("SUBMIT_TIMEOUT_SEC", "15.0")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    agency: AgencyConfig = field(default_factory=AgencyConfig)
    form: FormConfig = field(default_factory=FormConfig)
    transport: TransportConfig = field(default_factory=TransportConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "celebrity-booking-form")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.transport.submit_timeout_sec <= 0:
        raise ValueError(
            f"SUBMIT_TIMEOUT_SEC must be > 0, got {config.transport.submit_timeout_sec}"
        )
    if config.agency.response_window_hours < 1:
        raise ValueError(
            f"RESPONSE_WINDOW_HOURS must be >= 1, got {config.agency.response_window_hours}"
        )
    if not config.form.submit_path.startswith("/"):
        raise ValueError(
            f"SUBMIT_PATH must start with '/', got {config.form.submit_path!r}"
        )
    if not config.form.site_url.startswith(("http://", "https://")):
        raise ValueError(
            f"SITE_URL must be an http(s) URL, got {config.form.site_url!r}"
        )

    for var_name, value in [
        ("FORM_NAME", config.form.form_name),
        ("HONEYPOT_FIELD", config.form.honeypot_field),
    ]:
        if not value.strip():
            raise ValueError(f"{var_name} must not be blank")

    if config.form.honeypot_field in FIELD_NAMES or config.form.honeypot_field == "form-name":
        raise ValueError(
            f"HONEYPOT_FIELD must not collide with a form field, got {config.form.honeypot_field!r}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for form '%s'", config.form.form_name)
    return config


# Singleton instance
settings = load_config()
