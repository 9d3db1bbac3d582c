"""
Centralized configuration with environment variable overrides.

Operating window, notice defaults, order numbering, and integration
endpoints live here. Per-variant pricing tables live in
``cleanbook.tools.catalog``.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from cleanbook.logging_context import install_order_id_filter

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
class ScheduleConfig:
    """Operating window and availability defaults."""

    opening_hour: int = _safe_int("OPENING_HOUR", "7")
    closing_hour: int = _safe_int("CLOSING_HOUR", "20")
    default_min_notice_hours: float = _safe_float("DEFAULT_MIN_NOTICE_HOURS", "12")
    default_travel_buffer_mins: float = _safe_float("DEFAULT_TRAVEL_BUFFER_MINS", "30")
    scan_days_before: int = _safe_int("SCAN_DAYS_BEFORE", "30")
    scan_days_after: int = _safe_int("SCAN_DAYS_AFTER", "60")


@dataclass(frozen=True)
class BookingConfig:
    """Order numbering and payment settings."""

    business_name: str = os.getenv("BUSINESS_NAME", "Luxen Cleaning")
    order_id_prefix: str = os.getenv("ORDER_ID_PREFIX", "LUX")
    payment_due_hours: int = _safe_int("PAYMENT_DUE_HOURS", "24")


@dataclass(frozen=True)
class IntegrationConfig:
    """Outbound webhook and address lookup endpoints."""

    automation_webhook_url: str = os.getenv("AUTOMATION_WEBHOOK_URL", "")
    address_api_url: str = os.getenv("ADDRESS_API_URL", "https://api.getaddress.io").rstrip("/")
    address_api_key: str = os.getenv("ADDRESS_API_KEY", "")
    http_timeout_seconds: float = _safe_float("HTTP_TIMEOUT_SECONDS", "8.0")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    schedule: ScheduleConfig = field(default_factory=ScheduleConfig)
    booking: BookingConfig = field(default_factory=BookingConfig)
    integrations: IntegrationConfig = field(default_factory=IntegrationConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    schedule = config.schedule
    for name, hour in [
        ("OPENING_HOUR", schedule.opening_hour),
        ("CLOSING_HOUR", schedule.closing_hour),
    ]:
        if not 0 <= hour <= 23:
            raise ValueError(f"{name} must be between 0 and 23, got {hour}")
    if schedule.opening_hour >= schedule.closing_hour:
        raise ValueError(
            "OPENING_HOUR must be before CLOSING_HOUR, "
            f"got {schedule.opening_hour} >= {schedule.closing_hour}"
        )
    if schedule.default_min_notice_hours < 0:
        raise ValueError(
            "DEFAULT_MIN_NOTICE_HOURS must be >= 0, "
            f"got {schedule.default_min_notice_hours}"
        )
    if schedule.default_travel_buffer_mins < 0:
        raise ValueError(
            "DEFAULT_TRAVEL_BUFFER_MINS must be >= 0, "
            f"got {schedule.default_travel_buffer_mins}"
        )
    if schedule.scan_days_before < 0:
        raise ValueError(f"SCAN_DAYS_BEFORE must be >= 0, got {schedule.scan_days_before}")
    if schedule.scan_days_after < 1:
        raise ValueError(f"SCAN_DAYS_AFTER must be >= 1, got {schedule.scan_days_after}")

    if not config.booking.order_id_prefix.isalpha():
        raise ValueError(
            f"ORDER_ID_PREFIX must be alphabetic, got {config.booking.order_id_prefix!r}"
        )
    if config.booking.payment_due_hours < 0:
        raise ValueError(
            f"PAYMENT_DUE_HOURS must be >= 0, got {config.booking.payment_due_hours}"
        )
    if config.integrations.http_timeout_seconds <= 0:
        raise ValueError(
            "HTTP_TIMEOUT_SECONDS must be > 0, "
            f"got {config.integrations.http_timeout_seconds}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s [%(order_id)s]: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    install_order_id_filter(logging.getLogger())
    logger.info("Configuration loaded for '%s'", config.booking.business_name)
    return config


# Singleton instance
settings = load_config()
