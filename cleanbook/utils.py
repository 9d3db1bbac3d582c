"""Shared utilities used across the booking engine."""

import math
import re
from datetime import date, datetime
from typing import Optional

DATE_KEY_FORMAT = "%Y-%m-%d"

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def normalize_phone(value: Optional[str]) -> str:
    """Normalize a phone number to a single international (UK-first) format.

    Examples:
        >>> normalize_phone("07123 456789")
        '+447123456789'
        >>> normalize_phone("442071234567")
        '+442071234567'
        >>> normalize_phone(" +1 212 555 0100 ")
        '+1 212 555 0100'
    """
    if not value:
        return ""
    digits = re.sub(r"[^\d]", "", value)
    if digits.startswith("0") and len(digits) >= 10:
        return "+44" + digits[1:]
    if digits.startswith("44"):
        return "+" + digits
    if value.strip().startswith("+"):
        return value.strip()
    return "+" + digits


def date_key(day: date) -> str:
    """Canonical ``YYYY-MM-DD`` key for a local calendar date."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def parse_date_key(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` key. Raises ValueError on bad input."""
    return datetime.strptime(value.strip(), DATE_KEY_FORMAT).date()


def weekday_name(day: date) -> str:
    """Lower-case English weekday name, e.g. ``monday``."""
    return day.strftime("%A").lower()


def is_weekend(day: Optional[date]) -> bool:
    if day is None:
        return False
    return day.weekday() >= 5


def time_to_minutes(value: str) -> int:
    """Convert ``H``, ``HH:MM`` or ``HH:MM:SS`` to minutes past midnight."""
    parts = value.strip().split(":")
    hours = int(parts[0])
    minutes = int(parts[1]) if len(parts) > 1 and parts[1] else 0
    return hours * 60 + minutes


def add_hours_to_time(hhmm: str, hours: float) -> str:
    """Add a fractional number of hours to a clock time, rounded to the minute.

    The result does not wrap at midnight: a 5.5 hour job from 20:00 ends
    at ``"25:30"``.
    """
    minutes = time_to_minutes(hhmm) + math.floor((hours or 0) * 60 + 0.5)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def round_up_to_half(value: float) -> float:
    """Round up to the nearest half hour."""
    return math.ceil(value * 2) / 2


def round_money(value: float) -> float:
    """Round a currency amount to 2 decimal places, halves away from zero."""
    return math.floor(value * 100 + 0.5) / 100


def to_pence(value: float) -> int:
    """Whole pence for a pound amount, halves rounded up."""
    return math.floor(value * 100 + 0.5)


def display_date(day: Optional[date]) -> str:
    """Human-readable date, e.g. ``20 October 2026``."""
    if day is None:
        return "No date selected"
    return f"{day.day} {MONTH_NAMES[day.month - 1]} {day.year}"


def display_hour(hour: str) -> str:
    """Human-readable slot label, e.g. ``"14"`` -> ``"2:00 PM"``."""
    h = int(hour)
    twelve = h - 12 if h > 12 else h
    suffix = "PM" if h >= 12 else "AM"
    return f"{twelve}:00 {suffix}"
