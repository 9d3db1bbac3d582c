"""
Staff availability model: who works on which weekday, and when.

Roster records come from an admin tool, so weekday keys may be
lower-case or capitalized and the time fields may be missing.
"""

import logging
import math
from datetime import date
from typing import Iterable, Optional

from cleanbook.config import settings
from cleanbook.schemas.staff_schema import DayAvailability, StaffMember
from cleanbook.utils import weekday_name

logger = logging.getLogger(__name__)

_START_KEYS = ("startTime", "start", "from")
_END_KEYS = ("endTime", "end", "to")


def _first_present(record: dict, keys: tuple[str, ...]) -> Optional[str]:
    for key in keys:
        value = record.get(key)
        if value:
            return str(value)
    return None


def day_availability(staff: StaffMember, weekday: str) -> Optional[DayAvailability]:
    """Resolve a staff member's working window for a lower-case weekday name.

    Returns None when the roster has no well-formed entry for that day.
    Missing start and end times default independently to the operating
    window.
    """
    schedule = staff.availability
    if not isinstance(schedule, dict):
        return None
    entry = schedule.get(weekday)
    if entry is None:
        entry = schedule.get(weekday.capitalize())
    if not isinstance(entry, dict):
        return None

    opening = f"{settings.schedule.opening_hour:02d}:00"
    closing = f"{settings.schedule.closing_hour:02d}:00"
    return DayAvailability(
        available=bool(entry.get("available")),
        start=_first_present(entry, _START_KEYS) or opening,
        end=_first_present(entry, _END_KEYS) or closing,
    )


def active_staff(staff: Iterable[StaffMember]) -> list[StaffMember]:
    return [s for s in staff if s.active]


def staff_working_on(staff: Iterable[StaffMember], day: date) -> list[StaffMember]:
    """Active staff whose roster marks them available on the day's weekday."""
    weekday = weekday_name(day)
    working = []
    for member in active_staff(staff):
        avail = day_availability(member, weekday)
        if avail is not None and avail.available:
            working.append(member)
    return working


def _finite_or(value: Optional[float], default: float) -> float:
    if value is None:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def notice_hours(staff: StaffMember) -> float:
    return _finite_or(staff.min_notice_hours, settings.schedule.default_min_notice_hours)


def travel_buffer_minutes(staff: StaffMember) -> float:
    return _finite_or(staff.travel_buffer_mins, settings.schedule.default_travel_buffer_mins)


def minimum_notice_hours(staff: Iterable[StaffMember]) -> float:
    """Smallest notice period across the given staff, or the default when empty."""
    values = [notice_hours(s) for s in staff]
    if not values:
        return settings.schedule.default_min_notice_hours
    return min(values)
