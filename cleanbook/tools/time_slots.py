"""
Hourly slot filtering for one selected date.

A slot is offered when at least one working staff member is inside
their own hours and clear of every booking on that date, including each
booking's travel buffer. Bookings are not matched to the staff member
who holds them, so a single booking narrows the whole roster.

Any failure while loading the day's data yields no slots.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional

from cleanbook.config import settings
from cleanbook.schemas.booking_schema import ExistingBooking, UnavailabilityOverride
from cleanbook.schemas.staff_schema import StaffMember
from cleanbook.tools.availability import (
    day_availability,
    minimum_notice_hours,
    staff_working_on,
    travel_buffer_minutes,
)
from cleanbook.tools.stores import Stores
from cleanbook.utils import date_key, time_to_minutes, weekday_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AvailabilitySnapshot:
    """Roster, bookings, and override for one date, fetched together."""

    day: date
    staff: tuple[StaffMember, ...]
    bookings: tuple[ExistingBooking, ...]
    override: Optional[UnavailabilityOverride] = None


async def fetch_snapshot(stores: Stores, day: date) -> AvailabilitySnapshot:
    key = date_key(day)
    staff, bookings, override = await asyncio.gather(
        stores.staff.list_active(),
        stores.bookings.list_for_date(key),
        stores.overrides.get(key),
    )
    return AvailabilitySnapshot(
        day=day, staff=tuple(staff), bookings=tuple(bookings), override=override
    )


def candidate_hours() -> list[int]:
    """The fixed hourly grid, opening hour to closing hour inclusive."""
    return list(range(settings.schedule.opening_hour, settings.schedule.closing_hour + 1))


def _within(value: float, start: float, end: float) -> bool:
    return start <= value < end


def _collides(slot_minutes: int, bookings: Iterable[ExistingBooking], buffer: float) -> bool:
    for booking in bookings:
        if not booking.start_time or not booking.end_time:
            continue
        start = max(0, time_to_minutes(booking.start_time) - buffer)
        end = time_to_minutes(booking.end_time) + buffer
        if _within(slot_minutes, start, end):
            return True
    return False


def _staff_free_at(
    member: StaffMember, weekday: str, slot_minutes: int, bookings: tuple[ExistingBooking, ...]
) -> bool:
    avail = day_availability(member, weekday)
    if avail is None or not avail.available:
        return False
    if not _within(slot_minutes, time_to_minutes(avail.start), time_to_minutes(avail.end)):
        return False
    return not _collides(slot_minutes, bookings, travel_buffer_minutes(member))


def compute_available_slots(
    snapshot: AvailabilitySnapshot,
    now: Optional[datetime] = None,
    blocked_dates: Optional[set[str]] = None,
) -> list[str]:
    """Bookable hour labels (``"9"``, ``"14"``) for the snapshot's date, ascending."""
    now = now or datetime.now()
    day = snapshot.day
    key = date_key(day)
    if blocked_dates and key in blocked_dates:
        return []

    day_staff = staff_working_on(snapshot.staff, day)
    if not day_staff:
        return []

    schedule = settings.schedule
    removed = (
        snapshot.override.removed_slots(schedule.opening_hour, schedule.closing_hour)
        if snapshot.override
        else set()
    )
    cutoff = now + timedelta(hours=minimum_notice_hours(day_staff))
    bookings = tuple(b for b in snapshot.bookings if b.date == key)
    weekday = weekday_name(day)

    slots = []
    for hour in candidate_hours():
        if f"{hour}:00" in removed:
            continue
        if datetime.combine(day, time(hour=hour)) < cutoff:
            continue
        slot_minutes = hour * 60
        if any(_staff_free_at(m, weekday, slot_minutes, bookings) for m in day_staff):
            slots.append(str(hour))
    return slots


async def load_available_slots(
    stores: Stores,
    day: date,
    now: Optional[datetime] = None,
    blocked_dates: Optional[set[str]] = None,
) -> list[str]:
    """Fetch a consistent snapshot for the date and filter its slots; empty on failure."""
    try:
        snapshot = await fetch_snapshot(stores, day)
        return compute_available_slots(snapshot, now, blocked_dates)
    except Exception:
        logger.exception("Failed to load time slots for %s", date_key(day))
        return []
