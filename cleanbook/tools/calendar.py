"""
Calendar blocking: which dates in the rolling window cannot be booked at all.

Loading the roster fails open: on error no date is blocked and the
per-date slot lookup decides.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional

from cleanbook.config import settings
from cleanbook.schemas.staff_schema import StaffMember
from cleanbook.tools.availability import active_staff, minimum_notice_hours, staff_working_on
from cleanbook.tools.stores import StaffStore
from cleanbook.utils import date_key

logger = logging.getLogger(__name__)


def scan_window(today: date) -> list[date]:
    """Every date from ``SCAN_DAYS_BEFORE`` days ago up to ``SCAN_DAYS_AFTER`` days ahead."""
    schedule = settings.schedule
    return [
        today + timedelta(days=offset)
        for offset in range(-schedule.scan_days_before, schedule.scan_days_after)
    ]


def is_date_blocked(day: date, staff: Iterable[StaffMember], now: datetime) -> bool:
    roster = active_staff(staff)
    if day < now.date():
        return True
    if not staff_working_on(roster, day):
        return True
    cutoff = now + timedelta(hours=minimum_notice_hours(roster))
    end_of_day = datetime.combine(day, time(hour=settings.schedule.closing_hour))
    return end_of_day < cutoff


def compute_blocked_dates(
    staff: Iterable[StaffMember], now: Optional[datetime] = None
) -> set[str]:
    """Date keys in the scan window that have no bookable hour at all."""
    now = now or datetime.now()
    roster = active_staff(staff)
    blocked = {
        date_key(day) for day in scan_window(now.date()) if is_date_blocked(day, roster, now)
    }
    logger.debug("Blocked %d dates across the scan window", len(blocked))
    return blocked


async def load_blocked_dates(
    staff_store: StaffStore, now: Optional[datetime] = None
) -> set[str]:
    """Fetch the roster and compute blocked dates; nothing is blocked on failure."""
    try:
        staff = await staff_store.list_active()
        return compute_blocked_dates(staff, now)
    except Exception:
        logger.warning("Blocked-date scan failed; leaving calendar open", exc_info=True)
        return set()
