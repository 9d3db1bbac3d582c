"""Tests for the blocked-date scanner."""

from datetime import datetime, timedelta

import pytest

from cleanbook.config import settings
from cleanbook.tools.calendar import (
    compute_blocked_dates,
    is_date_blocked,
    load_blocked_dates,
    scan_window,
)
from cleanbook.tools.stores import StaffStore
from cleanbook.utils import date_key
from tests.conftest import MONDAY, NOW, SATURDAY, SUNDAY, TUESDAY, WEDNESDAY, make_staff


class FailingStaffStore(StaffStore):
    async def list_active(self):
        raise RuntimeError("roster unavailable")


class TestScanWindow:
    def test_window_bounds(self):
        window = scan_window(MONDAY)
        assert window[0] == MONDAY - timedelta(days=settings.schedule.scan_days_before)
        assert window[-1] == MONDAY + timedelta(days=settings.schedule.scan_days_after - 1)
        assert MONDAY in window


class TestIsDateBlocked:
    def test_past_date_blocked(self, roster):
        assert is_date_blocked(MONDAY - timedelta(days=1), roster, NOW)

    def test_day_with_no_active_staff_blocked(self, roster):
        assert is_date_blocked(SUNDAY, roster, NOW)

    def test_working_day_open(self, roster):
        assert not is_date_blocked(WEDNESDAY, roster, NOW)

    def test_today_blocked_when_notice_passes_closing(self, roster):
        # 09:00 + 12h notice is after the 20:00 close
        assert is_date_blocked(MONDAY, roster, NOW)

    def test_today_open_early_enough(self):
        staff = [make_staff(minNoticeHours=2)]
        assert not is_date_blocked(MONDAY, staff, NOW)

    def test_tomorrow_open(self, roster):
        assert not is_date_blocked(TUESDAY, roster, NOW)


class TestComputeBlockedDates:
    def test_past_dates_always_blocked(self, roster):
        blocked = compute_blocked_dates(roster, NOW)
        for offset in range(1, settings.schedule.scan_days_before + 1):
            assert date_key(MONDAY - timedelta(days=offset)) in blocked

    def test_every_sunday_blocked(self, roster):
        blocked = compute_blocked_dates(roster, NOW)
        sundays = [d for d in scan_window(MONDAY) if d.weekday() == 6]
        assert sundays
        assert all(date_key(d) in blocked for d in sundays)

    def test_saturday_open_for_bob(self, roster):
        assert date_key(SATURDAY) not in compute_blocked_dates(roster, NOW)

    def test_empty_roster_blocks_everything(self):
        blocked = compute_blocked_dates([], NOW)
        assert len(blocked) == len(scan_window(MONDAY))

    def test_defaults_to_current_time(self, roster):
        blocked = compute_blocked_dates(roster)
        yesterday = datetime.now().date() - timedelta(days=1)
        assert date_key(yesterday) in blocked


class TestLoadBlockedDates:
    @pytest.mark.asyncio
    async def test_loads_from_store(self, roster):
        blocked = await load_blocked_dates(StaffStore(roster), NOW)
        assert date_key(SUNDAY) in blocked
        assert date_key(WEDNESDAY) not in blocked

    @pytest.mark.asyncio
    async def test_store_failure_blocks_nothing(self):
        assert await load_blocked_dates(FailingStaffStore(), NOW) == set()
