"""Shared test fixtures and helpers."""

from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from cleanbook.booking.state_machine import SubmissionStateMachine
from cleanbook.schemas.booking_schema import Address, ConfirmedBookingRecord, Contact
from cleanbook.schemas.job_schema import (
    AccessMethod,
    FootfallLevel,
    JobDescription,
    RoomEntry,
    SuppliesChoice,
)
from cleanbook.schemas.staff_schema import StaffMember
from cleanbook.tools.stores import (
    BookingStore,
    CoverageStore,
    LedgerStore,
    OverrideStore,
    StaffStore,
    Stores,
)

# Monday 19 October 2026, 09:00
NOW = datetime(2026, 10, 19, 9, 0)
MONDAY = date(2026, 10, 19)
TUESDAY = date(2026, 10, 20)
WEDNESDAY = date(2026, 10, 21)
THURSDAY = date(2026, 10, 22)
SATURDAY = date(2026, 10, 24)
SUNDAY = date(2026, 10, 25)

_WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday"]


def make_staff(
    staff_id: str = "alice",
    days: Optional[dict] = None,
    **kwargs,
) -> StaffMember:
    """Staff member working the given days; Mon-Fri 09:00-17:00 by default."""
    if days is None:
        days = {
            d: {"available": True, "startTime": "09:00", "endTime": "17:00"}
            for d in _WEEKDAYS
        }
    return StaffMember(id=staff_id, name=staff_id.title(), availability=days, **kwargs)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def roster() -> list[StaffMember]:
    """Alice on weekdays, Bob on Saturdays, and an inactive Carol on Sundays."""
    return [
        make_staff("alice", travelBufferMins=30),
        make_staff("bob", days={"Saturday": {"available": True}}, minNoticeHours=24),
        make_staff("carol", days={"sunday": {"available": True}}, active=False),
    ]


@pytest.fixture
def stores(roster) -> Stores:
    """Roster plus one Wednesday booking from 12:00 to 13:00."""
    return Stores(
        staff=StaffStore(roster),
        bookings=BookingStore([
            {"date": "2026-10-21", "startTime": "12:00", "endTime": "13:00",
             "serviceType": "Cleaning Service"},
        ]),
        overrides=OverrideStore(),
        ledger=LedgerStore(),
        coverage=CoverageStore(["M1", "M20"]),
    )


@pytest.fixture
def contact() -> Contact:
    return Contact(name="Jo Bloggs", email="jo@example.com", phone="07123 456789")


@pytest.fixture
def address() -> Address:
    return Address(line1="1 Example Street", town="Manchester", postcode="m1 1aa")


@pytest.fixture
def bedroom_job() -> JobDescription:
    """One medium bedroom, average footfall, customer's own supplies."""
    return JobDescription(
        rooms=[RoomEntry(room_type="bedroom", size_class="m")],
        footfall=FootfallLevel.AVERAGE,
        supplies=SuppliesChoice.CUSTOMER,
    )


def make_record(**overrides) -> ConfirmedBookingRecord:
    """Helper to create a ConfirmedBookingRecord with sensible defaults."""
    booking_dt = datetime(2026, 10, 21, 10, 0)
    fields = dict(
        order_id="LUX12345",
        submitted_at=NOW,
        variant="residential",
        service_type="Cleaning Service",
        contact=Contact(name="Jo Bloggs", email="jo@example.com", phone="+447123456789"),
        address=Address(line1="1 Example Street", town="Manchester", postcode="M1 1AA"),
        job=JobDescription(
            rooms=[RoomEntry(room_type="bedroom", size_class="m")],
            footfall=FootfallLevel.AVERAGE,
            supplies=SuppliesChoice.CUSTOMER,
            date=booking_dt.date(),
        ),
        room_lines=["Room 1 — Bedroom — Medium (around ~6×6 m (≈36 m²))"],
        access=AccessMethod.HOME,
        date="2026-10-21",
        start_time="10:00",
        end_time="12:00",
        booking_datetime=booking_dt,
        payment_due_at=booking_dt - timedelta(hours=24),
        estimated_hours=2.0,
        base_estimated_hours=2.0,
        team_applied=False,
        labour_rate=28.0,
        labour_charge=56.0,
        add_ons_total=0.0,
        supplies_fee=0.0,
        total_price=56.0,
    )
    fields.update(overrides)
    return ConfirmedBookingRecord(**fields)


@pytest.fixture
def state_machine():
    return SubmissionStateMachine()
