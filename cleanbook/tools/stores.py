"""
In-memory stores for the roster, bookings, overrides, ledger, and coverage.

In production these would sit on a document database (the staff,
bookings, unavailability, finances, and postcodes collections). The
async interface matches that: every read and write is awaited, and
callers never hold a live reference into a store mid-computation.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Union

from cleanbook.schemas.booking_schema import (
    ConfirmedBookingRecord,
    ExistingBooking,
    LedgerEntry,
    UnavailabilityOverride,
)
from cleanbook.schemas.staff_schema import StaffMember

logger = logging.getLogger(__name__)


class StaffStore:
    """Staff roster. Administrators edit it elsewhere; this side only reads."""

    def __init__(self, members: Iterable[Union[StaffMember, dict]] = ()) -> None:
        self._members: dict[str, StaffMember] = {}
        for member in members:
            self.add(member)

    def add(self, member: Union[StaffMember, dict]) -> StaffMember:
        if isinstance(member, dict):
            member = StaffMember.model_validate(member)
        self._members[member.id] = member
        return member

    async def list_active(self) -> list[StaffMember]:
        return [m.model_copy(deep=True) for m in self._members.values() if m.active]


class BookingStore:
    """Confirmed bookings, queryable by exact date."""

    def __init__(self, existing: Iterable[Union[ExistingBooking, dict]] = ()) -> None:
        self._existing: list[ExistingBooking] = []
        self._records: dict[str, ConfirmedBookingRecord] = {}
        for booking in existing:
            self.add_existing(booking)

    def add_existing(self, booking: Union[ExistingBooking, dict]) -> None:
        if isinstance(booking, dict):
            booking = ExistingBooking.model_validate(booking)
        self._existing.append(booking)

    async def list_for_date(self, key: str) -> list[ExistingBooking]:
        found = [b.model_copy() for b in self._existing if b.date == key]
        found.extend(
            ExistingBooking(
                date=r.date,
                start_time=r.start_time,
                end_time=r.end_time,
                service_type=r.service_type,
            )
            for r in self._records.values()
            if r.date == key
        )
        return found

    async def save(self, record: ConfirmedBookingRecord) -> None:
        self._records[record.order_id] = record
        logger.info("Booking stored: %s on %s at %s", record.order_id, record.date, record.start_time)

    def get(self, order_id: str) -> Optional[ConfirmedBookingRecord]:
        return self._records.get(order_id)

    def all_records(self) -> list[ConfirmedBookingRecord]:
        return list(self._records.values())


class OverrideStore:
    """Per-date manual unavailability, keyed by ``YYYY-MM-DD``."""

    def __init__(self, records: Optional[dict[str, dict[str, Any]]] = None) -> None:
        self._records: dict[str, dict[str, Any]] = dict(records or {})

    def set(self, key: str, data: dict[str, Any]) -> None:
        self._records[key] = dict(data)

    async def get(self, key: str) -> Optional[UnavailabilityOverride]:
        data = self._records.get(key)
        if data is None:
            return None
        return UnavailabilityOverride.from_record(key, data)


class LedgerStore:
    """Finances ledger (income and expense lines)."""

    def __init__(self) -> None:
        self.entries: list[LedgerEntry] = []

    async def add(self, entry: LedgerEntry) -> None:
        self.entries.append(entry)
        logger.debug("Ledger %s: %s %.2f", entry.type.value, entry.name, entry.amount)


class CoverageStore:
    """Outward postcodes the business serves."""

    def __init__(self, outward_codes: Iterable[str] = ()) -> None:
        self._codes = {c.strip().upper() for c in outward_codes}

    async def is_covered(self, outward: str) -> bool:
        return outward.strip().upper() in self._codes


@dataclass
class Stores:
    """All stores one booking form reads from and writes to."""

    staff: StaffStore = field(default_factory=StaffStore)
    bookings: BookingStore = field(default_factory=BookingStore)
    overrides: OverrideStore = field(default_factory=OverrideStore)
    ledger: LedgerStore = field(default_factory=LedgerStore)
    coverage: CoverageStore = field(default_factory=CoverageStore)
