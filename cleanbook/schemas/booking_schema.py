"""Booking, override, and ledger data models."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from cleanbook.schemas.job_schema import AccessMethod, JobDescription


class BookingStatus(str, Enum):
    """Confirmed means payment is pending, not paid."""
    CONFIRMED = "confirmed"


class LedgerEntryType(str, Enum):
    INCOME = "Income"
    EXPENSE = "Expense"


class ExistingBooking(BaseModel):
    """A confirmed booking as seen by the conflict filter."""

    model_config = ConfigDict(populate_by_name=True)

    date: str
    start_time: Optional[str] = Field(default=None, alias="startTime")
    end_time: Optional[str] = Field(default=None, alias="endTime")
    service_type: Optional[str] = Field(default=None, alias="serviceType")


class UnavailabilityOverride(BaseModel):
    """Hours manually marked as booked for one date.

    Newer records keep a ``bookedTimeSlots`` map; older ones carry
    ``"9:00": true`` style flags directly on the record.
    """

    date: str
    booked_time_slots: Optional[dict[str, Any]] = None
    legacy_slots: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_record(cls, key: str, data: dict[str, Any]) -> "UnavailabilityOverride":
        booked = data.get("bookedTimeSlots")
        legacy = {k: v for k, v in data.items() if k != "bookedTimeSlots"}
        return cls(
            date=key,
            booked_time_slots=booked if isinstance(booked, dict) else None,
            legacy_slots=legacy,
        )

    def removed_slots(self, opening_hour: int, closing_hour: int) -> set[str]:
        """Slot keys (``"9:00"``) that are flagged as booked."""
        if self.booked_time_slots is not None:
            return {k for k, v in self.booked_time_slots.items() if v}
        removed = set()
        for hour in range(opening_hour, closing_hour + 1):
            key = f"{hour}:00"
            if self.legacy_slots.get(key):
                removed.add(key)
        return removed


class Contact(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""


class Address(BaseModel):
    line1: str = ""
    line2: str = ""
    town: str = ""
    county: str = ""
    postcode: str = ""
    full_address: str = ""

    def formatted(self) -> str:
        """Single-line address, preferring the provider's own formatting."""
        if self.full_address:
            return self.full_address
        parts = [self.line1, self.line2, self.town, self.county, self.postcode]
        return ", ".join(p for p in parts if p)


class RoomSummary(BaseModel):
    """Rooms of one type grouped for display and storage."""
    room_type: str
    label: str
    count: int
    sizes: list[str] = Field(default_factory=list)


class ConfirmedBookingRecord(BaseModel):
    """The persisted result of a successful submission."""

    order_id: str
    submitted_at: datetime
    variant: str
    service_type: str
    contact: Contact
    address: Address
    job: JobDescription
    room_summaries: list[RoomSummary] = Field(default_factory=list)
    room_lines: list[str] = Field(default_factory=list)
    add_on_lines: list[str] = Field(default_factory=list)
    access: Optional[AccessMethod] = None
    access_notes: str = ""
    additional_info: str = ""
    date: str
    start_time: str
    end_time: str
    booking_datetime: datetime
    payment_due_at: datetime
    estimated_hours: float
    base_estimated_hours: float
    team_applied: bool
    labour_rate: float
    labour_charge: float
    add_ons_total: float
    supplies_fee: float
    total_price: float
    status: BookingStatus = BookingStatus.CONFIRMED


class LedgerEntry(BaseModel):
    """Income or expense line written to the finances ledger."""
    type: LedgerEntryType
    name: str
    amount: float
    frequency: str = "One-time"
    created_at: datetime
