"""
Required-field checks run before any booking side effect.

Each field is described once, with the condition under which the
current variant requires it. ``validate_request`` collects every
problem at once so the customer sees the full list.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Optional

from cleanbook.config import settings
from cleanbook.schemas.booking_schema import Address, Contact
from cleanbook.schemas.job_schema import ACCESS_NEEDS_INSTRUCTIONS, AccessMethod, JobDescription
from cleanbook.tools.catalog import PricingConfig

logger = logging.getLogger(__name__)


@dataclass
class BookingRequest:
    """Everything the customer entered, before validation."""

    contact: Contact
    address: Address
    job: JobDescription
    selected_date: Optional[date] = None
    selected_time: Optional[str] = None
    access: Optional[AccessMethod] = None
    access_notes: str = ""
    additional_info: str = ""


class BookingValidationError(ValueError):
    """Raised when required booking input is missing or invalid."""

    def __init__(self, fields: list[str]) -> None:
        self.fields = fields
        super().__init__(f"Missing or invalid: {', '.join(fields)}")


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def _valid_slot(value: Any) -> bool:
    if not _present(value) or not str(value).strip().isdigit():
        return False
    hour = int(value)
    return settings.schedule.opening_hour <= hour <= settings.schedule.closing_hour


def _always(config: PricingConfig, request: BookingRequest) -> bool:
    return True


@dataclass(frozen=True)
class FieldDefinition:
    """One input the submission may require."""

    name: str
    display_name: str
    extract: Callable[[BookingRequest], Any]
    check: Callable[[Any], bool] = _present
    required_when: Callable[[PricingConfig, BookingRequest], bool] = field(default=_always)


FIELD_DEFINITIONS: list[FieldDefinition] = [
    FieldDefinition("date", "date", lambda r: r.selected_date),
    FieldDefinition("time", "time slot", lambda r: r.selected_time, check=_valid_slot),
    FieldDefinition("name", "name", lambda r: r.contact.name),
    FieldDefinition("email", "email", lambda r: r.contact.email),
    FieldDefinition("phone", "phone number", lambda r: r.contact.phone),
    FieldDefinition("line1", "address line 1", lambda r: r.address.line1),
    FieldDefinition("town", "town / city", lambda r: r.address.town),
    FieldDefinition("postcode", "postcode", lambda r: r.address.postcode),
    FieldDefinition(
        "supplies", "cleaning supplies choice", lambda r: r.job.supplies,
        required_when=lambda c, r: c.requires_supplies_choice,
    ),
    FieldDefinition(
        "access", "access method", lambda r: r.access,
        required_when=lambda c, r: c.requires_access,
    ),
    FieldDefinition(
        "access_notes", "access instructions", lambda r: r.access_notes,
        required_when=lambda c, r: c.requires_access and r.access in ACCESS_NEEDS_INSTRUCTIONS,
    ),
]


def missing_fields(request: BookingRequest, config: PricingConfig) -> list[FieldDefinition]:
    """Required fields that are absent or invalid for this variant."""
    return [
        defn
        for defn in FIELD_DEFINITIONS
        if defn.required_when(config, request) and not defn.check(defn.extract(request))
    ]


def validate_request(request: BookingRequest, config: PricingConfig) -> None:
    """Raise BookingValidationError listing every problem with the request."""
    problems = [d.name for d in missing_fields(request, config)]

    room_count = len(request.job.rooms)
    if room_count < config.min_rooms or (
        config.max_rooms is not None and room_count > config.max_rooms
    ):
        problems.append("rooms")

    if problems:
        logger.info("Booking rejected, missing or invalid: %s", ", ".join(problems))
        raise BookingValidationError(problems)
