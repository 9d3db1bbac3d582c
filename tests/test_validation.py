"""Tests for booking request validation."""

import pytest

from cleanbook.booking.validation import (
    BookingRequest,
    BookingValidationError,
    missing_fields,
    validate_request,
)
from cleanbook.schemas.booking_schema import Address, Contact
from cleanbook.schemas.job_schema import AccessMethod, JobDescription, RoomEntry, SuppliesChoice
from cleanbook.tools.catalog import OFFICE, PROMOTIONAL, RESIDENTIAL
from tests.conftest import WEDNESDAY


def _request(contact, address, job, **overrides) -> BookingRequest:
    fields = dict(
        contact=contact,
        address=address,
        job=job,
        selected_date=WEDNESDAY,
        selected_time="10",
        access=AccessMethod.HOME,
    )
    fields.update(overrides)
    return BookingRequest(**fields)


def _problems(request, config) -> list[str]:
    with pytest.raises(BookingValidationError) as exc_info:
        validate_request(request, config)
    return exc_info.value.fields


class TestValidRequests:
    def test_complete_residential_request(self, contact, address, bedroom_job):
        validate_request(_request(contact, address, bedroom_job), RESIDENTIAL)

    def test_residential_does_not_need_supplies_choice(self, contact, address):
        job = JobDescription(rooms=[RoomEntry(room_type="bedroom", size_class="m")])
        validate_request(_request(contact, address, job), RESIDENTIAL)

    def test_key_access_with_instructions(self, contact, address, bedroom_job):
        request = _request(
            contact, address, bedroom_job,
            access=AccessMethod.KEY, access_notes="Key safe by the back door, code 1234",
        )
        validate_request(request, RESIDENTIAL)


class TestMissingFields:
    def test_missing_postcode(self, contact, bedroom_job):
        address = Address(line1="1 Example Street", town="Manchester")
        assert _problems(_request(contact, address, bedroom_job), RESIDENTIAL) == ["postcode"]

    def test_whitespace_counts_as_missing(self, address, bedroom_job):
        contact = Contact(name="  ", email="jo@example.com", phone="07123456789")
        assert _problems(_request(contact, address, bedroom_job), RESIDENTIAL) == ["name"]

    def test_all_problems_reported_together(self, bedroom_job):
        request = _request(Contact(), Address(), bedroom_job, selected_date=None, selected_time=None)
        assert _problems(request, RESIDENTIAL) == [
            "date", "time", "name", "email", "phone", "line1", "town", "postcode",
        ]

    @pytest.mark.parametrize("slot", ["6", "21", "ten", "", "10:00"])
    def test_slot_outside_grid(self, contact, address, bedroom_job, slot):
        request = _request(contact, address, bedroom_job, selected_time=slot)
        assert _problems(request, RESIDENTIAL) == ["time"]

    def test_office_needs_supplies_choice(self, contact, address):
        job = JobDescription(rooms=[RoomEntry(room_type="meeting", size_class="m")])
        assert _problems(_request(contact, address, job), OFFICE) == ["supplies"]

    def test_access_method_required(self, contact, address, bedroom_job):
        request = _request(contact, address, bedroom_job, access=None)
        assert _problems(request, RESIDENTIAL) == ["access"]

    @pytest.mark.parametrize("access", [AccessMethod.KEY, AccessMethod.ALTERNATIVE])
    def test_access_needing_instructions(self, contact, address, bedroom_job, access):
        request = _request(contact, address, bedroom_job, access=access)
        assert _problems(request, RESIDENTIAL) == ["access_notes"]

    def test_promotional_single_room(self, contact, address):
        job = JobDescription(
            rooms=[RoomEntry(room_type="kitchen", size_class="m")] * 2,
            supplies=SuppliesChoice.CUSTOMER,
        )
        assert _problems(_request(contact, address, job), PROMOTIONAL) == ["rooms"]

    def test_promotional_needs_a_room(self, contact, address):
        job = JobDescription(supplies=SuppliesChoice.CUSTOMER)
        assert _problems(_request(contact, address, job), PROMOTIONAL) == ["rooms"]

    def test_error_message_lists_fields(self, contact, bedroom_job):
        request = _request(contact, Address(), bedroom_job)
        with pytest.raises(BookingValidationError, match="Missing or invalid: line1, town, postcode"):
            validate_request(request, RESIDENTIAL)

    def test_validation_error_is_value_error(self):
        assert issubclass(BookingValidationError, ValueError)

    def test_missing_fields_returns_definitions(self, contact, bedroom_job):
        request = _request(contact, Address(line1="1 Example Street", town="Manchester"), bedroom_job)
        defs = missing_fields(request, RESIDENTIAL)
        assert [d.display_name for d in defs] == ["postcode"]
