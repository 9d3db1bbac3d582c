"""
Booking submission: validate, price, persist, then notify.

The booking counts as made once the record is stored. The webhook
call, the income line, and the staff-pay line are attempted
independently afterwards; their failures are logged and never reach
the customer or undo the stored booking.
"""

import asyncio
import logging
import random
from datetime import date, datetime, time, timedelta
from typing import Any, Awaitable, Callable, Optional, Union

from cleanbook.booking.state_machine import SubmissionStateMachine, SubmissionTrigger
from cleanbook.booking.validation import BookingRequest, BookingValidationError, validate_request
from cleanbook.config import settings
from cleanbook.logging_context import order_context
from cleanbook.schemas.booking_schema import Address, ConfirmedBookingRecord, Contact
from cleanbook.schemas.job_schema import AccessMethod, JobDescription
from cleanbook.tools.catalog import PricingConfig, get_pricing_config
from cleanbook.tools.notifications import (
    LedgerRecorder,
    WebhookNotifier,
    build_notification_payload,
)
from cleanbook.tools.pricing import describe_add_ons, describe_rooms, quote, summarize_rooms
from cleanbook.tools.stores import Stores
from cleanbook.utils import add_hours_to_time, date_key, normalize_phone

logger = logging.getLogger(__name__)


def create_order_id(prefix: Optional[str] = None) -> str:
    """Prefix plus five random digits. Collisions are possible and not checked."""
    prefix = prefix if prefix is not None else settings.booking.order_id_prefix
    return f"{prefix}{random.randint(10000, 99999)}"


class BookingOrchestrator:
    """Turns a validated booking request into a stored, announced booking."""

    def __init__(
        self,
        stores: Stores,
        notifier: Optional[WebhookNotifier] = None,
        ledger: Optional[LedgerRecorder] = None,
        clock: Callable[[], datetime] = datetime.now,
        order_id_factory: Callable[[], str] = create_order_id,
    ) -> None:
        self._stores = stores
        self._notifier = notifier or WebhookNotifier()
        self._ledger = ledger or LedgerRecorder(stores.ledger, clock=clock)
        self._clock = clock
        self._order_id_factory = order_id_factory

    async def submit(
        self,
        variant: Union[str, PricingConfig],
        contact: Contact,
        address: Address,
        job: JobDescription,
        selected_date: Optional[date],
        selected_time: Optional[str],
        *,
        access: Optional[AccessMethod] = None,
        access_notes: str = "",
        additional_info: str = "",
        state_machine: Optional[SubmissionStateMachine] = None,
    ) -> ConfirmedBookingRecord:
        """Validate and store a booking, then fire the downstream notifications.

        Raises:
            BookingValidationError: Required input is missing; nothing was written.
            InvalidTransitionError: The draft was already submitted.
        """
        config = get_pricing_config(variant) if isinstance(variant, str) else variant
        sm = state_machine or SubmissionStateMachine()
        sm.transition(SubmissionTrigger.SUBMIT)

        request = BookingRequest(
            contact=contact,
            address=address,
            job=job,
            selected_date=selected_date,
            selected_time=selected_time,
            access=access,
            access_notes=access_notes,
            additional_info=additional_info,
        )
        try:
            validate_request(request, config)
        except BookingValidationError:
            sm.transition(SubmissionTrigger.VALIDATION_FAILED)
            raise

        try:
            record = self._build_record(request, config)
        except Exception:
            sm.transition(SubmissionTrigger.WRITE_FAILED)
            logger.exception("Could not build booking record")
            raise

        with order_context(record.order_id):
            try:
                await self._stores.bookings.save(record)
            except Exception:
                sm.transition(SubmissionTrigger.WRITE_FAILED)
                logger.exception("Booking write failed for %s", record.order_id)
                raise
            sm.transition(SubmissionTrigger.WRITE_SUCCEEDED)
            logger.info(
                "Booking confirmed: %s %s on %s at %s (%.2f)",
                record.order_id, config.variant, record.date, record.start_time, record.total_price,
            )

            payload = build_notification_payload(record)
            await asyncio.gather(
                self._attempt("webhook", self._notifier.send(payload)),
                self._attempt("income ledger entry", self._ledger.record_income(record)),
                self._attempt("staff pay ledger entry", self._ledger.record_staff_pay(record)),
            )
        return record

    async def _attempt(self, label: str, action: Awaitable[Any]) -> None:
        try:
            await action
        except Exception:
            logger.exception("Failed to send %s; booking stands", label)

    def _build_record(self, request: BookingRequest, config: PricingConfig) -> ConfirmedBookingRecord:
        job = request.job.model_copy(update={"date": request.selected_date}, deep=True)
        q = quote(job, config)

        hour = int(request.selected_time)
        start_time = f"{hour:02d}:00"
        booking_dt = datetime.combine(request.selected_date, time(hour=hour))
        due_at = booking_dt - timedelta(hours=settings.booking.payment_due_hours)
        contact = request.contact.model_copy(update={
            "name": request.contact.name.strip(),
            "email": request.contact.email.strip(),
            "phone": normalize_phone(request.contact.phone) or request.contact.phone,
        })
        address = request.address.model_copy(update={
            "postcode": request.address.postcode.strip().upper(),
        })

        return ConfirmedBookingRecord(
            order_id=self._order_id_factory(),
            submitted_at=self._clock(),
            variant=config.variant,
            service_type=config.service_type,
            contact=contact,
            address=address,
            job=job,
            room_summaries=summarize_rooms(job, config),
            room_lines=describe_rooms(job, config),
            add_on_lines=describe_add_ons(job, config),
            access=request.access,
            access_notes=request.access_notes.strip(),
            additional_info=request.additional_info.strip(),
            date=date_key(request.selected_date),
            start_time=start_time,
            end_time=add_hours_to_time(start_time, q.estimated_hours),
            booking_datetime=booking_dt,
            payment_due_at=due_at,
            estimated_hours=q.estimated_hours,
            base_estimated_hours=q.base_estimated_hours,
            team_applied=q.team_applied,
            labour_rate=q.hourly_rate,
            labour_charge=q.labour_charge,
            add_ons_total=q.add_ons_total,
            supplies_fee=q.supplies_fee,
            total_price=q.total_price,
        )
