"""
Downstream notifications for a confirmed booking.

The automation webhook receives a flat payload with display strings
alongside machine values. The ledger receives an income line for the
booking total and an expense line for staff pay. None of these decide
whether a booking succeeded.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Optional

import httpx

from cleanbook.config import settings
from cleanbook.schemas.booking_schema import (
    ConfirmedBookingRecord,
    LedgerEntry,
    LedgerEntryType,
)
from cleanbook.tools.catalog import staff_rate_for_job
from cleanbook.tools.stores import LedgerStore
from cleanbook.utils import display_date, display_hour, round_money, to_pence

logger = logging.getLogger(__name__)


def build_notification_payload(record: ConfirmedBookingRecord) -> dict[str, Any]:
    """Flatten a booking record into the automation platform's payload."""
    booking_date = record.booking_datetime.date()
    due = record.payment_due_at
    job = record.job
    return {
        "orderId": record.order_id,
        "submittedAt": record.submitted_at.isoformat(),
        "customerName": record.contact.name,
        "customerEmail": record.contact.email,
        "customerPhone": record.contact.phone,
        "addressLine1": record.address.line1,
        "addressLine2": record.address.line2,
        "town": record.address.town,
        "county": record.address.county,
        "postcode": record.address.postcode,
        "serviceType": record.service_type,
        "cleanliness": job.footfall.value if job.footfall else "",
        "products": job.supplies.value if job.supplies else "",
        "additionalInfo": record.additional_info,
        "access": record.access.value if record.access else "",
        "accessNotes": record.access_notes,
        "bookingDate": record.date,
        "bookingDatePretty": display_date(booking_date),
        "bookingTimeFrom": record.start_time,
        "bookingTimeFromPretty": display_hour(str(record.booking_datetime.hour)),
        "bookingTimeTo": record.end_time,
        "estimatedHours": record.estimated_hours,
        "baseEstimatedHours": record.base_estimated_hours,
        "twoCleaners": record.team_applied,
        "dueDate": due.date().isoformat(),
        "dueDatePretty": display_date(due.date()),
        "dueDateTimeISO": due.isoformat(),
        "bookingDateTimeISO": record.booking_datetime.isoformat(),
        "totalPrice": record.total_price,
        "totalPriceInPence": to_pence(record.total_price),
        "quoteDate": record.date,
        "roomSelections": [s.model_dump() for s in record.room_summaries],
        "rooms": record.room_lines,
        "roomsText": "\n".join(record.room_lines),
        "addOns": record.add_on_lines,
        "addOnsText": "\n".join(record.add_on_lines) if record.add_on_lines else "None",
    }


class WebhookNotifier:
    """Posts booking payloads to the automation webhook."""

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._url = url if url is not None else settings.integrations.automation_webhook_url
        self._timeout = timeout or settings.integrations.http_timeout_seconds
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self._url)

    async def send(self, payload: dict[str, Any]) -> None:
        """POST the payload. Raises httpx.HTTPError on transport or status failure."""
        if not self.enabled:
            logger.debug("No webhook configured; skipping %s", payload.get("orderId"))
            return
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            resp = await client.post(self._url, json=payload)
            resp.raise_for_status()
        logger.info("Webhook delivered for %s", payload.get("orderId"))


class LedgerRecorder:
    """Writes income and staff-pay lines for confirmed bookings."""

    def __init__(
        self, ledger: LedgerStore, clock: Callable[[], datetime] = datetime.now
    ) -> None:
        self._ledger = ledger
        self._clock = clock

    async def record_income(self, record: ConfirmedBookingRecord) -> LedgerEntry:
        label = record.service_type or settings.booking.business_name
        entry = LedgerEntry(
            type=LedgerEntryType.INCOME,
            name=f"{label} booking {record.order_id}",
            amount=record.total_price,
            created_at=self._clock(),
        )
        await self._ledger.add(entry)
        return entry

    async def record_staff_pay(self, record: ConfirmedBookingRecord) -> Optional[LedgerEntry]:
        """Expense line for staff pay; nothing is written when pay is zero."""
        amount = staff_pay_for(record)
        if amount <= 0:
            return None
        entry = LedgerEntry(
            type=LedgerEntryType.EXPENSE,
            name=f"Staff pay for {record.order_id}",
            amount=amount,
            created_at=self._clock(),
        )
        await self._ledger.add(entry)
        return entry


def staff_pay_for(record: ConfirmedBookingRecord) -> float:
    """Hours × staff rate, doubled when two cleaners attend."""
    rate = staff_rate_for_job(record.service_type, record.booking_datetime.date())
    cleaners = 2 if record.team_applied else 1
    return round_money(record.estimated_hours * rate * cleaners)
