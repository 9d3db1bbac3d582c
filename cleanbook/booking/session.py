"""
Per-customer booking draft.

Holds what the customer has picked so far and the derived calendar,
slot, and quote state. Slot lookups for a date the customer has since
moved away from are discarded when they arrive, so a slow response
never overwrites a newer one.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Optional

from cleanbook.booking.orchestrator import BookingOrchestrator
from cleanbook.booking.state_machine import SubmissionState, SubmissionStateMachine
from cleanbook.schemas.booking_schema import Address, ConfirmedBookingRecord, Contact
from cleanbook.schemas.job_schema import AccessMethod, JobDescription, Quote
from cleanbook.tools.calendar import load_blocked_dates
from cleanbook.tools.catalog import PricingConfig
from cleanbook.tools.pricing import quote
from cleanbook.tools.stores import Stores
from cleanbook.tools.time_slots import load_available_slots
from cleanbook.utils import date_key

logger = logging.getLogger(__name__)


@dataclass
class BookingSession:
    """
    One customer's booking draft for one form variant.

    Every derived value is recomputed from a fresh snapshot when its
    inputs change; nothing reads a store mid-computation.
    """

    config: PricingConfig
    stores: Stores
    orchestrator: Optional[BookingOrchestrator] = None
    clock: Callable[[], datetime] = datetime.now
    job: JobDescription = field(default_factory=JobDescription)
    selected_date: Optional[date] = None
    selected_time: Optional[str] = None
    blocked_dates: set[str] = field(default_factory=set)
    available_times: list[str] = field(default_factory=list)
    last_booking: Optional[ConfirmedBookingRecord] = None
    state_machine: SubmissionStateMachine = field(default_factory=SubmissionStateMachine)

    def __post_init__(self) -> None:
        if self.orchestrator is None:
            self.orchestrator = BookingOrchestrator(self.stores, clock=self.clock)

    async def refresh_calendar(self) -> set[str]:
        self.blocked_dates = await load_blocked_dates(self.stores.staff, self.clock())
        return self.blocked_dates

    def is_date_selectable(self, day: date) -> bool:
        return date_key(day) not in self.blocked_dates

    async def select_date(self, day: date) -> list[str]:
        """Select a date and load its slots. Clears any chosen time."""
        self.selected_date = day
        self.selected_time = None
        self.job = self.job.model_copy(update={"date": day})
        slots = await load_available_slots(self.stores, day, self.clock(), self.blocked_dates)
        if self.selected_date != day:
            logger.debug("Discarding stale slots for %s", date_key(day))
            return self.available_times
        self.available_times = slots
        return slots

    def select_time(self, hour: str) -> None:
        if hour not in self.available_times:
            raise ValueError(f"Slot {hour!r} is not available on {self.selected_date}")
        self.selected_time = hour

    def update_job(self, job: JobDescription) -> Quote:
        """Replace the job description, keeping the selected date, and re-quote."""
        self.job = job.model_copy(update={"date": self.selected_date})
        return self.quote

    @property
    def quote(self) -> Quote:
        return quote(self.job.model_copy(update={"date": self.selected_date}), self.config)

    @property
    def is_submitted(self) -> bool:
        return self.state_machine.current_state != SubmissionState.UNSUBMITTED

    async def submit(
        self,
        contact: Contact,
        address: Address,
        access: Optional[AccessMethod] = None,
        access_notes: str = "",
        additional_info: str = "",
    ) -> ConfirmedBookingRecord:
        """Submit the draft once. A second call raises InvalidTransitionError."""
        record = await self.orchestrator.submit(
            self.config,
            contact,
            address,
            self.job,
            self.selected_date,
            self.selected_time,
            access=access,
            access_notes=access_notes,
            additional_info=additional_info,
            state_machine=self.state_machine,
        )
        self.last_booking = record
        return record
