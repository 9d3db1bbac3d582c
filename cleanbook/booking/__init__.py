from cleanbook.booking.orchestrator import BookingOrchestrator, create_order_id
from cleanbook.booking.session import BookingSession
from cleanbook.booking.state_machine import (
    InvalidTransitionError,
    SubmissionState,
    SubmissionStateMachine,
    SubmissionTrigger,
)
from cleanbook.booking.validation import BookingRequest, BookingValidationError, validate_request

__all__ = [
    "BookingOrchestrator",
    "BookingSession",
    "BookingRequest",
    "BookingValidationError",
    "InvalidTransitionError",
    "SubmissionState",
    "SubmissionStateMachine",
    "SubmissionTrigger",
    "create_order_id",
    "validate_request",
]
