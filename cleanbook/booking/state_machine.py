"""
Submission state machine guarding a booking draft against double submit.

A draft starts UNSUBMITTED. Submitting moves it to SUBMITTING; a
validation or write failure returns it to UNSUBMITTED so the customer
can fix and retry; a durable write moves it to CONFIRMED, which is
terminal. A second submit while SUBMITTING or CONFIRMED is rejected.

Usage:
    sm = SubmissionStateMachine()
    sm.transition(SubmissionTrigger.SUBMIT)
    assert sm.current_state == SubmissionState.SUBMITTING
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class SubmissionState(str, Enum):
    UNSUBMITTED = "unsubmitted"
    SUBMITTING = "submitting"
    CONFIRMED = "confirmed"


class SubmissionTrigger(str, Enum):
    SUBMIT = "submit"
    VALIDATION_FAILED = "validation_failed"
    WRITE_FAILED = "write_failed"
    WRITE_SUCCEEDED = "write_succeeded"


@dataclass
class Transition:
    """A single valid state transition."""
    from_state: SubmissionState
    to_state: SubmissionState
    trigger: SubmissionTrigger


@dataclass
class StateEntry:
    """Recorded history entry for a state visit."""
    state: SubmissionState
    entered_at: datetime
    trigger: Optional[SubmissionTrigger] = None


class InvalidTransitionError(Exception):
    """Raised when a transition is not valid from the current state."""


class SubmissionStateMachine:
    """One-shot submit guard for a single booking draft."""

    TRANSITIONS: list[Transition] = [
        Transition(SubmissionState.UNSUBMITTED, SubmissionState.SUBMITTING,
                   SubmissionTrigger.SUBMIT),
        Transition(SubmissionState.SUBMITTING, SubmissionState.UNSUBMITTED,
                   SubmissionTrigger.VALIDATION_FAILED),
        Transition(SubmissionState.SUBMITTING, SubmissionState.UNSUBMITTED,
                   SubmissionTrigger.WRITE_FAILED),
        Transition(SubmissionState.SUBMITTING, SubmissionState.CONFIRMED,
                   SubmissionTrigger.WRITE_SUCCEEDED),
    ]

    def __init__(self) -> None:
        self._current_state = SubmissionState.UNSUBMITTED
        self._history: list[StateEntry] = [
            StateEntry(state=SubmissionState.UNSUBMITTED, entered_at=datetime.now(timezone.utc))
        ]

    @property
    def current_state(self) -> SubmissionState:
        return self._current_state

    def transition(self, trigger: SubmissionTrigger) -> SubmissionState:
        """
        Execute a state transition.

        Raises:
            InvalidTransitionError: If no valid transition exists.
        """
        for t in self.TRANSITIONS:
            if t.from_state == self._current_state and t.trigger == trigger:
                old_state = self._current_state
                self._current_state = t.to_state
                self._history.append(StateEntry(
                    state=self._current_state,
                    entered_at=datetime.now(timezone.utc),
                    trigger=trigger,
                ))
                logger.debug(
                    "Submission transition: %s -> %s (trigger: %s)",
                    old_state.value, self._current_state.value, trigger.value,
                )
                return self._current_state

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition from '{self._current_state.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def get_valid_triggers(self) -> list[SubmissionTrigger]:
        return [t.trigger for t in self.TRANSITIONS if t.from_state == self._current_state]

    def get_state_trace(self) -> list[str]:
        """Return ordered list of state names visited."""
        return [entry.state.value for entry in self._history]

    def is_terminal(self) -> bool:
        return self._current_state == SubmissionState.CONFIRMED
