"""
Finite state machine for the form submission lifecycle.

Defines four form states and explicit transitions with triggers.
Edits, submissions, retries and resets only happen when the current
state allows them, so an in-flight submission can never be started twice.

Usage:
    sm = FormStateMachine()
    sm.transition(FormTrigger.SUBMIT)
    assert sm.current_state == FormState.SUBMITTING
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class FormState(str, Enum):
    """All possible states of the booking form."""
    EDITING = "editing"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class FormTrigger(str, Enum):
    """Events that cause state transitions."""
    FIELD_EDITED = "field_edited"
    SUBMIT = "submit"
    SUBMISSION_SUCCEEDED = "submission_succeeded"
    SUBMISSION_FAILED = "submission_failed"
    RETRY = "retry"
    DISMISS_ERROR = "dismiss_error"
    START_NEW = "start_new"


@dataclass
class Transition:
    """A single valid state transition."""
    from_state: FormState
    to_state: FormState
    trigger: FormTrigger


@dataclass
class StateEntry:
    """Recorded history entry for a state visit."""
    state: FormState
    entered_at: datetime
    trigger: Optional[FormTrigger] = None


class InvalidTransitionError(Exception):
    """Raised when a transition is not valid from the current state."""


class FormStateMachine:
    """
    Deterministic state machine controlling the form lifecycle.

    Every transition must be explicitly defined. Anything else is rejected
    with an error listing the triggers allowed from the current state.
    """

    TRANSITIONS: list[Transition] = [
        # --- Editing ---
        Transition(FormState.EDITING, FormState.EDITING, FormTrigger.FIELD_EDITED),
        Transition(FormState.EDITING, FormState.SUBMITTING, FormTrigger.SUBMIT),

        # --- Delivery result ---
        Transition(FormState.SUBMITTING, FormState.SUCCEEDED,
                   FormTrigger.SUBMISSION_SUCCEEDED),
        Transition(FormState.SUBMITTING, FormState.FAILED,
                   FormTrigger.SUBMISSION_FAILED),

        # --- Failure handling ---
        Transition(FormState.FAILED, FormState.SUBMITTING, FormTrigger.RETRY),
        Transition(FormState.FAILED, FormState.EDITING, FormTrigger.DISMISS_ERROR),

        # --- Submit another request ---
        Transition(FormState.SUCCEEDED, FormState.EDITING, FormTrigger.START_NEW),
        Transition(FormState.FAILED, FormState.EDITING, FormTrigger.START_NEW),
    ]

    def __init__(self) -> None:
        self._current_state = FormState.EDITING
        self._history: list[StateEntry] = [
            StateEntry(state=FormState.EDITING, entered_at=datetime.now(timezone.utc))
        ]
        self._failure_count: int = 0

    @property
    def current_state(self) -> FormState:
        return self._current_state

    @property
    def failure_count(self) -> int:
        return self._failure_count

    def _find(self, trigger: FormTrigger) -> Optional[Transition]:
        for t in self.TRANSITIONS:
            if t.from_state == self._current_state and t.trigger == trigger:
                return t
        return None

    def _reject(self, trigger: FormTrigger) -> InvalidTransitionError:
        valid = [t.value for t in self.get_valid_triggers()]
        return InvalidTransitionError(
            f"No valid transition from '{self._current_state.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def can_transition(self, trigger: FormTrigger) -> bool:
        """Check whether a trigger is accepted from the current state."""
        return self._find(trigger) is not None

    def require(self, trigger: FormTrigger) -> None:
        """Raise InvalidTransitionError unless the trigger is currently valid."""
        if self._find(trigger) is None:
            raise self._reject(trigger)

    def transition(self, trigger: FormTrigger) -> FormState:
        """
        Execute a state transition.

        Args:
            trigger: The event triggering the transition.

        Returns:
            The new form state.

        Raises:
            InvalidTransitionError: If no valid transition exists.
        """
        t = self._find(trigger)
        if t is None:
            raise self._reject(trigger)

        old_state = self._current_state
        self._current_state = t.to_state

        # Field edits are frequent self-transitions; keep them out of history.
        if trigger != FormTrigger.FIELD_EDITED:
            self._history.append(StateEntry(
                state=self._current_state,
                entered_at=datetime.now(timezone.utc),
                trigger=trigger,
            ))

        if t.to_state == FormState.FAILED:
            self._failure_count += 1

        logger.debug(
            "State transition: %s -> %s (trigger: %s)",
            old_state.value, self._current_state.value, trigger.value,
        )
        return self._current_state

    def get_valid_triggers(self) -> list[FormTrigger]:
        """Return all triggers valid from the current state."""
        return [t.trigger for t in self.TRANSITIONS if t.from_state == self._current_state]

    def get_history(self) -> list[StateEntry]:
        """Return the full state transition history."""
        return list(self._history)

    def get_state_trace(self) -> list[str]:
        """Return ordered list of state names visited."""
        return [entry.state.value for entry in self._history]

    def is_submitting(self) -> bool:
        """Check if a submission is in flight."""
        return self._current_state == FormState.SUBMITTING
