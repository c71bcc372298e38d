"""
Form state controller: field values, live validation, and submission lifecycle.

Owns the one in-progress booking record and its submission outcome.
Edits re-validate the edited field; changing the event or performance
type clears the attendance choice because its catalog may have changed.
Submitting runs the full validator before anything leaves the process.

Usage:
    controller = FormController(FormPostTransport())
    controller.set_field("eventType", "vip")
    options = controller.attendance_options()
    result = await controller.submit()
"""

import asyncio
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional

from celebrity_booking.config import settings
from celebrity_booking.form.attendance import (
    AttendanceOption,
    normalize_choice,
    resolve_attendance_options,
)
from celebrity_booking.form.state_machine import (
    FormState,
    FormStateMachine,
    FormTrigger,
    InvalidTransitionError,
)
from celebrity_booking.form.validator import ValidationResult, validate_field, validate_record
from celebrity_booking.logging_context import get_form_logger, new_submission_id, set_submission_id
from celebrity_booking.schemas.booking_schema import BookingInquiry, SubmissionResult
from celebrity_booking.schemas.form_schema import (
    ATTENDANCE_GOVERNING_FIELDS,
    FIELD_NAMES,
    empty_record,
    get_definition,
)
from celebrity_booking.transport.base import SubmissionTransport

logger = get_form_logger(__name__)

ATTENDANCE_FIELD = "expectedAttendance"


class OutcomeStatus(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class SubmissionOutcome:
    """Result of the latest submission attempt, as shown to the person."""
    status: OutcomeStatus
    reason: Optional[str] = None


class FormController:
    """
    Drives one booking form through editing, submission and its aftermath.

    Only one submission can be in flight: while submitting, the state
    machine rejects edits and further submit attempts.
    """

    def __init__(
        self,
        transport: SubmissionTransport,
        submit_timeout: Optional[float] = None,
        today: Optional[date] = None,
    ) -> None:
        self._transport = transport
        self._submit_timeout = submit_timeout or settings.transport.submit_timeout_sec
        self._today = today
        self._machine = FormStateMachine()
        self.values: dict[str, Any] = empty_record()
        self.touched: set[str] = set()
        self.errors: dict[str, str] = {}
        self.outcome: Optional[SubmissionOutcome] = None
        self._accepted: Optional[BookingInquiry] = None

    @property
    def state(self) -> FormState:
        return self._machine.current_state

    @property
    def machine(self) -> FormStateMachine:
        return self._machine

    @property
    def accepted_inquiry(self) -> Optional[BookingInquiry]:
        """The inquiry being (or last) delivered, if any."""
        return self._accepted

    # ------------------------------------------------------------------ #
    # Editing
    # ------------------------------------------------------------------ #

    def _validate(self, name: str) -> Optional[str]:
        error = validate_field(name, self.values, today=self._today)
        if error:
            self.errors[name] = error
        else:
            self.errors.pop(name, None)
        return error

    def _clear_field(self, name: str) -> None:
        self.values[name] = get_definition(name).empty_value
        self.touched.discard(name)
        self.errors.pop(name, None)

    def set_field(self, name: str, value: Any) -> Optional[str]:
        """
        Update one field and re-validate it.

        Returns:
            The field's error message, or None if it is now valid.

        Raises:
            ValueError: If ``name`` is not a form field.
            InvalidTransitionError: If the form is not being edited.
        """
        get_definition(name)
        self._machine.transition(FormTrigger.FIELD_EDITED)

        previous = self.values.get(name)
        self.values[name] = value
        self.touched.add(name)

        changed = normalize_choice(value) != normalize_choice(previous)
        if name in ATTENDANCE_GOVERNING_FIELDS and changed:
            if self.values.get(ATTENDANCE_FIELD):
                logger.debug(
                    "'%s' changed, clearing %s (was %r)",
                    name, ATTENDANCE_FIELD, self.values[ATTENDANCE_FIELD],
                )
            self._clear_field(ATTENDANCE_FIELD)

        return self._validate(name)

    def touch(self, name: str) -> Optional[str]:
        """Mark a field as visited (blur) and validate its current value."""
        get_definition(name)
        self._machine.require(FormTrigger.FIELD_EDITED)
        self.touched.add(name)
        return self._validate(name)

    def attendance_options(self) -> list[AttendanceOption]:
        """Attendance choices valid for the current event and performance type."""
        return resolve_attendance_options(
            self.values.get("eventType"), self.values.get("performanceType")
        )

    def visible_errors(self) -> dict[str, str]:
        """Errors for touched fields only, in schema order."""
        return {
            name: self.errors[name]
            for name in FIELD_NAMES
            if name in self.errors and name in self.touched
        }

    # ------------------------------------------------------------------ #
    # Submission lifecycle
    # ------------------------------------------------------------------ #

    async def submit(self) -> ValidationResult:
        """
        Validate the whole record and, if valid, deliver it once.

        Returns:
            The validation result. Delivery results land in ``outcome``.

        Raises:
            InvalidTransitionError: If the form is not being edited, e.g.
                a submission is already in flight.
        """
        self._machine.require(FormTrigger.SUBMIT)

        result = validate_record(self.values, today=self._today)
        if not result.is_valid:
            self.errors = dict(result.errors)
            self.touched.update(FIELD_NAMES)
            logger.info("Submit blocked by %d field error(s)", len(self.errors))
            return result

        self.errors = {}
        self._accepted = result.inquiry
        self._machine.transition(FormTrigger.SUBMIT)
        await self._deliver(result.inquiry)
        return result

    async def retry(self) -> SubmissionOutcome:
        """Re-deliver the already accepted inquiry after a failure."""
        self._machine.require(FormTrigger.RETRY)
        if self._accepted is None:
            raise InvalidTransitionError("No accepted inquiry to retry")
        self._machine.transition(FormTrigger.RETRY)
        return await self._deliver(self._accepted)

    def dismiss_error(self) -> None:
        """Close the failure banner and go back to editing the same record."""
        self._machine.transition(FormTrigger.DISMISS_ERROR)
        self.outcome = None
        self._accepted = None

    def start_new(self) -> None:
        """Return to editing with a blank record ("submit another request")."""
        self._machine.transition(FormTrigger.START_NEW)
        self._reset_record()
        self.outcome = None

    def _reset_record(self) -> None:
        self.values = empty_record()
        self.touched = set()
        self.errors = {}
        self._accepted = None

    async def _deliver(self, inquiry: BookingInquiry) -> SubmissionOutcome:
        set_submission_id(new_submission_id())
        self.outcome = SubmissionOutcome(status=OutcomeStatus.PENDING)
        logger.info("Submitting inquiry for %s", inquiry.contact_name)

        try:
            result = await asyncio.wait_for(
                self._transport.deliver(inquiry), timeout=self._submit_timeout
            )
        except asyncio.TimeoutError:
            result = SubmissionResult(
                success=False,
                reason=f"Submission timed out after {self._submit_timeout:g} seconds",
            )
        except Exception as exc:
            logger.exception("Transport raised while delivering inquiry")
            result = SubmissionResult(success=False, reason=str(exc) or exc.__class__.__name__)

        if result.success:
            self._machine.transition(FormTrigger.SUBMISSION_SUCCEEDED)
            self._reset_record()
            self.outcome = SubmissionOutcome(status=OutcomeStatus.SUCCEEDED)
            logger.info("Inquiry delivered")
        else:
            self._machine.transition(FormTrigger.SUBMISSION_FAILED)
            self.outcome = SubmissionOutcome(status=OutcomeStatus.FAILED, reason=result.reason)
            logger.warning("Inquiry delivery failed: %s", result.reason)
        return self.outcome
