from celebrity_booking.form.attendance import AttendanceOption, resolve_attendance_options
from celebrity_booking.form.controller import FormController, OutcomeStatus, SubmissionOutcome
from celebrity_booking.form.state_machine import (
    FormState,
    FormStateMachine,
    FormTrigger,
    InvalidTransitionError,
)
from celebrity_booking.form.validator import Invalid, Valid, validate_field, validate_record

__all__ = [
    "FormController",
    "FormState",
    "FormStateMachine",
    "FormTrigger",
    "InvalidTransitionError",
    "OutcomeStatus",
    "SubmissionOutcome",
    "AttendanceOption",
    "resolve_attendance_options",
    "Valid",
    "Invalid",
    "validate_field",
    "validate_record",
]
