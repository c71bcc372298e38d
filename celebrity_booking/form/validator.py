"""
Pure validation of booking records against the field schema.

Every field is checked independently and every violation is reported, so
a person sees all problems at once instead of fixing them one by one.
Within a single field only the first failing check is reported.

Usage:
    result = validate_record(record)
    if result.is_valid:
        transport.deliver(result.inquiry)
    else:
        show(result.errors)
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence, Union

from email_validator import EmailNotValidError, validate_email
from pydantic import ValidationError

from celebrity_booking.catalogs import catalog_values
from celebrity_booking.form.attendance import allowed_attendance_values
from celebrity_booking.schemas.booking_schema import BookingInquiry
from celebrity_booking.schemas.form_schema import (
    FIELD_DEFINITIONS,
    FieldDefinition,
    FieldKind,
    get_definition,
)
from celebrity_booking.utils import is_blank

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class Valid:
    """The record is submittable; ``inquiry`` is its accepted form."""
    inquiry: BookingInquiry

    @property
    def is_valid(self) -> bool:
        return True


@dataclass(frozen=True)
class Invalid:
    """The record is not submittable; ``errors`` maps field name to message."""
    errors: dict[str, str]

    @property
    def is_valid(self) -> bool:
        return False


ValidationResult = Union[Valid, Invalid]


def _is_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
        return True
    except EmailNotValidError:
        return False


def _parse_date(value: Any) -> Optional[date]:
    """Parse an ISO YYYY-MM-DD date. Returns None if unparseable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        return None


def _required_message(defn: FieldDefinition) -> str:
    if defn.required_message:
        return defn.required_message
    if defn.min_length is not None:
        return _min_message(defn)
    if defn.format_message:
        return defn.format_message
    return f"{defn.label} is required"


def _min_message(defn: FieldDefinition) -> str:
    return defn.min_message or f"{defn.label} must be at least {defn.min_length} characters"


def _format_message(defn: FieldDefinition) -> str:
    return defn.format_message or f"Please enter a valid {defn.label.lower()}"


def _check_length(defn: FieldDefinition, text: str) -> Optional[str]:
    if defn.min_length is not None and len(text) < defn.min_length:
        return _min_message(defn)
    if defn.max_length is not None and len(text) > defn.max_length:
        return f"{defn.label} must be less than {defn.max_length} characters"
    return None


def _allowed_choices(defn: FieldDefinition, record: Mapping[str, Any]) -> tuple[str, ...]:
    if defn.name == "expectedAttendance":
        return allowed_attendance_values(record.get("eventType"), record.get("performanceType"))
    return catalog_values(defn.catalog or [])


def _check_field(
    defn: FieldDefinition,
    value: Any,
    record: Mapping[str, Any],
    today: date,
) -> Optional[str]:
    """Return the first violated constraint's message for one field, or None."""
    if is_blank(value):
        return _required_message(defn) if defn.required else None

    if defn.kind == FieldKind.BOOLEAN:
        return None if value is True else _required_message(defn)

    if defn.kind == FieldKind.MULTI_SELECT:
        if isinstance(value, str) or not isinstance(value, (list, tuple, set, frozenset)):
            return _format_message(defn)
        allowed = _allowed_choices(defn, record)
        if any(item not in allowed for item in value):
            return _format_message(defn)
        return None

    if defn.kind == FieldKind.DATE:
        parsed = _parse_date(value)
        if parsed is None:
            return _format_message(defn)
        if parsed < today:
            return f"{defn.label} cannot be in the past"
        return None

    if not isinstance(value, str):
        return _format_message(defn)
    text = value.strip()

    length_error = _check_length(defn, text)
    if length_error:
        return length_error

    if defn.kind == FieldKind.EMAIL and not _is_email(text):
        return _format_message(defn)
    if defn.pattern is not None and not defn.pattern.match(text):
        return _format_message(defn)
    if defn.kind == FieldKind.ENUM and text not in _allowed_choices(defn, record):
        return _format_message(defn)
    return None


def validate_field(
    name: str, record: Mapping[str, Any], today: Optional[date] = None
) -> Optional[str]:
    """
    Validate one field in the context of the whole record.

    Args:
        name: Field name from the schema.
        record: Current record; other fields supply context (attendance).
        today: Reference date for past-date checks. Defaults to today.

    Returns:
        The error message, or None if the field is valid.

    Raises:
        ValueError: If ``name`` is not a schema field.
    """
    defn = get_definition(name)
    value = record.get(name, defn.empty_value)
    error = _check_field(defn, value, record, today or date.today())
    if error:
        logger.debug("Field '%s' failed validation: %s", name, error)
    return error


def validate_record(
    record: Mapping[str, Any],
    definitions: Sequence[FieldDefinition] = FIELD_DEFINITIONS,
    today: Optional[date] = None,
) -> ValidationResult:
    """
    Validate a whole record. Never short-circuits on the first error.

    Keys that are not schema fields are ignored and do not reach the
    accepted inquiry.
    """
    today = today or date.today()
    errors: dict[str, str] = {}
    accepted: dict[str, Any] = {}

    for defn in definitions:
        value = record.get(defn.name, defn.empty_value)
        error = _check_field(defn, value, record, today)
        if error:
            errors[defn.name] = error
        elif defn.kind == FieldKind.DATE and not is_blank(value):
            accepted[defn.name] = _parse_date(value)
        else:
            accepted[defn.name] = value

    if errors:
        logger.debug("Record rejected with %d error(s): %s", len(errors), sorted(errors))
        return Invalid(errors=errors)

    try:
        inquiry = BookingInquiry.model_validate(accepted)
    except ValidationError as exc:
        model_errors = {str(err["loc"][0]): err["msg"] for err in exc.errors()}
        logger.debug("Record rejected by inquiry model: %s", sorted(model_errors))
        return Invalid(errors=model_errors)

    return Valid(inquiry=inquiry)
