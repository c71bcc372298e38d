"""Declarative field schema for the booking inquiry form.

Field names are the wire names posted to the form endpoint, so they stay
camelCase. Definitions are built once at import time and never mutated.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from celebrity_booking.catalogs import (
    ADDITIONAL_SERVICES,
    BOOKING_TIMELINES,
    BUDGET_INCLUDES,
    BUDGET_RANGES,
    EVENT_TYPES,
    PERFORMANCE_TYPES,
    Catalog,
)

PHONE_PATTERN = re.compile(r"^[+]?[1-9][\d]{0,15}$")
TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")


class FieldKind(str, Enum):
    """Input kinds understood by the validator."""

    TEXT = "text"
    EMAIL = "email"
    PHONE = "phone"
    DATE = "date"
    TIME = "time"
    ENUM = "enum"
    MULTI_SELECT = "multi-select"
    BOOLEAN = "boolean"
    LONG_TEXT = "long-text"


@dataclass(frozen=True)
class FieldDefinition:
    """Schema for a single form field."""

    name: str
    label: str
    kind: FieldKind
    required: bool = True
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[re.Pattern] = None
    catalog: Optional[Catalog] = None
    required_message: str = ""
    min_message: str = ""
    format_message: str = ""

    @property
    def empty_value(self) -> Any:
        """Value of this field in a freshly cleared record."""
        if self.kind == FieldKind.MULTI_SELECT:
            return []
        if self.kind == FieldKind.BOOLEAN:
            return False
        return ""


FIELD_DEFINITIONS: list[FieldDefinition] = [
    # --- Contact information ---
    FieldDefinition(
        name="firstName", label="First name", kind=FieldKind.TEXT,
        min_length=2, max_length=50,
    ),
    FieldDefinition(
        name="lastName", label="Last name", kind=FieldKind.TEXT,
        min_length=2, max_length=50,
    ),
    FieldDefinition(
        name="email", label="Email address", kind=FieldKind.EMAIL,
        format_message="Please enter a valid email address",
    ),
    FieldDefinition(
        name="phone", label="Phone number", kind=FieldKind.PHONE,
        min_length=10, pattern=PHONE_PATTERN,
        min_message="Phone number must be at least 10 digits",
        format_message="Please enter a valid phone number",
    ),
    FieldDefinition(
        name="company", label="Company name", kind=FieldKind.TEXT,
        min_length=2, max_length=100,
    ),
    FieldDefinition(
        name="title", label="Title", kind=FieldKind.TEXT,
        required=False, max_length=100,
    ),

    # --- Event details ---
    FieldDefinition(
        name="eventName", label="Event name", kind=FieldKind.TEXT,
        min_length=3, max_length=200,
    ),
    FieldDefinition(
        name="requestedArtist", label="Artist/Celebrity name", kind=FieldKind.TEXT,
        min_length=2, max_length=100,
    ),
    FieldDefinition(
        name="eventType", label="Event type", kind=FieldKind.ENUM,
        catalog=EVENT_TYPES,
        required_message="Please select an event type",
        format_message="Please select a valid event type",
    ),
    FieldDefinition(
        name="eventDate", label="Event date", kind=FieldKind.DATE,
        required_message="Please select an event date",
        format_message="Please enter a valid date",
    ),
    FieldDefinition(
        name="eventTime", label="Event time", kind=FieldKind.TIME,
        pattern=TIME_PATTERN,
        format_message="Please enter a valid time",
    ),
    FieldDefinition(
        name="venue", label="Venue name", kind=FieldKind.TEXT,
        min_length=2, max_length=200,
    ),
    FieldDefinition(
        name="city", label="City", kind=FieldKind.TEXT,
        min_length=2, max_length=100,
    ),
    FieldDefinition(
        name="state", label="State", kind=FieldKind.TEXT,
        min_length=2, max_length=100,
    ),
    # Catalog depends on eventType and performanceType, see form.attendance.
    FieldDefinition(
        name="expectedAttendance", label="Expected attendance", kind=FieldKind.ENUM,
        required_message="Please select expected attendance",
        format_message="Please select a valid attendance range",
    ),

    # --- Performance specifications ---
    FieldDefinition(
        name="performanceType", label="Performance type", kind=FieldKind.ENUM,
        catalog=PERFORMANCE_TYPES,
        required_message="Please select a performance type",
        format_message="Please select a valid performance type",
    ),
    FieldDefinition(
        name="additionalServices", label="Additional services", kind=FieldKind.MULTI_SELECT,
        required=False, catalog=ADDITIONAL_SERVICES,
        format_message="Please select valid additional services",
    ),
    FieldDefinition(
        name="technicalRequirements", label="Technical requirements", kind=FieldKind.LONG_TEXT,
        required=False, max_length=2000,
    ),

    # --- Budget information ---
    FieldDefinition(
        name="budgetRange", label="Budget range", kind=FieldKind.ENUM,
        catalog=BUDGET_RANGES,
        required_message="Please select a budget range",
        format_message="Please select a valid budget range",
    ),
    FieldDefinition(
        name="budgetNotes", label="Budget notes", kind=FieldKind.LONG_TEXT,
        required=False, max_length=1000,
    ),
    FieldDefinition(
        name="budgetIncludes", label="Budget includes", kind=FieldKind.MULTI_SELECT,
        required=False, catalog=BUDGET_INCLUDES,
        format_message="Please select valid budget inclusions",
    ),

    # --- Additional information ---
    FieldDefinition(
        name="eventDescription", label="Event description", kind=FieldKind.LONG_TEXT,
        required=False, max_length=2000,
    ),
    FieldDefinition(
        name="specialRequests", label="Special requests", kind=FieldKind.LONG_TEXT,
        required=False, max_length=1000,
    ),
    FieldDefinition(
        name="bookingTimeline", label="Booking timeline", kind=FieldKind.ENUM,
        required=False, catalog=BOOKING_TIMELINES,
        format_message="Please select a valid booking timeline",
    ),
    FieldDefinition(
        name="termsAgreement", label="Terms agreement", kind=FieldKind.BOOLEAN,
        required_message="You must agree to the terms and conditions",
    ),
]

FIELD_NAMES: tuple[str, ...] = tuple(defn.name for defn in FIELD_DEFINITIONS)

# Changing either of these invalidates the current expectedAttendance choice.
ATTENDANCE_GOVERNING_FIELDS: frozenset[str] = frozenset({"eventType", "performanceType"})


def get_definition(name: str) -> FieldDefinition:
    for defn in FIELD_DEFINITIONS:
        if defn.name == name:
            return defn
    raise ValueError(f"Unknown field: {name}")


def empty_record() -> dict[str, Any]:
    """Return a cleared booking record with every field at its empty value."""
    return {defn.name: defn.empty_value for defn in FIELD_DEFINITIONS}
