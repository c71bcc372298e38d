"""
Conditional option resolver for the expected attendance field.

The valid attendance ranges depend on what kind of event is being booked:
intimate VIP / meet-and-greet experiences, private events, or everything
else. The first matching rule wins.

Usage:
    options = resolve_attendance_options("vip", "acoustic")
    assert options[0].value == "5-10"
"""

from dataclasses import dataclass
from typing import Optional

from celebrity_booking.catalogs import ATTENDANCE_CATALOGS

VIP_EVENT_TYPE = "vip"
PRIVATE_EVENT_TYPE = "private"
MEET_GREET_PERFORMANCE = "meet-greet"


@dataclass(frozen=True)
class AttendanceOption:
    """A single selectable attendance range."""
    value: str
    label: str


def normalize_choice(value: object) -> str:
    """Selected option value as it will be stored: stripped, '' when unset."""
    return value.strip() if isinstance(value, str) else ""


def resolve_attendance_catalog(
    event_type: Optional[str], performance_type: Optional[str]
) -> str:
    """Return the name of the attendance catalog: 'vip', 'private' or 'standard'."""
    event_type = normalize_choice(event_type)
    performance_type = normalize_choice(performance_type)
    if event_type == VIP_EVENT_TYPE or performance_type == MEET_GREET_PERFORMANCE:
        return "vip"
    if event_type == PRIVATE_EVENT_TYPE:
        return "private"
    return "standard"


def resolve_attendance_options(
    event_type: Optional[str], performance_type: Optional[str]
) -> list[AttendanceOption]:
    """Return the attendance options currently valid for the given selections."""
    catalog = ATTENDANCE_CATALOGS[resolve_attendance_catalog(event_type, performance_type)]
    return [AttendanceOption(value=value, label=label) for value, label in catalog]


def allowed_attendance_values(
    event_type: Optional[str], performance_type: Optional[str]
) -> tuple[str, ...]:
    return tuple(
        option.value for option in resolve_attendance_options(event_type, performance_type)
    )
