"""Accepted booking inquiry and submission result models."""

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from celebrity_booking.catalogs import ADDITIONAL_SERVICES, BUDGET_INCLUDES, Catalog, catalog_values


def _in_catalog_order(value: Any, catalog: Catalog) -> Any:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    chosen = set(value)
    return tuple(v for v in catalog_values(catalog) if v in chosen)


class BookingInquiry(BaseModel):
    """A booking record that passed validation. Immutable once built."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    # Contact information
    first_name: str
    last_name: str
    email: str
    phone: str
    company: str
    title: Optional[str] = None

    # Event details
    event_name: str
    requested_artist: str
    event_type: str
    event_date: date
    event_time: str
    venue: str
    city: str
    state: str
    expected_attendance: str

    # Performance specifications
    performance_type: str
    additional_services: tuple[str, ...] = ()
    technical_requirements: Optional[str] = None

    # Budget information
    budget_range: str
    budget_notes: Optional[str] = None
    budget_includes: tuple[str, ...] = ()

    # Additional information
    event_description: Optional[str] = None
    special_requests: Optional[str] = None
    booking_timeline: Optional[str] = None
    terms_agreement: bool

    @field_validator(
        "title",
        "technical_requirements",
        "budget_notes",
        "event_description",
        "special_requests",
        "booking_timeline",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("additional_services", mode="before")
    @classmethod
    def _order_services(cls, value: Any) -> Any:
        return _in_catalog_order(value, ADDITIONAL_SERVICES)

    @field_validator("budget_includes", mode="before")
    @classmethod
    def _order_inclusions(cls, value: Any) -> Any:
        return _in_catalog_order(value, BUDGET_INCLUDES)

    @property
    def contact_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class SubmissionResult(BaseModel):
    """Outcome of a single delivery attempt."""

    success: bool
    status_code: Optional[int] = None
    reason: Optional[str] = None
