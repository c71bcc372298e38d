"""Shared test fixtures and helpers."""

import asyncio
from datetime import date
from typing import Any, Optional

import pytest

from celebrity_booking.form.controller import FormController
from celebrity_booking.form.state_machine import FormStateMachine
from celebrity_booking.schemas.booking_schema import BookingInquiry, SubmissionResult
from celebrity_booking.transport.base import SubmissionTransport

# Fixed reference date so past-date checks are deterministic.
TODAY = date(2030, 1, 1)


def make_record(**overrides: Any) -> dict[str, Any]:
    """Helper to create a fully valid booking record."""
    record: dict[str, Any] = {
        "firstName": "John",
        "lastName": "Smith",
        "email": "john@company.com",
        "phone": "+15551234567",
        "company": "Event Company LLC",
        "title": "",
        "eventName": "Summer Music Festival",
        "requestedArtist": "Kid Rock",
        "eventType": "concert",
        "eventDate": "2030-07-04",
        "eventTime": "19:30",
        "venue": "Madison Square Garden",
        "city": "New York",
        "state": "NY",
        "expectedAttendance": "10000-25000",
        "performanceType": "headliner",
        "additionalServices": [],
        "technicalRequirements": "",
        "budgetRange": "500k-1m",
        "budgetNotes": "",
        "budgetIncludes": [],
        "eventDescription": "",
        "specialRequests": "",
        "bookingTimeline": "",
        "termsAgreement": True,
    }
    record.update(overrides)
    return record


def fill(controller: FormController, record: dict[str, Any]) -> None:
    """Enter a record field by field, attendance last so it is not cleared."""
    for name, value in record.items():
        if name != "expectedAttendance":
            controller.set_field(name, value)
    controller.set_field("expectedAttendance", record["expectedAttendance"])


class RecordingTransport(SubmissionTransport):
    """In-memory transport that records deliveries and replays canned results."""

    def __init__(
        self,
        results: Optional[list[SubmissionResult]] = None,
        raises: Optional[Exception] = None,
        gate: Optional[asyncio.Event] = None,
    ) -> None:
        self.calls: list[BookingInquiry] = []
        self._results = list(results or [SubmissionResult(success=True, status_code=200)])
        self._raises = raises
        self.gate = gate

    async def deliver(self, inquiry: BookingInquiry) -> SubmissionResult:
        self.calls.append(inquiry)
        if self.gate is not None:
            await self.gate.wait()
        if self._raises is not None:
            raise self._raises
        if len(self._results) > 1:
            return self._results.pop(0)
        return self._results[0]


def failing_result(status_code: int = 500) -> SubmissionResult:
    return SubmissionResult(
        success=False,
        status_code=status_code,
        reason=f"Submission failed with status {status_code}",
    )


@pytest.fixture
def state_machine():
    return FormStateMachine()


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def controller(transport):
    return FormController(transport, today=TODAY)


@pytest.fixture
def valid_record():
    return make_record()
