from __future__ import annotations

from abc import ABC, abstractmethod

from celebrity_booking.schemas.booking_schema import BookingInquiry, SubmissionResult


class SubmissionTransport(ABC):
    """Delivers an accepted inquiry to the outside world, exactly once per call."""

    @abstractmethod
    async def deliver(self, inquiry: BookingInquiry) -> SubmissionResult:
        """Make one delivery attempt. Report failures in the result, never retry."""
        raise NotImplementedError
