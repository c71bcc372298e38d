"""Submission ID logging context for tracing one submission across modules.

Provides a submission_id-aware logger that attaches a correlation ID to
every log record, making it easy to follow a single inquiry from the
controller through the transport and back.

Usage:
    from celebrity_booking.logging_context import get_form_logger, set_submission_id

    set_submission_id("INQ-3F9A1C")
    logger = get_form_logger(__name__)
    logger.info("Delivering inquiry")  # record.submission_id == "INQ-3F9A1C"
"""

import logging
import uuid
from contextvars import ContextVar

_submission_id: ContextVar[str] = ContextVar("submission_id", default="NO_SUBMISSION")


def new_submission_id() -> str:
    """Generate a short correlation ID for a submission attempt."""
    return f"INQ-{uuid.uuid4().hex[:6].upper()}"


def set_submission_id(submission_id: str) -> None:
    """Set the correlation ID for the current async context."""
    _submission_id.set(submission_id)


def get_submission_id() -> str:
    """Retrieve the current correlation ID."""
    return _submission_id.get()


class SubmissionIdFilter(logging.Filter):
    """Injects submission_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.submission_id = _submission_id.get()  # type: ignore[attr-defined]
        return True


def get_form_logger(name: str) -> logging.Logger:
    """Return a logger with the SubmissionIdFilter attached.

    The filter adds ``submission_id`` to each record so formatters can
    include ``%(submission_id)s`` in their format string.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, SubmissionIdFilter) for f in logger.filters):
        logger.addFilter(SubmissionIdFilter())
    return logger
