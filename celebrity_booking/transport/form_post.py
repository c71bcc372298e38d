"""
URL-encoded form POST transport for static-site form handlers.

The payload mirrors what a browser sends for the HTML form: one key per
field, checkbox groups as repeated keys, plus the ``form-name`` key that
identifies the form and an always-empty honeypot key.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Union

import httpx

from celebrity_booking.config import settings
from celebrity_booking.logging_context import get_form_logger
from celebrity_booking.schemas.booking_schema import BookingInquiry, SubmissionResult
from celebrity_booking.schemas.form_schema import FIELD_DEFINITIONS, FieldKind
from celebrity_booking.transport.base import SubmissionTransport

logger = get_form_logger(__name__)

FORM_NAME_KEY = "form-name"

FormPayload = dict[str, Union[str, list[str]]]


def _to_wire(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def serialize_inquiry(
    inquiry: BookingInquiry,
    form_name: Optional[str] = None,
    honeypot_field: Optional[str] = None,
) -> FormPayload:
    """
    Flatten an inquiry into an ordered form payload.

    Multi-select fields map to a list (sent as repeated keys) and are left
    out entirely when nothing is selected, as unchecked checkboxes are.
    """
    payload: FormPayload = {
        FORM_NAME_KEY: form_name or settings.form.form_name,
        honeypot_field or settings.form.honeypot_field: "",
    }
    values = inquiry.model_dump(by_alias=True)
    for defn in FIELD_DEFINITIONS:
        value = values.get(defn.name)
        if defn.kind == FieldKind.MULTI_SELECT:
            if value:
                payload[defn.name] = [_to_wire(item) for item in value]
            continue
        payload[defn.name] = _to_wire(value)
    return payload


class FormPostTransport(SubmissionTransport):
    """Posts inquiries to ``site_url + submit_path`` with a single attempt."""

    def __init__(
        self,
        site_url: Optional[str] = None,
        submit_path: Optional[str] = None,
        form_name: Optional[str] = None,
        honeypot_field: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._site_url = (site_url or settings.form.site_url).rstrip("/")
        self._submit_path = submit_path or settings.form.submit_path
        self._form_name = form_name or settings.form.form_name
        self._honeypot_field = honeypot_field or settings.form.honeypot_field
        self._timeout = timeout or settings.transport.submit_timeout_sec
        self._client = client

    @property
    def url(self) -> str:
        return f"{self._site_url}{self._submit_path}"

    async def _post(self, payload: FormPayload) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(self.url, data=payload, timeout=self._timeout)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.post(self.url, data=payload)

    async def deliver(self, inquiry: BookingInquiry) -> SubmissionResult:
        payload = serialize_inquiry(inquiry, self._form_name, self._honeypot_field)
        logger.info("Posting inquiry for %s to %s", inquiry.contact_name, self.url)

        try:
            response = await self._post(payload)
        except httpx.HTTPError as exc:
            reason = str(exc) or exc.__class__.__name__
            logger.warning("Submission to %s failed: %s", self.url, reason)
            return SubmissionResult(success=False, reason=reason)

        if response.is_success:
            logger.info("Submission accepted with status %d", response.status_code)
            return SubmissionResult(success=True, status_code=response.status_code)

        logger.warning("Submission rejected with status %d", response.status_code)
        return SubmissionResult(
            success=False,
            status_code=response.status_code,
            reason=f"Submission failed with status {response.status_code}",
        )
