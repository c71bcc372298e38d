"""
Placeholder server-side handler for form submissions.

Shaped like a serverless function: it takes an event dict with
``httpMethod``, ``headers``, ``body`` and ``isBase64Encoded`` and returns
``statusCode`` / ``headers`` / ``body``. It does no validation of its own;
it logs the submission and echoes it back. Replace the logging with real
processing once there is somewhere to send inquiries.
"""

import base64
import binascii
import json
import logging
from typing import Any, Optional
from urllib.parse import parse_qs

from celebrity_booking.config import settings
from celebrity_booking.schemas.form_schema import FIELD_DEFINITIONS, FieldKind

logger = logging.getLogger(__name__)

FORM_URLENCODED = "application/x-www-form-urlencoded"
SUCCESS_MESSAGE = "Form submission processed successfully!"

_MULTI_VALUE_FIELDS = frozenset(
    defn.name for defn in FIELD_DEFINITIONS if defn.kind == FieldKind.MULTI_SELECT
)


def _response(status_code: int, body: Any) -> dict[str, Any]:
    if isinstance(body, str):
        return {"statusCode": status_code, "headers": {"Content-Type": "text/plain"}, "body": body}
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def _content_type(headers: Optional[dict[str, str]]) -> str:
    for key, value in (headers or {}).items():
        if key.lower() == "content-type":
            return value.split(";")[0].strip().lower()
    return ""


def _decode_body(event: dict[str, Any]) -> str:
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        return base64.b64decode(body).decode("utf-8")
    return body


def _parse_form(body: str) -> dict[str, Any]:
    """Parse URL-encoded form data. Checkbox groups always come back as lists."""
    parsed = parse_qs(body, keep_blank_values=True)
    data: dict[str, Any] = {}
    for key, values in parsed.items():
        if key in _MULTI_VALUE_FIELDS or len(values) > 1:
            data[key] = values
        else:
            data[key] = values[0]
    return data


def parse_submission(event: dict[str, Any]) -> dict[str, Any]:
    """
    Decode an event body into a submission dict.

    Raises:
        ValueError: If the body is not a JSON object or valid form data.
    """
    try:
        body = _decode_body(event)
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise ValueError(f"Body could not be decoded: {exc}") from exc

    if _content_type(event.get("headers")) == FORM_URLENCODED:
        return _parse_form(body)

    try:
        data = json.loads(body)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Body is not valid JSON: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise ValueError("Body must be a JSON object")
    return data


def handle_form_submission(event: dict[str, Any]) -> dict[str, Any]:
    """Accept a POSTed submission, log it, and echo it back."""
    if (event.get("httpMethod") or "").upper() != "POST":
        return _response(405, "Method Not Allowed")

    try:
        data = parse_submission(event)
    except ValueError as exc:
        logger.warning("Rejected form submission: %s", exc)
        return _response(400, {"message": str(exc)})

    if data.get(settings.form.honeypot_field):
        logger.warning(
            "Honeypot field '%s' was filled, ignoring submission", settings.form.honeypot_field
        )
        return _response(200, {"message": SUCCESS_MESSAGE})

    logger.info(
        "Form submission received for form '%s': %s",
        data.get("form-name", settings.form.form_name), data,
    )
    return _response(200, {"message": SUCCESS_MESSAGE, "submission": data})
