"""
Console front end: fills in and submits the booking form from a terminal.

Uses the real field schema, validator, attendance resolver, form
controller and form POST transport. In offline mode (the default) the
transport is routed into the local placeholder handler, so no site or
network is needed. Designed for demo walkthroughs.

Usage:
    python console_demo.py
    python console_demo.py --scenario vip
    python console_demo.py --scenario failure
    python console_demo.py --live
"""

import argparse
import asyncio
from typing import Any, Optional

import httpx

from celebrity_booking.catalogs import ATTENDANCE_CATALOGS, get_label
from celebrity_booking.config import settings
from celebrity_booking.form.controller import FormController, OutcomeStatus
from celebrity_booking.form.attendance import resolve_attendance_catalog
from celebrity_booking.form.state_machine import FormState
from celebrity_booking.handlers.form_submission import handle_form_submission
from celebrity_booking.schemas.booking_schema import BookingInquiry
from celebrity_booking.schemas.form_schema import FIELD_DEFINITIONS, FieldDefinition, FieldKind
from celebrity_booking.transport.form_post import FormPostTransport

BLUE = "\033[94m"
GREEN = "\033[92m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

YES_WORDS = ("y", "yes", "true", "agree", "i agree")


def prompt_order() -> list[FieldDefinition]:
    """Schema order, except attendance is asked after the fields that decide its options."""
    ordered = [d for d in FIELD_DEFINITIONS if d.name != "expectedAttendance"]
    attendance = next(d for d in FIELD_DEFINITIONS if d.name == "expectedAttendance")
    position = next(i for i, d in enumerate(ordered) if d.name == "performanceType")
    ordered.insert(position + 1, attendance)
    return ordered


def attendance_label(inquiry: BookingInquiry) -> Optional[str]:
    """Label of the inquiry's attendance range, from its own event and performance type."""
    catalog = ATTENDANCE_CATALOGS[
        resolve_attendance_catalog(inquiry.event_type, inquiry.performance_type)
    ]
    return get_label(catalog, inquiry.expected_attendance)


def _handler_bridge(request: httpx.Request) -> httpx.Response:
    """Feed an outgoing request to the local handler and return its response."""
    event = {
        "httpMethod": request.method,
        "headers": dict(request.headers),
        "body": request.content.decode("utf-8"),
        "isBase64Encoded": False,
    }
    result = handle_form_submission(event)
    return httpx.Response(
        result["statusCode"], headers=result["headers"], content=result["body"]
    )


class _FlakyBridge:
    """Fails the first ``failures`` requests with 503, then hands off to the handler."""

    def __init__(self, failures: int = 1) -> None:
        self.remaining = failures

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if self.remaining > 0:
            self.remaining -= 1
            return httpx.Response(503, text="Service Unavailable")
        return _handler_bridge(request)


def build_transport(live: bool, flaky: bool = False) -> FormPostTransport:
    if live:
        return FormPostTransport()
    bridge = _FlakyBridge() if flaky else _handler_bridge
    return FormPostTransport(client=httpx.AsyncClient(transport=httpx.MockTransport(bridge)))


class ConsoleSession:
    """Walks a person through the booking form in the terminal."""

    def __init__(self, live: bool = False, flaky: bool = False) -> None:
        self.controller = FormController(build_transport(live, flaky))
        self.live = live
        self.last_inquiry: Optional[BookingInquiry] = None

    def say(self, text: str) -> None:
        print(f"{GREEN}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def warn(self, text: str) -> None:
        print(f"{RED}  ! {text}{RESET}")

    # Pre-scripted scenarios for --scenario flag
    BASE_ANSWERS: dict[str, str] = {
        "firstName": "John",
        "lastName": "Smith",
        "email": "john@company.com",
        "phone": "+15551234567",
        "company": "Event Company LLC",
        "title": "Event Director",
        "eventName": "Summer Music Festival 2031",
        "requestedArtist": "Kid Rock",
        "eventType": "concert",
        "eventDate": "2031-07-04",
        "eventTime": "19:30",
        "venue": "Madison Square Garden",
        "city": "New York",
        "state": "NY",
        "expectedAttendance": "10000-25000",
        "performanceType": "headliner",
        "additionalServices": "soundcheck, photos",
        "technicalRequirements": "Full stage, 48-channel desk",
        "budgetRange": "500k-1m",
        "budgetNotes": "",
        "budgetIncludes": "travel, accommodation",
        "eventDescription": "Annual outdoor festival",
        "specialRequests": "",
        "bookingTimeline": "1-month",
        "termsAgreement": "yes",
    }

    SCENARIOS: dict[str, dict[str, str]] = {
        "valid": {},
        "vip": {
            "eventType": "vip",
            "performanceType": "meet-greet",
            "expectedAttendance": "25-50",
            "venue": "Private Lounge",
        },
        "invalid": {
            "email": "not-an-email",
            "phone": "555-1234",
            "eventTime": "25:00",
            "termsAgreement": "no",
        },
        "failure": {},
    }

    MAX_INPUT_LENGTH = 2000

    # ------------------------------------------------------------------ #
    # Input conversion
    # ------------------------------------------------------------------ #

    def _options_for(self, defn: FieldDefinition) -> list[tuple[str, str]]:
        if defn.name == "expectedAttendance":
            return [(o.value, o.label) for o in self.controller.attendance_options()]
        return list(defn.catalog or [])

    def _convert(self, defn: FieldDefinition, raw: str) -> Any:
        raw = raw.strip()[: self.MAX_INPUT_LENGTH]
        if defn.kind == FieldKind.BOOLEAN:
            return raw.lower() in YES_WORDS
        options = self._options_for(defn)
        if defn.kind == FieldKind.MULTI_SELECT:
            parts = [p.strip() for p in raw.split(",") if p.strip()]
            return [self._pick(options, p) for p in parts]
        if defn.kind == FieldKind.ENUM:
            return self._pick(options, raw)
        return raw

    @staticmethod
    def _pick(options: list[tuple[str, str]], raw: str) -> str:
        """Accept either an option value or its 1-based number."""
        if raw.isdigit() and 1 <= int(raw) <= len(options):
            return options[int(raw) - 1][0]
        return raw

    def _show_options(self, defn: FieldDefinition) -> None:
        for i, (value, label) in enumerate(self._options_for(defn), start=1):
            print(f"{DIM}    {i}. {label} [{value}]{RESET}")

    # ------------------------------------------------------------------ #
    # Running
    # ------------------------------------------------------------------ #

    def _banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  {settings.agency.artist_name.upper()} BOOKING REQUEST - {title}{RESET}")
        print(f"{BOLD}  Processed by {settings.agency.name}{RESET}")
        print(f"{BOLD}  Transport: {'live' if self.live else 'offline'}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        print()

    def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        if scenario not in self.SCENARIOS:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        self._banner(f"Scenario: {scenario}")
        answers = {**self.BASE_ANSWERS, **self.SCENARIOS[scenario]}
        for defn in prompt_order():
            raw = answers.get(defn.name, "")
            print(f"{BLUE}[{defn.label}] {RESET}{raw}")
            error = self.controller.set_field(defn.name, self._convert(defn, raw))
            if error:
                self.warn(error)

        asyncio.run(self._submit())
        if self.controller.state == FormState.FAILED:
            self.system_log("Retrying once")
            asyncio.run(self._retry())
        self._summary(scenario)

    def run(self) -> None:
        self._banner("Interactive")
        print(f"{DIM}  Press Enter to skip optional fields. Type 'quit' to exit.{RESET}")

        while True:
            if not self._collect_fields():
                print(f"\n{DIM}Session ended.{RESET}")
                return
            asyncio.run(self._submit())
            if not self._after_submit():
                print(f"\n{DIM}Session ended.{RESET}")
                return

    def _ask(self, prompt: str) -> Optional[str]:
        raw = input(f"{BLUE}{prompt}{RESET}")
        if raw.strip().lower() in ("quit", "exit", "q"):
            return None
        return raw

    def _collect_fields(self) -> bool:
        """Prompt for every field until it validates. False if the person quit."""
        for defn in prompt_order():
            suffix = " *" if defn.required else ""
            while True:
                if defn.kind in (FieldKind.ENUM, FieldKind.MULTI_SELECT):
                    self._show_options(defn)
                current = self.controller.values.get(defn.name)
                hint = f" ({current})" if current not in ("", [], False, None) else ""
                raw = self._ask(f"[{defn.label}{suffix}]{hint} ")
                if raw is None:
                    return False
                if not raw.strip() and hint:
                    break
                error = self.controller.set_field(defn.name, self._convert(defn, raw))
                if not error:
                    break
                self.warn(error)
        return True

    async def _submit(self) -> None:
        result = await self.controller.submit()
        if not result.is_valid:
            self.say("Please fix the following before submitting:")
            for name, message in self.controller.visible_errors().items():
                self.warn(f"{name}: {message}")
            return
        self.last_inquiry = result.inquiry
        self._report_outcome()

    async def _retry(self) -> None:
        await self.controller.retry()
        self._report_outcome()

    def _report_outcome(self) -> None:
        outcome = self.controller.outcome
        if outcome is None:
            return
        if outcome.status == OutcomeStatus.SUCCEEDED:
            self.say(
                "Booking request submitted successfully! "
                f"{settings.agency.name} will contact you within "
                f"{settings.agency.response_window_hours} hours."
            )
        elif outcome.status == OutcomeStatus.FAILED:
            self.warn(f"Failed to submit the form: {outcome.reason}. Please try again.")

    def _after_submit(self) -> bool:
        """Handle retry / edit / new after a submit. False if the person quit."""
        while True:
            state = self.controller.state
            if state == FormState.EDITING:
                return True
            if state == FormState.SUCCEEDED:
                raw = self._ask("Submit another request? [y/N] ")
                if raw is None or raw.strip().lower() not in YES_WORDS:
                    return False
                self.controller.start_new()
                return True
            if state == FormState.FAILED:
                raw = self._ask("[r]etry, [e]dit, [n]ew request? ")
                if raw is None:
                    return False
                choice = raw.strip().lower()[:1]
                if choice == "r":
                    asyncio.run(self._retry())
                elif choice == "e":
                    self.controller.dismiss_error()
                    return True
                elif choice == "n":
                    self.controller.start_new()
                    return True

    def _summary(self, scenario: str) -> None:
        machine = self.controller.machine
        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  Scenario '{scenario}' complete.{RESET}")
        print(f"{DIM}  State trace: {' -> '.join(machine.get_state_trace())}{RESET}")
        print(f"{DIM}  Failures: {machine.failure_count}{RESET}")
        if self.controller.errors:
            print(f"{DIM}  Field errors: {sorted(self.controller.errors)}{RESET}")
        inquiry = self.last_inquiry
        if inquiry is not None:
            print(f"{DIM}  Inquiry: {inquiry.contact_name}, {inquiry.event_name}{RESET}")
            label = attendance_label(inquiry)
            print(f"{DIM}  Attendance: {label}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Console booking form")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        default=None,
        help="Auto-play a pre-scripted scenario instead of interactive mode",
    )
    parser.add_argument(
        "--live",
        action="store_true",
        help=f"Post to {settings.form.site_url}{settings.form.submit_path} instead of the local handler",
    )
    args = parser.parse_args()

    session = ConsoleSession(live=args.live, flaky=args.scenario == "failure")
    if args.scenario:
        session.run_scenario(args.scenario)
    else:
        session.run()


if __name__ == "__main__":
    main()
