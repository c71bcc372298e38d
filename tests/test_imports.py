"""Tests for import chains and module integrity.

Ensures all public modules can be imported without errors and
that re-exports from __init__.py files work correctly.
"""

from celebrity_booking.form.state_machine import FormState


class TestSchemaImports:
    def test_import_form_schema(self):
        from celebrity_booking.schemas.form_schema import FIELD_DEFINITIONS, FIELD_NAMES
        assert len(FIELD_DEFINITIONS) == 25
        assert FIELD_NAMES[0] == "firstName"
        assert FIELD_NAMES[-1] == "termsAgreement"

    def test_import_booking_schema(self):
        from celebrity_booking.schemas.booking_schema import BookingInquiry, SubmissionResult
        assert BookingInquiry is not None
        assert SubmissionResult(success=True).reason is None

    def test_import_catalogs(self):
        from celebrity_booking.catalogs import ATTENDANCE_CATALOGS
        assert set(ATTENDANCE_CATALOGS) == {"vip", "private", "standard"}


class TestFormImports:
    def test_import_form_package(self):
        from celebrity_booking.form import (
            FormController, FormStateMachine, validate_record, resolve_attendance_options,
        )
        assert FormStateMachine().current_state == FormState.EDITING
        assert callable(validate_record)
        assert callable(resolve_attendance_options)
        assert FormController is not None


class TestTransportImports:
    def test_import_transport(self):
        from celebrity_booking.transport.base import SubmissionTransport
        from celebrity_booking.transport.form_post import FormPostTransport
        assert issubclass(FormPostTransport, SubmissionTransport)

    def test_import_handler(self):
        from celebrity_booking.handlers.form_submission import handle_form_submission
        assert callable(handle_form_submission)


class TestConfigImport:
    def test_import_config(self):
        from celebrity_booking.config import settings
        assert settings.agency.name is not None
        assert settings.form.form_name
        assert settings.transport.submit_timeout_sec > 0


class TestConsoleDemo:
    def test_console_session_imports(self):
        from console_demo import ConsoleSession
        session = ConsoleSession()
        assert session.controller.state == FormState.EDITING
        assert not session.live

    def test_prompt_order_asks_attendance_after_performance(self):
        from console_demo import prompt_order
        names = [d.name for d in prompt_order()]
        assert names.index("expectedAttendance") == names.index("performanceType") + 1
        assert len(names) == 25

    def test_valid_scenario_submits(self, capsys):
        from console_demo import ConsoleSession
        session = ConsoleSession()
        session.run_scenario("valid")
        assert session.controller.state == FormState.SUCCEEDED
        assert "submitted successfully" in capsys.readouterr().out

    def test_vip_scenario_submits(self, capsys):
        from console_demo import ConsoleSession
        session = ConsoleSession()
        session.run_scenario("vip")
        assert session.controller.state == FormState.SUCCEEDED
        assert "Attendance: 25 - 50 guests" in capsys.readouterr().out

    def test_summary_attendance_from_delivered_inquiry(self, capsys):
        from console_demo import ConsoleSession
        session = ConsoleSession()
        session.run_scenario("valid")
        assert session.controller.accepted_inquiry is None
        assert session.last_inquiry.expected_attendance == "10000-25000"
        assert "Attendance: 10,000 - 25,000" in capsys.readouterr().out

    def test_attendance_label_uses_inquiry_catalog(self):
        from console_demo import attendance_label
        from celebrity_booking.form.validator import validate_record
        from tests.conftest import TODAY, make_record

        record = make_record(eventType="private", expectedAttendance="under-50")
        inquiry = validate_record(record, today=TODAY).inquiry
        assert attendance_label(inquiry) == "Under 50 guests"

    def test_invalid_scenario_has_no_inquiry(self):
        from console_demo import ConsoleSession
        session = ConsoleSession()
        session.run_scenario("invalid")
        assert session.last_inquiry is None

    def test_invalid_scenario_stays_editing(self):
        from console_demo import ConsoleSession
        session = ConsoleSession()
        session.run_scenario("invalid")
        assert session.controller.state == FormState.EDITING
        assert {"email", "phone", "eventTime", "termsAgreement"} <= set(session.controller.errors)

    def test_failure_scenario_recovers_on_retry(self):
        from console_demo import ConsoleSession
        session = ConsoleSession(flaky=True)
        session.run_scenario("failure")
        assert session.controller.machine.failure_count == 1
        assert session.controller.state == FormState.SUCCEEDED
