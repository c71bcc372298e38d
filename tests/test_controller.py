"""Tests for the form state controller."""

import asyncio

import pytest

from celebrity_booking.form.controller import FormController, OutcomeStatus
from celebrity_booking.form.state_machine import FormState, InvalidTransitionError
from celebrity_booking.form.validator import Invalid, Valid
from celebrity_booking.schemas.booking_schema import SubmissionResult
from celebrity_booking.schemas.form_schema import FIELD_NAMES, empty_record

from tests.conftest import TODAY, RecordingTransport, failing_result, fill, make_record


class TestEditing:
    def test_starts_with_empty_record(self, controller):
        assert controller.state == FormState.EDITING
        assert controller.values == empty_record()
        assert controller.outcome is None

    def test_set_valid_field(self, controller):
        error = controller.set_field("firstName", "John")
        assert error is None
        assert controller.values["firstName"] == "John"
        assert "firstName" in controller.touched

    def test_set_invalid_field_records_error(self, controller):
        error = controller.set_field("email", "not-an-email")
        assert error == "Please enter a valid email address"
        assert controller.errors["email"] == error

    def test_fixing_field_clears_error(self, controller):
        controller.set_field("email", "not-an-email")
        controller.set_field("email", "john@company.com")
        assert "email" not in controller.errors

    def test_unknown_field_raises(self, controller):
        with pytest.raises(ValueError, match="Unknown field"):
            controller.set_field("favoriteColor", "blue")

    def test_touch_validates_without_changing_value(self, controller):
        error = controller.touch("lastName")
        assert error == "Last name must be at least 2 characters"
        assert controller.values["lastName"] == ""
        assert controller.visible_errors() == {"lastName": error}

    def test_visible_errors_only_for_touched_fields(self, controller):
        controller.errors["city"] = "City must be at least 2 characters"
        assert controller.visible_errors() == {}


class TestAttendanceReset:
    def test_changing_event_type_to_vip_clears_attendance(self, controller):
        controller.set_field("eventType", "concert")
        controller.set_field("expectedAttendance", "500-1000")
        controller.set_field("eventType", "vip")
        assert controller.values["expectedAttendance"] == ""
        assert "expectedAttendance" not in controller.touched

    def test_clears_even_if_value_valid_in_new_catalog(self, controller):
        controller.set_field("eventType", "concert")
        controller.set_field("expectedAttendance", "500-1000")
        controller.set_field("eventType", "private")  # private also lists 500-1000
        assert controller.values["expectedAttendance"] == ""

    def test_changing_performance_type_clears_attendance(self, controller):
        controller.set_field("eventType", "concert")
        controller.set_field("performanceType", "headliner")
        controller.set_field("expectedAttendance", "under-500")
        controller.set_field("performanceType", "meet-greet")
        assert controller.values["expectedAttendance"] == ""

    def test_clears_attendance_error(self, controller):
        controller.set_field("expectedAttendance", "5-10")
        assert "expectedAttendance" in controller.errors
        controller.set_field("eventType", "vip")
        assert "expectedAttendance" not in controller.errors

    def test_same_value_does_not_clear(self, controller):
        controller.set_field("eventType", "vip")
        controller.set_field("expectedAttendance", "5-10")
        controller.set_field("eventType", "vip")
        assert controller.values["expectedAttendance"] == "5-10"

    def test_padding_alone_does_not_clear(self, controller):
        controller.set_field("eventType", "vip")
        controller.set_field("expectedAttendance", "5-10")
        controller.set_field("eventType", " vip ")
        assert controller.values["expectedAttendance"] == "5-10"
        assert controller.attendance_options()[0].value == "5-10"

    def test_other_fields_do_not_clear(self, controller):
        controller.set_field("eventType", "vip")
        controller.set_field("expectedAttendance", "5-10")
        controller.set_field("venue", "Private Lounge")
        assert controller.values["expectedAttendance"] == "5-10"

    def test_attendance_options_follow_event_type(self, controller):
        controller.set_field("eventType", "vip")
        assert controller.attendance_options()[0].value == "5-10"
        controller.set_field("eventType", "private")
        assert controller.attendance_options()[0].value == "under-50"

    def test_vip_range_only_for_vip_or_meet_greet(self, controller):
        controller.set_field("eventType", "concert")
        assert controller.set_field("expectedAttendance", "5-10") is not None
        controller.set_field("performanceType", "meet-greet")
        assert controller.set_field("expectedAttendance", "5-10") is None


class TestSubmit:
    @pytest.mark.asyncio
    async def test_valid_submit_succeeds_and_clears(self, controller, transport):
        fill(controller, make_record())
        result = await controller.submit()
        assert isinstance(result, Valid)
        assert len(transport.calls) == 1
        assert controller.state == FormState.SUCCEEDED
        assert controller.outcome.status == OutcomeStatus.SUCCEEDED
        assert controller.values == empty_record()
        assert controller.touched == set()

    @pytest.mark.asyncio
    async def test_delivered_inquiry_matches_record(self, controller, transport):
        fill(controller, make_record(firstName="Jane"))
        await controller.submit()
        assert transport.calls[0].first_name == "Jane"

    @pytest.mark.asyncio
    async def test_terms_not_agreed_blocks_submission(self, controller, transport):
        fill(controller, make_record(termsAgreement=False))
        result = await controller.submit()
        assert isinstance(result, Invalid)
        assert list(result.errors) == ["termsAgreement"]
        assert transport.calls == []
        assert controller.state == FormState.EDITING

    @pytest.mark.asyncio
    async def test_invalid_submit_surfaces_all_errors(self, controller, transport):
        controller.set_field("firstName", "John")
        await controller.submit()
        assert controller.touched == set(FIELD_NAMES)
        assert "lastName" in controller.visible_errors()
        assert "firstName" not in controller.errors
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_submit_after_success_requires_start_new(self, controller):
        fill(controller, make_record())
        await controller.submit()
        with pytest.raises(InvalidTransitionError):
            await controller.submit()


class TestFailure:
    @pytest.mark.asyncio
    async def test_failure_keeps_record(self):
        transport = RecordingTransport(results=[failing_result(500)])
        controller = FormController(transport, today=TODAY)
        record = make_record()
        fill(controller, record)
        await controller.submit()
        assert controller.state == FormState.FAILED
        assert controller.values == record
        assert controller.outcome.status == OutcomeStatus.FAILED
        assert controller.outcome.reason == "Submission failed with status 500"

    @pytest.mark.asyncio
    async def test_edits_blocked_while_failed(self):
        controller = FormController(RecordingTransport(results=[failing_result()]), today=TODAY)
        fill(controller, make_record())
        await controller.submit()
        with pytest.raises(InvalidTransitionError):
            controller.set_field("firstName", "Jane")

    @pytest.mark.asyncio
    async def test_retry_redelivers_without_revalidating(self):
        transport = RecordingTransport(
            results=[failing_result(503), SubmissionResult(success=True, status_code=200)]
        )
        controller = FormController(transport, today=TODAY)
        fill(controller, make_record())
        await controller.submit()

        controller.values["firstName"] = ""
        outcome = await controller.retry()

        assert outcome.status == OutcomeStatus.SUCCEEDED
        assert len(transport.calls) == 2
        assert transport.calls[1] is transport.calls[0]
        assert transport.calls[1].first_name == "John"
        assert controller.values == empty_record()

    @pytest.mark.asyncio
    async def test_retry_only_after_failure(self, controller):
        with pytest.raises(InvalidTransitionError):
            await controller.retry()

    @pytest.mark.asyncio
    async def test_retry_without_accepted_inquiry_raises(self):
        transport = RecordingTransport(results=[failing_result()])
        controller = FormController(transport, today=TODAY)
        fill(controller, make_record())
        await controller.submit()
        controller._accepted = None

        with pytest.raises(InvalidTransitionError, match="No accepted inquiry"):
            await controller.retry()
        assert controller.state == FormState.FAILED
        assert len(transport.calls) == 1

    @pytest.mark.asyncio
    async def test_dismiss_error_keeps_record(self):
        controller = FormController(RecordingTransport(results=[failing_result()]), today=TODAY)
        record = make_record()
        fill(controller, record)
        await controller.submit()
        controller.dismiss_error()
        assert controller.state == FormState.EDITING
        assert controller.values == record
        assert controller.outcome is None
        assert controller.accepted_inquiry is None

    @pytest.mark.asyncio
    async def test_start_new_after_failure_clears_record(self):
        controller = FormController(RecordingTransport(results=[failing_result()]), today=TODAY)
        fill(controller, make_record())
        await controller.submit()
        controller.start_new()
        assert controller.state == FormState.EDITING
        assert controller.values == empty_record()

    @pytest.mark.asyncio
    async def test_start_new_after_success(self, controller):
        fill(controller, make_record())
        await controller.submit()
        controller.start_new()
        assert controller.state == FormState.EDITING
        assert controller.outcome is None

    @pytest.mark.asyncio
    async def test_transport_exception_treated_as_failure(self):
        transport = RecordingTransport(raises=RuntimeError("boom"))
        controller = FormController(transport, today=TODAY)
        fill(controller, make_record())
        await controller.submit()
        assert controller.state == FormState.FAILED
        assert controller.outcome.reason == "boom"

    @pytest.mark.asyncio
    async def test_timeout_treated_as_failure(self):
        transport = RecordingTransport(gate=asyncio.Event())
        controller = FormController(transport, submit_timeout=0.01, today=TODAY)
        fill(controller, make_record())
        await controller.submit()
        assert controller.state == FormState.FAILED
        assert "timed out" in controller.outcome.reason


class TestSingleFlight:
    @pytest.mark.asyncio
    async def test_second_submit_rejected_while_in_flight(self):
        gate = asyncio.Event()
        transport = RecordingTransport(gate=gate)
        controller = FormController(transport, today=TODAY)
        fill(controller, make_record())

        first = asyncio.create_task(controller.submit())
        await asyncio.sleep(0)
        assert controller.state == FormState.SUBMITTING
        assert controller.outcome.status == OutcomeStatus.PENDING

        with pytest.raises(InvalidTransitionError):
            await controller.submit()
        with pytest.raises(InvalidTransitionError):
            controller.set_field("firstName", "Jane")

        gate.set()
        await first
        assert len(transport.calls) == 1
        assert controller.state == FormState.SUCCEEDED
