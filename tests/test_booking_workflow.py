"""Tests for the booking submission workflow."""

import logging
from unittest.mock import AsyncMock, Mock

import pytest

from core.settings import ConfirmationDelivery
from domain.enums import OutcomeKind, WorkflowState
from domain.errors import DispatchError, LeadTimeViolation, MalformedRequest, RenderError
from services.booking_validation import BookingValidator
from services.booking_workflow import SUCCESS_MESSAGE, BookingWorkflow


@pytest.mark.unit
class TestSuccessfulSubmission:

    @pytest.mark.asyncio
    async def test_completes_and_sends_one_message(self, make_workflow, recording_transport, make_submission, frozen_clock):
        workflow = make_workflow(recording_transport)

        outcome = await workflow.submit(make_submission())

        assert outcome.kind == OutcomeKind.SUCCESS
        assert outcome.state == WorkflowState.COMPLETED
        assert outcome.status_code == 200
        assert outcome.body == {"success": True, "message": SUCCESS_MESSAGE}
        assert outcome.recipients == ["jane@example.com", "restaurant@thescenicinn.com"]
        assert len(recording_transport.sent) == 1

    @pytest.mark.asyncio
    async def test_attachment_delivery(self, make_workflow, recording_transport, make_submission, frozen_clock):
        workflow = make_workflow(recording_transport, delivery=ConfirmationDelivery.ATTACHMENT)

        outcome = await workflow.submit(make_submission())

        assert outcome.succeeded
        message = recording_transport.sent[0]
        assert [a.get_filename() for a in message.iter_attachments()] == ["booking-confirmation-2026-03-12.pdf"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("overrides", [
        {"contactName": "Łukasz Nowak"},
        {"specialRequests": "It’s a birthday 🎂"},
        {"contactName": "王小明"},
    ])
    async def test_attachment_delivery_beyond_latin1(
        self, make_workflow, recording_transport, make_submission, frozen_clock, overrides
    ):
        workflow = make_workflow(recording_transport, delivery=ConfirmationDelivery.ATTACHMENT)

        outcome = await workflow.submit(make_submission(**overrides))

        assert outcome.kind == OutcomeKind.SUCCESS
        pdf = next(recording_transport.sent[0].iter_attachments()).get_content()
        assert pdf.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_top_level_contact_email_is_shown(self, make_workflow, recording_transport, make_submission, frozen_clock):
        workflow = make_workflow(recording_transport)

        outcome = await workflow.submit(make_submission(contactEmail=None, contact_email="jane@example.com"))

        assert outcome.succeeded
        text = recording_transport.sent[0].get_body(preferencelist=("plain",)).get_content()
        assert "Contact Email: jane@example.com\n" in text


@pytest.mark.unit
class TestShortCircuits:
    """A failed step ends the workflow; later steps never run."""

    @pytest.fixture
    def spied_workflow(self):
        renderer = Mock()
        dispatcher = Mock()
        dispatcher.dispatch = AsyncMock()
        validator = BookingValidator(lead_time_hours=24, timezone="Europe/London")
        return BookingWorkflow(validator, renderer, dispatcher), renderer, dispatcher

    @pytest.mark.asyncio
    async def test_lead_time_violation_skips_render_and_dispatch(self, spied_workflow, make_submission, frozen_clock):
        workflow, renderer, dispatcher = spied_workflow

        outcome = await workflow.submit(make_submission(date="2026-03-10", time="14:00"))

        assert outcome.kind == OutcomeKind.CLIENT_ERROR
        assert outcome.state == WorkflowState.RECEIVED
        assert outcome.status_code == 400
        assert outcome.body == {"error": "Bookings must be made at least 24 hours in advance"}
        assert isinstance(outcome.error, LeadTimeViolation)
        renderer.render.assert_not_called()
        dispatcher.dispatch.assert_not_called()

    @pytest.mark.asyncio
    async def test_malformed_request_skips_render_and_dispatch(self, spied_workflow, make_submission, frozen_clock):
        workflow, renderer, dispatcher = spied_workflow

        outcome = await workflow.submit(make_submission(date="tomorrow"))

        assert outcome.kind == OutcomeKind.CLIENT_ERROR
        assert outcome.status_code == 400
        assert isinstance(outcome.error, MalformedRequest)
        assert outcome.body["error"].startswith("Invalid booking request:")
        renderer.render.assert_not_called()
        dispatcher.dispatch.assert_not_called()

    @pytest.mark.asyncio
    async def test_render_error_skips_dispatch(self, make_workflow, recording_transport, make_submission, frozen_clock, caplog):
        workflow = make_workflow(recording_transport)
        submission = make_submission(selections=[{"name": "A", "selections": [{"course": "Main", "price": 5}]}])

        with caplog.at_level(logging.ERROR):
            outcome = await workflow.submit(submission)

        assert outcome.kind == OutcomeKind.SERVER_ERROR
        assert outcome.state == WorkflowState.VALIDATED
        assert outcome.status_code == 500
        assert outcome.body == {"error": "Failed to process booking"}
        assert isinstance(outcome.error, RenderError)
        assert recording_transport.sent == []
        assert "RenderError" in caplog.text
        assert "missing item" in caplog.text

    @pytest.mark.asyncio
    async def test_dispatch_error_is_a_server_error(self, make_workflow, failing_transport, make_submission, frozen_clock, caplog):
        workflow = make_workflow(failing_transport)

        with caplog.at_level(logging.ERROR):
            outcome = await workflow.submit(make_submission())

        assert outcome.kind == OutcomeKind.SERVER_ERROR
        assert outcome.state == WorkflowState.RENDERED
        assert outcome.status_code == 500
        assert outcome.body == {"error": "Failed to process booking"}
        assert isinstance(outcome.error, DispatchError)
        assert failing_transport.attempts == 1
        assert "DispatchError" in caplog.text
        assert "Username and Password not accepted" in caplog.text
        assert "Username" not in str(outcome.body)
