"""
Booking submission workflow.
Runs one submission through validation, rendering and dispatch, stopping at
the first failure, and maps the result to an HTTP outcome.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from core.logging import LogContext
from domain.enums import OutcomeKind, WorkflowState
from domain.errors import GENERIC_FAILURE_MESSAGE, BookingError, RenderError
from domain.models import BookingSubmission
from services.booking_validation import BookingValidator
from services.confirmation_renderer import ConfirmationRenderer
from services.notification_dispatcher import NotificationDispatcher


logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Booking submitted successfully! You will receive a confirmation email shortly."


@dataclass
class BookingOutcome:
    """What the caller gets back from one submission."""

    kind: OutcomeKind
    state: WorkflowState
    status_code: int
    body: Dict[str, Any]
    error: Optional[BookingError] = None
    recipients: list = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.kind == OutcomeKind.SUCCESS

    @classmethod
    def success(cls, recipients: list) -> "BookingOutcome":
        return cls(
            kind=OutcomeKind.SUCCESS,
            state=WorkflowState.COMPLETED,
            status_code=200,
            body={"success": True, "message": SUCCESS_MESSAGE},
            recipients=recipients,
        )

    @classmethod
    def client_error(cls, state: WorkflowState, error: BookingError) -> "BookingOutcome":
        return cls(
            kind=OutcomeKind.CLIENT_ERROR,
            state=state,
            status_code=error.status_code,
            body={"error": error.user_message},
            error=error,
        )

    @classmethod
    def server_error(cls, state: WorkflowState, error: BookingError) -> "BookingOutcome":
        # Internal detail stays in the logs
        return cls(
            kind=OutcomeKind.SERVER_ERROR,
            state=state,
            status_code=500,
            body={"error": GENERIC_FAILURE_MESSAGE},
            error=error,
        )


class BookingWorkflow:
    """Received -> Validated -> Rendered -> Dispatched -> Completed."""

    def __init__(
        self,
        validator: BookingValidator,
        renderer: ConfirmationRenderer,
        dispatcher: NotificationDispatcher,
    ):
        self.validator = validator
        self.renderer = renderer
        self.dispatcher = dispatcher

    async def submit(self, submission: BookingSubmission) -> BookingOutcome:
        """
        Process one booking submission.

        Nothing is retried and nothing is persisted; a failed step ends the
        workflow with the matching outcome.
        """
        booking = submission.booking_data
        ctx = LogContext(
            logger,
            booking_date=booking.date,
            booking_time=booking.time,
            party_size=booking.party_size,
        )
        state = WorkflowState.RECEIVED

        validation = self.validator.validate(submission)
        if not validation.is_valid:
            ctx.log("info", f"Booking rejected: {validation.error}", error_type=type(validation.error).__name__)
            return BookingOutcome.client_error(state, validation.error)
        state = WorkflowState.VALIDATED

        try:
            # PDF generation blocks; keep it off the event loop
            document = await asyncio.to_thread(
                self.renderer.render,
                booking,
                submission.menu_selections,
                submission.recipient_email,
            )
        except RenderError as e:
            ctx.log("error", f"RenderError: {e}", error_type="RenderError")
            return BookingOutcome.server_error(state, e)
        state = WorkflowState.RENDERED

        recipients = self.dispatcher.recipients_for(submission.recipient_email)
        outcome = await self.dispatcher.dispatch(recipients, document, booking)
        if not outcome.success:
            ctx.log(
                "error",
                f"DispatchError: {outcome.error}",
                error_type="DispatchError",
                recipient_count=len(recipients),
            )
            return BookingOutcome.server_error(state, outcome.error)
        state = WorkflowState.DISPATCHED

        ctx.log("info", "Booking completed", last_state=state.value, recipient_count=len(recipients))
        return BookingOutcome.success(recipients)
