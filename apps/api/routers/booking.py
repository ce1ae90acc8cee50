"""Group booking submission endpoint."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from apps.api.deps import get_workflow
from domain.errors import GENERIC_FAILURE_MESSAGE
from domain.models import BookingSubmission, BookingSuccessResponse, ErrorResponse
from services.booking_workflow import BookingWorkflow


logger = logging.getLogger(__name__)

router = APIRouter(tags=["booking"])


@router.post(
    "/booking",
    response_model=BookingSuccessResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit_booking(
    submission: BookingSubmission,
    workflow: BookingWorkflow = Depends(get_workflow),
):
    """
    Submit a group booking.

    Validates the lead time, renders the confirmation and emails it to the
    customer and the venue. The response is sent once the email has been
    handed to the mail server, or the attempt has failed.
    """
    try:
        outcome = await workflow.submit(submission)
    except Exception:
        logger.exception("Unexpected booking failure")
        return JSONResponse(status_code=500, content={"error": GENERIC_FAILURE_MESSAGE})

    return JSONResponse(status_code=outcome.status_code, content=outcome.body)
