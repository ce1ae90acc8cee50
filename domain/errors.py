"""Error taxonomy for the booking workflow."""

from typing import Optional


LEAD_TIME_MESSAGE = "Bookings must be made at least {hours:g} hours in advance"
GENERIC_FAILURE_MESSAGE = "Failed to process booking"


class BookingError(Exception):
    """Base class for booking failures.

    ``user_message`` is safe to return to the client; ``str(error)`` carries
    the internal detail and is only logged.
    """

    status_code: int = 500
    user_message: str = GENERIC_FAILURE_MESSAGE

    def __init__(self, detail: str, user_message: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        if user_message is not None:
            self.user_message = user_message


class MalformedRequest(BookingError):
    """The booking request is missing data or cannot be parsed."""

    status_code = 400

    def __init__(self, detail: str, user_message: Optional[str] = None):
        super().__init__(detail, user_message or f"Invalid booking request: {detail}")


class LeadTimeViolation(BookingError):
    """The booking is closer than the minimum lead time."""

    status_code = 400

    def __init__(self, hours_until_booking: float, minimum_hours: float = 24):
        super().__init__(
            f"Booking is {hours_until_booking:.2f}h away, minimum is {minimum_hours:g}h",
            LEAD_TIME_MESSAGE.format(hours=minimum_hours),
        )
        self.hours_until_booking = hours_until_booking
        self.minimum_hours = minimum_hours


class RenderError(BookingError):
    """The confirmation document could not be rendered."""


class DispatchError(BookingError):
    """The confirmation could not be handed to the mail transport."""
