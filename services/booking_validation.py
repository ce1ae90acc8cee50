"""
Booking validation.
Checks that a submission is complete enough to confirm and that the booking
is far enough ahead of the moment it is submitted.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.utils_datetime import (
    TzInfo,
    combine_booking_datetime,
    get_current_datetime,
    get_timezone,
    hours_between,
    parse_booking_date,
    parse_booking_time,
)
from domain.errors import BookingError, LeadTimeViolation, MalformedRequest
from domain.models import BookingSubmission


logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Outcome of validating one submission: either a booking time or an error."""

    is_valid: bool
    booking_at: Optional[datetime] = None
    hours_until_booking: Optional[float] = None
    error: Optional[BookingError] = None

    @classmethod
    def ok(cls, booking_at: datetime, hours_until_booking: float) -> "ValidationResult":
        return cls(is_valid=True, booking_at=booking_at, hours_until_booking=hours_until_booking)

    @classmethod
    def fail(cls, error: BookingError) -> "ValidationResult":
        return cls(is_valid=False, error=error)


class BookingValidator:
    """Enforces structural completeness and the minimum lead time."""

    def __init__(self, lead_time_hours: float = 24, timezone: Optional[TzInfo] = None):
        """
        Args:
            lead_time_hours: Minimum hours between submission and the booking
            timezone: Timezone the submitted date and time are expressed in
        """
        self.lead_time_hours = lead_time_hours
        self.tz = get_timezone(timezone)

    def validate(self, submission: BookingSubmission) -> ValidationResult:
        """
        Validate a booking submission.

        The booking time is compared against the current time in the venue
        timezone as a real number of hours: exactly the lead time passes,
        anything less fails.

        Args:
            submission: Parsed submission

        Returns:
            ValidationResult holding the localized booking time, or a
            MalformedRequest / LeadTimeViolation error
        """
        booking = submission.booking_data

        if not submission.recipient_email:
            return ValidationResult.fail(MalformedRequest("contactEmail is required"))

        booking_date = parse_booking_date(booking.date)
        if booking_date is None:
            return ValidationResult.fail(
                MalformedRequest("date is not a valid date (expected YYYY-MM-DD)")
            )

        booking_time = parse_booking_time(booking.time)
        if booking_time is None:
            return ValidationResult.fail(
                MalformedRequest("time is not a valid time (expected HH:MM)")
            )

        booking_at = combine_booking_datetime(booking_date, booking_time, self.tz)
        now = get_current_datetime(self.tz)
        hours_until_booking = hours_between(now, booking_at)

        if hours_until_booking < self.lead_time_hours:
            logger.info(
                "Booking rejected for lead time",
                extra={"booking_date": booking.date, "hours_until_booking": round(hours_until_booking, 2)}
            )
            return ValidationResult.fail(LeadTimeViolation(hours_until_booking, self.lead_time_hours))

        return ValidationResult.ok(booking_at, hours_until_booking)
