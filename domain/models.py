"""Domain models using Pydantic v2 for the group booking service."""

from decimal import Decimal
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class BookingRequest(BaseModel):
    """Booking details as submitted by the client.

    ``date`` and ``time`` are kept as the strings the client sent: they are
    echoed verbatim in the document and subject, and parsed by the validator.
    """

    date: str = Field(..., description="Booking date (YYYY-MM-DD)")
    time: str = Field(..., description="Booking time (HH:MM)")
    party_size: int = Field(..., alias="partySize", ge=1, description="Number of guests")
    contact_name: str = Field(..., alias="contactName", min_length=1, max_length=200)
    contact_email: Optional[EmailStr] = Field(None, alias="contactEmail")
    special_requests: Optional[str] = Field(None, alias="specialRequests", max_length=2000)

    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
        frozen=True,
    )


class CourseSelection(BaseModel):
    """One course chosen by one person.

    Fields are optional here so that incomplete selections reach the
    renderer, which rejects them.
    """

    course: Optional[str] = None
    item: Optional[str] = None
    price: Optional[Decimal] = None

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    @field_validator("price", mode="before")
    @classmethod
    def keep_submitted_precision(cls, v: Any) -> Any:
        """Convert floats without picking up binary noise; integral floats become ints."""
        if isinstance(v, bool):
            raise ValueError("price must be a number")
        if isinstance(v, float):
            if v.is_integer():
                return int(v)
            return Decimal(repr(v))
        return v


class MenuSelection(BaseModel):
    """Menu choices for one attending person, in submission order."""

    name: str = Field(..., max_length=200)
    selections: List[CourseSelection] = Field(default_factory=list)

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)


class BookingSubmission(BaseModel):
    """Body of ``POST /booking``."""

    booking_data: BookingRequest = Field(..., alias="bookingData")
    menu_selections: List[MenuSelection] = Field(default_factory=list, alias="menuSelections")
    contact_email: Optional[EmailStr] = Field(None, alias="contactEmail")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @property
    def recipient_email(self) -> Optional[str]:
        """Customer address to send to: top-level field first, then the booking's own."""
        return self.contact_email or self.booking_data.contact_email


class Menu(BaseModel):
    """A menu offered for group bookings."""

    id: str
    name: str
    schedule: Optional[str] = None
    pricing: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class MenuItem(BaseModel):
    """A dish on a menu."""

    id: str
    name: str
    description: Optional[str] = None
    price: Union[int, float]
    section_key: str
    section_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class HealthResponse(BaseModel):
    """Health check payload."""

    status: str
    message: str
    timestamp: Optional[str] = None
    version: Optional[str] = None


class MenusResponse(BaseModel):
    """Envelope for the menu list."""

    success: bool = True
    data: List[Menu]


class MenuItemsResponse(BaseModel):
    """Envelope for the items of one menu."""

    success: bool = True
    data: List[MenuItem]


class BookingSuccessResponse(BaseModel):
    """Returned when the confirmation was sent."""

    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Returned for any rejected or failed booking."""

    error: str
