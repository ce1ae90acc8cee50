"""Domain layer for the group booking service."""

from .enums import WorkflowState, OutcomeKind
from .errors import (
    BookingError,
    MalformedRequest,
    LeadTimeViolation,
    RenderError,
    DispatchError,
    LEAD_TIME_MESSAGE,
    GENERIC_FAILURE_MESSAGE,
)
from .models import (
    BookingRequest,
    CourseSelection,
    MenuSelection,
    BookingSubmission,
    Menu,
    MenuItem,
    HealthResponse,
    MenusResponse,
    MenuItemsResponse,
    BookingSuccessResponse,
    ErrorResponse,
)

__all__ = [
    # Enums
    "WorkflowState",
    "OutcomeKind",
    # Errors
    "BookingError",
    "MalformedRequest",
    "LeadTimeViolation",
    "RenderError",
    "DispatchError",
    "LEAD_TIME_MESSAGE",
    "GENERIC_FAILURE_MESSAGE",
    # Models
    "BookingRequest",
    "CourseSelection",
    "MenuSelection",
    "BookingSubmission",
    "Menu",
    "MenuItem",
    "HealthResponse",
    "MenusResponse",
    "MenuItemsResponse",
    "BookingSuccessResponse",
    "ErrorResponse",
]
