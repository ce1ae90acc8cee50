"""Domain enums for the group booking service."""

from enum import Enum


class WorkflowState(str, Enum):
    """Stages of a single booking submission."""

    RECEIVED = "received"
    VALIDATED = "validated"
    RENDERED = "rendered"
    DISPATCHED = "dispatched"
    COMPLETED = "completed"


class OutcomeKind(str, Enum):
    """How a booking submission ended."""

    SUCCESS = "success"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
