"""Background status service package."""

from .status import (
    IDLE_STATUS,
    StatusPayload,
    StatusService,
    remaining_after,
    status_payload_for,
)
from .client import StatusServiceClient

__all__ = [
    "IDLE_STATUS",
    "StatusPayload",
    "StatusService",
    "remaining_after",
    "status_payload_for",
    "StatusServiceClient",
]
