"""SSE event types for run streams.

All events are Pydantic models for consistent serialization.
"""

from typing import Any

from pydantic import BaseModel, Field

MESSAGES_PARTIAL = "messages/partial"
MESSAGES_COMPLETE = "messages/complete"
ERROR = "error"


class StreamEvent(BaseModel):
    """A tagged batch of message records."""

    event: str = MESSAGES_PARTIAL
    data: list[Any] = Field(default_factory=list)


class ErrorDetail(BaseModel):
    """Body of an error event."""

    message: str
    type: str = "server_error"


class ErrorEvent(BaseModel):
    """SSE event written when a run fails. Always the last event."""

    event: str = ERROR
    error: ErrorDetail
