"""SSE formatting functions.

Converts events to SSE wire format:
- Tagged events: event: {tag}\ndata: {json}\n\n
- Heartbeat comment: : heartbeat\n\n
"""

import json
from typing import Any

from pydantic import BaseModel

from runstream.agentic.streaming.events import ErrorDetail, ErrorEvent, StreamEvent


def _dump(item: Any) -> Any:
    if isinstance(item, BaseModel):
        return item.model_dump(exclude_none=True)
    return item


def format_sse_event(event: StreamEvent) -> str:
    """Format a StreamEvent as SSE.

    Args:
        event: Event with a tag and a list of records

    Returns:
        SSE-formatted string: "event: {tag}\\ndata: {json}\\n\\n"
    """
    data = [_dump(item) for item in event.data]
    return f"event: {event.event}\ndata: {json.dumps(data, default=str)}\n\n"


def format_error(message: str, error_type: str = "server_error") -> str:
    """Format the terminal error event."""
    event = ErrorEvent(error=ErrorDetail(message=message, type=error_type))
    data = event.model_dump(exclude={"event"})
    return f"event: {event.event}\ndata: {json.dumps(data)}\n\n"


def format_heartbeat() -> str:
    """SSE comment line sent just before the stream closes."""
    return ": heartbeat\n\n"
