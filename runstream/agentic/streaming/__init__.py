"""Streaming module for workflow runs.

Components:
- events.py: SSE event types (Pydantic models)
- reshape.py: Message → record reshaping
- formatters.py: SSE formatting functions
- core.py: The run stream generator
"""

from runstream.agentic.streaming.core import stream_run, stream_run_request
from runstream.agentic.streaming.events import (
    ERROR,
    MESSAGES_COMPLETE,
    MESSAGES_PARTIAL,
    ErrorDetail,
    ErrorEvent,
    StreamEvent,
)
from runstream.agentic.streaming.formatters import (
    format_error,
    format_heartbeat,
    format_sse_event,
)
from runstream.agentic.streaming.reshape import (
    echo_input_messages,
    extract_tool_args,
    reshape_output_message,
)

__all__ = [
    # Core streaming function
    "stream_run",
    "stream_run_request",
    # Event types
    "StreamEvent",
    "ErrorEvent",
    "ErrorDetail",
    "MESSAGES_PARTIAL",
    "MESSAGES_COMPLETE",
    "ERROR",
    # Reshaping
    "echo_input_messages",
    "reshape_output_message",
    "extract_tool_args",
    # Formatters
    "format_sse_event",
    "format_error",
    "format_heartbeat",
]
