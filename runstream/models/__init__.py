"""runstream models."""

from runstream.models.messages import (
    AIMessageRecord,
    EchoMessageRecord,
    InputMessage,
    MessageRecord,
    RunInput,
    RunRequest,
    ThreadResponse,
    ToolCallRecord,
    ToolMessageRecord,
)

__all__ = [
    "InputMessage",
    "RunInput",
    "RunRequest",
    "ThreadResponse",
    "EchoMessageRecord",
    "AIMessageRecord",
    "ToolCallRecord",
    "ToolMessageRecord",
    "MessageRecord",
]
