"""Message models for the threads API.

Input side:
    RunRequest { input: { messages: [InputMessage, ...] }, config: {...} }

Output side (the records carried in SSE ``data``):
    EchoMessageRecord  - initial echo of each input message
    AIMessageRecord    - an ai turn, with any tool calls it made
    ToolMessageRecord  - a tool result
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# Aliases accepted for the role tag. OpenAI-style clients send "role"
# with user/assistant, LangGraph-style clients send "type" with human/ai.
ROLE_ALIASES: dict[str, str] = {
    "human": "human",
    "user": "human",
    "ai": "ai",
    "assistant": "ai",
    "tool": "tool",
    "system": "system",
}


class InputMessage(BaseModel):
    """One message of the request payload.

    Unknown fields are kept so the message reaches the workflow unmodified.
    """

    model_config = ConfigDict(extra="allow")

    type: str | None = None
    role: str | None = None
    content: Any = None

    @property
    def kind(self) -> str:
        """Normalized role tag: human, ai, tool, system, or the raw tag."""
        tag = (self.type or self.role or "").lower()
        return ROLE_ALIASES.get(tag, tag)

    def text(self) -> str:
        """Content flattened to text (content-block lists are joined)."""
        if isinstance(self.content, str):
            return self.content
        if isinstance(self.content, list):
            chunks = []
            for block in self.content:
                if isinstance(block, str):
                    chunks.append(block)
                elif isinstance(block, dict) and block.get("type") == "text":
                    chunks.append(str(block.get("text", "")))
            return "".join(chunks)
        if self.content is None:
            return ""
        return str(self.content)


class RunInput(BaseModel):
    """The ``input`` object of a run request."""

    model_config = ConfigDict(extra="allow")

    messages: list[InputMessage]


class RunRequest(BaseModel):
    """Body of POST /threads/{thread_id}/runs/stream."""

    input: RunInput
    config: dict[str, Any] | None = None


class ThreadResponse(BaseModel):
    """Body returned by POST /threads."""

    thread_id: str


class EchoMessageRecord(BaseModel):
    """Initial echo of an input message."""

    id: str
    type: Literal["human", "ai", "system"]
    content: Any = None


class ToolCallRecord(BaseModel):
    """A tool call requested by an ai message."""

    id: str | None = None
    name: str
    args: dict[str, Any] = Field(default_factory=dict)


class AIMessageRecord(BaseModel):
    """An ai message produced by the workflow."""

    type: Literal["ai"] = "ai"
    id: str
    content: Any = ""
    tool_calls: list[ToolCallRecord] = Field(default_factory=list)


class ToolMessageRecord(BaseModel):
    """A tool result produced by the workflow."""

    type: Literal["tool"] = "tool"
    id: str
    content: Any = ""
    tool_call_id: str | None = None
    name: str | None = None


MessageRecord = EchoMessageRecord | AIMessageRecord | ToolMessageRecord
