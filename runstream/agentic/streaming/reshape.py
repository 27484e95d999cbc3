"""Reshape messages into the records carried by SSE events.

Two directions:

- echo_input_messages: request messages → EchoMessageRecord list, sent
  before the workflow runs so the client can render the conversation.
- reshape_output_message: one workflow output message → zero or more
  AIMessageRecord / ToolMessageRecord.

OUTPUT MESSAGE FORMATS
----------------------
pydantic-ai (AgentWorkflow):
- ModelResponse → one ai record. TextParts are joined into content,
  ToolCallParts become tool_calls.
- ModelRequest → one tool record per ToolReturnPart, and per
  RetryPromptPart bound to a tool. User and system prompt parts are skipped.

Tagged messages (custom workflows, LangChain-like objects):
- dicts or objects with ``type`` (or ``role``) of ai/assistant or tool.
  Anything else (human, system) is skipped.

TOOL ARGUMENT EXTRACTION
------------------------
Tool call args may arrive as:
- ToolCallPart object with .args attribute
- ArgsDict object with .args_dict attribute
- Plain dict
- JSON string
- None (no arguments)
"""

import json
import uuid
from typing import Any

from pydantic_ai.messages import (
    ModelRequest,
    ModelResponse,
    RetryPromptPart,
    TextPart,
    ToolCallPart,
    ToolReturnPart,
)

from runstream.models.messages import (
    ROLE_ALIASES,
    AIMessageRecord,
    EchoMessageRecord,
    InputMessage,
    ToolCallRecord,
    ToolMessageRecord,
)


def random_id() -> str:
    """Short random identifier for records."""
    return uuid.uuid4().hex[:12]


def extract_tool_args(part_or_args: Any) -> dict | None:
    """Extract tool arguments from a ToolCallPart or raw args."""
    # If it's a ToolCallPart, get the .args attribute
    args = getattr(part_or_args, "args", part_or_args)

    if args is None:
        return None

    if hasattr(args, "args_dict"):
        return args.args_dict

    if isinstance(args, dict):
        return args

    if isinstance(args, str):
        if not args.strip():
            return {}
        try:
            parsed = json.loads(args)
        except json.JSONDecodeError:
            return {"raw": args}
        return parsed if isinstance(parsed, dict) else {"value": parsed}

    return None


def _stringify(content: Any) -> str:
    if isinstance(content, str):
        return content
    if content is None:
        return ""
    try:
        return json.dumps(content, default=str)
    except (TypeError, ValueError):
        return str(content)


def _field(message: Any, key: str, default: Any = None) -> Any:
    if isinstance(message, dict):
        return message.get(key, default)
    return getattr(message, key, default)


def echo_input_messages(messages: list[InputMessage]) -> list[EchoMessageRecord]:
    """Initial echo of the request messages.

    human and ai keep their tag, everything else is reported as system.
    """
    records = []
    for msg in messages:
        kind = msg.kind
        records.append(
            EchoMessageRecord(
                id=random_id(),
                type=kind if kind in ("human", "ai") else "system",
                content=msg.content,
            )
        )
    return records


def _ai_record(content: Any, tool_calls: list[ToolCallRecord]) -> AIMessageRecord:
    return AIMessageRecord(
        id=f"chatcmpl-{random_id()}",
        content=content,
        tool_calls=tool_calls,
    )


def _from_model_response(message: ModelResponse) -> list[AIMessageRecord]:
    text = "".join(p.content for p in message.parts if isinstance(p, TextPart))
    tool_calls = [
        ToolCallRecord(
            id=p.tool_call_id,
            name=p.tool_name,
            args=extract_tool_args(p) or {},
        )
        for p in message.parts
        if isinstance(p, ToolCallPart)
    ]
    return [_ai_record(text, tool_calls)]


def _from_model_request(message: ModelRequest) -> list[ToolMessageRecord]:
    records = []
    for part in message.parts:
        if isinstance(part, ToolReturnPart) or (
            isinstance(part, RetryPromptPart) and part.tool_name
        ):
            records.append(
                ToolMessageRecord(
                    id=random_id(),
                    content=_stringify(part.content),
                    tool_call_id=part.tool_call_id,
                    name=part.tool_name,
                )
            )
    return records


def _from_tagged(message: Any) -> list[AIMessageRecord | ToolMessageRecord]:
    tag = str(_field(message, "type") or _field(message, "role") or "").lower()
    kind = ROLE_ALIASES.get(tag, tag)

    if kind == "ai":
        tool_calls = []
        for call in _field(message, "tool_calls") or []:
            name = _field(call, "name")
            if not name:
                continue
            tool_calls.append(
                ToolCallRecord(
                    id=_field(call, "id"),
                    name=name,
                    args=extract_tool_args(_field(call, "args")) or {},
                )
            )
        return [_ai_record(_field(message, "content", ""), tool_calls)]

    if kind == "tool":
        return [
            ToolMessageRecord(
                id=random_id(),
                content=_field(message, "content", ""),
                tool_call_id=_field(message, "tool_call_id"),
                name=_field(message, "name"),
            )
        ]

    return []


def reshape_output_message(message: Any) -> list[AIMessageRecord | ToolMessageRecord]:
    """Reshape one workflow output message into ai/tool records."""
    if isinstance(message, ModelResponse):
        return _from_model_response(message)
    if isinstance(message, ModelRequest):
        return _from_model_request(message)
    return _from_tagged(message)
