"""Convert request messages to pydantic-ai native message format.

Clients send LangGraph-style message lists:
    {"type": "human", "content": "..."}
    {"type": "ai", "content": "...", "tool_calls": [{"id": ..., "name": ..., "args": {...}}]}
    {"type": "tool", "content": "...", "tool_call_id": "...", "name": "..."}
    {"type": "system", "content": "..."}

Pydantic-ai format (what the agent run expects):
    ModelRequest(parts=[UserPromptPart(content="...")])
    ModelResponse(parts=[TextPart(content="..."), ToolCallPart(...)])
    ModelRequest(parts=[ToolReturnPart(...)])

The trailing human message becomes the run prompt; everything before it is
message history. pydantic-ai only adds the agent's system prompt when the
history is empty, so it is prepended here when there is history.
"""

import json
import re
from typing import Any

from pydantic_ai.messages import (
    ModelMessage,
    ModelRequest,
    ModelResponse,
    SystemPromptPart,
    TextPart,
    ToolCallPart,
    ToolReturnPart,
    UserPromptPart,
)

from runstream.models.messages import InputMessage


def _sanitize_tool_name(tool_name: str) -> str:
    """Sanitize tool name for OpenAI API compatibility.

    OpenAI requires tool names to match pattern: ^[a-zA-Z0-9_-]+$
    """
    return re.sub(r"[^a-zA-Z0-9_-]", "_", tool_name)


def _parse_args(raw: Any) -> dict[str, Any]:
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, str) and raw.strip():
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            return {"raw": raw}
        return parsed if isinstance(parsed, dict) else {"value": parsed}
    return {}


def _extra(msg: InputMessage, key: str) -> Any:
    return (msg.model_extra or {}).get(key)


def to_pydantic_messages(
    messages: list[InputMessage],
    system_prompt: str | None = None,
) -> list[ModelMessage]:
    """Convert request messages to pydantic-ai ModelMessage history.

    Args:
        messages: Request messages, oldest first
        system_prompt: The workflow's system prompt, prepended when the
            resulting history is non-empty

    Returns:
        List of ModelMessage ready for agent.run(message_history=...)
    """
    history: list[ModelMessage] = []
    known_calls: set[str] = set()

    for i, msg in enumerate(messages):
        kind = msg.kind

        if kind == "human":
            history.append(ModelRequest(parts=[UserPromptPart(content=msg.text())]))

        elif kind == "ai":
            parts: list[Any] = []
            text = msg.text()
            if text:
                parts.append(TextPart(content=text))
            for j, call in enumerate(_extra(msg, "tool_calls") or []):
                if not isinstance(call, dict):
                    continue
                call_id = call.get("id") or f"call_{i}_{j}"
                known_calls.add(call_id)
                parts.append(
                    ToolCallPart(
                        tool_name=_sanitize_tool_name(call.get("name") or "unknown_tool"),
                        args=_parse_args(call.get("args")),
                        tool_call_id=call_id,
                    )
                )
            if parts:
                history.append(ModelResponse(parts=parts, model_name="recovered"))

        elif kind == "tool":
            tool_name = _sanitize_tool_name(_extra(msg, "name") or "unknown_tool")
            tool_call_id = _extra(msg, "tool_call_id") or f"call_{i}"

            # Orphan tool message (no preceding call) - synthesize the call
            if tool_call_id not in known_calls:
                history.append(
                    ModelResponse(
                        parts=[ToolCallPart(tool_name=tool_name, args={}, tool_call_id=tool_call_id)],
                        model_name="recovered",
                    )
                )
                known_calls.add(tool_call_id)

            history.append(
                ModelRequest(
                    parts=[
                        ToolReturnPart(
                            tool_name=tool_name,
                            content=msg.content if msg.content is not None else "",
                            tool_call_id=tool_call_id,
                        )
                    ]
                )
            )

        else:
            # system and anything unrecognized
            text = msg.text()
            if text:
                history.append(ModelRequest(parts=[SystemPromptPart(content=text)]))

    if history and system_prompt:
        history.insert(0, ModelRequest(parts=[SystemPromptPart(content=system_prompt)]))

    return history


def split_prompt(
    messages: list[InputMessage],
    system_prompt: str | None = None,
) -> tuple[str | None, list[ModelMessage]]:
    """Split request messages into (prompt, message_history).

    The prompt is the text of the last message when it is a human message,
    otherwise None and every message goes to history.
    """
    if messages and messages[-1].kind == "human":
        prompt = messages[-1].text()
        return prompt, to_pydantic_messages(messages[:-1], system_prompt)
    return None, to_pydantic_messages(messages, system_prompt)
