"""Unit tests for message reshaping (input echo and workflow output)."""

import json
from types import SimpleNamespace

from pydantic_ai.messages import (
    ModelRequest,
    ModelResponse,
    RetryPromptPart,
    SystemPromptPart,
    TextPart,
    ToolCallPart,
    ToolReturnPart,
    UserPromptPart,
)

from runstream.agentic.streaming import StreamEvent, format_sse_event
from runstream.agentic.streaming.reshape import (
    echo_input_messages,
    random_id,
    reshape_output_message,
)
from runstream.models.messages import (
    AIMessageRecord,
    InputMessage,
    ToolMessageRecord,
)


class TestEchoInputMessages:
    """Initial echo of request messages."""

    def test_role_mapping(self):
        messages = [
            InputMessage(type="human", content="a"),
            InputMessage(type="ai", content="b"),
            InputMessage(type="system", content="c"),
            InputMessage(type="tool", content="d"),
            InputMessage(role="user", content="e"),
            InputMessage(role="assistant", content="f"),
            InputMessage(type="weird", content="g"),
        ]
        records = echo_input_messages(messages)

        assert [r.type for r in records] == [
            "human", "ai", "system", "system", "human", "ai", "system",
        ]
        assert [r.content for r in records] == ["a", "b", "c", "d", "e", "f", "g"]

    def test_ids_are_fresh_and_unique(self):
        messages = [InputMessage(type="human", content="x", id="client-id")] * 3
        ids = [r.id for r in echo_input_messages(messages)]

        assert "client-id" not in ids
        assert len(set(ids)) == 3

    def test_content_blocks_passed_through(self):
        blocks = [{"type": "text", "text": "hello"}]
        records = echo_input_messages([InputMessage(type="human", content=blocks)])
        assert records[0].content == blocks

    def test_missing_content_left_out(self):
        [record] = echo_input_messages([InputMessage(type="human")])

        assert "content" not in record.model_dump(exclude_none=True)
        event = format_sse_event(StreamEvent(event="messages/partial", data=[record]))
        data = json.loads(event.split("data: ", 1)[1])
        assert data == [{"id": record.id, "type": "human"}]

    def test_empty_content_kept(self):
        [record] = echo_input_messages([InputMessage(type="human", content="")])
        assert record.model_dump(exclude_none=True)["content"] == ""

    def test_random_id_shape(self):
        assert len(random_id()) == 12


class TestReshapeModelMessages:
    """pydantic-ai ModelRequest / ModelResponse output."""

    def test_model_response_joins_text_parts(self):
        message = ModelResponse(parts=[TextPart(content="Hello "), TextPart(content="world")])
        [record] = reshape_output_message(message)

        assert isinstance(record, AIMessageRecord)
        assert record.content == "Hello world"
        assert record.tool_calls == []
        assert record.id.startswith("chatcmpl-")

    def test_model_response_with_tool_calls(self):
        message = ModelResponse(
            parts=[
                ToolCallPart(tool_name="search", args='{"q": "cats"}', tool_call_id="c1"),
                ToolCallPart(tool_name="lookup", args=None, tool_call_id="c2"),
            ]
        )
        [record] = reshape_output_message(message)

        assert record.content == ""
        assert [(c.id, c.name, c.args) for c in record.tool_calls] == [
            ("c1", "search", {"q": "cats"}),
            ("c2", "lookup", {}),
        ]

    def test_model_request_user_and_system_parts_skipped(self):
        message = ModelRequest(
            parts=[SystemPromptPart(content="sys"), UserPromptPart(content="hi")]
        )
        assert reshape_output_message(message) == []

    def test_model_request_one_record_per_tool_return(self):
        message = ModelRequest(
            parts=[
                ToolReturnPart(tool_name="a", content="one", tool_call_id="c1"),
                ToolReturnPart(tool_name="b", content={"temp": 21}, tool_call_id="c2"),
            ]
        )
        records = reshape_output_message(message)

        assert all(isinstance(r, ToolMessageRecord) for r in records)
        assert [(r.name, r.tool_call_id) for r in records] == [("a", "c1"), ("b", "c2")]
        assert records[0].content == "one"
        assert json.loads(records[1].content) == {"temp": 21}

    def test_tool_retry_prompt_becomes_tool_record(self):
        message = ModelRequest(
            parts=[
                RetryPromptPart(content="bad args", tool_name="search", tool_call_id="c9"),
                RetryPromptPart(content="output invalid"),
            ]
        )
        records = reshape_output_message(message)

        assert len(records) == 1
        assert records[0].name == "search"
        assert records[0].tool_call_id == "c9"
        assert records[0].content == "bad args"


class TestReshapeTaggedMessages:
    """Dict and attribute-style messages from custom workflows."""

    def test_ai_dict(self):
        [record] = reshape_output_message(
            {
                "type": "ai",
                "content": "done",
                "tool_calls": [{"id": "t1", "name": "calc", "args": {"x": 1}}],
            }
        )
        assert record.type == "ai"
        assert record.content == "done"
        assert record.tool_calls[0].model_dump() == {"id": "t1", "name": "calc", "args": {"x": 1}}

    def test_assistant_role_alias(self):
        [record] = reshape_output_message({"role": "assistant", "content": "ok"})
        assert record.type == "ai"

    def test_tool_dict(self):
        [record] = reshape_output_message(
            {"type": "tool", "content": "42", "tool_call_id": "t1", "name": "calc"}
        )
        assert record.model_dump(exclude={"id"}) == {
            "type": "tool",
            "content": "42",
            "tool_call_id": "t1",
            "name": "calc",
        }

    def test_tool_dict_missing_fields_dropped_on_dump(self):
        [record] = reshape_output_message({"type": "tool", "content": "x"})
        assert "name" not in record.model_dump(exclude_none=True)

    def test_attribute_style_message(self):
        call = SimpleNamespace(id="t2", name="search", args={"q": "dogs"})
        message = SimpleNamespace(type="ai", content="looking", tool_calls=[call])
        [record] = reshape_output_message(message)

        assert record.tool_calls[0].name == "search"
        assert record.tool_calls[0].args == {"q": "dogs"}

    def test_human_and_unknown_skipped(self):
        assert reshape_output_message({"type": "human", "content": "hi"}) == []
        assert reshape_output_message({"content": "no tag"}) == []
        assert reshape_output_message("plain string") == []
