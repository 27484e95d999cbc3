"""Run stream generator.

Event sequence for one run:

    messages/partial   echo of the request messages
    (workflow.invoke)
    messages/partial   one per ai / tool record, in output order
    messages/complete  []
    : heartbeat

A request body that fails validation produces only the error event.

On any failure the stream ends with a single error event instead; events
written before the failure are not retracted.
"""

import inspect
from typing import Any, AsyncGenerator, Callable

from loguru import logger
from pydantic import ValidationError

from runstream.agentic.streaming.events import (
    MESSAGES_COMPLETE,
    MESSAGES_PARTIAL,
    StreamEvent,
)
from runstream.agentic.streaming.formatters import (
    format_error,
    format_heartbeat,
    format_sse_event,
)
from runstream.agentic.streaming.reshape import (
    echo_input_messages,
    reshape_output_message,
)
from runstream.agentic.workflow import Workflow
from runstream.models.messages import InputMessage, RunRequest


def _output_messages(result: Any) -> list[Any]:
    """Message list from a workflow result.

    Accepts a bare list, a ``{"messages": [...]}`` state dict, or an object
    with a ``messages`` attribute.
    """
    if isinstance(result, dict) and "messages" in result:
        result = result["messages"]
    elif not isinstance(result, (list, tuple)) and hasattr(result, "messages"):
        result = result.messages
    if not isinstance(result, (list, tuple)):
        raise TypeError(
            f"Workflow returned {type(result).__name__}, expected a list of messages"
        )
    return list(result)


async def stream_run(
    workflow: Workflow | Callable[[], Workflow],
    messages: list[InputMessage],
    *,
    thread_id: str | None = None,
    config: dict[str, Any] | None = None,
) -> AsyncGenerator[str, None]:
    """Invoke the workflow and yield SSE-formatted strings.

    Args:
        workflow: The workflow, or a zero-arg callable resolving it (called
            inside the stream so resolution failures become error events)
        messages: Request messages, passed to the workflow unmodified
        thread_id: Thread identifier, used for logging only
        config: Optional run config passed through to the workflow

    Yields:
        SSE-formatted strings
    """
    try:
        yield format_sse_event(
            StreamEvent(event=MESSAGES_PARTIAL, data=echo_input_messages(messages))
        )

        if not hasattr(workflow, "invoke"):
            workflow = workflow()

        logger.info(f"Calling workflow for thread {thread_id}...")
        result = workflow.invoke(messages, config=config)
        if inspect.isawaitable(result):
            result = await result
        output = _output_messages(result)
        logger.info(f"Workflow completed: {len(output)} messages")

        for message in output:
            for record in reshape_output_message(message):
                yield format_sse_event(StreamEvent(event=MESSAGES_PARTIAL, data=[record]))

        yield format_sse_event(StreamEvent(event=MESSAGES_COMPLETE, data=[]))
        yield format_heartbeat()
        logger.info("Response sent and connection closed")

    except Exception as e:
        # Error handling: emit error event, don't crash
        logger.error(f"Error processing request: {e}")
        yield format_error(str(e) or "Unknown error")


async def stream_run_request(
    workflow: Workflow | Callable[[], Workflow],
    body: Any,
    *,
    thread_id: str | None = None,
) -> AsyncGenerator[str, None]:
    """Validate a raw run request body, then stream the run.

    A body that is not a valid RunRequest ends the stream with a single
    error event; nothing is echoed and the workflow is never called.
    """
    try:
        request = RunRequest.model_validate(body)
    except ValidationError as e:
        logger.error(f"Invalid run request for thread {thread_id}: {e}")
        yield format_error(str(e))
        return

    async for chunk in stream_run(
        workflow,
        request.input.messages,
        thread_id=thread_id,
        config=request.config,
    ):
        yield chunk
