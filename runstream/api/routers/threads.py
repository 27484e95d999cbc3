"""Threads router - create threads and stream workflow runs.

Provides:
- POST /threads - Create an opaque thread id (never persisted)
- POST /threads/{thread_id}/runs/stream - Run the workflow, stream SSE events

The stream is the only non-trivial endpoint: it echoes the input messages,
invokes the configured workflow, and writes each ai/tool output message as
a messages/partial event, ending with messages/complete and a heartbeat.
"""

import uuid
from typing import Any

from fastapi import APIRouter, Body
from fastapi.responses import StreamingResponse
from loguru import logger

from runstream.agentic.streaming import stream_run_request
from runstream.agentic.workflow import Workflow, load_workflow
from runstream.models.messages import ThreadResponse
from runstream.settings import settings

router = APIRouter(prefix="/threads", tags=["threads"])

# Workflow instance (injected via init_threads or loaded on first run)
_workflow: Workflow | None = None

STREAM_HEADERS = {
    "access-control-allow-headers": "*",
    "access-control-allow-methods": "GET, POST, PUT, PATCH, DELETE, OPTIONS",
    "access-control-allow-origin": "*",
    "cache-control": "public, max-age=0, must-revalidate",
    "content-type": "text/event-stream",
}


def init_threads(workflow: Workflow | None):
    """Initialize threads router with a workflow (None resets to lazy loading)."""
    global _workflow
    _workflow = workflow


def get_workflow() -> Workflow:
    """Return the active workflow, loading it from settings on first use."""
    global _workflow
    if _workflow is None:
        _workflow = load_workflow(settings.workflow.ref)
    return _workflow


def new_thread_id() -> str:
    return f"thread_{uuid.uuid4().hex}"


@router.post("", response_model=ThreadResponse)
async def create_thread() -> ThreadResponse:
    """Create a thread id. Nothing is stored."""
    return ThreadResponse(thread_id=new_thread_id())


@router.post("/{thread_id}/runs/stream")
async def stream_thread_run(thread_id: str, body: Any = Body(None)) -> StreamingResponse:
    """
    Run the workflow over the input messages and stream SSE events.

    Body: {"input": {"messages": [...]}, "config": {...}}

    Events:
    - messages/partial: echo of input messages, then one per ai/tool message
    - messages/complete: empty list, once the workflow finished
    - error: {"error": {"message", "type": "server_error"}} on failure

    The body is validated inside the stream, so a malformed body is reported
    as an error event like any other failure. The thread id is not validated.
    """
    logger.info(f"Received request for thread: {thread_id}")
    logger.debug(f"Input: {body}")

    return StreamingResponse(
        stream_run_request(get_workflow, body, thread_id=thread_id),
        headers=STREAM_HEADERS,
    )
