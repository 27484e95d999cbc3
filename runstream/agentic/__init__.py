"""runstream agentic module - workflows and run streaming.

Core Components:
- WorkflowSchema: YAML-based workflow definitions
- AgentWorkflow: pydantic-ai backed workflow
- load_workflow: Resolve a workflow from a YAML path or import path

Streaming:
- stream_run: SSE stream for one workflow run
"""

from runstream.agentic.schema import (
    WorkflowSchema,
    default_workflow_schema,
    schema_from_yaml,
    schema_from_yaml_file,
    schema_to_yaml,
)
from runstream.agentic.history import split_prompt, to_pydantic_messages
from runstream.agentic.workflow import (
    AgentWorkflow,
    Workflow,
    WorkflowLoadError,
    import_object,
    load_workflow,
)
from runstream.agentic.streaming import (
    stream_run,
    StreamEvent,
    ErrorEvent,
    format_sse_event,
    format_error,
    format_heartbeat,
)

__all__ = [
    # Schema
    "WorkflowSchema",
    "default_workflow_schema",
    "schema_from_yaml",
    "schema_from_yaml_file",
    "schema_to_yaml",
    # History
    "split_prompt",
    "to_pydantic_messages",
    # Workflow
    "Workflow",
    "AgentWorkflow",
    "WorkflowLoadError",
    "import_object",
    "load_workflow",
    # Streaming
    "stream_run",
    "StreamEvent",
    "ErrorEvent",
    "format_sse_event",
    "format_error",
    "format_heartbeat",
]
