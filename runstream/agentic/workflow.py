"""
Workflow - the opaque collaborator behind the stream endpoint
=============================================================

The server knows exactly one thing about a workflow: it has an
``invoke(messages, config=None)``, sync or async, that returns the messages
the run produced, either as a list or as a ``{"messages": [...]}`` state.
Everything else (model calls, tool execution, multi-step reasoning) happens
inside it.

    workflow = load_workflow("workflows/assistant.yaml")
    messages = await workflow.invoke([InputMessage(type="human", content="hi")])

Two kinds of workflow references are understood:

    path/to/workflow.yaml      → AgentWorkflow built from a WorkflowSchema
    package.module:attribute   → any object with ``invoke`` (or a zero-arg
                                 factory returning one)

AgentWorkflow is the built-in implementation, a pydantic-ai Agent. Its
output is ``result.new_messages()``: ModelRequest/ModelResponse objects
that the streaming layer reshapes into ai/tool records.

Per-run overrides come from LangGraph-style config:

    {"configurable": {"model": "openai:gpt-4.1", "temperature": 0.0}}
"""

import importlib
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import yaml
from loguru import logger
from pydantic import ValidationError
from pydantic_ai import Agent, UsageLimits
from pydantic_ai.settings import ModelSettings

from runstream.agentic.history import split_prompt
from runstream.agentic.schema import (
    WorkflowSchema,
    default_workflow_schema,
    schema_from_yaml_file,
)
from runstream.models.messages import InputMessage
from runstream.settings import settings


class WorkflowLoadError(Exception):
    """Raised when a workflow reference cannot be resolved."""


@runtime_checkable
class Workflow(Protocol):
    """Anything the stream endpoint can proxy into.

    invoke may also be a plain method, and may return a state dict or object
    carrying ``messages`` instead of the bare list.
    """

    async def invoke(
        self,
        messages: list[InputMessage],
        config: dict[str, Any] | None = None,
    ) -> list[Any]: ...


def import_object(path: str) -> Any:
    """Import ``package.module:attribute`` and return the attribute."""
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise WorkflowLoadError(f"Expected 'module:attribute', got: {path!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise WorkflowLoadError(f"Cannot import module '{module_name}': {e}") from e

    obj: Any = module
    for name in attr.split("."):
        try:
            obj = getattr(obj, name)
        except AttributeError as e:
            raise WorkflowLoadError(f"'{module_name}' has no attribute '{attr}'") from e
    return obj


class AgentWorkflow:
    """Workflow backed by a pydantic-ai Agent built from a WorkflowSchema."""

    def __init__(
        self,
        schema: WorkflowSchema | dict[str, Any] | None = None,
        *,
        model: Any = None,
        tools: list[Any] | None = None,
    ):
        if schema is None:
            schema = default_workflow_schema()
        if isinstance(schema, dict):
            schema = WorkflowSchema.model_validate(schema)
        self.schema = schema

        meta = schema.json_schema_extra
        # Model priority: explicit argument > schema > settings
        self.model = model or meta.model or settings.llm.default_model
        self.temperature = (
            meta.temperature if meta.temperature is not None else settings.llm.temperature
        )
        self.request_limit = meta.request_limit or settings.llm.request_limit
        self.system_prompt = schema.get_system_prompt()

        self.tools = [import_object(ref) for ref in meta.tools]
        self.tools.extend(tools or [])

        self.agent = Agent(
            model=self.model,
            system_prompt=self.system_prompt,
            tools=self.tools,
            defer_model_check=True,
        )
        logger.debug(
            f"Workflow '{self.name}' built: model={self.model}, tools={len(self.tools)}"
        )

    @property
    def name(self) -> str:
        return self.schema.name

    async def invoke(
        self,
        messages: list[InputMessage],
        config: dict[str, Any] | None = None,
    ) -> list[Any]:
        """Run the agent once over the conversation and return the new messages."""
        messages = [
            m if isinstance(m, InputMessage) else InputMessage.model_validate(m)
            for m in messages
        ]
        prompt, history = split_prompt(messages, self.system_prompt)
        if prompt is None and not history:
            raise ValueError("No messages to run")

        configurable = (config or {}).get("configurable") or {}
        temperature = configurable.get("temperature", self.temperature)

        result = await self.agent.run(
            prompt,
            message_history=history or None,
            model=configurable.get("model"),
            model_settings=ModelSettings(temperature=temperature),
            usage_limits=UsageLimits(request_limit=self.request_limit),
        )
        return result.new_messages()


def load_workflow(ref: str | None = None) -> Workflow:
    """Resolve a workflow reference (see module docstring).

    Raises:
        WorkflowLoadError: If the reference cannot be turned into a workflow
    """
    if not ref:
        logger.info("Using built-in default workflow")
        return AgentWorkflow()

    if ref.endswith((".yaml", ".yml")) or Path(ref).is_file():
        try:
            schema = schema_from_yaml_file(ref)
        except (OSError, yaml.YAMLError, ValidationError, TypeError) as e:
            raise WorkflowLoadError(f"Invalid workflow schema '{ref}': {e}") from e
        logger.info(f"Loaded workflow '{schema.name}' from {ref}")
        return AgentWorkflow(schema)

    obj = import_object(ref)
    # Classes and factories are called with no arguments
    if isinstance(obj, type) or (callable(obj) and not hasattr(obj, "invoke")):
        obj = obj()
    if not hasattr(obj, "invoke"):
        raise WorkflowLoadError(f"'{ref}' does not provide an invoke() method")
    logger.info(f"Loaded workflow from {ref}")
    return obj
