"""
Workflow Schema - Declarative Workflow Definitions
==================================================

The workflow that runs behind the stream endpoint is declared in YAML
instead of code. The format is a JSON Schema object with runstream
extensions under ``json_schema_extra``:

    type: object
    description: |
      You are a helpful assistant. Answer briefly.

    json_schema_extra:
      kind: workflow
      name: assistant
      version: "1.0.0"
      model: openai:gpt-4o-mini
      temperature: 0.2
      request_limit: 10
      tools:
        - myproject.tools:search_docs
        - myproject.tools:get_weather

As with agent schemas, ``description`` IS the system prompt. ``tools`` are
``module:function`` import paths resolved when the workflow is built.

Fields left unset (model, temperature, request_limit) fall back to the
LLM settings.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


class WorkflowSchemaMetadata(BaseModel):
    """
    runstream-specific metadata in json_schema_extra.

    Attributes:
        kind: Schema type (always "workflow")
        name: Workflow identifier, used in logs and the CLI
        version: Semantic version string
        system_prompt: Optional text appended to description
        model: Model override (e.g. "anthropic:claude-sonnet-4-5")
        temperature: Sampling temperature override
        request_limit: Max model requests per run (bounds tool loops)
        tools: Tool functions as "module:function" import paths
    """

    kind: str | None = "workflow"
    name: str
    version: str = "1.0.0"
    system_prompt: str | None = None
    model: str | None = None
    temperature: float | None = None
    request_limit: int | None = None
    tools: list[str] = Field(default_factory=list)

    model_config = {"extra": "allow"}


class WorkflowSchema(BaseModel):
    """Root workflow definition. ``description`` is the system prompt."""

    type: str = "object"
    description: str
    properties: dict[str, Any] = Field(default_factory=dict)
    json_schema_extra: WorkflowSchemaMetadata

    @property
    def name(self) -> str:
        return self.json_schema_extra.name

    def get_system_prompt(self) -> str:
        """Combine description with the optional json_schema_extra.system_prompt."""
        parts = [self.description]
        if self.json_schema_extra.system_prompt:
            parts.append(self.json_schema_extra.system_prompt)
        return "\n\n".join(parts)


def schema_from_yaml(yaml_content: str) -> WorkflowSchema:
    """Parse a workflow schema from a YAML string.

    Raises:
        ValidationError: If the document doesn't match the schema format
    """
    data = yaml.safe_load(yaml_content)
    return WorkflowSchema(**data)


def schema_from_yaml_file(file_path: str | Path) -> WorkflowSchema:
    """Load a workflow schema from a YAML file."""
    content = Path(file_path).read_text()
    return schema_from_yaml(content)


def schema_to_yaml(schema: WorkflowSchema) -> str:
    """Serialize a workflow schema back to YAML."""
    return yaml.dump(
        schema.model_dump(exclude_none=True),
        default_flow_style=False,
        sort_keys=False,
    )


def default_workflow_schema() -> dict[str, Any]:
    """Built-in workflow used when no WORKFLOW__REF is configured."""
    return {
        "type": "object",
        "description": "You are a helpful assistant. Answer the user's question clearly and concisely.",
        "json_schema_extra": {
            "kind": "workflow",
            "name": "default-assistant",
            "version": "1.0.0",
        },
    }
