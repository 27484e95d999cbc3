"""
Pytest configuration and fixtures for runstream unit tests.

Unit tests MUST be isolated from external dependencies:
- No LLM API calls (use pydantic-ai TestModel / FunctionModel or fakes)
- No network servers (use FastAPI TestClient)
"""

from typing import Any

import pytest

from runstream.api.routers.threads import init_threads


class FakeWorkflow:
    """Workflow double returning canned output messages."""

    def __init__(self, output: list[Any] | None = None, error: Exception | None = None):
        self.output = output or []
        self.error = error
        self.calls: list[tuple[list, dict | None]] = []

    async def invoke(self, messages, config=None):
        self.calls.append((messages, config))
        if self.error:
            raise self.error
        return self.output


@pytest.fixture
def fake_workflow_cls():
    return FakeWorkflow


@pytest.fixture(autouse=True)
def reset_threads_workflow():
    """Make sure no injected workflow leaks between tests."""
    init_threads(None)
    yield
    init_threads(None)


def parse_sse(body: str) -> list[tuple[str, str]]:
    """Split an SSE body into (field, value) pairs per block.

    Event blocks come back as ("event:<tag>", "<data json>"), comment blocks
    as ("comment", "<text>").
    """
    blocks = []
    for raw in body.split("\n\n"):
        if not raw:
            continue
        if raw.startswith(":"):
            blocks.append(("comment", raw[1:].strip()))
            continue
        lines = raw.split("\n")
        tag = lines[0][len("event: "):]
        data = lines[1][len("data: "):]
        blocks.append((f"event:{tag}", data))
    return blocks


@pytest.fixture
def sse_parser():
    return parse_sse


def pytest_collection_modifyitems(items):
    """Automatically add 'unit' marker to all tests in /unit/."""
    for item in items:
        if "/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
