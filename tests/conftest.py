"""
Pytest configuration and shared fixtures for runstream tests.

Test Organization:
- tests/unit/ - Mock-only tests, no LLM calls or network
"""

import pytest

from runstream.models.messages import InputMessage


@pytest.fixture
def sample_messages() -> list[InputMessage]:
    """A short conversation ending with a human turn."""
    return [
        InputMessage(type="system", content="Be brief."),
        InputMessage(type="human", content="Hi there"),
        InputMessage(type="ai", content="Hello! How can I help?"),
        InputMessage(type="human", content="What's the weather in Paris?"),
    ]


@pytest.fixture
def sample_payload() -> dict:
    """Request body for the stream endpoint."""
    return {
        "input": {
            "messages": [
                {"type": "human", "content": "What's the weather in Paris?"},
            ]
        },
        "config": {"configurable": {"temperature": 0.0}},
    }
