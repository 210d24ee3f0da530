"""Shared test fixtures and configuration."""

import pytest
from unittest.mock import MagicMock

from vibe_agents.agent_manager import AgentManager
from vibe_agents.clients.base import BaseLLMClient
from vibe_agents.types import (
    AgentContext,
    FinishReason,
    MessageRole,
    UnifiedMessage,
    UnifiedResponse,
    UsageStats,
)


@pytest.fixture
def app_files():
    """A small app with content in every well-known file."""
    return {
        "index.html": (
            "<!DOCTYPE html>\n<html>\n<head><title>Todo</title></head>\n"
            "<body>\n<h1>Todo</h1>\n</body>\n</html>"
        ),
        "styles.css": "body { margin: 0; }",
        "script.js": "console.log('ready');",
        "db.json": '{"items": []}',
    }


@pytest.fixture
def manager():
    """A router with the deterministic default generator."""
    return AgentManager()


@pytest.fixture
def make_context():
    """Build an AgentContext with sensible defaults."""
    def _make(message, files=None, history=()):
        return AgentContext.build(
            app_id="app-1",
            file_contents=files or {},
            user_message=message,
            conversation_history=history,
            workspace_id="ws-1",
        )
    return _make


@pytest.fixture
def mock_client():
    """Create a mock LLM client."""
    client = MagicMock(spec=BaseLLMClient)
    return client


@pytest.fixture
def sample_response():
    """Create a sample unified response."""
    return UnifiedResponse(
        message=UnifiedMessage(
            role=MessageRole.ASSISTANT,
            content="Refined answer.",
        ),
        finish_reason=FinishReason.STOP,
        usage=UsageStats(
            prompt_tokens=10,
            completion_tokens=5,
            total_tokens=15,
        ),
    )
