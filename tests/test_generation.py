"""Tests for response text generators."""

import pytest

from vibe_agents.config import Settings
from vibe_agents.exceptions import GenerationError
from vibe_agents.generation import LLMGenerator, PassthroughGenerator, build_generator
from vibe_agents.types import (
    AgentContext,
    FinishReason,
    MessageRole,
    UnifiedMessage,
    UnifiedResponse,
)


@pytest.fixture
def context():
    return AgentContext.build(
        app_id="app-1",
        file_contents={"index.html": "<body></body>", "script.js": ""},
        user_message="add a button",
        conversation_history=(),
        workspace_id="ws-1",
    )


@pytest.mark.asyncio
async def test_passthrough_returns_draft(context):
    assert await PassthroughGenerator().generate("draft", context) == "draft"


def test_build_messages(mock_client, context):
    messages = LLMGenerator(mock_client).build_messages(
        "draft text", context, system_prompt="You are the Editor Agent"
    )

    assert [m.role for m in messages] == [MessageRole.SYSTEM, MessageRole.USER]
    assert messages[0].content.startswith("You are the Editor Agent")
    assert "User request: add a button" in messages[1].content
    assert "--- index.html ---" in messages[1].content
    assert "--- script.js ---" not in messages[1].content
    assert "draft text" in messages[1].content


def test_build_messages_truncates_files(mock_client):
    context = AgentContext.build("a", {"styles.css": "x" * 50}, "hi", (), "w")
    messages = LLMGenerator(mock_client, max_files_chars=10).build_messages("d", context)
    assert "x" * 10 in messages[1].content
    assert "x" * 11 not in messages[1].content


@pytest.mark.asyncio
async def test_llm_generator_uses_client(mock_client, sample_response, context):
    mock_client.generate.return_value = sample_response

    text = await LLMGenerator(mock_client).generate("draft", context)

    assert text == "Refined answer."
    mock_client.generate.assert_called_once()


@pytest.mark.asyncio
async def test_llm_generator_empty_output(mock_client, context):
    mock_client.generate.return_value = UnifiedResponse(
        message=UnifiedMessage(role=MessageRole.ASSISTANT, content="  "),
        finish_reason=FinishReason.STOP,
    )

    with pytest.raises(GenerationError):
        await LLMGenerator(mock_client).generate("draft", context)


def test_build_generator_without_provider():
    settings = Settings(llm_provider=None)
    assert isinstance(build_generator(settings), PassthroughGenerator)


def test_build_generator_missing_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    settings = Settings(llm_provider="openai", openai_api_key=None)
    with pytest.raises(ValueError):
        build_generator(settings)
