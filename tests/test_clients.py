"""Tests for LLM clients and the client factory."""

import httpx
import openai
import pytest
from unittest.mock import MagicMock, patch

from vibe_agents.agent_manager import AgentManager
from vibe_agents.clients import (
    create_client,
    create_client_from_settings,
    get_available_providers,
    get_default_model,
)
from vibe_agents.clients.anthropic import AnthropicClient
from vibe_agents.clients.base import BaseLLMClient, retry_after_from, with_retry
from vibe_agents.clients.openai import OpenAIClient
from vibe_agents.config import Settings
from vibe_agents.exceptions import (
    ClientError,
    InvalidResponseError,
    ProviderUnavailableError,
    RateLimitError,
)
from vibe_agents.generation import LLMGenerator
from vibe_agents.types import FinishReason, MessageRole, UnifiedMessage


def test_available_providers():
    assert get_available_providers() == ["anthropic", "openai"]


def test_default_model_unknown_provider():
    with pytest.raises(ValueError):
        get_default_model("nope")


def test_create_client_unknown_provider():
    with pytest.raises(ValueError, match="Unknown provider"):
        create_client("nope", api_key="fake")


def test_create_client_missing_key(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    with pytest.raises(ValueError, match="ANTHROPIC_API_KEY"):
        create_client("anthropic")


def test_create_client_openai():
    client = create_client("openai", api_key="fake")
    assert isinstance(client, OpenAIClient)
    assert isinstance(client, BaseLLMClient)
    assert client.model == "gpt-4o"


def test_unsupported_config_key():
    with pytest.raises(ValueError, match="Unsupported config keys"):
        AnthropicClient(api_key="fake", client_config={"bogus": 1})


def test_anthropic_separates_system_prompt():
    client = AnthropicClient(api_key="fake")
    system, converted = client._convert_messages([
        UnifiedMessage(role=MessageRole.SYSTEM, content="Be brief."),
        UnifiedMessage(role=MessageRole.USER, content="Hello!"),
    ])
    assert system == "Be brief."
    assert converted == [{"role": "user", "content": "Hello!"}]


def test_anthropic_merges_consecutive_turns():
    client = AnthropicClient(api_key="fake")
    _, converted = client._convert_messages([
        UnifiedMessage(role=MessageRole.USER, content="First."),
        UnifiedMessage(role=MessageRole.USER, content="Second."),
        UnifiedMessage(role=MessageRole.ASSISTANT, content="Reply."),
    ])
    assert converted == [
        {"role": "user", "content": "First.\n\nSecond."},
        {"role": "assistant", "content": "Reply."},
    ]


def test_anthropic_request_carries_config():
    client = AnthropicClient(api_key="fake", client_config={"temperature": 0.1})
    request = client._build_request([
        UnifiedMessage(role=MessageRole.SYSTEM, content="Be brief."),
        UnifiedMessage(role=MessageRole.USER, content="Hello!"),
    ])
    assert request["system"] == "Be brief."
    assert request["temperature"] == 0.1
    assert request["max_tokens"] == 2048
    assert "top_k" not in request


def test_anthropic_generate():
    client = AnthropicClient(api_key="fake")
    sdk_response = MagicMock()
    sdk_response.content = [MagicMock(type="text", text="Hi there")]
    sdk_response.stop_reason = "max_tokens"
    sdk_response.usage.input_tokens = 3
    sdk_response.usage.output_tokens = 2
    client.client = MagicMock()
    client.client.messages.create.return_value = sdk_response

    response = client.generate([UnifiedMessage(role=MessageRole.USER, content="Hello!")])

    assert response.message.content == "Hi there"
    assert response.finish_reason == FinishReason.LENGTH
    assert response.usage.total_tokens == 5


def test_openai_generate():
    client = OpenAIClient(api_key="fake", client_config={"temperature": 0.2})
    choice = MagicMock(finish_reason="stop")
    choice.message.content = "Hi there"
    sdk_response = MagicMock(choices=[choice])
    sdk_response.usage.prompt_tokens = 4
    sdk_response.usage.completion_tokens = 2
    sdk_response.usage.total_tokens = 6
    client.client = MagicMock()
    client.client.chat.completions.create.return_value = sdk_response

    response = client.generate([UnifiedMessage(role=MessageRole.USER, content="Hello!")])

    assert response.message.content == "Hi there"
    assert response.finish_reason == FinishReason.STOP
    kwargs = client.client.chat.completions.create.call_args.kwargs
    assert kwargs["temperature"] == 0.2
    assert kwargs["messages"] == [{"role": "user", "content": "Hello!"}]


def test_openai_bad_response():
    client = OpenAIClient(api_key="fake")
    with pytest.raises(InvalidResponseError):
        client._parse_response(MagicMock(choices=[]))


def _openai_status_error(error_class, status):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    return error_class(
        f"Error code: {status}",
        response=httpx.Response(status, request=request),
        body=None,
    )


def test_openai_server_error_is_retried_as_unavailable():
    client = OpenAIClient(api_key="fake")
    client.client = MagicMock()
    client.client.chat.completions.create.side_effect = _openai_status_error(
        openai.InternalServerError, 500
    )

    with patch("vibe_agents.clients.base.time.sleep"):
        with pytest.raises(ProviderUnavailableError):
            client.generate([UnifiedMessage(role=MessageRole.USER, content="Hello!")])
    assert client.client.chat.completions.create.call_count == 3


def test_openai_bad_request_is_client_error():
    client = OpenAIClient(api_key="fake")
    client.client = MagicMock()
    client.client.chat.completions.create.side_effect = _openai_status_error(
        openai.NotFoundError, 404
    )

    with pytest.raises(ClientError):
        client.generate([UnifiedMessage(role=MessageRole.USER, content="Hello!")])
    assert client.client.chat.completions.create.call_count == 1


@pytest.mark.asyncio
async def test_provider_failure_falls_back_to_draft():
    client = OpenAIClient(api_key="fake")
    client.client = MagicMock()
    client.client.chat.completions.create.side_effect = _openai_status_error(
        openai.InternalServerError, 500
    )
    manager = AgentManager(generator=LLMGenerator(client))
    expected = await AgentManager().process_request("hello there", "app-1", {}, "ws-1")

    with patch("vibe_agents.clients.base.time.sleep"):
        response = await manager.process_request("hello there", "app-1", {}, "ws-1")

    assert response.content == expected.content
    assert len(manager.get_conversation_history()) == 2


def test_with_retry_gives_up():
    calls = []

    @with_retry(max_retries=2, initial_delay=0.0, jitter=False)
    def flaky():
        calls.append(1)
        raise RateLimitError()

    with patch("vibe_agents.clients.base.time.sleep"):
        with pytest.raises(RateLimitError):
            flaky()
    assert len(calls) == 3


def test_with_retry_recovers():
    attempts = iter([RateLimitError(), "ok"])

    @with_retry(max_retries=2, initial_delay=0.0, jitter=False)
    def flaky():
        result = next(attempts)
        if isinstance(result, Exception):
            raise result
        return result

    with patch("vibe_agents.clients.base.time.sleep"):
        assert flaky() == "ok"


def test_with_retry_honors_retry_after():
    attempts = iter([RateLimitError(retry_after=5), "ok"])

    @with_retry(max_retries=1, initial_delay=0.1)
    def limited():
        result = next(attempts)
        if isinstance(result, Exception):
            raise result
        return result

    with patch("vibe_agents.clients.base.time.sleep") as sleep:
        assert limited() == "ok"
    sleep.assert_called_once_with(5.0)


def test_retry_after_from_sdk_error():
    error = MagicMock()
    error.response.headers = {"retry-after": "2"}
    assert retry_after_from(error) == 2.0
    assert retry_after_from(ValueError("no response")) is None


def test_create_client_from_settings():
    settings = Settings(
        _env_file=None,
        llm_provider="openai",
        openai_api_key="fake",
        llm_model="gpt-4o-mini",
        llm_temperature=0.3,
    )
    client = create_client_from_settings(settings)
    assert isinstance(client, OpenAIClient)
    assert client.model == "gpt-4o-mini"
    assert client.client_config == {"temperature": 0.3}


def test_create_client_from_settings_without_provider():
    with pytest.raises(ValueError, match="LLM_PROVIDER"):
        create_client_from_settings(Settings(_env_file=None, llm_provider=None))
