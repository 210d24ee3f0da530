"""Claude models through the Anthropic messages API.

The messages API takes the system prompt as its own argument and expects
user and assistant turns to alternate, so conversion folds system messages
out of the list and merges consecutive turns from the same role.
"""

import os
from typing import Any

from anthropic import Anthropic, APIConnectionError, APIError, InternalServerError
from anthropic import AuthenticationError as AnthropicAuthError
from anthropic import RateLimitError as AnthropicRateLimitError

from ..exceptions import (
    AuthenticationError,
    ClientError,
    InvalidResponseError,
    ProviderUnavailableError,
    RateLimitError,
)
from ..types import FinishReason, MessageRole, UnifiedMessage, UnifiedResponse, UsageStats
from .base import BaseLLMClient, retry_after_from, with_retry

DEFAULT_MAX_TOKENS = 2048

STOP_REASONS = {
    "end_turn": FinishReason.STOP,
    "stop_sequence": FinishReason.STOP,
    "max_tokens": FinishReason.LENGTH,
}

# passed through to messages.create when present in client_config
_OPTIONAL_PARAMS = ("temperature", "top_p", "top_k", "stop_sequences")


class AnthropicClient(BaseLLMClient):
    """Client for Claude models."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "claude-sonnet-4-5-20250929",
        client_config: dict | None = None,
    ):
        """
        Args:
            api_key: Falls back to ANTHROPIC_API_KEY.
            model: Claude model id.
            client_config: Any of temperature, top_p, top_k, stop_sequences
                and max_tokens (DEFAULT_MAX_TOKENS if unset).
        """
        super().__init__(client_config)
        self.client = Anthropic(api_key=api_key or os.environ.get("ANTHROPIC_API_KEY"))
        self.model = model

    def _get_supported_config_keys(self) -> set[str]:
        return {"max_tokens", *_OPTIONAL_PARAMS}

    def _build_request(self, messages: list[UnifiedMessage]) -> dict[str, Any]:
        system, turns = self._convert_messages(messages)
        request: dict[str, Any] = {
            "model": self.model,
            "messages": turns,
            "max_tokens": self.client_config.get("max_tokens", DEFAULT_MAX_TOKENS),
        }
        if system:
            request["system"] = system
        request.update(
            (key, self.client_config[key]) for key in _OPTIONAL_PARAMS if key in self.client_config
        )
        return request

    @with_retry(max_retries=2)
    def generate(self, messages: list[UnifiedMessage]) -> UnifiedResponse:
        """Send the conversation to Claude.

        Raises:
            AuthenticationError: The key was rejected.
            RateLimitError: Too many requests; carries the server's Retry-After.
            ProviderUnavailableError: Network failure or a 5xx from the API.
            ClientError: Any other error response, such as a bad model id.
        """
        try:
            response = self.client.messages.create(**self._build_request(messages))
        except AnthropicAuthError as e:
            raise AuthenticationError(f"Anthropic rejected the API key: {e}") from e
        except AnthropicRateLimitError as e:
            raise RateLimitError("Anthropic rate limit hit", retry_after=retry_after_from(e)) from e
        except (APIConnectionError, InternalServerError) as e:
            raise ProviderUnavailableError(f"Anthropic unreachable: {e}") from e
        except APIError as e:
            raise ClientError(f"Anthropic request failed: {e}") from e

        return self._parse_response(response)

    def _convert_messages(
        self, messages: list[UnifiedMessage]
    ) -> tuple[str | None, list[dict[str, str]]]:
        system_parts: list[str] = []
        turns: list[dict[str, str]] = []

        for msg in messages:
            if msg.role == MessageRole.SYSTEM:
                system_parts.append(msg.content)
                continue
            role = msg.role.value
            if turns and turns[-1]["role"] == role:
                turns[-1]["content"] += "\n\n" + msg.content
            else:
                turns.append({"role": role, "content": msg.content})

        return "\n\n".join(system_parts) or None, turns

    def _parse_response(self, response: Any) -> UnifiedResponse:
        try:
            text = "".join(block.text for block in response.content if block.type == "text")
            usage = response.usage
            return UnifiedResponse(
                message=UnifiedMessage(role=MessageRole.ASSISTANT, content=text),
                finish_reason=STOP_REASONS.get(response.stop_reason, FinishReason.STOP),
                usage=UsageStats(
                    prompt_tokens=usage.input_tokens,
                    completion_tokens=usage.output_tokens,
                    total_tokens=usage.input_tokens + usage.output_tokens,
                ),
            )
        except (AttributeError, TypeError) as e:
            raise InvalidResponseError(f"Unexpected Anthropic response shape: {e}") from e
