"""OpenAI client implementation.

This client handles communication with the OpenAI chat completions API
and normalizes responses to the unified format. Any OpenAI-compatible
endpoint can be used by passing ``base_url``.
"""

import os
from typing import Any

from openai import APIConnectionError, APIError, InternalServerError, OpenAI
from openai import AuthenticationError as OpenAIAuthError
from openai import RateLimitError as OpenAIRateLimitError

from ..exceptions import (
    AuthenticationError,
    ClientError,
    InvalidResponseError,
    ProviderUnavailableError,
    RateLimitError,
)
from ..types import (
    FinishReason,
    MessageRole,
    UnifiedMessage,
    UnifiedResponse,
    UsageStats,
)
from .base import BaseLLMClient, retry_after_from, with_retry


class OpenAIClient(BaseLLMClient):
    """OpenAI API client with unified response handling."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o",
        client_config: dict | None = None,
        base_url: str | None = None,
    ):
        """Initialize the OpenAI client.

        Args:
            api_key: OpenAI API key. Defaults to OPENAI_API_KEY env var.
            model: Model to use. Defaults to gpt-4o.
            client_config: Optional dictionary of configuration parameters.
            base_url: Optional endpoint for OpenAI-compatible providers.
        """
        super().__init__(client_config)
        self.client = OpenAI(
            api_key=api_key or os.environ.get("OPENAI_API_KEY"),
            base_url=base_url,
        )
        self.model = model

    def _get_supported_config_keys(self) -> set[str]:
        return {
            "temperature",
            "top_p",
            "max_tokens",
            "stop",
            "presence_penalty",
            "frequency_penalty",
        }

    @with_retry(max_retries=2)
    def generate(self, messages: list[UnifiedMessage]) -> UnifiedResponse:
        """Generate a response from OpenAI.

        Raises:
            AuthenticationError: If API key is invalid
            RateLimitError: If rate limit is exceeded
            ProviderUnavailableError: If API is unavailable or returns a 5xx
            ClientError: For any other error response
        """
        api_args = {
            "model": self.model,
            "messages": self._convert_messages(messages),
            **self.client_config,
        }

        try:
            response = self.client.chat.completions.create(**api_args)
        except OpenAIAuthError as e:
            raise AuthenticationError(f"OpenAI authentication failed: {e}") from e
        except OpenAIRateLimitError as e:
            raise RateLimitError(
                "OpenAI rate limit exceeded", retry_after=retry_after_from(e)
            ) from e
        except (APIConnectionError, InternalServerError) as e:
            raise ProviderUnavailableError(f"OpenAI API unavailable: {e}") from e
        except APIError as e:
            raise ClientError(f"OpenAI request failed: {e}") from e

        return self._parse_response(response)

    def _convert_messages(self, messages: list[UnifiedMessage]) -> list[dict[str, Any]]:
        """Convert unified messages to OpenAI format."""
        return [msg.to_dict() for msg in messages]

    def _map_finish_reason(self, reason: str | None) -> FinishReason:
        if reason == "length":
            return FinishReason.LENGTH
        return FinishReason.STOP

    def _parse_response(self, response: Any) -> UnifiedResponse:
        """Parse OpenAI response into unified format."""
        try:
            choice = response.choices[0]
            usage = None
            if getattr(response, "usage", None):
                usage = UsageStats(
                    prompt_tokens=response.usage.prompt_tokens,
                    completion_tokens=response.usage.completion_tokens,
                    total_tokens=response.usage.total_tokens,
                )

            return UnifiedResponse(
                message=UnifiedMessage(
                    role=MessageRole.ASSISTANT,
                    content=choice.message.content or "",
                ),
                finish_reason=self._map_finish_reason(choice.finish_reason),
                usage=usage,
            )
        except (AttributeError, IndexError, TypeError) as e:
            raise InvalidResponseError(f"Failed to parse OpenAI response: {e}") from e
