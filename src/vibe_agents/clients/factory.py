"""Provider registry and client construction.

Each provider is described by a ``ProviderSpec``. The SDK module behind a
provider is imported only when a client for it is built, so installing the
package without ever configuring a provider never touches the SDKs.
"""

import importlib
import os
from dataclasses import dataclass

from ..config import Settings
from ..logging import get_logger
from .base import BaseLLMClient

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProviderSpec:
    """How to build a client for one provider."""
    class_path: str
    api_key_env: str
    default_model: str


_PROVIDER_REGISTRY: dict[str, ProviderSpec] = {
    "anthropic": ProviderSpec(
        class_path="vibe_agents.clients.anthropic.AnthropicClient",
        api_key_env="ANTHROPIC_API_KEY",
        default_model="claude-sonnet-4-5-20250929",
    ),
    "openai": ProviderSpec(
        class_path="vibe_agents.clients.openai.OpenAIClient",
        api_key_env="OPENAI_API_KEY",
        default_model="gpt-4o",
    ),
}


def get_available_providers() -> list[str]:
    """Get the registered provider names."""
    return list(_PROVIDER_REGISTRY)


def _get_spec(provider: str) -> ProviderSpec:
    spec = _PROVIDER_REGISTRY.get(provider)
    if spec is None:
        raise ValueError(f"Unknown provider: {provider}. Available: {get_available_providers()}")
    return spec


def get_default_model(provider: str) -> str:
    """Get the default model for a provider.

    Raises:
        ValueError: If provider is unknown.
    """
    return _get_spec(provider).default_model


def create_client(
    provider: str,
    model: str | None = None,
    client_config: dict | None = None,
    api_key: str | None = None,
) -> BaseLLMClient:
    """Create a client for a registered provider.

    Args:
        provider: Provider name (anthropic, openai).
        model: Model override. Defaults to the provider's default model.
        client_config: Provider sampling options.
        api_key: API key. Falls back to the provider's env var.

    Raises:
        ValueError: If provider is unknown or no API key is available.
    """
    spec = _get_spec(provider)

    resolved_key = api_key or os.getenv(spec.api_key_env)
    if not resolved_key:
        raise ValueError(f"{spec.api_key_env} not set in environment")

    module_path, class_name = spec.class_path.rsplit(".", 1)
    client_class: type[BaseLLMClient] = getattr(importlib.import_module(module_path), class_name)

    resolved_model = model or spec.default_model
    logger.debug(f"creating {provider} client for model {resolved_model}")
    return client_class(
        api_key=resolved_key,
        model=resolved_model,
        client_config=client_config,
    )


def create_client_from_settings(settings: Settings) -> BaseLLMClient:
    """Create the client selected by ``settings.llm_provider``.

    Raises:
        ValueError: If no provider is configured, it is unknown, or its
            API key is missing.
    """
    if not settings.llm_provider:
        raise ValueError("LLM_PROVIDER is not set")

    return create_client(
        settings.llm_provider,
        model=settings.llm_model,
        client_config=settings.client_config(),
        api_key=settings.get_api_key_for_provider(settings.llm_provider),
    )
