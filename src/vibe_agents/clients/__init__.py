"""LLM client implementations.

All clients implement the BaseLLMClient interface and normalize
provider-specific responses to unified types. Provider SDKs are imported
lazily through the factory.
"""

from .base import BaseLLMClient, with_retry
from .factory import (
    create_client,
    create_client_from_settings,
    get_available_providers,
    get_default_model,
)

__all__ = [
    "BaseLLMClient",
    "create_client",
    "create_client_from_settings",
    "get_available_providers",
    "get_default_model",
    "with_retry",
]
