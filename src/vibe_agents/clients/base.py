"""Base class for LLM clients.

All LLM provider clients inherit from BaseLLMClient and implement
the normalization methods to convert between provider-specific formats
and the unified types.
"""

import functools
import random
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, TypeVar

from ..exceptions import ProviderUnavailableError, RateLimitError
from ..logging import get_logger
from ..types import UnifiedMessage, UnifiedResponse

logger = get_logger(__name__)

T = TypeVar("T")


def retry_after_from(error: Exception) -> float | None:
    """Read the Retry-After header from an SDK error, if it carries one."""
    response = getattr(error, "response", None)
    headers = getattr(response, "headers", None)
    if not headers:
        return None
    try:
        return float(headers.get("retry-after"))
    except (TypeError, ValueError):
        return None


def _retry_delay(
    error: Exception,
    delay: float,
    max_delay: float,
    jitter: bool,
) -> float:
    """Seconds to wait before the next attempt.

    A provider-supplied ``retry_after`` wins over the backoff schedule.
    """
    retry_after = getattr(error, "retry_after", None)
    if retry_after:
        return min(float(retry_after), max_delay)

    wait = min(delay, max_delay)
    if jitter:
        wait *= 0.5 + random.random()
    return wait


def with_retry(
    max_retries: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Retry a provider call on transient failures with exponential backoff.

    Only RateLimitError and ProviderUnavailableError are retried; anything
    else (bad key, unparseable response) is raised on the first attempt.

    Args:
        max_retries: Retries after the first attempt.
        initial_delay: First backoff delay in seconds.
        max_delay: Upper bound for any single wait.
        exponential_base: Backoff multiplier per attempt.
        jitter: Randomize each wait between 50% and 150%.
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            delay = initial_delay
            attempt = 0

            while True:
                try:
                    return func(*args, **kwargs)
                except (RateLimitError, ProviderUnavailableError) as e:
                    if attempt >= max_retries:
                        logger.warning(f"giving up on {func.__name__} after {attempt} retries: {e}")
                        raise

                    wait = _retry_delay(e, delay, max_delay, jitter)
                    attempt += 1
                    logger.info(f"retry {attempt}/{max_retries} for {func.__name__} in {wait:.1f}s: {e}")
                    time.sleep(wait)
                    delay *= exponential_base

        return wrapper
    return decorator


class BaseLLMClient(ABC):
    """Abstract base class for all LLM clients.

    Each client is responsible for:
    1. Converting UnifiedMessage list to provider format
    2. Making API calls
    3. Converting responses back to UnifiedResponse

    Callers only see unified types.
    """

    def __init__(self, client_config: dict | None = None):
        """Initialize the client.

        Args:
            client_config: Optional dictionary of configuration parameters
                           (e.g. temperature, max_tokens, etc.)
        """
        self.client_config = client_config or {}
        self._validate_config()

    def _validate_config(self) -> None:
        """Reject configuration keys the provider does not understand."""
        unsupported = set(self.client_config) - self._get_supported_config_keys()
        if unsupported:
            raise ValueError(
                f"Unsupported config keys for {self.__class__.__name__}: {sorted(unsupported)}"
            )

    @abstractmethod
    def generate(self, messages: list[UnifiedMessage]) -> UnifiedResponse:
        """Generate a text response from the LLM.

        Args:
            messages: Conversation in unified format

        Returns:
            UnifiedResponse with the assistant message
        """

    @abstractmethod
    def _get_supported_config_keys(self) -> set[str]:
        """Return the set of config keys supported by this provider."""

    @abstractmethod
    def _convert_messages(self, messages: list[UnifiedMessage]) -> Any:
        """Convert unified messages to provider-specific format.

        - OpenAI: list of dicts with role/content, system message inline
        - Anthropic: system prompt separated from the message list
        """

    @abstractmethod
    def _parse_response(self, response: Any) -> UnifiedResponse:
        """Parse provider response into unified format."""
