"""Custom exception hierarchy for the agent router.

This module defines all custom exceptions used throughout the package,
organized into logical categories: routing errors, generation errors and
LLM client errors.
"""


class AgentError(Exception):
    """Base exception for all agent errors."""


# =============================================================================
# Routing Errors - Programmer errors surfaced to the caller
# =============================================================================

class UnknownAgentError(AgentError, ValueError):
    """Requested agent type is not registered with the router.

    Attributes:
        agent_type: The value the caller asked for
        available: Registered agent type values
    """

    def __init__(self, agent_type: object, available: list[str]):
        self.agent_type = agent_type
        self.available = available
        super().__init__(
            f"Agent type '{agent_type}' not found. Available: {', '.join(available)}"
        )


# =============================================================================
# Generation Errors - Issues turning a draft into response text
# =============================================================================

class GenerationError(AgentError):
    """Text generation produced no usable output."""


# =============================================================================
# Client Errors - Issues with LLM API interactions
# =============================================================================

class ClientError(AgentError):
    """Base class for LLM client errors."""


class AuthenticationError(ClientError):
    """API key is invalid or missing."""


class RateLimitError(ClientError):
    """Rate limit exceeded."""

    def __init__(self, message: str = "Rate limit exceeded", retry_after: float | None = None):
        self.retry_after = retry_after
        if retry_after:
            message = f"{message}. Retry after: {retry_after}s"
        super().__init__(message)


class ProviderUnavailableError(ClientError):
    """Provider API is temporarily unavailable."""


class InvalidResponseError(ClientError):
    """Response from provider could not be parsed."""
