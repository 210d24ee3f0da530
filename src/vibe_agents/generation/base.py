"""Pluggable text generation for agents.

Agents build a rule-based draft first and then hand it to a generator.
The default generator returns the draft unchanged, which keeps responses
deterministic; a model-backed generator can rewrite it without any change
to the router or the action contract.
"""

from abc import ABC, abstractmethod

from ..types import AgentContext


class TextGenerator(ABC):
    """Turns an agent's draft into final response text."""

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        context: AgentContext,
        system_prompt: str | None = None,
    ) -> str:
        """Generate response text.

        Args:
            prompt: The agent's rule-based draft.
            context: The request context. Must not be mutated.
            system_prompt: The agent's role description.

        Returns:
            Text to show the user (without the agent name prefix).
        """


class PassthroughGenerator(TextGenerator):
    """Deterministic generator that returns the draft as-is."""

    async def generate(
        self,
        prompt: str,
        context: AgentContext,
        system_prompt: str | None = None,
    ) -> str:
        return prompt
