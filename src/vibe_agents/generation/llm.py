"""Model-backed text generation.

Wraps a BaseLLMClient so agents can have their drafts rewritten by a
language model. The blocking SDK call runs in a worker thread.
"""

import asyncio

from ..clients.base import BaseLLMClient
from ..clients.factory import create_client_from_settings
from ..config import Settings
from ..exceptions import GenerationError
from ..logging import get_logger
from ..types import AgentContext, MessageRole, UnifiedMessage
from .base import PassthroughGenerator, TextGenerator

logger = get_logger(__name__)

LLM_INSTRUCTIONS = """You are answering inside a browser-based app editor with four files:
index.html, styles.css, script.js and db.json.

A rule-based draft of your answer is included below. Keep its facts, section
headings and any file names it mentions. Improve clarity and tailor it to the
user's request. Do not invent file changes that the draft does not mention."""


class LLMGenerator(TextGenerator):
    """Generator that asks an LLM to refine the agent's draft."""

    def __init__(self, client: BaseLLMClient, max_files_chars: int = 4000):
        """Initialize the generator.

        Args:
            client: LLM client used for generation.
            max_files_chars: Per-file character limit when quoting file contents.
        """
        self.client = client
        self.max_files_chars = max_files_chars

    def build_messages(
        self,
        prompt: str,
        context: AgentContext,
        system_prompt: str | None = None,
    ) -> list[UnifiedMessage]:
        """Build the provider conversation for one generation call."""
        system = LLM_INSTRUCTIONS
        if system_prompt:
            system = f"{system_prompt}\n\n{LLM_INSTRUCTIONS}"

        files = "\n\n".join(
            f"--- {name} ---\n{content[:self.max_files_chars]}"
            for name, content in context.file_contents.items()
            if content
        )
        user = (
            f"User request: {context.user_message}\n\n"
            f"Current files:\n{files or '(all files are empty)'}\n\n"
            f"Draft answer:\n{prompt}"
        )

        return [
            UnifiedMessage(role=MessageRole.SYSTEM, content=system),
            UnifiedMessage(role=MessageRole.USER, content=user),
        ]

    async def generate(
        self,
        prompt: str,
        context: AgentContext,
        system_prompt: str | None = None,
    ) -> str:
        """Generate response text with the LLM.

        Raises:
            ClientError: If the provider call fails.
            GenerationError: If the provider returns no text.
        """
        messages = self.build_messages(prompt, context, system_prompt)
        response = await asyncio.to_thread(self.client.generate, messages)

        content = (response.message.content or "").strip()
        if not content:
            raise GenerationError("LLM returned an empty response")
        return content


def build_generator(settings: Settings) -> TextGenerator:
    """Create the generator described by settings.

    Returns PassthroughGenerator when no provider is configured.
    """
    if not settings.generation_enabled:
        return PassthroughGenerator()

    logger.info(f"using {settings.llm_provider} for response generation")
    client = create_client_from_settings(settings)
    return LLMGenerator(client, max_files_chars=settings.llm_max_file_chars)
