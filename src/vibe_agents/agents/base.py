"""Base class for the router's agents.

Every agent declares a fixed capability set and role description, shares
the keyword task classifier, and implements ``process`` by building a
rule-based draft that is then passed through the configured generator.
"""

from abc import ABC, abstractmethod

from ..core.task_analyzer import classify_task
from ..exceptions import AgentError
from ..generation.base import PassthroughGenerator, TextGenerator
from ..logging import get_logger
from ..types import (
    AgentAction,
    AgentCapabilities,
    AgentContext,
    AgentIdentity,
    AgentResponse,
    AgentType,
    Delegation,
    TaskContext,
)

logger = get_logger(__name__)


class BaseAgent(ABC):
    """Abstract base class for all agents.

    Subclasses set the class attributes below and implement ``process`` and
    ``is_capable_of``. ``process`` must not mutate the context and must
    always return a non-empty response.
    """

    AGENT_TYPE: AgentType
    CAPABILITIES: AgentCapabilities
    SYSTEM_PROMPT: str

    def __init__(self, generator: TextGenerator | None = None):
        """Initialize the agent.

        Args:
            generator: Text generator for final responses. Defaults to the
                deterministic passthrough generator.
        """
        self.generator = generator or PassthroughGenerator()

    @property
    def agent_type(self) -> AgentType:
        return self.AGENT_TYPE

    @property
    def capabilities(self) -> AgentCapabilities:
        return self.CAPABILITIES

    @property
    def display_name(self) -> str:
        return self.AGENT_TYPE.display_name

    @abstractmethod
    async def process(self, context: AgentContext) -> AgentResponse:
        """Handle a request and return text plus any proposed actions."""

    @abstractmethod
    def is_capable_of(self, task: TaskContext) -> bool:
        """Advisory predicate: whether this agent suits the classified task."""

    def analyze_task(self, context: AgentContext) -> TaskContext:
        """Classify the request in the context."""
        return classify_task(context.user_message)

    def can_handle(self, context: AgentContext) -> bool:
        """Check if this agent can handle the request in the context."""
        return self.is_capable_of(self.analyze_task(context))

    def get_identity(self) -> AgentIdentity:
        """Get the agent's type, role summary and capabilities."""
        role = self.SYSTEM_PROMPT.split("\n")[0] or "AI Assistant"
        return AgentIdentity(
            type=self.AGENT_TYPE,
            role=role,
            capabilities=self.CAPABILITIES,
        )

    async def compose(self, draft: str, context: AgentContext) -> str:
        """Run the draft through the generator, falling back to the draft.

        Generation failures never fail the request; they are logged and the
        rule-based draft is used instead.
        """
        try:
            text = await self.generator.generate(
                draft, context, system_prompt=self.SYSTEM_PROMPT
            )
        except AgentError as e:
            logger.warning(f"{self.AGENT_TYPE.value} generation failed, using draft: {e}")
            return draft

        if not text or not text.strip():
            logger.warning(f"{self.AGENT_TYPE.value} generation returned no text, using draft")
            return draft
        return text

    def format_response(
        self,
        content: str,
        actions: list[AgentAction] | None = None,
        completed: bool = True,
        delegation: Delegation | None = None,
    ) -> AgentResponse:
        """Build a response prefixed with the agent's display name."""
        return AgentResponse(
            content=f"**{self.display_name}**: {content}",
            actions=list(actions or []),
            delegation=delegation,
            completed=completed,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(type='{self.AGENT_TYPE.value}')"
