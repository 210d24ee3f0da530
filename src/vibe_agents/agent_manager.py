"""Multi-agent request router.

The AgentManager owns one instance of every agent, the bounded
conversation history, and the action executor. A request either goes to
the Manager first (which may delegate to a specialist) or straight to an
explicitly selected agent.

The history is mutable router-owned state with no internal locking:
callers must serialize requests per conversation. Use one AgentManager
per conversation when several conversations run at once.
"""

from typing import Mapping, Sequence

from .agents import AGENT_CLASSES, BaseAgent, DelegationRules, ManagerAgent
from .core.action_executor import ActionExecutor, SaveCallback, get_agent_display_name
from .core.memory_manager import DEFAULT_HISTORY_LIMIT, ConversationHistory
from .exceptions import UnknownAgentError
from .generation.base import TextGenerator
from .logging import get_logger
from .types import (
    AgentAction,
    AgentContext,
    AgentIdentity,
    AgentResponse,
    AgentType,
    ChatMessage,
    ExecutionResult,
)

logger = get_logger(__name__)


class AgentManager:
    """Routes user messages to agents and applies their proposed actions."""

    def __init__(
        self,
        generator: TextGenerator | None = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        delegation_rules: DelegationRules | None = None,
    ):
        """Initialize the router and construct every agent once.

        Args:
            generator: Text generator shared by all agents. Defaults to the
                deterministic passthrough generator.
            history_limit: Number of conversation turns retained.
            delegation_rules: Signal words the manager uses to delegate.
        """
        missing = set(AgentType) - set(AGENT_CLASSES)
        if missing:
            raise RuntimeError(
                f"No agent class registered for: {sorted(t.value for t in missing)}"
            )

        self._agents: dict[AgentType, BaseAgent] = {}
        for agent_type, agent_class in AGENT_CLASSES.items():
            if agent_class is ManagerAgent:
                self._agents[agent_type] = ManagerAgent(generator, rules=delegation_rules)
            else:
                self._agents[agent_type] = agent_class(generator)

        self._history = ConversationHistory(limit=history_limit)
        self._executor = ActionExecutor()

    # ==================== registry ====================

    def _resolve_type(self, agent_type: AgentType | str) -> AgentType:
        try:
            resolved = AgentType(agent_type)
        except ValueError:
            raise UnknownAgentError(agent_type, [t.value for t in self._agents]) from None
        if resolved not in self._agents:
            raise UnknownAgentError(agent_type, [t.value for t in self._agents])
        return resolved

    def get_agent(self, agent_type: AgentType | str) -> BaseAgent:
        """Get the registered agent for a type.

        Raises:
            UnknownAgentError: If the type is not registered.
        """
        return self._agents[self._resolve_type(agent_type)]

    def get_available_agents(self) -> list[AgentIdentity]:
        """Get the identity of every registered agent."""
        return [agent.get_identity() for agent in self._agents.values()]

    @staticmethod
    def get_agent_display_name(agent_type: AgentType) -> str:
        """Get the attribution name for an agent type, e.g. "Editor Agent"."""
        return get_agent_display_name(agent_type)

    # ==================== history ====================

    def get_conversation_history(self) -> list[ChatMessage]:
        """Get a copy of the conversation history."""
        return self._history.messages()

    def clear_history(self) -> None:
        """Clear the conversation history."""
        self._history.clear()

    @property
    def history_limit(self) -> int:
        return self._history.limit

    # ==================== request processing ====================

    def _build_context(
        self,
        user_message: str,
        app_id: str,
        file_contents: Mapping[str, str],
        workspace_id: str,
    ) -> AgentContext:
        return AgentContext.build(
            app_id=app_id,
            file_contents=file_contents,
            user_message=user_message,
            conversation_history=self._history.snapshot(),
            workspace_id=workspace_id,
        )

    async def process_request(
        self,
        user_message: str,
        app_id: str,
        file_contents: Mapping[str, str],
        workspace_id: str,
    ) -> AgentResponse:
        """Send a request through the Manager, following any delegation.

        The manager's turn is always recorded. When it delegates, the
        delegate's turn is recorded after it and the delegate's response is
        returned.

        Args:
            user_message: The user's message.
            app_id: Application being edited.
            file_contents: Current file map. Never modified.
            workspace_id: Owning workspace.

        Returns:
            The response the caller should render.
        """
        self._history.add_user_message(user_message)
        context = self._build_context(user_message, app_id, file_contents, workspace_id)

        manager = self._agents[AgentType.MANAGER]
        initial = await manager.process(context)

        delegation = initial.delegation
        if delegation is not None and delegation.to in self._agents:
            logger.info(f"manager delegated to {delegation.to.value}: {delegation.reason}")
            delegated = await self._agents[delegation.to].process(context)

            self._history.add_agent_message(initial.content, AgentType.MANAGER)
            self._history.add_agent_message(delegated.content, delegation.to)
            return delegated

        if delegation is not None:
            logger.warning(f"manager delegated to unregistered agent {delegation.to!r}")
        else:
            logger.info("manager is handling the request itself")

        self._history.add_agent_message(initial.content, AgentType.MANAGER)
        return initial

    async def process_with_agent(
        self,
        agent_type: AgentType | str,
        user_message: str,
        app_id: str,
        file_contents: Mapping[str, str],
        workspace_id: str,
    ) -> AgentResponse:
        """Send a request straight to one agent, skipping the Manager.

        Raises:
            UnknownAgentError: If the agent type is not registered. History
                is left untouched in that case.
        """
        resolved = self._resolve_type(agent_type)
        context = self._build_context(user_message, app_id, file_contents, workspace_id)

        logger.info(f"processing request with {resolved.value}")
        response = await self._agents[resolved].process(context)

        self._history.add_user_message(user_message)
        self._history.add_agent_message(response.content, resolved)
        return response

    async def execute_actions(
        self,
        actions: Sequence[AgentAction],
        file_contents: Mapping[str, str],
        agent_type: AgentType | None = None,
        save_callback: SaveCallback | None = None,
    ) -> ExecutionResult:
        """Apply proposed actions to a copy of the file map.

        Args:
            actions: Actions returned by an agent.
            file_contents: Current file map. Never modified.
            agent_type: Agent credited with the change.
            save_callback: Optional persistence hook called with
                ``(attribution, action_description)``. Failures are logged
                and do not undo the in-memory update.

        Returns:
            ExecutionResult with updated files, attribution and save flag.
        """
        result = await self._executor.execute(
            actions, file_contents, agent_type=agent_type, save_callback=save_callback
        )
        if result.agent_context is not None:
            logger.info(
                f"{result.agent_context.agent_name} applied: "
                f"{result.agent_context.action_description}"
            )
        return result
