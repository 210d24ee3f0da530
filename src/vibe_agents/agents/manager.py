"""Manager agent: first-pass triage and delegation."""

from dataclasses import dataclass

from ..generation.base import TextGenerator
from ..types import (
    AgentCapabilities,
    AgentContext,
    AgentResponse,
    AgentType,
    Complexity,
    Delegation,
    Scope,
    TaskContext,
)
from .base import BaseAgent
from .prompts import MANAGER_PROMPT


@dataclass(frozen=True)
class DelegationRules:
    """Signal words the manager uses to pick a specialist.

    Rules are checked in field order: editor, architect, advisor, shepherd.
    Edit signals only delegate when the task is simple or moderate.
    """
    editor: tuple[str, ...] = ("edit", "change", "update", "fix", "add", "remove", "implement")
    architect: tuple[str, ...] = (
        "architecture", "structure", "organize", "design pattern", "best way to",
    )
    advisor: tuple[str, ...] = ("should i", "recommend", "best practice", "advice", "how to")
    shepherd: tuple[str, ...] = ("review", "check", "validate", "quality", "progress")


DEFAULT_DELEGATION_RULES = DelegationRules()

_EDITABLE_COMPLEXITIES = (Complexity.SIMPLE, Complexity.MODERATE)


class ManagerAgent(BaseAgent):
    """Decides whether a specialist should take the request."""

    AGENT_TYPE = AgentType.MANAGER
    CAPABILITIES = AgentCapabilities(can_coordinate=True, can_make_decisions=True)
    SYSTEM_PROMPT = MANAGER_PROMPT

    def __init__(
        self,
        generator: TextGenerator | None = None,
        rules: DelegationRules | None = None,
    ):
        super().__init__(generator)
        self.rules = rules or DEFAULT_DELEGATION_RULES

    async def process(self, context: AgentContext) -> AgentResponse:
        task = self.analyze_task(context)
        best_agent = self.select_best_agent(context.user_message, task)

        if best_agent != AgentType.MANAGER:
            draft = (
                f"I've analyzed your request: \"{context.user_message}\"\n\n"
                f"**Task Analysis:**\n"
                f"- Complexity: {task.complexity.value}\n"
                f"- Scope: {task.scope.value}\n"
                f"- Estimated Time: {task.estimated_time}\n\n"
                f"I'm delegating this to the **{best_agent.value}** agent "
                f"who is best suited for this type of task."
            )
            delegation = Delegation(
                to=best_agent,
                reason=f"{best_agent.display_name} is best suited for this {task.complexity.value} task",
                context=context.user_message,
            )
            content = await self.compose(draft, context)
            return self.format_response(content, completed=False, delegation=delegation)

        draft = (
            "I'll coordinate this task, which needs several agents:\n\n"
            "**Coordination Plan:**\n"
            "1. Architect will analyze the current structure\n"
            "2. Advisor will provide best practices recommendations\n"
            "3. Editor will implement the changes\n"
            "4. Shepherd will ensure quality and completion\n\n"
            f"**Task Analysis:**\n"
            f"- Complexity: {task.complexity.value}\n"
            f"- Scope: {task.scope.value}\n"
            f"- Priority: {task.priority.value}\n"
            f"- Estimated Time: {task.estimated_time}\n\n"
            "Let's start with the Architect's analysis."
        )
        content = await self.compose(draft, context)
        return self.format_response(content, completed=False)

    def is_capable_of(self, task: TaskContext) -> bool:
        return task.complexity == Complexity.ARCHITECTURAL or task.scope == Scope.FULL_APP

    def select_best_agent(self, user_message: str, task: TaskContext) -> AgentType:
        """Map strong signal words to a specialist, or keep the request.

        Args:
            user_message: The raw user message.
            task: The classified task.

        Returns:
            The specialist to delegate to, or MANAGER when no rule matches.
        """
        message = (user_message or "").lower()

        def signals(keywords: tuple[str, ...]) -> bool:
            return any(keyword in message for keyword in keywords)

        if signals(self.rules.editor) and task.complexity in _EDITABLE_COMPLEXITIES:
            return AgentType.EDITOR
        if signals(self.rules.architect):
            return AgentType.ARCHITECT
        if signals(self.rules.advisor):
            return AgentType.ADVISOR
        if signals(self.rules.shepherd):
            return AgentType.SHEPHERD
        return AgentType.MANAGER
