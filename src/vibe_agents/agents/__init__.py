"""The five agents behind the router.

    ManagerAgent    triage, delegates to a specialist or coordinates
    EditorAgent     proposes file edits (the only agent that can)
    ArchitectAgent  structural analysis and recommendations
    AdvisorAgent    advice, best practices and next steps
    ShepherdAgent   progress auditing and quality checks

``AGENT_CLASSES`` maps every AgentType to its class; the router checks
that it is exhaustive.
"""

from ..types import AgentType
from .advisor import AdvisorAgent
from .architect import ArchitectAgent
from .base import BaseAgent
from .editor import EditorAgent
from .manager import DEFAULT_DELEGATION_RULES, DelegationRules, ManagerAgent
from .shepherd import ShepherdAgent

AGENT_CLASSES: dict[AgentType, type[BaseAgent]] = {
    AgentType.MANAGER: ManagerAgent,
    AgentType.EDITOR: EditorAgent,
    AgentType.ARCHITECT: ArchitectAgent,
    AgentType.ADVISOR: AdvisorAgent,
    AgentType.SHEPHERD: ShepherdAgent,
}

__all__ = [
    "AGENT_CLASSES",
    "AdvisorAgent",
    "ArchitectAgent",
    "BaseAgent",
    "DEFAULT_DELEGATION_RULES",
    "DelegationRules",
    "EditorAgent",
    "ManagerAgent",
    "ShepherdAgent",
]
