"""Vibe Agents - multi-agent request router for a browser app editor.

This package routes free-text requests about a small web app (markup,
styles, script and data files) to one of five specialized agents, applies
the file edits they propose, and keeps a bounded conversation history.
"""

from .agent_manager import AgentManager
from .agents import (
    AdvisorAgent,
    ArchitectAgent,
    BaseAgent,
    DelegationRules,
    EditorAgent,
    ManagerAgent,
    ShepherdAgent,
)
from .exceptions import (
    AgentError,
    ClientError,
    GenerationError,
    UnknownAgentError,
)
from .generation import LLMGenerator, PassthroughGenerator, TextGenerator
from .types import (
    ActionType,
    AgentAction,
    AgentAttribution,
    AgentCapabilities,
    AgentContext,
    AgentIdentity,
    AgentResponse,
    AgentType,
    ChatMessage,
    Delegation,
    ExecutionResult,
    MessageRole,
    TaskContext,
)

__all__ = [
    # router
    "AgentManager",
    # agents
    "AdvisorAgent",
    "ArchitectAgent",
    "BaseAgent",
    "DelegationRules",
    "EditorAgent",
    "ManagerAgent",
    "ShepherdAgent",
    # generation
    "LLMGenerator",
    "PassthroughGenerator",
    "TextGenerator",
    # types
    "ActionType",
    "AgentAction",
    "AgentAttribution",
    "AgentCapabilities",
    "AgentContext",
    "AgentIdentity",
    "AgentResponse",
    "AgentType",
    "ChatMessage",
    "Delegation",
    "ExecutionResult",
    "MessageRole",
    "TaskContext",
    # exceptions
    "AgentError",
    "ClientError",
    "GenerationError",
    "UnknownAgentError",
]
