"""Shared types for the multi-agent router.

These types describe the request context handed to agents, the responses
they produce, and the file mutations they propose. The same message types
are also used when talking to an LLM provider.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class AgentType(str, Enum):
    """The five registered agent roles."""
    MANAGER = "manager"
    EDITOR = "editor"
    ARCHITECT = "architect"
    ADVISOR = "advisor"
    SHEPHERD = "shepherd"

    @property
    def display_name(self) -> str:
        """Capitalized name used to prefix agent responses."""
        return self.value.capitalize()


class MessageRole(str, Enum):
    """Role of a message in the conversation."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ActionType(str, Enum):
    """Kind of change an agent proposes."""
    FILE_EDIT = "file_edit"
    FILE_CREATE = "file_create"
    FILE_DELETE = "file_delete"
    ANALYSIS = "analysis"
    RECOMMENDATION = "recommendation"


class Complexity(str, Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"
    ARCHITECTURAL = "architectural"


class Scope(str, Enum):
    SINGLE_FILE = "single-file"
    MULTI_FILE = "multi-file"
    STRUCTURAL = "structural"
    FULL_APP = "full-app"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


# well-known files of a generated app
HTML_FILE = "index.html"
CSS_FILE = "styles.css"
JS_FILE = "script.js"
DATA_FILE = "db.json"

WELL_KNOWN_FILES = (HTML_FILE, CSS_FILE, JS_FILE, DATA_FILE)
CODE_FILES = (HTML_FILE, CSS_FILE, JS_FILE)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class ChatMessage:
    """One turn in the conversation transcript.

    Attributes:
        role: Who produced the turn
        content: Text of the turn
        agent_type: Agent that produced an assistant turn (None for user turns)
        id: Unique identifier
        created_at: ISO-8601 UTC timestamp
    """
    role: MessageRole
    content: str
    agent_type: AgentType | None = None
    id: str = field(default_factory=_new_id)
    created_at: str = field(default_factory=_utc_now)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary representation."""
        result: dict[str, Any] = {
            "id": self.id,
            "role": self.role.value,
            "content": self.content,
            "created_at": self.created_at,
        }
        if self.agent_type is not None:
            result["agent_type"] = self.agent_type.value
        return result


@dataclass(frozen=True)
class AgentCapabilities:
    """What an agent is allowed to do. Fixed at construction."""
    can_edit_files: bool = False
    can_analyze_code: bool = False
    can_provide_guidance: bool = False
    can_coordinate: bool = False
    can_make_decisions: bool = False

    def to_dict(self) -> dict[str, bool]:
        return {
            "can_edit_files": self.can_edit_files,
            "can_analyze_code": self.can_analyze_code,
            "can_provide_guidance": self.can_provide_guidance,
            "can_coordinate": self.can_coordinate,
            "can_make_decisions": self.can_make_decisions,
        }


@dataclass(frozen=True)
class TaskContext:
    """Coarse classification of a request."""
    complexity: Complexity
    scope: Scope
    priority: Priority
    estimated_time: str


@dataclass(frozen=True)
class AgentAction:
    """A change proposed by an agent.

    Attributes:
        type: Kind of change
        target: Filename or logical component
        content: Full replacement content for file kinds
        reason: Human-readable justification
    """
    type: ActionType
    target: str
    content: str = ""
    reason: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "type": self.type.value,
            "target": self.target,
            "content": self.content,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class Delegation:
    """Instruction from the manager to hand a request to a specialist."""
    to: AgentType
    reason: str
    context: str = ""


@dataclass
class AgentResponse:
    """Output of an agent's process call.

    Attributes:
        content: Response text, prefixed with the agent's display name
        actions: Proposed changes (may be empty)
        delegation: Set when the manager wants a specialist to take over
        completed: Whether the agent considers the request handled
    """
    content: str
    actions: list[AgentAction] = field(default_factory=list)
    delegation: Delegation | None = None
    completed: bool = True

    @property
    def should_delegate(self) -> bool:
        """Check if the response carries a delegation instruction."""
        return self.delegation is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary representation."""
        result: dict[str, Any] = {
            "content": self.content,
            "actions": [action.to_dict() for action in self.actions],
            "completed": self.completed,
        }
        if self.delegation is not None:
            result["should_delegate"] = {
                "to": self.delegation.to.value,
                "reason": self.delegation.reason,
                "context": self.delegation.context,
            }
        return result


@dataclass(frozen=True)
class AgentContext:
    """Everything an agent sees for one request.

    Built fresh by the router per request. ``file_contents`` is a read-only
    copy and ``conversation_history`` a tuple snapshot, so agents cannot
    mutate either.
    """
    app_id: str
    file_contents: Mapping[str, str]
    user_message: str
    conversation_history: tuple[ChatMessage, ...]
    workspace_id: str

    @classmethod
    def build(
        cls,
        app_id: str,
        file_contents: Mapping[str, str],
        user_message: str,
        conversation_history: list[ChatMessage] | tuple[ChatMessage, ...],
        workspace_id: str,
    ) -> "AgentContext":
        """Create a context from caller-owned data, copying what could be mutated."""
        return cls(
            app_id=app_id,
            file_contents=MappingProxyType(dict(file_contents)),
            user_message=user_message,
            conversation_history=tuple(conversation_history),
            workspace_id=workspace_id,
        )

    def file(self, name: str) -> str:
        """Get a file's content, or an empty string if the file is absent."""
        return self.file_contents.get(name) or ""


@dataclass(frozen=True)
class AgentIdentity:
    """Descriptor advertised to callers for each registered agent."""
    type: AgentType
    role: str
    capabilities: AgentCapabilities

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "role": self.role,
            "capabilities": self.capabilities.to_dict(),
        }


@dataclass(frozen=True)
class AgentAttribution:
    """Who changed the files, passed to the save callback."""
    agent_type: AgentType
    agent_name: str
    action_description: str

    def to_dict(self) -> dict[str, str]:
        return {
            "agent_type": self.agent_type.value,
            "agent_name": self.agent_name,
            "action_description": self.action_description,
        }


@dataclass
class ExecutionResult:
    """Result of applying proposed actions to a file map.

    Attributes:
        updated_files: New file map (the caller's input is never modified)
        agent_context: Attribution, set when files changed and an agent was named
        should_save: Whether any file was created, edited or deleted
    """
    updated_files: dict[str, str]
    agent_context: AgentAttribution | None = None
    should_save: bool = False


# ==================== llm provider types ====================


class FinishReason(Enum):
    """Reason why the model stopped generating."""
    STOP = "stop"
    LENGTH = "length"
    ERROR = "error"


@dataclass
class UnifiedMessage:
    """A message sent to an LLM provider.

    Each LLM client converts to/from this format internally.
    """
    role: MessageRole
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role.value, "content": self.content}


@dataclass
class UsageStats:
    """Token usage statistics."""
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass
class UnifiedResponse:
    """Response from an LLM provider in a provider-agnostic format."""
    message: UnifiedMessage
    finish_reason: FinishReason
    usage: UsageStats | None = None
