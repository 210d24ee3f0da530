"""Pydantic models for API requests and responses."""

from pydantic import BaseModel, Field

from ..types import ActionType, AgentAction, AgentResponse, AgentType


class MessageRequest(BaseModel):
    """Request to route a user message."""

    message: str
    app_id: str | None = None  # falls back to the session binding
    workspace_id: str | None = None
    file_contents: dict[str, str] = Field(default_factory=dict)
    agent_type: str | None = None  # None routes through the manager


class ActionModel(BaseModel):
    """A proposed file change."""

    type: ActionType
    target: str
    content: str = ""
    reason: str = ""

    @classmethod
    def from_action(cls, action: AgentAction) -> "ActionModel":
        return cls(
            type=action.type,
            target=action.target,
            content=action.content,
            reason=action.reason,
        )

    def to_action(self) -> AgentAction:
        return AgentAction(
            type=self.type,
            target=self.target,
            content=self.content,
            reason=self.reason,
        )


class DelegationModel(BaseModel):
    """Delegation instruction carried by a manager response."""

    to: AgentType
    reason: str
    context: str = ""


class AgentReply(BaseModel):
    """Response from an agent."""

    content: str
    actions: list[ActionModel] = Field(default_factory=list)
    should_delegate: DelegationModel | None = None
    completed: bool = True

    @classmethod
    def from_response(cls, response: AgentResponse) -> "AgentReply":
        delegation = None
        if response.delegation is not None:
            delegation = DelegationModel(
                to=response.delegation.to,
                reason=response.delegation.reason,
                context=response.delegation.context,
            )
        return cls(
            content=response.content,
            actions=[ActionModel.from_action(action) for action in response.actions],
            should_delegate=delegation,
            completed=response.completed,
        )


class ExecuteActionsRequest(BaseModel):
    """Request to apply proposed actions to a file map."""

    actions: list[ActionModel]
    file_contents: dict[str, str] = Field(default_factory=dict)
    agent_type: AgentType | None = None


class AttributionModel(BaseModel):
    """Who changed the files."""

    agent_type: AgentType
    agent_name: str
    action_description: str


class ExecuteActionsResponse(BaseModel):
    """Result of applying actions."""

    updated_files: dict[str, str]
    agent_context: AttributionModel | None = None
    should_save: bool


class CreateSessionRequest(BaseModel):
    """Optional binding of a new session to the app it edits."""

    app_id: str | None = None
    workspace_id: str | None = None


class SessionInfo(BaseModel):
    """A created session."""

    session_id: str
    app_id: str | None = None
    workspace_id: str | None = None
