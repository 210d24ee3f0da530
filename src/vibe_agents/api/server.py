"""FastAPI server exposing one router per session."""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ..agent_manager import AgentManager
from ..config import get_settings
from ..exceptions import UnknownAgentError
from .schemas import (
    AgentReply,
    AttributionModel,
    CreateSessionRequest,
    ExecuteActionsRequest,
    ExecuteActionsResponse,
    MessageRequest,
    SessionInfo,
)
from .sessions import Session, sessions


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Vibe Agents API",
        description="Multi-agent assistant for the browser app editor",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app


app = create_app()


def _require_session(session_id: str) -> Session:
    session = sessions.get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found or expired")
    return session


@app.get("/api/agents")
def list_agents() -> list[dict]:
    """List registered agents and their capabilities."""
    return [identity.to_dict() for identity in AgentManager().get_available_agents()]


@app.post("/api/sessions", response_model=SessionInfo)
def create_session(request: CreateSessionRequest | None = None) -> SessionInfo:
    """Create a new conversation session, optionally bound to an app."""
    request = request or CreateSessionRequest()
    session = sessions.create_session(app_id=request.app_id, workspace_id=request.workspace_id)
    return SessionInfo(
        session_id=session.id,
        app_id=session.app_id,
        workspace_id=session.workspace_id,
    )


@app.delete("/api/sessions/{session_id}")
def delete_session(session_id: str) -> dict:
    """Delete a session."""
    if sessions.delete_session(session_id):
        return {"status": "deleted"}
    raise HTTPException(status_code=404, detail="Session not found")


@app.post("/api/sessions/{session_id}/messages", response_model=AgentReply)
async def send_message(session_id: str, request: MessageRequest) -> AgentReply:
    """Route a message through the manager, or to one agent when named."""
    session = _require_session(session_id)
    app_id = request.app_id or session.app_id or ""
    workspace_id = request.workspace_id or session.workspace_id or ""

    async with session.lock:
        try:
            if request.agent_type is not None:
                response = await session.manager.process_with_agent(
                    request.agent_type,
                    request.message,
                    app_id,
                    request.file_contents,
                    workspace_id,
                )
            else:
                response = await session.manager.process_request(
                    request.message,
                    app_id,
                    request.file_contents,
                    workspace_id,
                )
        except UnknownAgentError as e:
            raise HTTPException(status_code=400, detail=str(e))

    return AgentReply.from_response(response)


@app.post("/api/sessions/{session_id}/actions", response_model=ExecuteActionsResponse)
async def execute_actions(session_id: str, request: ExecuteActionsRequest) -> ExecuteActionsResponse:
    """Apply proposed actions to the supplied file map."""
    session = _require_session(session_id)

    async with session.lock:
        result = await session.manager.execute_actions(
            [action.to_action() for action in request.actions],
            request.file_contents,
            agent_type=request.agent_type,
        )

    attribution = None
    if result.agent_context is not None:
        attribution = AttributionModel(**result.agent_context.to_dict())

    return ExecuteActionsResponse(
        updated_files=result.updated_files,
        agent_context=attribution,
        should_save=result.should_save,
    )


@app.get("/api/sessions/{session_id}/history")
def get_history(session_id: str) -> list[dict]:
    """Get conversation history for a session."""
    session = _require_session(session_id)
    return [message.to_dict() for message in session.manager.get_conversation_history()]


@app.post("/api/sessions/{session_id}/clear")
def clear_history(session_id: str) -> dict:
    """Clear conversation history for a session."""
    session = _require_session(session_id)
    session.manager.clear_history()
    return {"status": "cleared"}
