"""Per-conversation routers for the API server.

A router's history has a single writer, so each session owns its own
AgentManager plus an asyncio lock. Requests for the same session are
serialized on the lock; different sessions run independently.
"""

import asyncio
import time
import uuid
from dataclasses import dataclass, field

from ..agent_manager import AgentManager
from ..config import get_settings
from ..generation import build_generator
from ..generation.base import TextGenerator
from ..logging import get_logger

logger = get_logger(__name__)


@dataclass
class Session:
    """One conversation, optionally bound to the app it edits."""

    id: str
    manager: AgentManager
    app_id: str | None = None
    workspace_id: str | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    last_accessed: float = field(default_factory=time.time)

    def touch(self) -> None:
        self.last_accessed = time.time()

    def is_expired(self, timeout: int, now: float | None = None) -> bool:
        return (now or time.time()) - self.last_accessed > timeout


class SessionManager:
    """Creates, looks up and expires sessions."""

    def __init__(
        self,
        session_timeout: int | None = None,
        generator: TextGenerator | None = None,
    ):
        """Initialize the session store.

        Args:
            session_timeout: Idle seconds before a session expires
                (settings.session_timeout if not given).
            generator: Generator shared by every router. Built from settings
                on first use if not given, so a misconfigured provider only
                fails the first request rather than the import.
        """
        self._sessions: dict[str, Session] = {}
        self._timeout = session_timeout or get_settings().session_timeout
        self._generator = generator

    def _get_generator(self) -> TextGenerator:
        if self._generator is None:
            self._generator = build_generator(get_settings())
        return self._generator

    def create_session(
        self,
        app_id: str | None = None,
        workspace_id: str | None = None,
    ) -> Session:
        """Start a conversation with a fresh router and empty history.

        Expired sessions are evicted first so abandoned ones do not pile up.
        """
        self.cleanup_expired()
        manager = AgentManager(
            generator=self._get_generator(),
            history_limit=get_settings().history_limit,
        )
        session = Session(
            id=str(uuid.uuid4()),
            manager=manager,
            app_id=app_id,
            workspace_id=workspace_id,
        )
        self._sessions[session.id] = session
        logger.info(f"created session {session.id} for app {app_id or '-'}")
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a live session and refresh its idle timer.

        Returns:
            The session, or None if it is unknown or has expired.
        """
        session = self._sessions.get(session_id)
        if session is None:
            return None

        if session.is_expired(self._timeout):
            del self._sessions[session_id]
            logger.info(f"session {session_id} expired")
            return None

        session.touch()
        return session

    def delete_session(self, session_id: str) -> bool:
        """Drop a session. Returns False if it did not exist."""
        return self._sessions.pop(session_id, None) is not None

    def cleanup_expired(self) -> int:
        """Drop every expired session and return how many were removed."""
        now = time.time()
        expired = [sid for sid, s in self._sessions.items() if s.is_expired(self._timeout, now)]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info(f"evicted {len(expired)} expired sessions")
        return len(expired)

    @property
    def active_count(self) -> int:
        return len(self._sessions)


# global session store used by the server
sessions = SessionManager()
