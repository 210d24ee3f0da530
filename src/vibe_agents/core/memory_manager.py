"""Conversation history for the router.

This module keeps the bounded, router-owned transcript. The router is the
only writer; callers must serialize requests per conversation.
"""

from ..logging import get_logger
from ..types import AgentType, ChatMessage, MessageRole

logger = get_logger(__name__)

DEFAULT_HISTORY_LIMIT = 50


class ConversationHistory:
    """Ordered transcript capped at the most recent ``limit`` messages.

    Messages are immutable once appended. When an append pushes the
    length past the cap, the oldest entries are dropped first.
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT):
        """Initialize an empty history.

        Args:
            limit: Maximum number of messages retained.

        Raises:
            ValueError: If limit is smaller than 1.
        """
        if limit < 1:
            raise ValueError(f"History limit must be at least 1, got {limit}")
        self.limit = limit
        self._messages: list[ChatMessage] = []

    def add_message(self, message: ChatMessage) -> None:
        """Append a message and trim from the front if over the cap.

        Args:
            message: The message to add.
        """
        self._messages.append(message)
        overflow = len(self._messages) - self.limit
        if overflow > 0:
            del self._messages[:overflow]
            logger.debug(f"trimmed {overflow} message(s) from conversation history")

    def add_user_message(self, content: str) -> ChatMessage:
        """Record a user turn.

        Args:
            content: The user's message text.

        Returns:
            The appended message.
        """
        message = ChatMessage(role=MessageRole.USER, content=content)
        self.add_message(message)
        return message

    def add_agent_message(self, content: str, agent_type: AgentType) -> ChatMessage:
        """Record an assistant turn attributed to an agent.

        Args:
            content: The agent's response text.
            agent_type: The agent that produced it.

        Returns:
            The appended message.
        """
        message = ChatMessage(
            role=MessageRole.ASSISTANT,
            content=content,
            agent_type=agent_type,
        )
        self.add_message(message)
        return message

    def snapshot(self) -> tuple[ChatMessage, ...]:
        """Get an immutable view of the current transcript."""
        return tuple(self._messages)

    def messages(self) -> list[ChatMessage]:
        """Get a copy of the current transcript."""
        return list(self._messages)

    def clear(self) -> None:
        """Drop every message."""
        self._messages = []

    def get_history(self) -> list[dict]:
        """Export history as list of dicts."""
        return [msg.to_dict() for msg in self._messages]

    def __len__(self) -> int:
        return len(self._messages)
