"""Tests for shared types."""

import pytest
from dataclasses import FrozenInstanceError

from vibe_agents.types import (
    ActionType,
    AgentAction,
    AgentContext,
    AgentResponse,
    AgentType,
    ChatMessage,
    Delegation,
    MessageRole,
    UnifiedMessage,
)


class TestAgentType:
    """Tests for AgentType enum."""

    def test_enum_values(self):
        """Test that every role is registered."""
        assert [t.value for t in AgentType] == [
            "manager", "editor", "architect", "advisor", "shepherd",
        ]

    def test_display_name(self):
        assert AgentType.EDITOR.display_name == "Editor"
        assert AgentType.SHEPHERD.display_name == "Shepherd"

    def test_unknown_value_raises(self):
        with pytest.raises(ValueError):
            AgentType("designer")


class TestChatMessage:
    """Tests for ChatMessage dataclass."""

    def test_defaults(self):
        msg = ChatMessage(role=MessageRole.USER, content="hi")
        assert msg.agent_type is None
        assert msg.id
        assert msg.created_at

    def test_ids_are_unique(self):
        a = ChatMessage(role=MessageRole.USER, content="a")
        b = ChatMessage(role=MessageRole.USER, content="a")
        assert a.id != b.id

    def test_immutable(self):
        msg = ChatMessage(role=MessageRole.USER, content="hi")
        with pytest.raises(FrozenInstanceError):
            msg.content = "changed"

    def test_to_dict_includes_agent_type(self):
        msg = ChatMessage(
            role=MessageRole.ASSISTANT, content="done", agent_type=AgentType.EDITOR
        )
        data = msg.to_dict()
        assert data["role"] == "assistant"
        assert data["agent_type"] == "editor"

    def test_to_dict_user_has_no_agent_type(self):
        data = ChatMessage(role=MessageRole.USER, content="hi").to_dict()
        assert "agent_type" not in data


class TestAgentContext:
    """Tests for AgentContext."""

    def test_build_copies_file_map(self):
        files = {"index.html": "<body></body>"}
        context = AgentContext.build("app", files, "hello", [], "ws")

        files["index.html"] = "changed"
        assert context.file_contents["index.html"] == "<body></body>"

    def test_file_map_is_read_only(self):
        context = AgentContext.build("app", {"index.html": ""}, "hello", [], "ws")
        with pytest.raises(TypeError):
            context.file_contents["index.html"] = "x"

    def test_history_is_tuple(self):
        history = [ChatMessage(role=MessageRole.USER, content="hi")]
        context = AgentContext.build("app", {}, "hello", history, "ws")
        assert isinstance(context.conversation_history, tuple)

    def test_file_helper_defaults_to_empty(self):
        context = AgentContext.build("app", {}, "hello", [], "ws")
        assert context.file("script.js") == ""


class TestAgentResponse:
    """Tests for AgentResponse."""

    def test_should_delegate(self):
        response = AgentResponse(
            content="x",
            delegation=Delegation(to=AgentType.EDITOR, reason="edit"),
        )
        assert response.should_delegate
        assert not AgentResponse(content="x").should_delegate

    def test_to_dict(self):
        response = AgentResponse(
            content="x",
            actions=[AgentAction(type=ActionType.FILE_EDIT, target="index.html", content="y")],
            delegation=Delegation(to=AgentType.ADVISOR, reason="advice", context="ctx"),
            completed=False,
        )
        data = response.to_dict()
        assert data["actions"][0]["type"] == "file_edit"
        assert data["should_delegate"]["to"] == "advisor"
        assert data["completed"] is False


class TestUnifiedMessage:
    """Tests for UnifiedMessage dataclass."""

    def test_to_dict(self):
        msg = UnifiedMessage(role=MessageRole.SYSTEM, content="You are helpful.")
        assert msg.to_dict() == {"role": "system", "content": "You are helpful."}
