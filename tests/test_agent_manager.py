"""Tests for the AgentManager router."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from vibe_agents.agent_manager import AgentManager
from vibe_agents.agents import DelegationRules, EditorAgent
from vibe_agents.exceptions import UnknownAgentError
from vibe_agents.types import (
    ActionType,
    AgentAction,
    AgentType,
    MessageRole,
)


def _roles(manager):
    return [(m.role, m.agent_type) for m in manager.get_conversation_history()]


class TestRegistry:
    """Tests for agent lookup."""

    def test_every_type_registered(self, manager):
        identities = manager.get_available_agents()
        assert [i.type for i in identities] == list(AgentType)

    def test_get_agent(self, manager):
        assert isinstance(manager.get_agent(AgentType.EDITOR), EditorAgent)
        assert isinstance(manager.get_agent("editor"), EditorAgent)

    def test_get_unknown_agent(self, manager):
        with pytest.raises(UnknownAgentError) as exc_info:
            manager.get_agent("designer")
        assert "designer" in str(exc_info.value)
        assert "manager" in exc_info.value.available

    def test_display_name(self):
        assert AgentManager.get_agent_display_name(AgentType.ARCHITECT) == "Architect Agent"

    def test_history_limit(self):
        assert AgentManager().history_limit == 50
        assert AgentManager(history_limit=4).history_limit == 4


class TestProcessRequest:
    """Tests for manager-first routing."""

    @pytest.mark.asyncio
    async def test_delegation_records_three_turns(self, manager):
        response = await manager.process_request(
            "can you add a button and style it",
            "app-1",
            {"index.html": "<body></body>", "styles.css": ""},
            "ws-1",
        )

        assert response.content.startswith("**Editor**: ")
        assert {a.target for a in response.actions} == {"index.html", "styles.css"}
        assert _roles(manager) == [
            (MessageRole.USER, None),
            (MessageRole.ASSISTANT, AgentType.MANAGER),
            (MessageRole.ASSISTANT, AgentType.EDITOR),
        ]

    @pytest.mark.asyncio
    async def test_manager_handles_without_signal(self, manager):
        response = await manager.process_request("hello there", "app-1", {}, "ws-1")

        assert response.content.startswith("**Manager**: ")
        assert response.completed is False
        assert _roles(manager) == [
            (MessageRole.USER, None),
            (MessageRole.ASSISTANT, AgentType.MANAGER),
        ]

    @pytest.mark.asyncio
    async def test_delegate_sees_user_turn_in_context(self, manager):
        shepherd = manager.get_agent(AgentType.SHEPHERD)
        real_process = shepherd.process
        seen = []

        async def spy(context):
            seen.append(context)
            return await real_process(context)

        shepherd.process = spy
        await manager.process_request("please review my code", "app-1", {}, "ws-1")

        assert seen[0].conversation_history[-1].content == "please review my code"
        assert seen[0].app_id == "app-1"
        assert seen[0].workspace_id == "ws-1"

    @pytest.mark.asyncio
    async def test_caller_files_untouched(self, manager):
        files = {"index.html": "<body></body>", "styles.css": ""}
        await manager.process_request("add a button and style it", "app-1", files, "ws-1")
        assert files == {"index.html": "<body></body>", "styles.css": ""}

    @pytest.mark.asyncio
    async def test_custom_delegation_rules(self):
        manager = AgentManager(delegation_rules=DelegationRules(advisor=("ponder",)))
        response = await manager.process_request("ponder this", "app-1", {}, "ws-1")
        assert response.content.startswith("**Advisor**: ")

    @pytest.mark.asyncio
    async def test_history_is_capped(self):
        manager = AgentManager(history_limit=50)
        for i in range(55):
            await manager.process_with_agent(AgentType.ADVISOR, f"question {i}", "a", {}, "w")

        history = manager.get_conversation_history()
        assert len(history) == 50
        assert history[-1].agent_type == AgentType.ADVISOR
        assert history[-2].content == "question 54"

    @pytest.mark.asyncio
    async def test_clear_history(self, manager):
        await manager.process_request("hello", "app-1", {}, "ws-1")
        manager.clear_history()
        assert manager.get_conversation_history() == []


class TestProcessWithAgent:
    """Tests for direct agent selection."""

    @pytest.mark.asyncio
    async def test_skips_manager(self, manager):
        response = await manager.process_with_agent(
            AgentType.ARCHITECT, "fix the button", "app-1", {}, "ws-1"
        )

        assert response.content.startswith("**Architect**: ")
        assert _roles(manager) == [
            (MessageRole.USER, None),
            (MessageRole.ASSISTANT, AgentType.ARCHITECT),
        ]

    @pytest.mark.asyncio
    async def test_accepts_string_type(self, manager):
        response = await manager.process_with_agent("shepherd", "status?", "app-1", {}, "ws-1")
        assert response.content.startswith("**Shepherd**: ")

    @pytest.mark.asyncio
    async def test_unknown_type_leaves_history_alone(self, manager):
        await manager.process_request("hello", "app-1", {}, "ws-1")
        before = manager.get_conversation_history()

        with pytest.raises(UnknownAgentError):
            await manager.process_with_agent("designer", "hi", "app-1", {}, "ws-1")

        assert manager.get_conversation_history() == before

    @pytest.mark.asyncio
    async def test_empty_type_is_value_error(self, manager):
        with pytest.raises(ValueError):
            await manager.process_with_agent("", "hi", "app-1", {}, "ws-1")


class TestExecuteActions:
    """Tests for applying actions through the router."""

    @pytest.mark.asyncio
    async def test_edit_and_delete(self, manager):
        files = {"index.html": "old", "script.js": "x"}
        actions = [
            AgentAction(type=ActionType.FILE_EDIT, target="index.html", content="new"),
            AgentAction(type=ActionType.FILE_DELETE, target="script.js"),
        ]

        result = await manager.execute_actions(actions, files, agent_type=AgentType.EDITOR)

        assert result.updated_files == {"index.html": "new"}
        assert files == {"index.html": "old", "script.js": "x"}
        assert result.should_save is True
        assert result.agent_context.agent_type == AgentType.EDITOR
        assert result.agent_context.agent_name == "Editor Agent"

    @pytest.mark.asyncio
    async def test_rejecting_callback_still_returns_update(self, manager):
        callback = AsyncMock(side_effect=OSError("read-only"))
        actions = [AgentAction(type=ActionType.FILE_CREATE, target="db.json", content="{}")]

        result = await manager.execute_actions(
            actions, {}, agent_type=AgentType.EDITOR, save_callback=callback
        )

        callback.assert_awaited_once()
        assert result.should_save is True
        assert result.updated_files == {"db.json": "{}"}

    @pytest.mark.asyncio
    async def test_no_actions(self, manager):
        callback = MagicMock()
        result = await manager.execute_actions([], {"a": "b"}, save_callback=callback)

        assert result.should_save is False
        assert result.agent_context is None
        callback.assert_not_called()

    @pytest.mark.asyncio
    async def test_editor_actions_end_to_end(self, manager):
        files = {"index.html": "<body></body>", "styles.css": ""}
        response = await manager.process_request(
            "can you add a button and style it", "app-1", files, "ws-1"
        )

        result = await manager.execute_actions(
            response.actions, files, agent_type=AgentType.EDITOR
        )

        assert 'id="newButton"' in result.updated_files["index.html"]
        assert ".btn" in result.updated_files["styles.css"]
        assert result.agent_context.action_description == (
            "Modified index.html, Modified styles.css"
        )
