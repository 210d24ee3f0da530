"""Action execution for the router.

This module applies file mutations proposed by agents to a copy of the
caller's file map and optionally hands the result to a persistence
callback with attribution metadata.
"""

import inspect
from typing import Any, Awaitable, Callable, Mapping, Sequence

from ..logging import get_logger
from ..types import (
    ActionType,
    AgentAction,
    AgentAttribution,
    AgentType,
    ExecutionResult,
)

logger = get_logger(__name__)

# called with (attribution, action_description); may be sync or async
SaveCallback = Callable[[AgentAttribution, str], Awaitable[Any] | Any]

DEFAULT_ACTION_DESCRIPTION = "Applied file changes"


def get_agent_display_name(agent_type: AgentType) -> str:
    """Get the attribution name for an agent type, e.g. "Editor Agent"."""
    return f"{agent_type.display_name} Agent"


class ActionExecutor:
    """Applies proposed actions to an in-memory file map.

    ``file_edit`` and ``file_create`` overwrite the target, ``file_delete``
    removes it. ``analysis`` and ``recommendation`` actions carry no file
    change and are skipped.
    """

    def apply(
        self,
        actions: Sequence[AgentAction],
        file_contents: Mapping[str, str],
    ) -> tuple[dict[str, str], list[str]]:
        """Apply actions to a copy of the file map.

        Args:
            actions: Proposed actions in order.
            file_contents: The caller's file map. Never modified.

        Returns:
            Tuple of (updated_files, change_descriptions).
        """
        updated_files = dict(file_contents)
        changes: list[str] = []

        for action in actions:
            if action.type == ActionType.FILE_EDIT:
                updated_files[action.target] = action.content
                changes.append(f"Modified {action.target}")
            elif action.type == ActionType.FILE_CREATE:
                updated_files[action.target] = action.content
                changes.append(f"Created {action.target}")
            elif action.type == ActionType.FILE_DELETE:
                updated_files.pop(action.target, None)
                changes.append(f"Deleted {action.target}")

        return updated_files, changes

    async def execute(
        self,
        actions: Sequence[AgentAction],
        file_contents: Mapping[str, str],
        agent_type: AgentType | None = None,
        save_callback: SaveCallback | None = None,
    ) -> ExecutionResult:
        """Apply actions and persist through the callback when given.

        A failing save callback is logged and swallowed; the in-memory
        update is still returned.

        Args:
            actions: Proposed actions in order.
            file_contents: The caller's file map. Never modified.
            agent_type: Agent credited with the change.
            save_callback: Optional persistence hook.

        Returns:
            ExecutionResult with the new file map and attribution.
        """
        updated_files, changes = self.apply(actions, file_contents)
        should_save = bool(changes)

        result = ExecutionResult(updated_files=updated_files, should_save=should_save)
        if not should_save or agent_type is None:
            return result

        description = ", ".join(changes) or DEFAULT_ACTION_DESCRIPTION
        result.agent_context = AgentAttribution(
            agent_type=agent_type,
            agent_name=get_agent_display_name(agent_type),
            action_description=description,
        )

        if save_callback is not None:
            try:
                outcome = save_callback(result.agent_context, description)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception:
                logger.exception("failed to save files with agent context")

        return result
