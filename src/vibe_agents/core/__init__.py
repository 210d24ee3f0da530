"""Core router components.

This module provides the pieces the router is built from:
- ConversationHistory: Bounded transcript owned by the router
- ActionExecutor: Applies proposed file mutations
- classify_task: Keyword-based task classification
"""

from .action_executor import ActionExecutor, SaveCallback, get_agent_display_name
from .memory_manager import DEFAULT_HISTORY_LIMIT, ConversationHistory
from .task_analyzer import ESTIMATED_TIMES, classify_task

__all__ = [
    "ActionExecutor",
    "ConversationHistory",
    "DEFAULT_HISTORY_LIMIT",
    "ESTIMATED_TIMES",
    "SaveCallback",
    "classify_task",
    "get_agent_display_name",
]
