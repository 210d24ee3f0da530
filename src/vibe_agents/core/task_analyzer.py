"""Keyword-based task classification shared by every agent.

Checks run in a fixed order and the first matching category wins, so the
same message always classifies the same way.
"""

from ..types import Complexity, Priority, Scope, TaskContext

ARCHITECTURAL_KEYWORDS = ("refactor", "restructure", "architecture", "database", "api")
MODERATE_KEYWORDS = ("component", "function", "style", "layout", "feature")
STRUCTURAL_KEYWORDS = ("folder", "organize", "structure", "framework")
MULTI_FILE_KEYWORDS = ("across files", "multiple files", "all files")

ESTIMATED_TIMES: dict[Complexity, str] = {
    Complexity.SIMPLE: "5-10 minutes",
    Complexity.MODERATE: "10-20 minutes",
    Complexity.COMPLEX: "15-30 minutes",
    Complexity.ARCHITECTURAL: "30-60 minutes",
}


def _mentions(message: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in message for keyword in keywords)


def classify_task(user_message: str) -> TaskContext:
    """Map a free-text request to complexity, scope, priority and time estimate.

    Args:
        user_message: The raw user message.

    Returns:
        TaskContext for the message. Never raises for odd input; an empty or
        unrecognized message classifies as a simple single-file task.
    """
    message = (user_message or "").lower()

    complexity = Complexity.SIMPLE
    scope = Scope.SINGLE_FILE
    priority = Priority.MEDIUM

    if _mentions(message, ARCHITECTURAL_KEYWORDS):
        complexity = Complexity.ARCHITECTURAL
        scope = Scope.FULL_APP
        priority = Priority.HIGH
    elif _mentions(message, MODERATE_KEYWORDS):
        complexity = Complexity.MODERATE
        scope = Scope.MULTI_FILE
    elif _mentions(message, STRUCTURAL_KEYWORDS):
        complexity = Complexity.COMPLEX
        scope = Scope.STRUCTURAL
    elif _mentions(message, MULTI_FILE_KEYWORDS):
        scope = Scope.MULTI_FILE

    return TaskContext(
        complexity=complexity,
        scope=scope,
        priority=priority,
        estimated_time=ESTIMATED_TIMES[complexity],
    )
