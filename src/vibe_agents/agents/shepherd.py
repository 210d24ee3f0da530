"""Shepherd agent: progress auditing, quality checks and guidance."""

from dataclasses import dataclass
from typing import Callable, Mapping, Sequence

from ..types import (
    CSS_FILE,
    HTML_FILE,
    JS_FILE,
    WELL_KNOWN_FILES,
    AgentCapabilities,
    AgentContext,
    AgentResponse,
    AgentType,
    ChatMessage,
    Complexity,
    TaskContext,
)
from .base import BaseAgent
from .prompts import SHEPHERD_PROMPT

NOT_YET_PRESENT = "⏳ not yet present"


@dataclass(frozen=True)
class QualityCheck:
    """One checklist item evaluated against a single file.

    ``evaluate`` receives the file content (never empty) and returns
    ``(is_issue, status_text)``.
    """
    name: str
    source: str
    evaluate: Callable[[str], tuple[bool, str]]


def _doctype(html: str) -> tuple[bool, str]:
    if "<!DOCTYPE html>" in html or "<!doctype html>" in html:
        return False, "✅ Present"
    return True, "❌ Missing DOCTYPE declaration"


def _charset(html: str) -> tuple[bool, str]:
    if "<meta charset=" in html:
        return False, "✅ Present"
    return True, "⚠️ Missing charset meta tag"


def _title(html: str) -> tuple[bool, str]:
    if "<title>" in html:
        return False, "✅ Present"
    return True, "⚠️ Missing page title"


def _important(css: str) -> tuple[bool, str]:
    if "!important" in css:
        return True, "⚠️ Overuse of !important in CSS"
    return False, "✅ Not used"


def _event_handlers(js: str) -> tuple[bool, str]:
    if "addEventListener" in js:
        return False, "✅ Registered with addEventListener"
    if "onclick=" in js:
        return True, "💡 Consider using addEventListener instead of inline event handlers"
    return False, "➖ No event handlers yet"


def _accessibility(html: str) -> tuple[bool, str]:
    if "aria-" in html or "role=" in html:
        return False, "✅ Good accessibility practices detected"
    return False, "➖ No ARIA attributes or roles yet"


def _responsive(css: str) -> tuple[bool, str]:
    if "@media" in css:
        return False, "✅ Responsive design implemented"
    return False, "➖ No media queries yet"


def _error_handling(js: str) -> tuple[bool, str]:
    if "try" in js and "catch" in js:
        return False, "✅ Error handling implemented"
    return False, "➖ No try/catch blocks yet"


QUALITY_CHECKS: tuple[QualityCheck, ...] = (
    QualityCheck("DOCTYPE declaration", HTML_FILE, _doctype),
    QualityCheck("Charset meta tag", HTML_FILE, _charset),
    QualityCheck("Page title", HTML_FILE, _title),
    QualityCheck("!important usage", CSS_FILE, _important),
    QualityCheck("Event handlers", JS_FILE, _event_handlers),
    QualityCheck("Accessibility", HTML_FILE, _accessibility),
    QualityCheck("Responsive design", CSS_FILE, _responsive),
    QualityCheck("Error handling", JS_FILE, _error_handling),
)

MILESTONE_POINTS = 25


class ShepherdAgent(BaseAgent):
    """Audits progress from the transcript and the current files."""

    AGENT_TYPE = AgentType.SHEPHERD
    CAPABILITIES = AgentCapabilities(
        can_analyze_code=True,
        can_provide_guidance=True,
        can_coordinate=True,
    )
    SYSTEM_PROMPT = SHEPHERD_PROMPT

    async def process(self, context: AgentContext) -> AgentResponse:
        progress = self.compute_progress(context.conversation_history, context.file_contents)
        assessment = self.assess_progress(
            context.conversation_history, context.file_contents, progress
        )
        quality = self.perform_quality_check(context.file_contents)
        guidance = self.provide_guidance(context.user_message, progress)

        draft = (
            "I'm monitoring your project progress. Here's my assessment:\n\n"
            f"**Progress Assessment:**\n{assessment}\n\n"
            f"**Quality Check:**\n{quality}\n\n"
            f"**Guidance:**\n{guidance}\n\n"
            "I'll continue to monitor and guide you through the next steps."
        )
        return self.format_response(await self.compose(draft, context))

    def is_capable_of(self, task: TaskContext) -> bool:
        return task.complexity != Complexity.SIMPLE

    # ==================== progress ====================

    @staticmethod
    def has_planning(history: Sequence[ChatMessage]) -> bool:
        return any(
            "plan" in (msg.content or "").lower()
            or msg.agent_type in (AgentType.ARCHITECT, AgentType.ADVISOR)
            for msg in history
        )

    @staticmethod
    def has_implementation(history: Sequence[ChatMessage]) -> bool:
        return any(
            msg.agent_type == AgentType.EDITOR
            or "implement" in (msg.content or "").lower()
            for msg in history
        )

    @staticmethod
    def has_basic_structure(files: Mapping[str, str]) -> bool:
        html = files.get(HTML_FILE) or ""
        css = files.get(CSS_FILE) or ""
        js = files.get(JS_FILE) or ""
        return "<html" in html and len(css) > 50 and len(js) > 20

    @staticmethod
    def has_advanced_features(files: Mapping[str, str]) -> bool:
        html = files.get(HTML_FILE) or ""
        css = files.get(CSS_FILE) or ""
        js = files.get(JS_FILE) or ""
        interactive = "addEventListener" in js or "onclick" in js
        styled = "class" in css or "#" in css
        structured = "<div" in html or "<section" in html
        return interactive and styled and structured

    def compute_progress(
        self, history: Sequence[ChatMessage], files: Mapping[str, str]
    ) -> int:
        """Score progress as 25 points per milestone reached (0-100)."""
        milestones = (
            self.has_planning(history),
            self.has_implementation(history),
            self.has_basic_structure(files),
            self.has_advanced_features(files),
        )
        return MILESTONE_POINTS * sum(milestones)

    def assess_progress(
        self,
        history: Sequence[ChatMessage],
        files: Mapping[str, str],
        progress: int,
    ) -> str:
        with_content = [
            name for name in WELL_KNOWN_FILES if (files.get(name) or "").strip()
        ]
        planning = "✅ Completed" if self.has_planning(history) else "⏳ In progress"
        implementation = "✅ Active" if self.has_implementation(history) else "⚠️ Pending"

        return "\n".join([
            "📊 **Current Status:**",
            f"- Planning phase: {planning}",
            f"- Implementation: {implementation}",
            f"- File development: {len(with_content)}/{len(WELL_KNOWN_FILES)} files have content",
            f"- Overall progress: {progress}% complete",
        ])

    # ==================== quality ====================

    def perform_quality_check(self, files: Mapping[str, str]) -> str:
        """Report every checklist item; items on empty files are not yet present."""
        lines: list[str] = []
        issues = 0
        evaluated = 0

        for check in QUALITY_CHECKS:
            content = files.get(check.source) or ""
            if not content.strip():
                lines.append(f"- {check.name}: {NOT_YET_PRESENT}")
                continue
            is_issue, status = check.evaluate(content)
            evaluated += 1
            issues += int(is_issue)
            lines.append(f"- {check.name}: {status}")

        if evaluated == 0:
            lines.append("Add content to your files so I can run the quality checks.")
        elif issues == 0:
            lines.append("✅ No major quality issues detected")
        else:
            lines.append(f"Issues found: {issues}")

        return "\n".join(lines)

    # ==================== guidance ====================

    def provide_guidance(self, user_message: str, progress: int) -> str:
        message = (user_message or "").lower()

        if "stuck" in message or "help" in message:
            return "\n".join([
                "🆘 **Getting Unstuck:**",
                "1. Break down your problem into smaller steps",
                "2. Ask the Advisor for best practices",
                "3. Have the Architect review your structure",
                "4. Use the Editor for specific implementations",
            ])

        if "next" in message or "what should" in message:
            lines = ["🎯 **Next Steps Recommendation:**"]
            if progress == 0:
                lines += [
                    "1. Start with planning - ask the Architect for structure advice",
                    "2. Get recommendations from the Advisor",
                    "3. Begin implementation with the Editor",
                ]
            elif progress == 25:
                lines += [
                    "1. Begin implementation with core features",
                    "2. Focus on HTML structure first",
                    "3. Add basic styling and interactions",
                ]
            elif progress == 50:
                lines += [
                    "1. Enhance styling and user experience",
                    "2. Add interactive features",
                    "3. Test across different scenarios",
                ]
            else:
                lines += [
                    "1. Perform thorough testing",
                    "2. Optimize performance",
                    "3. Add final polish and documentation",
                ]
            return "\n".join(lines)

        return "\n".join([
            "🧭 **General Guidance:**",
            "- Focus on one feature at a time",
            "- Test each change before moving forward",
            "- Keep code clean and well-organized",
            "- Ask for help when you need clarification",
        ])
