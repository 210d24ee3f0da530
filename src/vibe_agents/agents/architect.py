"""Architect agent: read-only structural analysis and recommendations."""

import json
import re
from typing import Mapping

from ..types import (
    CSS_FILE,
    DATA_FILE,
    HTML_FILE,
    JS_FILE,
    AgentCapabilities,
    AgentContext,
    AgentResponse,
    AgentType,
    Complexity,
    TaskContext,
)
from .base import BaseAgent
from .prompts import ARCHITECT_PROMPT

SEMANTIC_HTML = re.compile(r"<(header|nav|main|section|article|aside|footer)")
ACCESSIBILITY = re.compile(r"(aria-|role=|alt=)")
FORM = re.compile(r"<form")
MODULAR_CSS = re.compile(r"(@media|\.component|\.module)")
CSS_VARIABLES = re.compile(r"(--[\w-]+:|var\()")
FLEX_GRID = re.compile(r"display:\s*(flex|grid)")
JS_MODULES = re.compile(r"(import |export |module\.exports)")
JS_EVENTS = re.compile(r"addEventListener")
JS_ERRORS = re.compile(r"(try\s*\{|catch\s*\(|\.catch\()")
JS_ASYNC = re.compile(r"(async |await |Promise)")

# (trigger words, heading, recommendations)
RECOMMENDATION_RULES: list[tuple[tuple[str, ...], str, tuple[str, ...]]] = [
    (
        ("scale", "performance"),
        "📈 **Scalability Focus:**",
        (
            "Implement component-based architecture",
            "Add lazy loading for better performance",
            "Consider state management patterns",
            "Optimize bundle size and asset loading",
        ),
    ),
    (
        ("maintain", "clean"),
        "🧹 **Maintainability:**",
        (
            "Separate concerns into distinct modules",
            "Add comprehensive error handling",
            "Implement consistent naming conventions",
            "Add code documentation and comments",
        ),
    ),
    (
        ("responsive", "mobile"),
        "📱 **Responsive Design:**",
        (
            "Use CSS Grid and Flexbox for layouts",
            "Implement mobile-first design approach",
            "Add proper viewport meta tags",
            "Test across different screen sizes",
        ),
    ),
    (
        ("security", "safe"),
        "🔒 **Security:**",
        (
            "Sanitize user inputs",
            "Implement proper form validation",
            "Add CSRF protection for forms",
            "Use HTTPS for external API calls",
        ),
    ),
]

GENERAL_RECOMMENDATIONS = (
    "Add semantic HTML structure",
    "Implement CSS custom properties",
    "Use modern JavaScript patterns",
    "Add accessibility features",
    "Implement error boundaries",
)


def _mark(ok: bool, good: str, bad: str) -> str:
    return f"✅ {good}" if ok else f"⚠️ {bad}"


class ArchitectAgent(BaseAgent):
    """Checks the app files against a fixed structural checklist."""

    AGENT_TYPE = AgentType.ARCHITECT
    CAPABILITIES = AgentCapabilities(
        can_analyze_code=True,
        can_provide_guidance=True,
        can_make_decisions=True,
    )
    SYSTEM_PROMPT = ARCHITECT_PROMPT

    async def process(self, context: AgentContext) -> AgentResponse:
        analysis = self.analyze_architecture(context.file_contents)
        recommendations = self.generate_recommendations(context.user_message)

        draft = (
            "I've analyzed your app's architecture. Here's my assessment:\n\n"
            f"**Current Architecture Analysis:**\n{analysis}\n\n"
            f"**Recommendations:**\n{recommendations}\n\n"
            "Would you like me to delegate the implementation to the Editor agent?"
        )
        return self.format_response(await self.compose(draft, context))

    def is_capable_of(self, task: TaskContext) -> bool:
        return task.complexity in (Complexity.ARCHITECTURAL, Complexity.COMPLEX)

    def analyze_architecture(self, file_contents: Mapping[str, str]) -> str:
        """Run the per-file checklist. Empty or missing files are skipped."""
        html = file_contents.get(HTML_FILE) or ""
        css = file_contents.get(CSS_FILE) or ""
        js = file_contents.get(JS_FILE) or ""
        data = file_contents.get(DATA_FILE) or ""

        lines: list[str] = []

        if html:
            lines.append("**HTML Structure:**")
            lines.append(f"- Semantic HTML: {_mark(bool(SEMANTIC_HTML.search(html)), 'Good', 'Could improve')}")
            lines.append(f"- Accessibility: {_mark(bool(ACCESSIBILITY.search(html)), 'Present', 'Missing')}")
            forms = "✅ Structured" if FORM.search(html) else "➖ None detected"
            lines.append(f"- Forms: {forms}")

        if css:
            lines.append("**CSS Architecture:**")
            lines.append(f"- Modular approach: {_mark(bool(MODULAR_CSS.search(css)), 'Good', 'Monolithic')}")
            lines.append(f"- CSS Variables: {_mark(bool(CSS_VARIABLES.search(css)), 'Used', 'Missing')}")
            lines.append(f"- Modern layout: {_mark(bool(FLEX_GRID.search(css)), 'Flexbox/Grid', 'Basic')}")

        if js:
            lines.append("**JavaScript Architecture:**")
            lines.append(f"- Module system: {_mark(bool(JS_MODULES.search(js)), 'Modular', 'Global scope')}")
            lines.append(f"- Event handling: {_mark(bool(JS_EVENTS.search(js)), 'Proper events', 'Basic')}")
            lines.append(f"- Error handling: {_mark(bool(JS_ERRORS.search(js)), 'Present', 'Missing')}")
            patterns = "✅ Modern" if JS_ASYNC.search(js) else "➖ Synchronous"
            lines.append(f"- Async patterns: {patterns}")

        if data:
            lines.append("**Data Structure:**")
            try:
                parsed = json.loads(data)
            except (ValueError, RecursionError):
                lines.append("- JSON validity: ❌ Invalid JSON")
            else:
                organized = isinstance(parsed, (dict, list)) and len(parsed) > 0
                lines.append("- JSON validity: ✅ Valid")
                lines.append(f"- Structure: {_mark(organized, 'Organized', 'Empty/Basic')}")

        if not lines:
            return "➖ No file content to analyze yet."
        return "\n".join(lines)

    def generate_recommendations(self, user_message: str) -> str:
        """Pick recommendation groups by message intent."""
        message = (user_message or "").lower()
        lines: list[str] = []

        for triggers, heading, items in RECOMMENDATION_RULES:
            if any(trigger in message for trigger in triggers):
                lines.append(heading)
                lines.extend(f"- {item}" for item in items)

        if not lines:
            lines.append("🎯 **General Improvements:**")
            lines.extend(f"- {item}" for item in GENERAL_RECOMMENDATIONS)

        return "\n".join(lines)
