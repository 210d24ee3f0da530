"""Advisor agent: categorized advice, best practices and next steps."""

from typing import Mapping

from ..types import (
    CSS_FILE,
    JS_FILE,
    AgentCapabilities,
    AgentContext,
    AgentResponse,
    AgentType,
    TaskContext,
)
from .base import BaseAgent
from .prompts import ADVISOR_PROMPT

LARGE_JS_CHARS = 1000
LARGE_CSS_CHARS = 2000

DECISION_TOPICS: list[tuple[tuple[str, ...], list[str]]] = [
    (
        ("framework", "library"),
        [
            "🎯 **Framework Choice:**",
            "For your current app structure, I recommend:",
            "- Vanilla JavaScript for simple interactions",
            "- Consider React/Vue for complex state management",
            "- CSS frameworks like Tailwind for rapid styling",
        ],
    ),
    (
        ("database", "storage"),
        [
            "💾 **Data Storage:**",
            "Based on your needs:",
            "- Local Storage for client-side data",
            "- JSON files for static/mock data",
            "- Consider Firebase for real-time features",
        ],
    ),
]

IMPLEMENTATION_TOPICS: list[tuple[tuple[str, ...], list[str]]] = [
    (
        ("responsive", "mobile"),
        [
            "📱 **Responsive Implementation:**",
            "1. Start with mobile-first CSS design",
            "2. Use CSS Grid/Flexbox for layouts",
            "3. Test on actual devices, not just browser tools",
            "4. Consider touch interactions and accessibility",
        ],
    ),
    (
        ("form", "validation"),
        [
            "📝 **Form Best Practices:**",
            "1. Always validate on both client and server",
            "2. Provide clear, helpful error messages",
            "3. Use proper input types (email, tel, etc.)",
            "4. Add loading states for submissions",
        ],
    ),
    (
        ("animation", "transition"),
        [
            "✨ **Animation Guidelines:**",
            "1. Keep animations subtle and purposeful",
            "2. Use CSS transitions over JavaScript when possible",
            "3. Respect user motion preferences",
            "4. Test performance on lower-end devices",
        ],
    ),
]

BEST_PRACTICES: list[tuple[tuple[str, ...], list[str]]] = [
    (
        ("html", "markup"),
        [
            "🏷️ **HTML Best Practices:**",
            "- Use semantic elements (header, nav, main, section)",
            "- Include proper meta tags and descriptions",
            "- Ensure keyboard navigation works",
            "- Add alt text for all images",
        ],
    ),
    (
        ("css", "style"),
        [
            "🎨 **CSS Best Practices:**",
            "- Use a consistent naming convention (BEM, OOCSS)",
            "- Avoid overly specific selectors",
            "- Use CSS custom properties for theming",
            "- Test in different browsers",
        ],
    ),
    (
        ("javascript", "js"),
        [
            "⚙️ **JavaScript Best Practices:**",
            "- Always use strict mode",
            "- Handle errors gracefully",
            "- Use const/let instead of var",
            "- Add event listeners properly",
        ],
    ),
]

GENERAL_ADVICE = """Based on your current app structure, here are my general recommendations:

🎯 **Code Quality:**
- Add proper error handling and validation
- Use consistent naming conventions
- Include helpful comments for complex logic
- Implement proper separation of concerns

🏗️ **Architecture:**
- Keep HTML semantic and accessible
- Organize CSS with a clear methodology
- Structure JavaScript in logical modules
- Plan for future scalability

🔧 **Development Process:**
- Test across different browsers and devices
- Use version control for all changes
- Consider automated testing for critical features
- Plan for maintenance and updates"""

IMPROVE_STEPS = """1. 🔍 Review current code for optimization opportunities
2. 🧪 Test the current functionality thoroughly
3. 📋 Plan incremental improvements
4. 🚀 Implement changes with proper testing
5. 📊 Monitor performance after changes"""

CREATE_STEPS = """1. 📐 Plan the new feature's requirements
2. 🏗️ Design the implementation approach
3. 💻 Code the feature incrementally
4. 🧪 Test thoroughly in different scenarios
5. 📖 Document the new functionality"""

DEFAULT_STEPS = """1. 🎯 Clarify specific requirements and goals
2. 🔍 Analyze current app structure
3. 📋 Create an implementation plan
4. 💻 Execute changes systematically
5. ✅ Test and validate results"""


def _collect(message: str, topics: list[tuple[tuple[str, ...], list[str]]]) -> list[str]:
    lines: list[str] = []
    for triggers, advice in topics:
        if any(trigger in message for trigger in triggers):
            lines.extend(advice)
    return lines


class AdvisorAgent(BaseAgent):
    """Gives guidance for any request. Never proposes actions."""

    AGENT_TYPE = AgentType.ADVISOR
    CAPABILITIES = AgentCapabilities(can_analyze_code=True, can_provide_guidance=True)
    SYSTEM_PROMPT = ADVISOR_PROMPT

    async def process(self, context: AgentContext) -> AgentResponse:
        message = (context.user_message or "").lower()
        advice = self.generate_advice(message, context.file_contents)
        best_practices = self.get_best_practices(message)
        next_steps = self.suggest_next_steps(message)

        draft = (
            f"Here's my advice for your request: \"{context.user_message}\"\n\n"
            f"**My Recommendation:**\n{advice}\n\n"
            f"**Best Practices:**\n{best_practices}\n\n"
            f"**Suggested Next Steps:**\n{next_steps}\n\n"
            "Would you like me to have the Editor implement these suggestions?"
        )
        return self.format_response(await self.compose(draft, context))

    def is_capable_of(self, task: TaskContext) -> bool:
        return True

    def generate_advice(self, message: str, file_contents: Mapping[str, str]) -> str:
        """Choose decision, implementation, optimization or general advice."""
        if "should i" in message or "which is better" in message:
            lines = _collect(message, DECISION_TOPICS)
            return "\n".join(lines) if lines else (
                "I need more context about your specific decision to provide targeted advice."
            )

        if "how to" in message or "best way" in message:
            lines = _collect(message, IMPLEMENTATION_TOPICS)
            return "\n".join(lines) if lines else (
                "Could you be more specific about what you'd like to implement?"
            )

        if "improve" in message or "optimize" in message:
            return self._optimization_advice(file_contents)

        return GENERAL_ADVICE

    def _optimization_advice(self, file_contents: Mapping[str, str]) -> str:
        lines = ["⚡ **Performance Optimization:**"]

        if len(file_contents.get(JS_FILE) or "") > LARGE_JS_CHARS:
            lines.append("- Consider code splitting for large JavaScript files")
            lines.append("- Remove unused functions and variables")
            lines.append("- Use async/defer for non-critical scripts")

        if len(file_contents.get(CSS_FILE) or "") > LARGE_CSS_CHARS:
            lines.append("- Remove unused CSS selectors")
            lines.append("- Use CSS custom properties for consistent theming")
            lines.append("- Consider critical CSS extraction")

        lines.extend([
            "- Optimize images (use WebP format when possible)",
            "- Minimize HTTP requests",
            "- Add proper caching headers",
            "- Use semantic HTML for better SEO",
        ])
        return "\n".join(lines)

    def get_best_practices(self, message: str) -> str:
        lines = _collect(message, BEST_PRACTICES)
        if not lines:
            return "📚 Consider following modern web development standards and accessibility guidelines."
        return "\n".join(lines)

    def suggest_next_steps(self, message: str) -> str:
        if "improve" in message or "enhance" in message:
            return IMPROVE_STEPS
        if "add" in message or "create" in message:
            return CREATE_STEPS
        return DEFAULT_STEPS
