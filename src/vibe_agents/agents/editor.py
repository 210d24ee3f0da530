"""Editor agent: proposes concrete file edits from keyword templates."""

from typing import Mapping

from ..types import (
    CODE_FILES,
    CSS_FILE,
    DATA_FILE,
    HTML_FILE,
    JS_FILE,
    ActionType,
    AgentAction,
    AgentCapabilities,
    AgentContext,
    AgentResponse,
    AgentType,
    Complexity,
    TaskContext,
)
from .base import BaseAgent
from .prompts import EDITOR_PROMPT

# explicit file-type vocabulary
FILE_KEYWORDS: dict[str, tuple[str, ...]] = {
    HTML_FILE: ("html", "markup", "dom"),
    CSS_FILE: ("css", "style", "design", "color", "layout"),
    JS_FILE: ("javascript", "js", "function", "click", "event", "logic"),
    DATA_FILE: ("data", "json", "api"),
}

# ui elements touch markup, styles and behaviour together
ELEMENT_KEYWORDS = ("button", "form", "input", "element", "component")
APPEARANCE_KEYWORDS = ("appearance", "look", "visual")
BEHAVIOR_KEYWORDS = ("behavior", "behaviour", "interactive", "dynamic")

BUTTON_HTML = '<button id="newButton" class="btn">Click Me</button>'
HEADING_HTML = "<h2>New Heading</h2>"

BACKGROUND_CSS = """
body {
  background-color: #f0f0f0;
}
"""

BUTTON_CSS = """
.btn {
  padding: 10px 20px;
  background-color: #007bff;
  color: white;
  border: none;
  border-radius: 4px;
  cursor: pointer;
}
"""

CLICK_JS = """
// Add click event listener
document.addEventListener('DOMContentLoaded', function() {
  const button = document.getElementById('newButton');
  if (button) {
    button.addEventListener('click', function() {
      alert('Button clicked!');
    });
  }
});
"""

EMPTY_DATA_JSON = '{\n  "data": [],\n  "config": {}\n}'


def _insert_before_body_close(content: str, snippet: str) -> str | None:
    if "</body>" not in content:
        return None
    return content.replace("</body>", f"  {snippet}\n</body>", 1)


class EditorAgent(BaseAgent):
    """The only agent that proposes file mutations."""

    AGENT_TYPE = AgentType.EDITOR
    CAPABILITIES = AgentCapabilities(can_edit_files=True, can_analyze_code=True)
    SYSTEM_PROMPT = EDITOR_PROMPT

    async def process(self, context: AgentContext) -> AgentResponse:
        task = self.analyze_task(context)
        files_to_edit = self.identify_files_to_edit(context.user_message, context.file_contents)
        actions = self.generate_edit_actions(
            context.user_message, context.file_contents, files_to_edit
        )

        if not actions:
            draft = (
                "I've analyzed your request but couldn't identify specific file changes needed. "
                "Could you be more specific about what you'd like me to edit?\n\n"
                "For example:\n"
                "- \"Add a button to the HTML\"\n"
                "- \"Change the background color in CSS\"\n"
                "- \"Add a click handler function in JavaScript\""
            )
            return self.format_response(await self.compose(draft, context))

        draft = self.build_implementation_plan(context.user_message, actions, task)
        return self.format_response(await self.compose(draft, context), actions)

    def is_capable_of(self, task: TaskContext) -> bool:
        return task.complexity != Complexity.ARCHITECTURAL and self.CAPABILITIES.can_edit_files

    def identify_files_to_edit(
        self, user_message: str, file_contents: Mapping[str, str]
    ) -> list[str]:
        """Work out which well-known files the request implicates.

        Returns:
            Filenames present in ``file_contents``, in well-known order.
        """
        message = (user_message or "").lower()
        files: list[str] = [
            name for name, keywords in FILE_KEYWORDS.items()
            if any(keyword in message for keyword in keywords)
        ]

        if any(keyword in message for keyword in ELEMENT_KEYWORDS):
            files.extend(CODE_FILES)
        elif not files:
            if any(keyword in message for keyword in APPEARANCE_KEYWORDS):
                files.append(CSS_FILE)
            elif any(keyword in message for keyword in BEHAVIOR_KEYWORDS):
                files.append(JS_FILE)
            else:
                files.extend(CODE_FILES)

        selected = set(files)
        return [name for name in FILE_KEYWORDS if name in selected and name in file_contents]

    def generate_edit_actions(
        self,
        user_message: str,
        file_contents: Mapping[str, str],
        files_to_edit: list[str],
    ) -> list[AgentAction]:
        """Build one ``file_edit`` action per file that has a matching template."""
        actions = []
        for filename in files_to_edit:
            new_content = self.generate_file_edit(
                user_message, filename, file_contents.get(filename) or ""
            )
            if new_content is not None:
                actions.append(AgentAction(
                    type=ActionType.FILE_EDIT,
                    target=filename,
                    content=new_content,
                    reason=f"Implementing requested changes in {filename}",
                ))
        return actions

    def generate_file_edit(
        self, user_message: str, filename: str, current_content: str
    ) -> str | None:
        """Get the replacement content for one file, or None if nothing applies."""
        message = (user_message or "").lower()
        if filename == HTML_FILE:
            return self._edit_html(message, current_content)
        if filename == CSS_FILE:
            return self._edit_css(message, current_content)
        if filename == JS_FILE:
            return self._edit_js(message, current_content)
        if filename == DATA_FILE:
            return self._edit_json(current_content)
        return None

    def _edit_html(self, message: str, content: str) -> str | None:
        if "button" in message:
            edited = _insert_before_body_close(content, BUTTON_HTML)
            if edited is not None:
                return edited
        if "heading" in message or "title" in message:
            return _insert_before_body_close(content, HEADING_HTML)
        return None

    def _edit_css(self, message: str, content: str) -> str | None:
        new_css = content
        if "background" in message and "color" in message:
            new_css += BACKGROUND_CSS
        if "button" in message and "style" in message:
            new_css += BUTTON_CSS
        return new_css if new_css != content else None

    def _edit_js(self, message: str, content: str) -> str | None:
        if "click" in message or "button" in message:
            return content + CLICK_JS
        return None

    def _edit_json(self, content: str) -> str | None:
        if not content.strip():
            return EMPTY_DATA_JSON
        return None

    def build_implementation_plan(
        self, user_message: str, actions: list[AgentAction], task: TaskContext
    ) -> str:
        files_list = ", ".join(action.target for action in actions)
        changes = "\n".join(
            f"{index}. **{action.target}**: {action.reason}"
            for index, action in enumerate(actions, start=1)
        )
        return (
            f"I'll implement your request: \"{user_message}\"\n\n"
            f"**Implementation Plan:**\n"
            f"- Files to modify: {files_list}\n"
            f"- Complexity: {task.complexity.value}\n"
            f"- Estimated time: {task.estimated_time}\n\n"
            f"**Changes I'll make:**\n{changes}\n\n"
            "These changes will be applied automatically. "
            "You can review them in the file editor and save when ready."
        )
