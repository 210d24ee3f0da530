"""Main entry point for the vibe-agents CLI.

Runs an interactive chat against a project directory holding the app
files, or starts the API server.
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Mapping

from .agent_manager import AgentManager
from .clients.factory import get_available_providers
from .config import get_settings
from .generation import build_generator
from .logging import get_logger, setup_logging
from .types import WELL_KNOWN_FILES, AgentAttribution, AgentType

logger = get_logger(__name__)


def load_project_files(project_dir: Path) -> dict[str, str]:
    """Read the well-known app files that exist in a directory."""
    files = {}
    for name in WELL_KNOWN_FILES:
        path = project_dir / name
        if path.is_file():
            files[name] = path.read_text(encoding="utf-8")
    return files


def write_project_files(project_dir: Path, files: Mapping[str, str]) -> None:
    """Write a file map back to disk, removing well-known files it no longer holds."""
    for name in WELL_KNOWN_FILES:
        path = project_dir / name
        if name in files:
            path.write_text(files[name], encoding="utf-8")
        elif path.exists():
            path.unlink()
    logger.debug(f"wrote project files to {project_dir}")


def _start_server(host: str, port: int) -> None:
    """Start the API server."""
    import uvicorn

    from .api import app

    print(f"Starting API server at http://{host}:{port}")
    print(f"API docs available at http://{host}:{port}/docs")
    uvicorn.run(app, host=host, port=port)


def _print_agents(manager: AgentManager) -> None:
    for identity in manager.get_available_agents():
        print(f"  {identity.type.value:<10} {identity.role}")


def _print_attribution(attribution: AgentAttribution | None) -> None:
    if attribution is not None:
        print(f"[{attribution.agent_name}] {attribution.action_description}")


async def _chat_loop(
    manager: AgentManager,
    project_dir: Path,
    agent_type: AgentType | None,
) -> None:
    app_id = project_dir.resolve().name
    workspace_id = "local"

    while True:
        try:
            user_input = input("\nYou: ").strip()
        except (KeyboardInterrupt, EOFError):
            print()
            return

        if not user_input:
            continue
        if user_input.lower() in ("exit", "quit"):
            return
        if user_input == "/agents":
            _print_agents(manager)
            continue
        if user_input == "/clear":
            manager.clear_history()
            print("History cleared.")
            continue

        files = load_project_files(project_dir)
        if agent_type is None:
            response = await manager.process_request(user_input, app_id, files, workspace_id)
        else:
            response = await manager.process_with_agent(
                agent_type, user_input, app_id, files, workspace_id
            )

        print(f"\n{response.content}")

        if not response.actions:
            continue

        # only the editor proposes file changes
        credited = agent_type or AgentType.EDITOR
        result = await manager.execute_actions(response.actions, files, agent_type=credited)
        if result.should_save:
            write_project_files(project_dir, result.updated_files)
            _print_attribution(result.agent_context)


def main():
    """Main entry point for the vibe-agents CLI."""
    parser = argparse.ArgumentParser(description="Vibe Agents CLI")
    parser.add_argument(
        "--project-dir",
        type=Path,
        default=Path("."),
        help="Directory holding index.html, styles.css, script.js and db.json",
    )
    parser.add_argument(
        "--agent",
        choices=[t.value for t in AgentType],
        help="Talk to one agent directly instead of going through the manager",
    )
    parser.add_argument(
        "--provider",
        choices=get_available_providers(),
        help="LLM provider used to refine responses (rule-based text if omitted)",
    )
    parser.add_argument("--model", help="LLM model to use")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (also settable via VIBE_AGENTS_LOG_LEVEL env var)",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Start the API server instead of the CLI",
    )
    parser.add_argument("--port", type=int, default=8000, help="Port for the API server")
    parser.add_argument("--host", default="127.0.0.1", help="Host for the API server")
    args = parser.parse_args()

    setup_logging(args.log_level)

    if args.serve:
        _start_server(args.host, args.port)
        return

    settings = get_settings()
    if args.provider:
        settings = settings.model_copy(update={"llm_provider": args.provider})
    if args.model:
        settings = settings.model_copy(update={"llm_model": args.model})

    try:
        generator = build_generator(settings)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    manager = AgentManager(generator=generator, history_limit=settings.history_limit)
    agent_type = AgentType(args.agent) if args.agent else None

    print("Vibe Agents. Type 'exit' to quit, '/agents' to list agents, '/clear' to reset.")
    asyncio.run(_chat_loop(manager, args.project_dir, agent_type))


if __name__ == "__main__":
    main()
