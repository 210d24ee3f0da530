"""Logging setup for vibe_agents.

Routing decisions are logged at INFO, history trimming at DEBUG and
save-callback failures at ERROR. Everything goes through the
``vibe_agents`` logger so the CLI and the API server share one handler.
"""

import logging
import os
import sys

PACKAGE_LOGGER = "vibe_agents"
LOG_LEVEL_ENV = "VIBE_AGENTS_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# provider sdks log request bodies at DEBUG, which would include file contents
NOISY_LOGGERS = ("anthropic", "openai", "httpx", "httpcore")


def _resolve_level(level: str | None) -> int:
    name = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        print(f"Warning: Invalid log level '{name}', using WARNING", file=sys.stderr)
        return logging.WARNING
    return numeric


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Level name from the CLI. Falls back to the
               VIBE_AGENTS_LOG_LEVEL env var, then WARNING.

    Returns:
        The ``vibe_agents`` logger.
    """
    numeric_level = _resolve_level(level)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(numeric_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a module logger (pass ``__name__``)."""
    return logging.getLogger(name)
