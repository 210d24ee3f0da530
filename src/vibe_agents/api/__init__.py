"""HTTP API for the agent router."""

from .server import app, create_app

__all__ = ["app", "create_app"]
