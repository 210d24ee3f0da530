"""Text generation backends for agent responses."""

from .base import PassthroughGenerator, TextGenerator
from .llm import LLMGenerator, build_generator

__all__ = [
    "LLMGenerator",
    "PassthroughGenerator",
    "TextGenerator",
    "build_generator",
]
