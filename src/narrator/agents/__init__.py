"""AI agents for narration script generation."""

from .base import BaseAgent
from .scriptwriter import ScriptWriterAgent

__all__ = ["BaseAgent", "ScriptWriterAgent"]
