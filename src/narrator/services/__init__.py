"""External service integrations."""

from .anthropic import AnthropicClient, TextGenerator

__all__ = ["AnthropicClient", "TextGenerator"]
