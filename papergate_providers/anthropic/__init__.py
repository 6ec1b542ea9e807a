"""
Anthropic provider package.

Exports:
- AnthropicProvider: adapter for the Messages API
"""

from .client import AnthropicProvider

__all__ = ["AnthropicProvider"]
