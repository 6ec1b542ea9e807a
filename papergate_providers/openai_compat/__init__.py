"""
OpenAI-compatible relay provider package.

Exports:
- OpenAICompatProvider: Chat Completions adapter for third-party relays
"""

from .client import OpenAICompatProvider

__all__ = ["OpenAICompatProvider"]
