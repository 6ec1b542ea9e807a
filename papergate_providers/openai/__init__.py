"""
OpenAI provider package.

Exports:
- OpenAIProvider: adapter speaking the Responses and Chat Completions dialects
"""

from .client import OpenAIProvider

__all__ = ["OpenAIProvider"]
