"""
OpenRouter provider package.

Exports:
- OpenRouterProvider: OpenAI-compatible relay adapter with file parts and
  multi-file support
"""

from .client import OpenRouterProvider

__all__ = ["OpenRouterProvider"]
