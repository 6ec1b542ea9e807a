"""
Gemini provider package.

Exports:
- GeminiProvider: adapter for the Generative Language ``generateContent`` API
"""

from .client import GeminiProvider

__all__ = ["GeminiProvider"]
