"""
Volcano Engine Ark provider package.

Exports:
- ArkProvider: adapter for Ark's Responses-style endpoint
"""

from .client import ArkProvider

__all__ = ["ArkProvider"]
