"""Small dependency-free helpers shared across the base layer."""

from .json_safe import get_path, safe_json_parse

__all__ = ["get_path", "safe_json_parse"]
