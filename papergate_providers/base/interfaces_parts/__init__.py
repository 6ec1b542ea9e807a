"""Interfaces (Protocols) split into single-class modules.

``papergate_providers.base.interfaces`` re-exports them as the stable API.
"""

from .llm_provider import LLMProvider, ProgressCallback
from .supports_multi_file import SupportsMultiFile
from .has_default_model import HasDefaultModel

__all__ = ["LLMProvider", "ProgressCallback", "SupportsMultiFile", "HasDefaultModel"]
