"""
Gateway domain models public surface.

Re-exports the one-class-per-file implementations under
``papergate_providers.base.models_parts``.
"""

from .models_parts.provider_config import ProviderConfig
from .models_parts.conversation_message import ConversationMessage, Role
from .models_parts.multi_file_input import MultiFileInput

__all__ = [
    "ProviderConfig",
    "ConversationMessage",
    "Role",
    "MultiFileInput",
]
