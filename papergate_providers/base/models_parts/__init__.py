"""One-class-per-file model implementations re-exported by ``base.models``."""

from .provider_config import ProviderConfig
from .conversation_message import ConversationMessage, Role
from .multi_file_input import MultiFileInput

__all__ = ["ProviderConfig", "ConversationMessage", "Role", "MultiFileInput"]
