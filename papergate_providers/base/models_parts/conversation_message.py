"""
Conversation message record used by the ``chat`` operation.

Index 0 of a conversation is the first user turn and carries the original
document-bound prompt; adapters attach the document payload to it. Role
alternation is conventional and not validated.
"""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


Role = Literal["system", "user", "assistant"]


class ConversationMessage(BaseModel):
    """One turn of a conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


__all__ = ["ConversationMessage", "Role"]
