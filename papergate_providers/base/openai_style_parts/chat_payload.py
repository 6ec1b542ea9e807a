"""
Typed Chat Completions request body.

Used by the OpenAI text dialect and every OpenAI-compatible relay
(including OpenRouter). ``content`` is either a plain string or a list of
parts; each part sets only the fields of its ``type`` and the rest are
dropped at serialization (``exclude_none``).
"""
from __future__ import annotations

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field


class ChatContentPart(BaseModel):
    """One part of a multi-part message (``text``, ``image_url`` or ``file``)."""

    type: str
    text: Optional[str] = None
    image_url: Optional[Dict[str, str]] = None
    file: Optional[Dict[str, str]] = None

    @classmethod
    def text_part(cls, text: str) -> "ChatContentPart":
        return cls(type="text", text=text)

    @classmethod
    def image_url_part(cls, url: str) -> "ChatContentPart":
        return cls(type="image_url", image_url={"url": url})

    @classmethod
    def file_part(cls, filename: str, file_data: str) -> "ChatContentPart":
        return cls(type="file", file={"filename": filename, "file_data": file_data})


class ChatMessage(BaseModel):
    role: str
    content: Union[str, List[ChatContentPart]]


class ChatCompletionsPayload(BaseModel):
    """Request body for ``POST .../chat/completions``."""

    model: str
    messages: List[ChatMessage] = Field(default_factory=list)
    stream: bool = False
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_tokens: Optional[int] = None


__all__ = ["ChatContentPart", "ChatMessage", "ChatCompletionsPayload"]
