"""Typed Anthropic Messages API request body.

``max_tokens`` is mandatory on this API, so the model declares it without a
default and rejects non-positive values at construction; builders fill it
from the configuration or :data:`ANTHROPIC_DEFAULT_MAX_TOKENS`.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Union

from pydantic import BaseModel, Field

from ..base.constants import PDF_MIME_TYPE
from ..base.models import ConversationMessage, ProviderConfig
from ..base.prompts import CONNECTIVITY_PROMPT, SYSTEM_ROLE_PROMPT, build_user_message
from ..config.defaults import ANTHROPIC_DEFAULT_MAX_TOKENS, CONNECTIVITY_MAX_TOKENS


class DocumentSource(BaseModel):
    type: str = "base64"
    media_type: str = PDF_MIME_TYPE
    data: str


class ContentBlock(BaseModel):
    """``text`` or ``document`` block."""

    type: str
    text: Optional[str] = None
    source: Optional[DocumentSource] = None

    @classmethod
    def text_block(cls, text: str) -> "ContentBlock":
        return cls(type="text", text=text)

    @classmethod
    def document_block(cls, encoded: str) -> "ContentBlock":
        return cls(type="document", source=DocumentSource(data=encoded))


class AnthropicMessage(BaseModel):
    role: str
    content: Union[str, List[ContentBlock]]


class MessagesPayload(BaseModel):
    model: str
    max_tokens: int = Field(gt=0)
    messages: List[AnthropicMessage] = Field(default_factory=list)
    system: Optional[str] = None
    stream: Optional[bool] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None


def _payload(model: str, messages: List[AnthropicMessage], config: ProviderConfig) -> MessagesPayload:
    return MessagesPayload(
        model=model,
        max_tokens=config.max_tokens or ANTHROPIC_DEFAULT_MAX_TOKENS,
        messages=messages,
        system=SYSTEM_ROLE_PROMPT,
        stream=config.stream,
        temperature=config.temperature,
        top_p=config.top_p,
    )


def _first_turn(text: str, document: str, is_encoded: bool, config: ProviderConfig) -> AnthropicMessage:
    if is_encoded:
        blocks = [ContentBlock.text_block(text or ""), ContentBlock.document_block(document)]
    else:
        blocks = [ContentBlock.text_block(build_user_message(text, document or "", config.option("answer_language")))]
    return AnthropicMessage(role="user", content=blocks)


def build_summary(model: str, content: str, is_encoded: bool, prompt: str, config: ProviderConfig) -> MessagesPayload:
    return _payload(model, [_first_turn(prompt, content, is_encoded, config)], config)


def build_chat(
    model: str,
    document_content: str,
    is_encoded: bool,
    conversation: Sequence[ConversationMessage],
    config: ProviderConfig,
) -> MessagesPayload:
    """First turn carries the document; the API accepts only user/assistant roles."""
    messages: List[AnthropicMessage] = []
    if conversation:
        messages.append(_first_turn(conversation[0].content, document_content, is_encoded, config))
        for msg in conversation[1:]:
            role = "user" if msg.role == "user" else "assistant"
            messages.append(AnthropicMessage(role=role, content=msg.content))
    return _payload(model, messages, config)


def build_connectivity(model: str) -> MessagesPayload:
    return MessagesPayload(
        model=model,
        max_tokens=CONNECTIVITY_MAX_TOKENS,
        messages=[AnthropicMessage(role="user", content=CONNECTIVITY_PROMPT)],
    )


__all__ = [
    "DocumentSource",
    "ContentBlock",
    "AnthropicMessage",
    "MessagesPayload",
    "build_summary",
    "build_chat",
    "build_connectivity",
]
