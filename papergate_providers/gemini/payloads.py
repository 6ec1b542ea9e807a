"""Typed Gemini ``generateContent`` request bodies.

Field names are snake_case in Python and serialized with the camelCase
aliases the API expects (``generationConfig``, ``inlineData`` ...). The
assistant role is called ``model`` on this wire.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..base.constants import PDF_MIME_TYPE
from ..base.models import ConversationMessage, ProviderConfig
from ..base.prompts import CONNECTIVITY_PROMPT, SYSTEM_ROLE_PROMPT, build_user_message
from ..config.defaults import CONNECTIVITY_MAX_TOKENS, CONNECTIVITY_TEMPERATURE


class _AliasedModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class InlineData(_AliasedModel):
    mime_type: str = Field(default=PDF_MIME_TYPE, alias="mimeType")
    data: str


class GeminiPart(_AliasedModel):
    text: Optional[str] = None
    inline_data: Optional[InlineData] = Field(default=None, alias="inlineData")


class GeminiContent(BaseModel):
    role: str
    parts: List[GeminiPart]


class SystemInstruction(BaseModel):
    parts: List[GeminiPart]


class GenerationConfig(_AliasedModel):
    temperature: Optional[float] = None
    top_p: Optional[float] = Field(default=None, alias="topP")
    max_output_tokens: Optional[int] = Field(default=None, alias="maxOutputTokens")


class GeminiPayload(_AliasedModel):
    generation_config: GenerationConfig = Field(default_factory=GenerationConfig, alias="generationConfig")
    contents: List[GeminiContent] = Field(default_factory=list)
    system_instruction: SystemInstruction = Field(
        default_factory=lambda: SystemInstruction(parts=[GeminiPart(text=SYSTEM_ROLE_PROMPT)]),
        alias="systemInstruction",
    )


def _generation_config(config: ProviderConfig) -> GenerationConfig:
    return GenerationConfig(temperature=config.temperature, top_p=config.top_p, max_output_tokens=config.max_tokens)


def _document_turn(text: str, encoded: str) -> GeminiContent:
    return GeminiContent(role="user", parts=[GeminiPart(text=text), GeminiPart(inline_data=InlineData(data=encoded))])


def _role(role: str) -> str:
    return "model" if role == "assistant" else "user"


def build_summary(content: str, is_encoded: bool, prompt: str, config: ProviderConfig) -> GeminiPayload:
    if is_encoded:
        turn = _document_turn(prompt or "", content)
    else:
        text = build_user_message(prompt, content, config.option("answer_language"))
        turn = GeminiContent(role="user", parts=[GeminiPart(text=text)])
    return GeminiPayload(generation_config=_generation_config(config), contents=[turn])


def build_chat(
    document_content: str, is_encoded: bool, conversation: Sequence[ConversationMessage], config: ProviderConfig
) -> GeminiPayload:
    """First turn carries the document; later turns map role-for-role."""
    contents: List[GeminiContent] = []
    for index, msg in enumerate(conversation):
        if index == 0:
            if is_encoded:
                contents.append(_document_turn(msg.content, document_content))
            else:
                text = build_user_message(msg.content, document_content or "", config.option("answer_language"))
                contents.append(GeminiContent(role="user", parts=[GeminiPart(text=text)]))
            continue
        contents.append(GeminiContent(role=_role(msg.role), parts=[GeminiPart(text=msg.content)]))
    return GeminiPayload(generation_config=_generation_config(config), contents=contents)


def build_connectivity() -> GeminiPayload:
    return GeminiPayload(
        generation_config=GenerationConfig(
            temperature=CONNECTIVITY_TEMPERATURE, top_p=1.0, max_output_tokens=CONNECTIVITY_MAX_TOKENS
        ),
        contents=[GeminiContent(role="user", parts=[GeminiPart(text=CONNECTIVITY_PROMPT)])],
    )


__all__ = [
    "InlineData",
    "GeminiPart",
    "GeminiContent",
    "SystemInstruction",
    "GenerationConfig",
    "GeminiPayload",
    "build_summary",
    "build_chat",
    "build_connectivity",
]
