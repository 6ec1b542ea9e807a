"""Ark request builders.

Ark accepts the Responses ``input`` format but with a plain ``system`` item,
the file placed before the instruction, and ``max_output_tokens`` always
present (multi-file requests get a larger budget).
"""
from __future__ import annotations

from typing import List, Sequence

from ..base.models import ConversationMessage, MultiFileInput, ProviderConfig
from ..base.openai_style_parts import ResponsesContentPart, ResponsesInputItem, ResponsesPayload
from ..base.prompts import CONNECTIVITY_PROMPT, SYSTEM_ROLE_PROMPT, build_user_message, pdf_data_url
from ..config.defaults import (
    CONNECTIVITY_MAX_TOKENS,
    CONNECTIVITY_TEMPERATURE,
    DEFAULT_MAX_TOKENS,
    MULTI_FILE_MAX_TOKENS,
)

DOCUMENT_FILENAME = "document.pdf"


def _system_item() -> ResponsesInputItem:
    return ResponsesInputItem(role="system", content=SYSTEM_ROLE_PROMPT)


def _first_turn(text: str, document: str, is_encoded: bool, config: ProviderConfig) -> ResponsesInputItem:
    if is_encoded:
        return ResponsesInputItem(
            role="user",
            content=[
                ResponsesContentPart.input_file(DOCUMENT_FILENAME, pdf_data_url(document)),
                ResponsesContentPart.input_text(text or ""),
            ],
        )
    return ResponsesInputItem(
        role="user", content=build_user_message(text, document or "", config.option("answer_language"))
    )


def _payload(model: str, items: List[ResponsesInputItem], config: ProviderConfig, max_tokens: int) -> ResponsesPayload:
    return ResponsesPayload(
        model=model,
        input=items,
        stream=config.stream,
        temperature=config.temperature,
        top_p=config.top_p,
        max_output_tokens=config.max_tokens or max_tokens,
    )


def build_summary(model: str, content: str, is_encoded: bool, prompt: str, config: ProviderConfig) -> ResponsesPayload:
    items = [_system_item(), _first_turn(prompt, content, is_encoded, config)]
    return _payload(model, items, config, DEFAULT_MAX_TOKENS)


def build_chat(
    model: str,
    document_content: str,
    is_encoded: bool,
    conversation: Sequence[ConversationMessage],
    config: ProviderConfig,
) -> ResponsesPayload:
    items = [_system_item()]
    if conversation:
        items.append(_first_turn(conversation[0].content, document_content, is_encoded, config))
        for msg in conversation[1:]:
            items.append(ResponsesInputItem(role="user" if msg.role == "user" else "assistant", content=msg.content))
    return _payload(model, items, config, DEFAULT_MAX_TOKENS)


def build_multi_file(
    model: str, files: Sequence[MultiFileInput], prompt: str, config: ProviderConfig
) -> ResponsesPayload:
    """Every file with a payload first, then the instruction."""
    parts = [
        ResponsesContentPart.input_file(item.filename(index), pdf_data_url(item.encoded_payload))
        for index, item in enumerate(files)
        if item.has_payload
    ]
    parts.append(ResponsesContentPart.input_text(prompt or ""))
    items = [_system_item(), ResponsesInputItem(role="user", content=parts)]
    return _payload(model, items, config, MULTI_FILE_MAX_TOKENS)


def build_connectivity(model: str) -> ResponsesPayload:
    return ResponsesPayload(
        model=model,
        input=[ResponsesInputItem(role="user", content=CONNECTIVITY_PROMPT)],
        stream=False,
        temperature=CONNECTIVITY_TEMPERATURE,
        max_output_tokens=CONNECTIVITY_MAX_TOKENS,
    )


__all__ = ["DOCUMENT_FILENAME", "build_summary", "build_chat", "build_multi_file", "build_connectivity"]
