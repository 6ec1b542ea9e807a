"""OpenAI payload builders.

Two dialects share one adapter:

* Responses (``/v1/responses``) for embedded PDF documents, multi-file
  requests and connectivity tests. The system prompt travels as a
  ``developer`` item.
* Chat Completions (``/v1/chat/completions``) for raw-text documents.

Builders only shape request bodies; endpoints and transport live in
``client.py``.
"""
from __future__ import annotations

from typing import List, Sequence

from ..base.models import ConversationMessage, MultiFileInput, ProviderConfig
from ..base.openai_style_parts import (
    ChatCompletionsPayload,
    ChatMessage,
    ResponsesContentPart,
    ResponsesInputItem,
    ResponsesPayload,
)
from ..base.prompts import (
    CONNECTIVITY_PROMPT,
    SYSTEM_ROLE_PROMPT,
    build_user_message,
    flatten_history,
    pdf_data_url,
)

DOCUMENT_FILENAME = "paper.pdf"


def _developer_item() -> ResponsesInputItem:
    return ResponsesInputItem(role="developer", content=[ResponsesContentPart.input_text(SYSTEM_ROLE_PROMPT)])


def _responses(model: str, items: List[ResponsesInputItem], config: ProviderConfig) -> ResponsesPayload:
    return ResponsesPayload(
        model=model,
        input=items,
        stream=config.stream,
        temperature=config.temperature,
        top_p=config.top_p,
        max_output_tokens=config.max_tokens,
    )


def _chat_completions(model: str, messages: List[ChatMessage], config: ProviderConfig) -> ChatCompletionsPayload:
    return ChatCompletionsPayload(
        model=model,
        messages=messages,
        stream=config.stream,
        temperature=config.temperature,
        top_p=config.top_p,
        max_tokens=config.max_tokens,
    )


def build_document_summary(model: str, encoded: str, prompt: str, config: ProviderConfig) -> ResponsesPayload:
    """Responses body with the PDF attached after the instruction."""
    user = ResponsesInputItem(
        role="user",
        content=[
            ResponsesContentPart.input_text(prompt or ""),
            ResponsesContentPart.input_file(DOCUMENT_FILENAME, pdf_data_url(encoded)),
        ],
    )
    return _responses(model, [_developer_item(), user], config)


def build_document_chat(
    model: str, encoded: str, conversation: Sequence[ConversationMessage], config: ProviderConfig
) -> ResponsesPayload:
    """Responses body for a conversation about an embedded PDF.

    The Responses input cannot re-attach the file on later turns, so the
    first user turn carries the document and every later turn is flattened
    into one labelled ``input_text`` part.
    """
    items = [_developer_item()]
    if conversation:
        parts = [
            ResponsesContentPart.input_text(conversation[0].content),
            ResponsesContentPart.input_file(DOCUMENT_FILENAME, pdf_data_url(encoded)),
        ]
        history = flatten_history(conversation[1:])
        if history:
            parts.append(ResponsesContentPart.input_text(history))
        items.append(ResponsesInputItem(role="user", content=parts))
    return _responses(model, items, config)


def build_multi_file(
    model: str, files: Sequence[MultiFileInput], prompt: str, config: ProviderConfig
) -> ResponsesPayload:
    """Responses body with the instruction followed by every usable file.

    Callers must check that at least one file carries a payload.
    """
    parts = [ResponsesContentPart.input_text(prompt or "")]
    for index, item in enumerate(files):
        if item.has_payload:
            parts.append(ResponsesContentPart.input_file(item.filename(index), pdf_data_url(item.encoded_payload)))
    user = ResponsesInputItem(role="user", content=parts)
    return _responses(model, [_developer_item(), user], config)


def build_text_summary(model: str, text: str, prompt: str, config: ProviderConfig) -> ChatCompletionsPayload:
    messages = [
        ChatMessage(role="system", content=SYSTEM_ROLE_PROMPT),
        ChatMessage(role="user", content=build_user_message(prompt, text, config.option("answer_language"))),
    ]
    return _chat_completions(model, messages, config)


def build_text_chat(
    model: str, text: str, conversation: Sequence[ConversationMessage], config: ProviderConfig
) -> ChatCompletionsPayload:
    """Chat Completions body: document text folded into the first user turn."""
    messages = [ChatMessage(role="system", content=SYSTEM_ROLE_PROMPT)]
    if conversation:
        first = build_user_message(conversation[0].content, text or "", config.option("answer_language"))
        messages.append(ChatMessage(role="user", content=first))
        for msg in conversation[1:]:
            messages.append(ChatMessage(role="user" if msg.role == "user" else "assistant", content=msg.content))
    return _chat_completions(model, messages, config)


def build_connectivity(model: str) -> ResponsesPayload:
    user = ResponsesInputItem(role="user", content=[ResponsesContentPart.input_text(CONNECTIVITY_PROMPT)])
    return ResponsesPayload(model=model, input=[user], stream=False)


__all__ = [
    "DOCUMENT_FILENAME",
    "build_document_summary",
    "build_document_chat",
    "build_multi_file",
    "build_text_summary",
    "build_text_chat",
    "build_connectivity",
]
