"""Chat Completions payload builders for OpenAI-compatible relays.

Relays differ only in how an embedded document is attached, so builders take
a ``document_part`` factory: plain relays use an ``image_url`` data URL,
OpenRouter a ``file`` part. Sampling parameters are sent only when set.
"""
from __future__ import annotations

from typing import Callable, List, Sequence

from ..base.models import ConversationMessage, MultiFileInput, ProviderConfig
from ..base.openai_style_parts import ChatCompletionsPayload, ChatContentPart, ChatMessage
from ..base.prompts import CONNECTIVITY_PROMPT, SYSTEM_ROLE_PROMPT, build_user_message, pdf_data_url

DocumentPartFactory = Callable[[str], ChatContentPart]

DEFAULT_DOCUMENT_PROMPT = "Please analyze this document."


def image_url_document(encoded: str) -> ChatContentPart:
    return ChatContentPart.image_url_part(pdf_data_url(encoded))


def _payload(model: str, messages: List[ChatMessage], config: ProviderConfig, *, stream: bool) -> ChatCompletionsPayload:
    return ChatCompletionsPayload(
        model=model,
        messages=messages,
        stream=stream,
        temperature=config.temperature,
        top_p=config.top_p,
        max_tokens=config.max_tokens,
    )


def _document_turn(text: str, encoded: str, document_part: DocumentPartFactory) -> ChatMessage:
    return ChatMessage(role="user", content=[ChatContentPart.text_part(text), document_part(encoded)])


def build_summary(
    model: str,
    content: str,
    is_encoded: bool,
    prompt: str,
    config: ProviderConfig,
    document_part: DocumentPartFactory = image_url_document,
) -> ChatCompletionsPayload:
    messages = [ChatMessage(role="system", content=SYSTEM_ROLE_PROMPT)]
    if is_encoded:
        messages.append(_document_turn(prompt or DEFAULT_DOCUMENT_PROMPT, content, document_part))
    else:
        messages.append(
            ChatMessage(role="user", content=build_user_message(prompt, content, config.option("answer_language")))
        )
    return _payload(model, messages, config, stream=config.stream)


def build_chat(
    model: str,
    document_content: str,
    is_encoded: bool,
    conversation: Sequence[ConversationMessage],
    config: ProviderConfig,
    document_part: DocumentPartFactory = image_url_document,
) -> ChatCompletionsPayload:
    """Map every turn; the first user turn carries the document."""
    messages = [ChatMessage(role="system", content=SYSTEM_ROLE_PROMPT)]
    for index, msg in enumerate(conversation):
        if index == 0 and msg.role == "user":
            if is_encoded:
                messages.append(_document_turn(msg.content, document_content, document_part))
            else:
                text = build_user_message(msg.content, document_content or "", config.option("answer_language"))
                messages.append(ChatMessage(role="user", content=text))
            continue
        messages.append(ChatMessage(role=msg.role, content=msg.content))
    return _payload(model, messages, config, stream=config.stream)


def build_multi_file(
    model: str,
    files: Sequence[MultiFileInput],
    prompt: str,
    config: ProviderConfig,
    file_part: Callable[[str, str], ChatContentPart],
) -> ChatCompletionsPayload:
    """Instruction followed by one part per file with a payload."""
    parts = [ChatContentPart.text_part(prompt or "")]
    for index, item in enumerate(files):
        if item.has_payload:
            parts.append(file_part(item.filename(index), item.encoded_payload))
    messages = [
        ChatMessage(role="system", content=SYSTEM_ROLE_PROMPT),
        ChatMessage(role="user", content=parts),
    ]
    return _payload(model, messages, config, stream=config.stream)


def build_connectivity(model: str, config: ProviderConfig) -> ChatCompletionsPayload:
    messages = [
        ChatMessage(role="system", content=SYSTEM_ROLE_PROMPT),
        ChatMessage(role="user", content=CONNECTIVITY_PROMPT),
    ]
    return _payload(model, messages, config, stream=False)


__all__ = [
    "DocumentPartFactory",
    "DEFAULT_DOCUMENT_PROMPT",
    "image_url_document",
    "build_summary",
    "build_chat",
    "build_multi_file",
    "build_connectivity",
]
