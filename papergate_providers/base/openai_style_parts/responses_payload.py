"""
Typed Responses API request body.

Shared by the OpenAI document dialect and Ark, which speaks the same
``input`` item format. Parts are ``input_text`` or ``input_file``; the file
carries a ``data:`` URL rather than an uploaded file id.
"""
from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, Field


class ResponsesContentPart(BaseModel):
    type: str
    text: Optional[str] = None
    filename: Optional[str] = None
    file_data: Optional[str] = None

    @classmethod
    def input_text(cls, text: str) -> "ResponsesContentPart":
        return cls(type="input_text", text=text)

    @classmethod
    def input_file(cls, filename: str, file_data: str) -> "ResponsesContentPart":
        return cls(type="input_file", filename=filename, file_data=file_data)


class ResponsesInputItem(BaseModel):
    """One ``input`` entry; ``role`` is ``developer``/``system``/``user``/``assistant``."""

    role: str
    content: Union[str, List[ResponsesContentPart]]


class ResponsesPayload(BaseModel):
    """Request body for ``POST .../responses``."""

    model: str
    input: List[ResponsesInputItem] = Field(default_factory=list)
    stream: bool = False
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_output_tokens: Optional[int] = None


__all__ = ["ResponsesContentPart", "ResponsesInputItem", "ResponsesPayload"]
