"""
Input record for multi-file summarization.

Constructed by the caller per file, consumed once by
``summarize_multi_file``. Extraction and encoding happen outside the gateway:
files arriving without ``encoded_payload`` are skipped by adapters.
"""
from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict


class MultiFileInput(BaseModel):
    """One document in a multi-file request.

    Attributes:
        path: Source path, informational only (never read by the gateway).
        display_name: Filename presented to the vendor.
        encoded_payload: Base64 PDF content, or ``None`` if not extracted.
    """

    model_config = ConfigDict(frozen=True)

    path: str = ""
    display_name: str = ""
    encoded_payload: Optional[str] = None

    @property
    def has_payload(self) -> bool:
        return bool(self.encoded_payload)

    def filename(self, index: int) -> str:
        """Name sent to the vendor, falling back to ``document_{n}.pdf``."""
        name = self.display_name.strip() or os.path.basename(self.path or "")
        return name or f"document_{index + 1}.pdf"


__all__ = ["MultiFileInput"]
