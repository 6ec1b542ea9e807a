"""
Per-call provider configuration.

Purpose
-------
``ProviderConfig`` is the plain configuration object every contract
operation receives. It is validated by pydantic on construction (numeric
bounds, types) while the "must be non-empty before any network call" rule
for base URL and API key is enforced by adapters through
:meth:`ProviderConfig.missing_fields`, so a config can be built incrementally
(defaults, file, env, overrides) and only checked at the call boundary.

Sampling parameters are independently optional: ``None`` means the field is
omitted from the vendor payload entirely.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProviderConfig(BaseModel):
    """Options for one gateway call.

    Attributes:
        base_url: Vendor base URL or full endpoint (dialect-dependent).
        api_key: Credential; excluded from ``repr`` and never logged.
        model: Model identifier; adapters fall back to their default.
        stream: Use the vendor's streaming endpoint when true.
        request_timeout_ms: Per-call timeout; default and floor applied by
            :func:`resolve_request_timeout_ms`.
        temperature / top_p / max_tokens: Optional sampling parameters.
        vendor_options: Free-form bag for vendor-specific switches
            (e.g. ``collapse_newlines``, ``answer_language``, ``http_referer``).
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    base_url: str = ""
    api_key: str = Field(default="", repr=False)
    model: str = ""
    stream: bool = True
    request_timeout_ms: Optional[int] = Field(default=None, gt=0)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    vendor_options: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("base_url", "api_key", "model", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> str:
        """Normalize ``None`` to ``""`` and trim surrounding whitespace."""
        if value is None:
            return ""
        return str(value).strip()

    def missing_fields(self) -> List[str]:
        """Return the names of required connection fields that are empty."""
        return [name for name in ("base_url", "api_key") if not getattr(self, name)]

    def option(self, key: str, default: Any = None) -> Any:
        """Read a vendor option with a default."""
        return self.vendor_options.get(key, default)

    def with_overrides(self, **changes: Any) -> "ProviderConfig":
        """Return a validated copy with ``changes`` applied (``None`` ignored)."""
        data = self.model_dump()
        data.update({k: v for k, v in changes.items() if v is not None})
        return ProviderConfig(**data)


__all__ = ["ProviderConfig"]
