"""papergate_providers.config.defaults
====================================

Central place for small, stable default values: vendor endpoints, default
models and sampling values. They can be overridden through the external
config file, environment variables or per-call overrides (see
``papergate_providers.config``).

This module imports nothing from the rest of the package so any layer can
use it without creating import cycles.
"""

from __future__ import annotations

# ---- Facade defaults ----
# Provider used when a caller does not name one.
DEFAULT_PROVIDER = "openai"
# Sampling defaults applied by the facade (adapters omit unset values).
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TOP_P = 1.0
DEFAULT_MAX_TOKENS = 4096
# Multi-file requests carry several documents; allow a longer answer.
MULTI_FILE_MAX_TOKENS = 8192


# ---- OpenAI (Responses + Chat Completions) ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com"
OPENAI_DEFAULT_MODEL = "gpt-3.5-turbo"
# Document (base64) and multi-file requests need a model that accepts files.
OPENAI_FILE_MODEL = "gpt-4o"

# ---- OpenAI-compatible relays ----
OPENAI_COMPAT_DEFAULT_BASE_URL = "https://api.openai.com/v1/chat/completions"
OPENAI_COMPAT_DEFAULT_MODEL = "gpt-3.5-turbo"

# ---- OpenRouter ----
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1/chat/completions"
OPENROUTER_DEFAULT_MODEL = "google/gemma-3-27b-it"
OPENROUTER_DEFAULT_REFERER = "https://github.com/papergate/papergate"
OPENROUTER_DEFAULT_TITLE = "papergate"

# ---- Gemini ----
GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
GEMINI_DEFAULT_MODEL = "gemini-2.5-pro"

# ---- Anthropic ----
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com"
ANTHROPIC_DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
ANTHROPIC_API_VERSION = "2023-06-01"
# Anthropic rejects requests without max_tokens.
ANTHROPIC_DEFAULT_MAX_TOKENS = 4096

# ---- Ark ----
ARK_DEFAULT_BASE_URL = "https://ark.cn-beijing.volces.com/api/v3/responses"
ARK_DEFAULT_MODEL = "doubao-seed-1-6-251015"

# ---- Connectivity test ----
CONNECTIVITY_MAX_TOKENS = 16
CONNECTIVITY_TEMPERATURE = 0.1


__all__ = [
    "DEFAULT_PROVIDER",
    "DEFAULT_TEMPERATURE",
    "DEFAULT_TOP_P",
    "DEFAULT_MAX_TOKENS",
    "MULTI_FILE_MAX_TOKENS",
    "OPENAI_DEFAULT_BASE_URL",
    "OPENAI_DEFAULT_MODEL",
    "OPENAI_FILE_MODEL",
    "OPENAI_COMPAT_DEFAULT_BASE_URL",
    "OPENAI_COMPAT_DEFAULT_MODEL",
    "OPENROUTER_DEFAULT_BASE_URL",
    "OPENROUTER_DEFAULT_MODEL",
    "OPENROUTER_DEFAULT_REFERER",
    "OPENROUTER_DEFAULT_TITLE",
    "GEMINI_DEFAULT_BASE_URL",
    "GEMINI_DEFAULT_MODEL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_MODEL",
    "ANTHROPIC_API_VERSION",
    "ANTHROPIC_DEFAULT_MAX_TOKENS",
    "ARK_DEFAULT_BASE_URL",
    "ARK_DEFAULT_MODEL",
    "CONNECTIVITY_MAX_TOKENS",
    "CONNECTIVITY_TEMPERATURE",
]
