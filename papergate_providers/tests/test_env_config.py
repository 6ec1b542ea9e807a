"""Configuration layer tests.

Covers:
- Merge order: defaults < config file < environment < call overrides.
- JSON and YAML config files; aliases in file keys.
- ``vendor_options`` merged key by key.
- API key aliases, canonical-first precedence and placeholder rejection.
- ``None`` overrides never clobber lower layers.
"""
from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from papergate_providers.config import DEFAULTS, get_model, get_provider_config, reset_config_cache
from papergate_providers.config.defaults import GEMINI_DEFAULT_MODEL, OPENAI_DEFAULT_BASE_URL
from papergate_providers.config.env import (
    get_env_var_candidates,
    get_env_var_name,
    is_placeholder,
    resolve_provider_key,
)


def test_defaults_without_any_source():
    cfg = get_provider_config("openai")
    assert cfg.base_url == OPENAI_DEFAULT_BASE_URL  # nosec B101
    assert cfg.api_key == ""  # nosec B101
    assert cfg.missing_fields() == ["api_key"]  # nosec B101
    assert set(DEFAULTS) == {"openai", "openai-compat", "openrouter", "gemini", "anthropic", "ark"}  # nosec B101


def test_environment_overrides_defaults(monkeypatch):
    monkeypatch.setenv("OPENAI_COMPAT_BASE_URL", "https://relay.test/v1/chat/completions")
    monkeypatch.setenv("OPENAI_COMPAT_API_KEY", "sk-relay")
    monkeypatch.setenv("OPENAI_COMPAT_TIMEOUT_MS", "45000")
    cfg = get_provider_config("openai-compat")
    assert cfg.base_url == "https://relay.test/v1/chat/completions"  # nosec B101
    assert cfg.api_key == "sk-relay"  # nosec B101
    assert cfg.request_timeout_ms == 45000  # nosec B101


def test_yaml_file_then_env_then_overrides(tmp_path, monkeypatch):
    path = tmp_path / "providers.yaml"
    path.write_text(
        "google:\n"
        "  model: gemini-file\n"
        "  base_url: https://file.test\n"
        "  vendor_options:\n"
        "    answer_language: German\n"
        "    collapse_newlines: false\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(path))
    monkeypatch.setenv("GEMINI_MODEL", "gemini-env")
    reset_config_cache()
    cfg = get_provider_config(
        "gemini", {"base_url": None, "temperature": 0.4, "vendor_options": {"answer_language": "Spanish"}}
    )
    assert cfg.model == "gemini-env"  # nosec B101
    assert cfg.base_url == "https://file.test"  # nosec B101
    assert cfg.temperature == 0.4  # nosec B101
    assert cfg.vendor_options == {"answer_language": "Spanish", "collapse_newlines": False}  # nosec B101


def test_json_file(tmp_path, monkeypatch):
    path = tmp_path / "providers.json"
    path.write_text(json.dumps({"ark": {"model": "doubao-file"}}), encoding="utf-8")
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(path))
    reset_config_cache()
    assert get_model("ark") == "doubao-file"  # nosec B101
    assert get_model("gemini") == GEMINI_DEFAULT_MODEL  # nosec B101


def test_unparseable_file_is_ignored(tmp_path, monkeypatch):
    path = tmp_path / "broken.yaml"
    path.write_text("openai: [unclosed", encoding="utf-8")
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(path))
    reset_config_cache()
    assert get_provider_config("openai").base_url == OPENAI_DEFAULT_BASE_URL  # nosec B101


def test_invalid_timeout_env_fails_validation(monkeypatch):
    monkeypatch.setenv("ARK_TIMEOUT_MS", "soon")
    with pytest.raises(ValidationError):
        get_provider_config("ark")


def test_key_aliases_canonical_first(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "g-alias")
    assert resolve_provider_key("gemini") == ("g-alias", "GOOGLE_API_KEY")  # nosec B101
    monkeypatch.setenv("GEMINI_API_KEY", "g-canonical")
    assert resolve_provider_key("gemini") == ("g-canonical", "GEMINI_API_KEY")  # nosec B101
    assert get_provider_config("google").api_key == "g-canonical"  # nosec B101


def test_placeholder_keys_are_ignored(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "your_openai_key_here")
    assert resolve_provider_key("openai") == (None, None)  # nosec B101
    assert get_provider_config("openai").api_key == ""  # nosec B101


@pytest.mark.parametrize(
    "value, expected",
    [("placeholder", True), ("CHANGEME", True), ("your_key", True), ("test_123", True), ("sk-live", False), (None, False)],
)
def test_is_placeholder(value, expected):
    assert is_placeholder(value) is expected  # nosec B101


def test_env_var_names():
    assert get_env_var_name("openai-compat") == "OPENAI_COMPAT_API_KEY"  # nosec B101
    assert get_env_var_name("unknown") is None  # nosec B101
    assert list(get_env_var_candidates("ark")) == ["ARK_API_KEY", "VOLCANOARK_API_KEY"]  # nosec B101
