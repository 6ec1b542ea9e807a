"""CLI tests driven through ``main(argv, client=...)``.

Covers:
- ``providers`` listing in text and JSON.
- ``test`` exit codes: 0 success, 1 connectivity failure, 2 config error.
- ``summarize`` streams increments to stdout; errors exit 1.
- Missing file, missing command and invalid log level.
- ``parse_verbosity`` synonyms.
"""
from __future__ import annotations

import json

import pytest

from papergate_providers.base.http import TransportChunk, TransportResponse
from papergate_providers.base.registry import ProviderRegistry, register_default_providers
from papergate_providers.client import GatewayClient
from papergate_providers.service.cli import main
from papergate_providers.service.cli.cli_utils import parse_verbosity
from papergate_providers.tests.utils import PROVIDER_IDS, FakeTransport, connectivity_body, ok_chunks, sse


def _client(transport):
    return GatewayClient(register_default_providers(ProviderRegistry(), transport=transport))


def test_providers_text_and_json(capsys):
    client = _client(FakeTransport())
    assert main(["providers"], client=client) == 0  # nosec B101
    assert capsys.readouterr().out.split() == sorted(PROVIDER_IDS)  # nosec B101
    assert main(["providers", "--json"], client=client) == 0  # nosec B101
    assert json.loads(capsys.readouterr().out) == sorted(PROVIDER_IDS)  # nosec B101


def test_connection_success(monkeypatch, capsys):
    monkeypatch.setenv("GEMINI_API_KEY", "g-key")
    transport = FakeTransport(response=TransportResponse(200, connectivity_body("gemini")))
    code = main(["test", "--provider", "gemini", "--model", "gemini-x"], client=_client(transport))
    out = capsys.readouterr().out
    assert code == 0  # nosec B101
    assert out.startswith("Connection OK\nModel: gemini-x\nReply: OK\n")  # nosec B101
    assert "/models/gemini-x:generateContent" in transport.requests[0].url  # nosec B101


def test_connection_failure_prints_diagnostics(monkeypatch, capsys):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "a-key")
    body = json.dumps({"type": "error", "error": {"type": "authentication_error", "message": "invalid x-api-key"}})
    transport = FakeTransport(response=TransportResponse(401, body))
    code = main(["test", "--provider", "anthropic"], client=_client(transport))
    diag = json.loads(capsys.readouterr().err)
    assert code == 1  # nosec B101
    assert diag["error_name"] == "authentication_error"  # nosec B101
    assert diag["status"] == 401  # nosec B101
    assert diag["request_url"].endswith("/v1/messages")  # nosec B101
    assert diag["response_body"] == body  # nosec B101


def test_connection_missing_key_hints_env_vars(capsys):
    transport = FakeTransport()
    code = main(["test", "--provider", "ark"], client=_client(transport))
    hint = json.loads(capsys.readouterr().err)
    assert code == 2  # nosec B101
    assert hint["set_one_of_env"] == ["ARK_API_KEY", "VOLCANOARK_API_KEY"]  # nosec B101
    assert transport.requests == []  # nosec B101


def test_unknown_provider_exit_code(capsys):
    code = main(["test", "--provider", "nope"], client=_client(FakeTransport()))
    err = json.loads(capsys.readouterr().err)
    assert code == 2  # nosec B101
    assert sorted(PROVIDER_IDS) == err["available"]  # nosec B101


def test_summarize_streams_to_stdout(monkeypatch, capsys, tmp_path):
    monkeypatch.setenv("OPENAI_COMPAT_API_KEY", "c-key")
    doc = tmp_path / "paper.txt"
    doc.write_text("A study of streams.", encoding="utf-8")
    transport = FakeTransport(
        chunks=ok_chunks(
            sse({"choices": [{"delta": {"content": "Short "}}]}, {"choices": [{"delta": {"content": "summary"}}]}),
            "data: [DONE]\n\n",
        )
    )
    code = main(
        ["summarize", "--provider", "openai-compat", "--file", str(doc), "--prompt", "TL;DR"],
        client=_client(transport),
    )
    assert code == 0  # nosec B101
    assert capsys.readouterr().out == "Short summary\n"  # nosec B101
    body = transport.requests[0].json
    assert body["stream"] is True  # nosec B101
    assert "A study of streams." in body["messages"][1]["content"]  # nosec B101


def test_summarize_encoded_no_stream(monkeypatch, capsys, tmp_path):
    monkeypatch.setenv("OPENAI_COMPAT_API_KEY", "c-key")
    doc = tmp_path / "paper.pdf"
    doc.write_bytes(b"%PDF")
    transport = FakeTransport(response=TransportResponse(200, connectivity_body("openai-compat", "done")))
    code = main(
        ["summarize", "--provider", "openai-compat", "--file", str(doc), "--encoded", "--no-stream"],
        client=_client(transport),
    )
    assert code == 0  # nosec B101
    assert capsys.readouterr().out == "done\n"  # nosec B101
    part = transport.requests[0].json["messages"][1]["content"][1]
    assert part["image_url"]["url"] == "data:application/pdf;base64,JVBERg=="  # nosec B101


def test_summarize_vendor_error_exit_code(monkeypatch, capsys, tmp_path):
    monkeypatch.setenv("OPENAI_COMPAT_API_KEY", "c-key")
    doc = tmp_path / "paper.txt"
    doc.write_text("text", encoding="utf-8")
    transport = FakeTransport(chunks=[TransportChunk(status=404, text='{"error": {"message": "no such model"}}')])
    code = main(["summarize", "--provider", "openai-compat", "--file", str(doc)], client=_client(transport))
    err = json.loads(capsys.readouterr().err)
    assert code == 1  # nosec B101
    assert err["error"] == "not_found"  # nosec B101
    assert err["status"] == 404  # nosec B101


def test_summarize_missing_file(capsys, tmp_path):
    code = main(["summarize", "--file", str(tmp_path / "absent.txt")], client=_client(FakeTransport()))
    assert code == 2  # nosec B101
    assert "file not found" in capsys.readouterr().err  # nosec B101


def test_no_command_prints_help(capsys):
    assert main([], client=_client(FakeTransport())) == 2  # nosec B101
    assert "papergate-cli" in capsys.readouterr().out  # nosec B101


def test_invalid_log_level_exits():
    with pytest.raises(SystemExit) as ei:
        main(["--log-level", "loud", "providers"], client=_client(FakeTransport()))
    assert ei.value.code == 2  # nosec B101


@pytest.mark.parametrize(
    "raw, level",
    [("verbose", "DEBUG"), ("Quiet", "ERROR"), ("med", "WARNING"), ("silent", "CRITICAL"), ("bogus", None)],
)
def test_parse_verbosity(raw, level):
    assert parse_verbosity(raw) == level  # nosec B101
