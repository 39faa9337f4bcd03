"""
Tests for the Typer CLI.
"""

import logging

import httpx
import pytest
from typer.testing import CliRunner

import cli.main as cli_main
from cli.doctor import _check_http
from cli.logging_setup import configure_logging
from core.config import GENERATE_WEBHOOK_URL, AppSettings
from core.query import build_final_query

HOOK_URL = "https://hook.test/abc"

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for var in ("NAME", "REGNO", "EMAIL", "BFHL_OUTPUT_PATH", "BFHL_GENERATE_WEBHOOK_URL", "BFHL_PROPERTIES_FILE"):
        monkeypatch.delenv(var, raising=False)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def seen():
    return []


@pytest.fixture
def stub_client(monkeypatch, seen):
    def install(submit_status=200, generate_body=None):
        body = generate_body or {"webhook": HOOK_URL, "accessToken": "tok123"}

        def handler(request):
            seen.append(request)
            if str(request.url) == GENERATE_WEBHOOK_URL:
                return httpx.Response(200, json=body)
            return httpx.Response(submit_status, text="ok")

        def fake_build_client(settings=None, **kwargs):
            return httpx.Client(transport=httpx.MockTransport(handler))

        monkeypatch.setattr(cli_main, "build_client", fake_build_client)

    return install


def test_query_plain():
    result = runner.invoke(cli_main.app, ["query", "--plain"])
    assert result.exit_code == 0
    assert result.output.strip() == build_final_query()


def test_run_success(tmp_path, stub_client, seen, monkeypatch):
    monkeypatch.setenv("NAME", "Jane")
    stub_client()

    result = runner.invoke(cli_main.app, ["run", "--no-banner", "--reg-no", "REG1", "--email", "jane@x.com"])

    assert result.exit_code == 0, result.output
    assert "submitted successfully" in result.output
    assert (tmp_path / "final-query.sql").read_text(encoding="utf-8") == build_final_query()
    assert [str(r.url) for r in seen] == [GENERATE_WEBHOOK_URL, HOOK_URL]
    assert b'"regNo":"REG1"' in seen[0].content.replace(b" ", b"")
    assert b'"name":"Jane"' in seen[0].content.replace(b" ", b"")


def test_run_submission_failure_exits_zero(stub_client):
    stub_client(submit_status=500)

    result = runner.invoke(cli_main.app, ["run", "--no-banner"])

    assert result.exit_code == 0
    assert "submit_failed" in result.output


def test_run_abort_skips_submission(tmp_path, stub_client, seen):
    stub_client(generate_body={"webhook": HOOK_URL})

    result = runner.invoke(cli_main.app, ["run", "--no-banner", "--output", "answer.sql"])

    assert result.exit_code == 0
    assert "aborted" in result.output
    assert len(seen) == 1
    assert not (tmp_path / "answer.sql").exists()


def test_run_uses_properties_file(tmp_path, stub_client, seen):
    (tmp_path / "custom.properties").write_text("name=Props Person\n", encoding="utf-8")
    stub_client()

    result = runner.invoke(cli_main.app, ["run", "--no-banner", "--properties", "custom.properties"])

    assert result.exit_code == 0
    assert b"Props Person" in seen[0].content


def test_configure_logging_is_idempotent():
    configure_logging("DEBUG")
    configure_logging("warning")
    named = [h for h in logging.getLogger().handlers if h.get_name() == "bfhl-rich"]
    assert len(named) == 1
    assert logging.getLogger().level == logging.WARNING


def test_configure_logging_unknown_level_defaults_to_info():
    configure_logging("chatty")
    assert logging.getLogger().level == logging.INFO


def test_doctor_setup_writes_properties(tmp_path):
    result = runner.invoke(
        cli_main.app,
        ["doctor", "setup"],
        input="Jane Roe\nREG1\njane@x.com\n",
    )

    assert result.exit_code == 0, result.output
    content = (tmp_path / "application.properties").read_text(encoding="utf-8")
    assert "name=Jane Roe" in content
    assert "regNo=REG1" in content
    assert "email=jane@x.com" in content


def test_run_with_invalid_settings_uses_defaults(tmp_path, stub_client, monkeypatch):
    monkeypatch.setenv("BFHL_HTTP_TIMEOUT_SECONDS", "abc")
    stub_client()

    result = runner.invoke(cli_main.app, ["run", "--no-banner"])

    assert result.exit_code == 0, result.output
    assert "submitted successfully" in result.output
    assert (tmp_path / "final-query.sql").exists()


def test_doctor_http_check_reports_invalid_url():
    settings = AppSettings(generate_webhook_url="https://exa\x00mple.com/gen")

    ok, detail = _check_http(settings.generate_webhook_url, settings)

    assert ok is False
    assert detail
