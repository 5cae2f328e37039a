import json

import httpx
import pytest
from typer.testing import CliRunner

import cli.main as cli_main
from cli.main import app, read_tokens_file
from core.services.token_registration import APNSTokenRegistrar

runner = CliRunner()


@pytest.fixture
def patched_registrar(monkeypatch: pytest.MonkeyPatch, settings, provider):
    monkeypatch.setenv("FCM_LOG_LEVEL", "WARNING")

    def build(_settings, *, bundle_id, strict):
        return APNSTokenRegistrar(settings, strict=strict, transport=httpx.MockTransport(provider))

    monkeypatch.setattr(cli_main, "build_registrar", build)
    return provider


def test_register_json_output(patched_registrar) -> None:
    result = runner.invoke(app, ["register", "good1", "bad1", "--json", "--server-key", "cli-key"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert {item["native_token"]: item["is_registered"] for item in data} == {"good1": True, "bad1": False}
    assert patched_registrar.requests[0].headers["Authorization"] == "key=cli-key"


def test_register_table_output(patched_registrar) -> None:
    result = runner.invoke(app, ["register", "good1"])

    assert result.exit_code == 0
    assert "1/1 registered" in result.stdout


def test_register_reads_tokens_file(patched_registrar, tmp_path) -> None:
    tokens_file = tmp_path / "tokens.txt"
    tokens_file.write_text("# devices\nt1\n\nt2\n", encoding="utf-8")

    result = runner.invoke(app, ["register", "t0", "--tokens-file", str(tokens_file), "--json"])

    assert result.exit_code == 0
    assert patched_registrar.last_payload["apns_tokens"] == ["t0", "t1", "t2"]


def test_register_provider_error_exits_1(patched_registrar) -> None:
    patched_registrar.respond = lambda request: httpx.Response(500, text="quota exceeded")

    result = runner.invoke(app, ["register", "t1"])

    assert result.exit_code == 1
    assert "quota exceeded" in result.output


def test_register_too_many_tokens_without_batches(patched_registrar) -> None:
    tokens = [f"t{i}" for i in range(101)]

    result = runner.invoke(app, ["register", *tokens, "--json"])

    assert result.exit_code == 1
    assert patched_registrar.requests == []


def test_register_with_batches(patched_registrar) -> None:
    tokens = [f"t{i}" for i in range(101)]

    result = runner.invoke(app, ["register", *tokens, "--json", "--batches"])

    assert result.exit_code == 0
    assert len(json.loads(result.stdout)) == 101
    assert len(patched_registrar.requests) == 2


def test_read_tokens_file(tmp_path) -> None:
    path = tmp_path / "t.txt"
    path.write_text("  a  \n#b\nc\n", encoding="utf-8")

    assert read_tokens_file(path) == ["a", "c"]


def test_build_registrar_uses_cli_bundle_id_when_unconfigured() -> None:
    from core.config import AppSettings

    settings = AppSettings(_env_file=None, app_bundle_id=None, server_key="k")

    registrar = cli_main.build_registrar(settings, bundle_id="com.cli.app", strict=True)

    assert registrar.configuration is not None
    assert registrar.configuration.app_bundle_id == "com.cli.app"
    assert registrar.configuration.server_key == "k"


def test_doctor_reports_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FCM_APP_BUNDLE_ID", "com.doctor.app")
    monkeypatch.setenv("FCM_SERVER_KEY", "abcdef123456")

    result = runner.invoke(app, ["doctor", "run"])

    assert result.exit_code == 0
    assert "com.doctor.app" in result.stdout
    assert "abcdef123456" not in result.stdout
