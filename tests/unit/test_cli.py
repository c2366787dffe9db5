import json

import pytest
from typer.testing import CliRunner

import eventpass.security as security
from eventpass.cli import app

SECRET = "cli-test-secret-0123456789abcdef00"

runner = CliRunner()


@pytest.fixture(autouse=True)
def _env(tmp_path, monkeypatch):
    monkeypatch.setenv("EVENTPASS_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.setenv("EVENTPASS_SECRET", SECRET)


def _issue(*args: str) -> str:
    result = runner.invoke(app, ["issue", *args])
    assert (
        result.exit_code == 0
    ), f"Command failed with exit code {result.exit_code}. Output: {result.output}"
    return result.stdout.strip()


def test_issue_then_verify_prints_claims():
    token = _issue("--participant-id", "p1", "--event-id", "e1", "--type", "checkin")

    result = runner.invoke(app, ["verify", token])
    assert result.exit_code == 0, result.output
    claims = json.loads(result.stdout)
    assert claims["participantId"] == "p1"
    assert claims["eventId"] == "e1"
    assert claims["type"] == "checkin"
    assert claims["exp"] - claims["iat"] == 600


def test_extra_claims_are_included():
    token = _issue("--participant-id", "p1", "--claim", "seat=12", "--claim", "zone=A")

    result = runner.invoke(app, ["verify", token])
    claims = json.loads(result.stdout)
    assert claims["seat"] == "12"
    assert claims["zone"] == "A"


def test_malformed_claim_is_a_usage_error():
    result = runner.invoke(app, ["issue", "--claim", "no-separator"])
    assert result.exit_code == 2


def test_reserved_claim_fails_issue():
    result = runner.invoke(app, ["issue", "--claim", "exp=1"])
    assert result.exit_code == 1
    assert "exp" in result.output


def test_issue_with_link():
    link = _issue("--participant-id", "p1", "--link", "https://example.org/checkin")

    assert link.startswith("https://example.org/checkin?token=")


def test_verify_rejects_invalid_credential():
    result = runner.invoke(app, ["verify", "not-a-credential"])

    assert result.exit_code == 1
    assert "Invalid credential" in result.output


def test_verify_rejects_credential_from_other_secret(monkeypatch):
    token = _issue("--participant-id", "p1")
    monkeypatch.setenv("EVENTPASS_SECRET", "some-other-secret-0123456789abcdef")

    result = runner.invoke(app, ["verify", token])
    assert result.exit_code == 1
    assert "Invalid credential" in result.output


@pytest.mark.parametrize("command", [["issue"], ["verify", "abc"], ["check-config"]])
def test_missing_secret_aborts(command, monkeypatch):
    monkeypatch.delenv("EVENTPASS_SECRET")

    result = runner.invoke(app, command)
    assert result.exit_code == 1
    assert "EVENTPASS_SECRET is required" in result.output


def _separate_streams_runner() -> CliRunner:
    try:
        return CliRunner(mix_stderr=False)
    except TypeError:
        # click 8.2 always keeps stderr separate
        return CliRunner()


def test_missing_secret_error_goes_to_stderr(monkeypatch):
    monkeypatch.delenv("EVENTPASS_SECRET")

    result = _separate_streams_runner().invoke(app, ["check-config"])
    assert result.exit_code == 1
    assert "EVENTPASS_SECRET is required" in result.stderr
    assert "EVENTPASS_SECRET is required" not in result.stdout


def test_commands_leave_shared_service_alone(monkeypatch):
    monkeypatch.setattr(security, "_service_instance", None)

    _issue("--participant-id", "p1")
    runner.invoke(app, ["verify", "not-a-credential"])
    assert security._service_instance is None


def test_check_config_reports_transport(tmp_path, monkeypatch):
    config_path = tmp_path / "eventpass.yaml"
    config_path.write_text("transport:\n  header: X-Checkin\n")
    monkeypatch.setenv("EVENTPASS_CONFIG", str(config_path))

    result = runner.invoke(app, ["check-config"])
    assert result.exit_code == 0, result.output
    assert "Signing secret configured" in result.output
    assert "X-Checkin" in result.output
    assert SECRET not in result.output
