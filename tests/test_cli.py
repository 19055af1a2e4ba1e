from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from errchain import MultiError, cli

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch, clean_env: Path) -> list[Any]:
    """Keep the CLI from replacing the test's loguru sinks."""
    configured: list[Any] = []
    monkeypatch.setattr(cli, "configure_logging", configured.append)
    return configured


def test_root_configures_logging(quiet_logging: list[Any]) -> None:
    result = runner.invoke(cli.app, ["status", "404"])
    assert result.exit_code == 0
    assert len(quiet_logging) == 1
    assert quiet_logging[0].log_level == "INFO"


@pytest.mark.parametrize(
    "code, want",
    [
        ("404", "404 Resource not found"),
        ("400", "400 Bad request"),
        ("401", "401 Unauthorized"),
        ("403", "403 Forbidden"),
        ("500", "500 Internal server error"),
        ("503", "503 Service unavailable"),
    ],
)
def test_status(code: str, want: str) -> None:
    result = runner.invoke(cli.app, ["status", code])
    assert result.exit_code == 0
    assert result.stdout.strip() == want


def test_status_unknown_code() -> None:
    result = runner.invoke(cli.app, ["status", "418"])
    assert result.exit_code == 1
    assert "No predefined error for status 418" in result.output


def test_demo_plain() -> None:
    result = runner.invoke(cli.app, ["demo", "-f", "s"])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "top: mid: root",
        "Resource not found: no paste with that slug",
    ]


def test_demo_quoted() -> None:
    result = runner.invoke(cli.app, ["demo", "--format", "q"])
    assert result.exit_code == 0
    assert result.stdout.strip() == r'"top: mid: root\nResource not found: no paste with that slug"'


def test_demo_detailed_by_default() -> None:
    result = runner.invoke(cli.app, ["demo"])
    assert result.exit_code == 0
    out = result.stdout
    assert out.startswith("root\n")
    assert "\nmid\n" in out
    assert "\ntop\n" in out
    assert "Resource not found\nno paste with that slug\n" in out
    assert "errchain.cli.sample_error" in out


def test_demo_invalid_format() -> None:
    result = runner.invoke(cli.app, ["demo", "-f", "x"])
    assert result.exit_code == 2
    assert "Unsupported format 'x'" in result.output


def test_demo_log(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[Any, ...]] = []

    def fake_log_error(err: Any, event: str, message: str, **kwargs: Any) -> None:
        calls.append((err, event, message, kwargs))

    monkeypatch.setattr(cli, "log_error", fake_log_error)
    monkeypatch.setenv("ERRCHAIN_LOG_STACK", "false")
    result = runner.invoke(cli.app, ["demo", "-f", "s", "--log"])

    assert result.exit_code == 0
    assert len(calls) == 1
    err, event, message, kwargs = calls[0]
    assert event == "cli.demo"
    assert message == "sample error"
    assert kwargs == {"stack": False}
    assert str(err).startswith("top: mid: root")


def test_inspect_without_wraps() -> None:
    result = runner.invoke(cli.app, ["inspect", "disk full"])
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines[:4] == [
        "message: disk full",
        "cause: disk full",
        "http: 500 Internal Server Error",
        "disk full",
    ]


def test_inspect_with_wraps() -> None:
    result = runner.invoke(
        cli.app, ["inspect", "disk full", "-w", "write block", "--wrap", "save file"]
    )
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines[0] == "message: save file: write block: disk full"
    assert lines[1] == "cause: disk full"
    assert lines[2] == "http: 500 Internal Server Error"
    assert "write block" in lines
    assert "save file" in lines
    assert lines.index("write block") < lines.index("save file")


def test_invalid_log_level_is_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERRCHAIN_LOG_LEVEL", "bogus")
    result = runner.invoke(cli.app, ["status", "404"])
    assert result.exit_code == 2
    assert "Invalid settings" in result.output


def test_sample_error_is_joined() -> None:
    err = cli.sample_error()
    assert isinstance(err, MultiError)
    assert len(err.errors) == 2
