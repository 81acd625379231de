"""Tests for the toolgate command line."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
import sys

from loguru import logger
import pytest
from typer.testing import CliRunner

from toolgate.ui.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def gate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    monkeypatch.setenv("TOOLGATE_WORKSPACE_ROOT", str(tmp_path))
    monkeypatch.setenv("TOOLGATE_LOG_LEVEL", "ERROR")
    monkeypatch.delenv("TOOLGATE_EDIT_MODE", raising=False)
    yield tmp_path
    # The CLI callback reconfigures the global logger
    logger.remove()
    logger.add(sys.stderr)


class TestClassify:
    """Tests for the classify command."""

    def test_prints_tier(self) -> None:
        cases = {
            "ls -la": "GREEN",
            "git push origin main": "YELLOW",
            "rm -rf /": "RED",
        }

        for command, expected in cases.items():
            result = runner.invoke(app, ["classify", command])
            assert result.exit_code == 0, command
            assert result.stdout.strip() == expected, command

    def test_verbose_prints_reasons(self) -> None:
        result = runner.invoke(app, ["classify", "--verbose", "sudo ls"])

        assert result.exit_code == 0
        assert result.stdout.splitlines()[0] == "RED"
        assert "  - RED: blocked command: sudo" in result.stdout

    def test_workspace_option_overrides_env(self, tmp_path: Path) -> None:
        # input
        other = tmp_path / "other"
        command = f"cat {other}/notes.txt"

        # act
        default = runner.invoke(app, ["classify", command])
        scoped = runner.invoke(app, ["classify", "--workspace", str(other), command])

        # assert
        assert default.stdout.strip() == "GREEN"
        assert scoped.stdout.strip() == "GREEN"

        outside = runner.invoke(
            app, ["classify", "--workspace", str(other), f"cat {tmp_path}/x.txt"]
        )
        assert outside.stdout.strip() == "YELLOW"


class TestValidate:
    """Tests for the validate command."""

    def test_auto_approved(self) -> None:
        result = runner.invoke(app, ["validate", "git status"])

        assert result.exit_code == 0
        assert "auto-approved" in result.stdout

    def test_approval_required(self) -> None:
        result = runner.invoke(app, ["validate", "make test"])

        assert result.exit_code == 0
        assert "approval required" in result.stdout

    def test_forbidden_exits_two(self) -> None:
        result = runner.invoke(app, ["validate", "cat ~/.ssh/id_rsa"])

        assert result.exit_code == 2
        assert "forbidden" in result.output

    def test_blank_command_exits_one(self) -> None:
        result = runner.invoke(app, ["validate", "   "])

        assert result.exit_code == 1
        assert "Error:" in result.output


def test_check_path_reports_category() -> None:
    cases = {
        "src/app.py": "GREEN benign",
        "/etc/shadow": "RED system (absolute system path)",
        ".env": "YELLOW hidden (hidden file)",
    }

    for path, expected in cases.items():
        result = runner.invoke(app, ["check-path", path])
        assert result.exit_code == 0, path
        assert result.stdout.strip() == expected, path


def test_invalid_configuration_exits_one(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TOOLGATE_LOG_LEVEL", "LOUD")

    result = runner.invoke(app, ["classify", "ls"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
