"""Tests for classifier and validator audit records."""

from __future__ import annotations

from typing import Any

import pytest

from toolgate.core.safety.classifier import CommandClassifier
from toolgate.core.safety.errors import ForbiddenCommandError
from toolgate.core.safety.logger import AUDIT_COMMAND_PREFIX, truncate_command
from toolgate.core.safety.validator import SafetyValidator


def test_truncate_command() -> None:
    assert truncate_command("ls") == "ls"
    assert len(truncate_command("x" * 500)) == AUDIT_COMMAND_PREFIX


def test_classification_emits_start_and_result(records: list[dict[str, Any]]) -> None:
    # act
    CommandClassifier().classify("git push --force")

    # assert
    messages = [record["message"] for record in records]
    assert messages[0].startswith("Classifying command safety")
    result = records[-1]
    assert result["extra"]["tier"] == "YELLOW"
    assert result["extra"]["command"] == "git push --force"
    assert result["extra"]["reasons"] == ["YELLOW: git push (write operation)"]


def test_audit_records_truncate_long_commands(records: list[dict[str, Any]]) -> None:
    command = "echo " + "a" * 1000

    CommandClassifier().classify(command)

    for record in records:
        if "command" in record["extra"]:
            assert len(record["extra"]["command"]) <= AUDIT_COMMAND_PREFIX


def test_parse_failure_is_logged_as_warning(records: list[dict[str, Any]]) -> None:
    CommandClassifier().classify("echo 'unterminated")

    warnings = [r for r in records if r["level"].name == "WARNING"]
    assert len(warnings) == 1
    assert "Failed to parse command" in warnings[0]["message"]


def test_forbidden_validation_is_logged(records: list[dict[str, Any]]) -> None:
    with pytest.raises(ForbiddenCommandError):
        SafetyValidator().validate("sudo ls")

    warnings = [r for r in records if r["level"].name == "WARNING"]
    assert warnings[-1]["extra"]["reasons"] == ["RED: blocked command: sudo"]
