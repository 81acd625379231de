"""Tests for shell tool approval policies."""

from __future__ import annotations

from pydantic import ValidationError
import pytest

from toolgate.core.config import GateConfig
from toolgate.core.safety.classifier import CommandClassifier
from toolgate.core.safety.errors import EmptyCommandError, ForbiddenCommandError
from toolgate.core.safety.validator import SafetyValidator
from toolgate.tools.protocol import ApprovalDecision
from toolgate.tools.shell.policy import BashApprovalPolicy, ShellApprovalPolicy


class TestBashApprovalPolicy:
    """Tests for the single-command bash policy."""

    def test_tool_name(self) -> None:
        assert BashApprovalPolicy().tool_name == "bash"

    def test_green_command_runs_unattended(self) -> None:
        policy = BashApprovalPolicy()

        assert policy.decide({"command": "git status"}) is (
            ApprovalDecision.NO_APPROVAL_NEEDED
        )
        assert policy.needs_approval({"command": "ls -la"}) is False

    def test_yellow_command_needs_approval(self) -> None:
        policy = BashApprovalPolicy()

        assert policy.needs_approval({"command": "make test"}) is True
        assert policy.needs_approval({"command": "git push"}) is True

    def test_forbidden_command_propagates(self) -> None:
        policy = BashApprovalPolicy()

        with pytest.raises(ForbiddenCommandError, match="forbidden"):
            policy.needs_approval({"command": "rm -rf /"})

    def test_empty_command_propagates(self) -> None:
        with pytest.raises(EmptyCommandError):
            BashApprovalPolicy().needs_approval({"command": "  "})

    def test_malformed_params_raise_validation_error(self) -> None:
        policy = BashApprovalPolicy()

        with pytest.raises(ValidationError):
            policy.decide({})
        with pytest.raises(ValidationError):
            policy.decide({"command": ["ls"]})

    def test_uses_injected_validator(self) -> None:
        validator = SafetyValidator(
            classifier=CommandClassifier(workspace_root="/work/app")
        )
        policy = BashApprovalPolicy(validator=validator)

        assert policy.needs_approval({"command": "cat /work/app/a.txt"}) is False

    def test_from_config_scopes_paths_to_workspace(self) -> None:
        # input
        config = GateConfig(workspace_root="/work/app")
        params = {"command": "cat /work/app/a.txt"}

        # act
        policy = BashApprovalPolicy.from_config(config)

        # assert
        assert policy.needs_approval(params) is False
        assert BashApprovalPolicy().needs_approval(params) is True


class TestShellApprovalPolicy:
    """Tests for the multi-command shell policy."""

    def test_tool_name(self) -> None:
        assert ShellApprovalPolicy().tool_name == "shell"

    def test_all_green_commands_run_unattended(self) -> None:
        params = {"commands": ["ls", "git status", "cat README.md"]}

        assert ShellApprovalPolicy().needs_approval(params) is False

    def test_any_yellow_command_needs_approval(self) -> None:
        params = {"commands": ["ls", "npx prettier --check ."]}

        assert ShellApprovalPolicy().needs_approval(params) is True

    def test_agent_request_is_honored(self) -> None:
        params = {"commands": ["ls"], "needs_approval": True}

        assert ShellApprovalPolicy().decide(params) is (
            ApprovalDecision.APPROVAL_REQUIRED
        )

    def test_forbidden_command_propagates_even_when_approval_requested(
        self,
    ) -> None:
        params = {"commands": ["ls", "sudo reboot"], "needs_approval": True}

        with pytest.raises(ForbiddenCommandError):
            ShellApprovalPolicy().needs_approval(params)

    def test_malformed_params_raise_validation_error(self) -> None:
        policy = ShellApprovalPolicy()

        with pytest.raises(ValidationError):
            policy.decide({"command": "ls"})
        with pytest.raises(ValidationError):
            policy.decide({"commands": "ls"})

    def test_from_config_scopes_paths_to_workspace(self) -> None:
        config = GateConfig(workspace_root="/work/app")
        params = {"commands": ["ls /work/app/src", "cat /work/app/README.md"]}

        assert ShellApprovalPolicy.from_config(config).needs_approval(params) is False
        assert ShellApprovalPolicy().needs_approval(params) is True
