"""Approval policies for shell-executing tools.

Both policies defer to the command safety validator: GREEN runs unattended,
YELLOW asks the user, and RED raises ``ForbiddenCommandError`` which is left
to propagate so the caller can report a hard failure instead of a prompt.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from toolgate.core.config import GateConfig
from toolgate.core.safety.classifier import CommandClassifier
from toolgate.core.safety.errors import ForbiddenCommandError
from toolgate.core.safety.validator import SafetyValidator
from toolgate.tools.logger import PolicyLogger
from toolgate.tools.protocol import ApprovalDecision


class BashParams(BaseModel):
    command: str = Field(..., description="Shell command line to run")


class ShellParams(BaseModel):
    commands: list[str] = Field(..., description="Command lines to run in order")
    needs_approval: bool = Field(
        False, description="Whether the agent itself asked for a human decision"
    )


def _validator_for(config: GateConfig) -> SafetyValidator:
    return SafetyValidator(
        classifier=CommandClassifier(workspace_root=config.workspace_root)
    )


def _decision(required: bool) -> ApprovalDecision:
    if required:
        return ApprovalDecision.APPROVAL_REQUIRED
    return ApprovalDecision.NO_APPROVAL_NEEDED


class BashApprovalPolicy:
    """Approval hook for the single-command ``bash`` tool."""

    def __init__(
        self,
        validator: SafetyValidator | None = None,
        policy_logger: PolicyLogger | None = None,
    ) -> None:
        self._validator = validator or SafetyValidator()
        self._log = policy_logger or PolicyLogger()

    @classmethod
    def from_config(cls, config: GateConfig) -> BashApprovalPolicy:
        """Build a policy whose classifier knows the configured workspace root."""
        return cls(validator=_validator_for(config))

    @property
    def tool_name(self) -> str:
        return "bash"

    def decide(self, params: dict[str, Any]) -> ApprovalDecision:
        """
        Validate the proposed command.

        Raises:
            pydantic.ValidationError: If params do not match BashParams
            ForbiddenCommandError: If the command classifies as RED
        """
        parsed = BashParams.model_validate(params)
        try:
            required = self._validator.validate(parsed.command)
        except ForbiddenCommandError:
            self._log.shell_forbidden(self.tool_name, parsed.command)
            raise

        decision = _decision(required)
        self._log.decision(self.tool_name, decision.value, "command safety tier")
        return decision

    def needs_approval(self, params: dict[str, Any]) -> bool:
        return self.decide(params).requires_approval


class ShellApprovalPolicy:
    """Approval hook for the multi-command ``shell`` tool."""

    def __init__(
        self,
        validator: SafetyValidator | None = None,
        policy_logger: PolicyLogger | None = None,
    ) -> None:
        self._validator = validator or SafetyValidator()
        self._log = policy_logger or PolicyLogger()

    @classmethod
    def from_config(cls, config: GateConfig) -> ShellApprovalPolicy:
        """Build a policy whose classifier knows the configured workspace root."""
        return cls(validator=_validator_for(config))

    @property
    def tool_name(self) -> str:
        return "shell"

    def decide(self, params: dict[str, Any]) -> ApprovalDecision:
        """
        Require approval when the agent asked for it or any command is YELLOW.

        Every command is validated even when the agent already asked for
        approval, so a forbidden command is never offered to the user.

        Raises:
            pydantic.ValidationError: If params do not match ShellParams
            ForbiddenCommandError: If any command classifies as RED
        """
        parsed = ShellParams.model_validate(params)

        required = parsed.needs_approval
        for command in parsed.commands:
            try:
                if self._validator.validate(command):
                    required = True
            except ForbiddenCommandError:
                self._log.shell_forbidden(self.tool_name, command)
                raise

        decision = _decision(required)
        if parsed.needs_approval:
            reason = "agent requested approval"
        else:
            reason = "command safety tier"
        self._log.decision(
            self.tool_name, decision.value, reason, commands=len(parsed.commands)
        )
        return decision

    def needs_approval(self, params: dict[str, Any]) -> bool:
        return self.decide(params).requires_approval
