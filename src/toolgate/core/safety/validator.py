from __future__ import annotations

from toolgate.core.safety.classifier import CommandClassifier
from toolgate.core.safety.errors import EmptyCommandError, ForbiddenCommandError
from toolgate.core.safety.logger import SafetyAuditLogger
from toolgate.core.safety.tiers import SafetyTier


class SafetyValidator:
    """Turns a classification into an approval decision.

    ``validate`` returns True when the command needs human approval (YELLOW),
    False when it may run unattended (GREEN) and raises for RED.
    """

    def __init__(
        self,
        classifier: CommandClassifier | None = None,
        audit_logger: SafetyAuditLogger | None = None,
    ) -> None:
        self._audit = audit_logger or SafetyAuditLogger()
        self._classifier = classifier or CommandClassifier(audit_logger=self._audit)

    def validate(self, command: object) -> bool:
        """Decide whether ``command`` requires approval.

        Args:
            command: Shell command line

        Returns:
            True if approval is required, False if the command is auto-approved

        Raises:
            EmptyCommandError: If the command is not a string or is blank
            ForbiddenCommandError: If the command classifies as RED
        """
        if not isinstance(command, str) or not command.strip():
            raise EmptyCommandError("Command must be a non-empty string")

        self._audit.validation_started(command)
        verdict = self._classifier.classify_verdict(command)

        if verdict.tier is SafetyTier.RED:
            self._audit.validation_forbidden(command, verdict.reasons)
            raise ForbiddenCommandError(command, verdict.reasons)

        self._audit.validation_completed(command, verdict.tier)
        return verdict.tier is SafetyTier.YELLOW


def validate_command_safety(
    command: object, *, workspace_root: str | None = None
) -> bool:
    """Validate a command with a one-off validator."""
    classifier = CommandClassifier(workspace_root=workspace_root)
    return SafetyValidator(classifier=classifier).validate(command)
