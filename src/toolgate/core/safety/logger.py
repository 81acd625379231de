"""Audit logging for command classification and validation.

Separates logging logic from business logic; every record carries the command
truncated to a bounded prefix.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import loguru
from loguru import logger

if TYPE_CHECKING:
    from toolgate.core.safety.path_analysis import PathRisk
    from toolgate.core.safety.tiers import ClassificationVerdict, SafetyTier

AUDIT_COMMAND_PREFIX = 200


def truncate_command(command: str, limit: int = AUDIT_COMMAND_PREFIX) -> str:
    """Return the audit-safe prefix of a command."""
    return command[:limit]


class SafetyAuditLogger:
    """Handles all audit logging for the classifier and validator."""

    def __init__(self, logger_instance: loguru.Logger = logger) -> None:
        self._logger = logger_instance

    def classification_started(self, command: str) -> None:
        """Log the start of a classification pass."""
        self._logger.bind(command=truncate_command(command)).debug(
            "Classifying command safety: {}", truncate_command(command)
        )

    def classification_completed(
        self, command: str, verdict: ClassificationVerdict
    ) -> None:
        """Log the folded verdict for a command line."""
        self._logger.bind(
            command=truncate_command(command),
            tier=verdict.tier.value,
            reasons=list(verdict.reasons),
        ).info(
            "Command classification result: {} ({} reasons)",
            verdict.tier.value,
            len(verdict.reasons),
        )

    def parse_failed(self, command: str, error: Exception) -> None:
        """Log a parse failure that degrades to YELLOW."""
        self._logger.bind(command=truncate_command(command), error=str(error)).warning(
            "Failed to parse command, classifying as YELLOW: {}", error
        )

    def path_flagged(self, path: str, risk: PathRisk) -> None:
        """Log a path argument the analyzer did not consider benign."""
        self._logger.bind(
            path=path, tier=risk.tier.value, category=risk.category
        ).debug("Path risk: {} ({})", risk.reason, path)

    def validation_started(self, command: str) -> None:
        """Log a validator call."""
        self._logger.bind(command=truncate_command(command)).debug(
            "Validating command safety"
        )

    def validation_forbidden(self, command: str, reasons: list[str]) -> None:
        """Log a hard block."""
        self._logger.bind(command=truncate_command(command), reasons=reasons).warning(
            "Command validation failed: RED (forbidden)"
        )

    def validation_completed(self, command: str, tier: SafetyTier) -> None:
        """Log the validator outcome for non-RED commands."""
        self._logger.bind(command=truncate_command(command), tier=tier.value).info(
            "Validation result: {}", tier.value
        )
