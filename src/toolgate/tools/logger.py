"""Logging for tool approval policies."""

from __future__ import annotations

import loguru
from loguru import logger

from toolgate.core.safety.logger import truncate_command


class PolicyLogger:
    """Handles all logging for tool approval policies."""

    def __init__(self, logger_instance: loguru.Logger = logger) -> None:
        self._logger = logger_instance

    def decision(
        self, tool_name: str, decision: str, reason: str, **fields: object
    ) -> None:
        """Log an approval decision with its reason."""
        self._logger.bind(tool=tool_name, decision=decision, **fields).info(
            "{} needs_approval: {} ({})", tool_name, decision, reason
        )

    def unknown_tool(self, tool_name: str) -> None:
        """Log a lookup for a tool without a registered policy."""
        self._logger.bind(tool=tool_name).warning(
            "No approval policy registered for {}, requiring approval", tool_name
        )

    def shell_forbidden(self, tool_name: str, command: str) -> None:
        """Log a forbidden shell command before the error propagates."""
        self._logger.bind(tool=tool_name, command=truncate_command(command)).warning(
            "{} rejected forbidden command", tool_name
        )

    def patch_validation_passed(self, operation: str, path: str) -> None:
        self._logger.bind(type=operation, path=path).info(
            "apply_patch validation passed for {}", path
        )

    def patch_validation_failed(
        self, operation: str, path: str, error: Exception
    ) -> None:
        """Log a diff dry-run failure that is left for execution to report."""
        self._logger.bind(type=operation, path=path, error=str(error)).error(
            "apply_patch validation failed, will fail in execute: {}", error
        )

    def policy_error(self, tool_name: str, error: Exception) -> None:
        """Log an unexpected policy error; the call falls back to approval."""
        self._logger.bind(tool=tool_name).exception(
            "{} needs_approval error: {}", tool_name, error
        )
