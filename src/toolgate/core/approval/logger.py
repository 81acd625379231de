"""Logging for the approval state machine."""

from __future__ import annotations

import loguru
from loguru import logger


class ApprovalStateLogger:
    """Handles all logging for ApprovalState with business logic separated."""

    def __init__(self, logger_instance: loguru.Logger = logger) -> None:
        self._logger = logger_instance

    def pending_set(self, emitted_count: int) -> None:
        """Log a new pending approval."""
        self._logger.bind(emitted=emitted_count).debug(
            "Approval pending ({} emitted calls)", emitted_count
        )

    def pending_rejected(self) -> None:
        """Log an attempt to overwrite a pending approval."""
        self._logger.warning("Rejected set_pending: an approval is already pending")

    def interceptor_attached(self) -> None:
        self._logger.debug("Attached remove interceptor to pending approval")

    def pending_aborted(self, had_interceptor: bool) -> None:
        """Log a pending approval moved to the aborted slot."""
        self._logger.bind(had_interceptor=had_interceptor).info(
            "Pending approval aborted (interceptor={})", had_interceptor
        )

    def abort_ignored(self) -> None:
        self._logger.debug("abort_pending called with nothing pending")

    def interceptor_failed(self, error: Exception) -> None:
        """Log a cleanup callback that raised after an abort."""
        self._logger.exception("Remove interceptor failed after abort: {}", error)

    def aborted_consumed(self) -> None:
        self._logger.debug("Aborted approval context consumed")

    def pending_cleared(self) -> None:
        """Log the resume path."""
        self._logger.info("Pending approval cleared for resume")
