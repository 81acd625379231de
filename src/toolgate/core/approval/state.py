"""Single-slot approval state machine.

Tracks the one tool call currently waiting for a human decision:

    Empty -> Pending (set_pending)
    Pending -> Empty (clear_pending, caller resumes)
    Pending -> Aborted (abort_pending)
    Aborted -> Empty (consume_aborted, one-shot read)

Each operation holds the lock for a single critical section. Cleanup callbacks
run after the lock is released so they may call back into the state.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
import threading
from typing import Any

from toolgate.core.approval.logger import ApprovalStateLogger

RemoveInterceptor = Callable[[], None]


class ApprovalStateError(RuntimeError):
    """Raised when the approval state machine is driven out of order."""


@dataclass(slots=True)
class PendingApprovalContext:
    """A paused run waiting for a human yes/no.

    ``execution_state`` and ``interruption`` are opaque to this module. The
    emitted ids and recorded arguments let the UI avoid re-rendering tool
    calls across the interruption boundary.
    """

    execution_state: Any
    interruption: Any
    emitted_command_ids: set[str] = field(default_factory=set)
    tool_call_arguments: dict[str, Any] = field(default_factory=dict)
    remove_interceptor: RemoveInterceptor | None = None

    def mark_emitted(self, call_id: str) -> None:
        self.emitted_command_ids.add(call_id)

    def was_emitted(self, call_id: str) -> bool:
        return call_id in self.emitted_command_ids

    def record_arguments(self, call_id: str, arguments: Any) -> None:
        self.tool_call_arguments[call_id] = arguments

    def arguments_for(self, call_id: str) -> Any | None:
        return self.tool_call_arguments.get(call_id)


@dataclass(frozen=True, slots=True)
class AbortedApprovalContext:
    """What remains of a pending approval after it was aborted."""

    execution_state: Any
    interruption: Any
    emitted_command_ids: set[str] = field(default_factory=set)
    tool_call_arguments: dict[str, Any] = field(default_factory=dict)


class ApprovalState:
    """
    Holds at most one pending approval and the last aborted one.

    Instances are constructed explicitly and handed to whoever drives the
    approval flow; there is no module-level state.

    Example:
        state = ApprovalState()
        state.set_pending(PendingApprovalContext(run_state, interruption))
        state.set_pending_remove_interceptor(unsubscribe)

        # Human declined or the prompt timed out
        state.abort_pending()
        aborted = state.consume_aborted()
    """

    def __init__(self, state_logger: ApprovalStateLogger | None = None) -> None:
        self._lock = threading.Lock()
        self._pending: PendingApprovalContext | None = None
        self._aborted: AbortedApprovalContext | None = None
        self._log = state_logger or ApprovalStateLogger()

    @property
    def has_pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def get_pending(self) -> PendingApprovalContext | None:
        """Return the pending context without clearing it."""
        with self._lock:
            return self._pending

    def set_pending(self, context: PendingApprovalContext) -> None:
        """
        Store a new pending approval.

        Args:
            context: The paused run to hold until a decision arrives

        Raises:
            ApprovalStateError: If another approval is already pending
        """
        with self._lock:
            if self._pending is not None:
                self._log.pending_rejected()
                raise ApprovalStateError(
                    "An approval is already pending; resolve or abort it first"
                )
            self._pending = context
        self._log.pending_set(len(context.emitted_command_ids))

    def set_pending_remove_interceptor(
        self, remove_interceptor: RemoveInterceptor | None
    ) -> None:
        """Attach a cleanup callback to the pending approval, if any."""
        if remove_interceptor is None:
            return
        with self._lock:
            if self._pending is None:
                return
            self._pending.remove_interceptor = remove_interceptor
        self._log.interceptor_attached()

    def abort_pending(self) -> bool:
        """
        Move the pending approval into the aborted slot.

        The cleanup callback, when one was attached, runs after the move and
        outside the lock.

        Returns:
            True if an approval was aborted, False if nothing was pending
        """
        with self._lock:
            pending = self._pending
            if pending is not None:
                self._aborted = AbortedApprovalContext(
                    execution_state=pending.execution_state,
                    interruption=pending.interruption,
                    emitted_command_ids=pending.emitted_command_ids,
                    tool_call_arguments=pending.tool_call_arguments,
                )
                self._pending = None

        if pending is None:
            self._log.abort_ignored()
            return False

        cleanup = pending.remove_interceptor
        self._log.pending_aborted(had_interceptor=cleanup is not None)
        if cleanup is not None:
            try:
                cleanup()
            except Exception as e:
                self._log.interceptor_failed(e)
                raise
        return True

    def consume_aborted(self) -> AbortedApprovalContext | None:
        """Return the aborted context once; later calls return None."""
        with self._lock:
            aborted = self._aborted
            self._aborted = None
        if aborted is not None:
            self._log.aborted_consumed()
        return aborted

    def clear_pending(self) -> PendingApprovalContext | None:
        """Take the pending context for the resume path and empty the slot."""
        with self._lock:
            pending = self._pending
            self._pending = None
        if pending is not None:
            self._log.pending_cleared()
        return pending
