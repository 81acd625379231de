"""Approval policy protocol shared by every gated tool."""

from __future__ import annotations

import enum
from typing import Any, Protocol, runtime_checkable


class ApprovalDecision(enum.Enum):
    """Outcome of a tool's pre-execution approval hook."""

    NO_APPROVAL_NEEDED = "no_approval_needed"
    APPROVAL_REQUIRED = "approval_required"

    @property
    def requires_approval(self) -> bool:
        return self is ApprovalDecision.APPROVAL_REQUIRED


@runtime_checkable
class ApprovalPolicy(Protocol):
    """
    Protocol for deciding whether a tool call needs a human decision.

    Policies are consulted after the agent proposes a call and before the
    tool executes. They never execute the tool themselves.

    Example:
        class ReadFilePolicy:
            @property
            def tool_name(self) -> str:
                return "read_file"

            def decide(self, params: dict[str, Any]) -> ApprovalDecision:
                return ApprovalDecision.NO_APPROVAL_NEEDED

            def needs_approval(self, params: dict[str, Any]) -> bool:
                return self.decide(params).requires_approval
    """

    @property
    def tool_name(self) -> str:
        """Name of the tool this policy gates (e.g., 'apply_patch')."""
        ...

    def decide(self, params: dict[str, Any]) -> ApprovalDecision:
        """
        Decide whether the proposed call needs approval.

        Args:
            params: Raw tool call arguments as proposed by the agent

        Returns:
            ApprovalDecision for this call
        """
        ...

    def needs_approval(self, params: dict[str, Any]) -> bool:
        """Boolean form of ``decide`` for tool frameworks that expect one."""
        ...
