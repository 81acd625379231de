"""Central registry for tool approval policies."""

from __future__ import annotations

from typing import Any

from toolgate.tools.logger import PolicyLogger
from toolgate.tools.protocol import ApprovalDecision, ApprovalPolicy


class PolicyRegistry:
    """
    Registry for approval policies keyed by tool name.

    Tools without a registered policy always require approval.

    Example:
        config = load_gate_config_from_env()
        registry = PolicyRegistry()
        registry.register(BashApprovalPolicy.from_config(config))
        registry.register(ApplyPatchApprovalPolicy.from_config(config))

        if registry.needs_approval("bash", {"command": "ls"}):
            ...
    """

    def __init__(self, policy_logger: PolicyLogger | None = None) -> None:
        """Initialize empty registry."""
        self._policies: dict[str, ApprovalPolicy] = {}
        self._log = policy_logger or PolicyLogger()

    def register(self, policy: ApprovalPolicy) -> None:
        """
        Register a policy instance.

        Args:
            policy: Policy to register

        Raises:
            ValueError: If a policy for the same tool is already registered
        """
        if policy.tool_name in self._policies:
            raise ValueError(
                f"Policy for tool '{policy.tool_name}' already registered"
            )
        self._policies[policy.tool_name] = policy

    def get(self, tool_name: str) -> ApprovalPolicy | None:
        return self._policies.get(tool_name)

    def all(self) -> list[ApprovalPolicy]:
        return list(self._policies.values())

    def decide(self, tool_name: str, params: dict[str, Any]) -> ApprovalDecision:
        """
        Decide whether a proposed tool call needs approval.

        Args:
            tool_name: Tool the agent wants to call
            params: Proposed arguments

        Returns:
            The registered policy's decision, or APPROVAL_REQUIRED for tools
            without a policy

        Raises:
            ForbiddenCommandError: Propagated from shell policies
        """
        policy = self.get(tool_name)
        if policy is None:
            self._log.unknown_tool(tool_name)
            return ApprovalDecision.APPROVAL_REQUIRED
        return policy.decide(params)

    def needs_approval(self, tool_name: str, params: dict[str, Any]) -> bool:
        return self.decide(tool_name, params).requires_approval

    def __len__(self) -> int:
        """Return number of registered policies."""
        return len(self._policies)

    def __contains__(self, tool_name: str) -> bool:
        """Check if a policy is registered for the tool."""
        return tool_name in self._policies
