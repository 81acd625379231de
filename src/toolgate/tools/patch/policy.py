"""Approval policies for file-writing tools."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, Literal

from agents import apply_diff
from pydantic import BaseModel, Field

from toolgate.core.config import GateConfig
from toolgate.tools.logger import PolicyLogger
from toolgate.tools.protocol import ApprovalDecision
from toolgate.tools.workspace import OutsideWorkspaceError, resolve_workspace_path

PatchOperation = Literal["create_file", "update_file", "delete_file"]
DiffMode = Literal["default", "create"]
DiffApplier = Callable[[str, str, DiffMode], str]

_EDIT_OPERATIONS = frozenset({"create_file", "update_file"})


class ApplyPatchParams(BaseModel):
    type: PatchOperation = Field(..., description="Patch operation")
    path: str = Field(..., description="Target file, relative to the workspace")
    diff: str = Field("", description="V4A diff (unused for deletions)")


class CreateFileParams(BaseModel):
    path: str = Field(..., description="File to create, relative to the workspace")
    content: str = Field("", description="Full file contents")


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


class ApplyPatchApprovalPolicy:
    """
    Approval hook for the ``apply_patch`` tool.

    Decision order:
    1. Deletions always require approval.
    2. Targets outside the workspace require approval. This runs before the
       dry run, so an escaping path needs approval even when its diff is
       malformed.
    3. A diff that fails its dry run with ``agents.apply_diff`` is let
       through without a prompt; the tool's execute step reports the failure
       to the agent.
    4. In edit mode, creates and updates inside the workspace run unattended.
    5. Everything else requires approval, including unexpected errors.
    """

    def __init__(
        self,
        workspace_root: str | Path,
        *,
        edit_mode: bool = False,
        diff_applier: DiffApplier = apply_diff,
        read_text: Callable[[Path], str] = _read_text,
        policy_logger: PolicyLogger | None = None,
    ) -> None:
        self.workspace_root = Path(workspace_root)
        self.edit_mode = edit_mode
        self._apply = diff_applier
        self._read_text = read_text
        self._log = policy_logger or PolicyLogger()

    @classmethod
    def from_config(cls, config: GateConfig) -> ApplyPatchApprovalPolicy:
        return cls(config.workspace_root, edit_mode=config.edit_mode)

    @property
    def tool_name(self) -> str:
        return "apply_patch"

    def decide(self, params: dict[str, Any]) -> ApprovalDecision:
        try:
            return self._decide(params)
        except Exception as e:
            self._log.policy_error(self.tool_name, e)
            return ApprovalDecision.APPROVAL_REQUIRED

    def needs_approval(self, params: dict[str, Any]) -> bool:
        return self.decide(params).requires_approval

    def _decide(self, params: dict[str, Any]) -> ApprovalDecision:
        parsed = ApplyPatchParams.model_validate(params)
        operation, path = parsed.type, parsed.path

        if operation == "delete_file":
            return self._required("deletion always requires approval", operation, path)

        try:
            target = resolve_workspace_path(path, self.workspace_root)
        except OutsideWorkspaceError:
            return self._required("outside workspace", operation, path)

        try:
            self._dry_run(operation, target, parsed.diff)
        except (ValueError, OSError) as e:
            self._log.patch_validation_failed(operation, path, e)
            return ApprovalDecision.NO_APPROVAL_NEEDED
        self._log.patch_validation_passed(operation, path)

        inside = target != self.workspace_root.resolve()
        if self.edit_mode and inside and operation in _EDIT_OPERATIONS:
            self._log.decision(
                self.tool_name,
                ApprovalDecision.NO_APPROVAL_NEEDED.value,
                "auto-approved in edit mode",
                type=operation,
                path=path,
            )
            return ApprovalDecision.NO_APPROVAL_NEEDED

        return self._required("approval required", operation, path)

    def _dry_run(self, operation: str, target: Path, diff: str) -> None:
        if operation == "create_file":
            self._apply("", diff, "create")
        else:
            self._apply(self._read_text(target), diff, "default")

    def _required(self, reason: str, operation: str, path: str) -> ApprovalDecision:
        decision = ApprovalDecision.APPROVAL_REQUIRED
        self._log.decision(
            self.tool_name,
            decision.value,
            reason,
            type=operation,
            path=path,
            edit_mode=self.edit_mode,
        )
        return decision


class CreateFileApprovalPolicy:
    """Approval hook for the ``create_file`` tool."""

    def __init__(
        self,
        workspace_root: str | Path,
        *,
        edit_mode: bool = False,
        policy_logger: PolicyLogger | None = None,
    ) -> None:
        self.workspace_root = Path(workspace_root)
        self.edit_mode = edit_mode
        self._log = policy_logger or PolicyLogger()

    @classmethod
    def from_config(cls, config: GateConfig) -> CreateFileApprovalPolicy:
        return cls(config.workspace_root, edit_mode=config.edit_mode)

    @property
    def tool_name(self) -> str:
        return "create_file"

    def decide(self, params: dict[str, Any]) -> ApprovalDecision:
        """Auto-approve only edit-mode writes that stay inside the workspace."""
        try:
            parsed = CreateFileParams.model_validate(params)
            target = resolve_workspace_path(parsed.path, self.workspace_root)
        except OutsideWorkspaceError:
            decision = ApprovalDecision.APPROVAL_REQUIRED
            self._log.decision(self.tool_name, decision.value, "outside workspace")
            return decision
        except Exception as e:
            self._log.policy_error(self.tool_name, e)
            return ApprovalDecision.APPROVAL_REQUIRED

        inside = target != self.workspace_root.resolve()
        if self.edit_mode and inside:
            decision = ApprovalDecision.NO_APPROVAL_NEEDED
            reason = "auto-approved in edit mode"
        else:
            decision = ApprovalDecision.APPROVAL_REQUIRED
            reason = "approval required"
        self._log.decision(
            self.tool_name, decision.value, reason, path=parsed.path
        )
        return decision

    def needs_approval(self, params: dict[str, Any]) -> bool:
        return self.decide(params).requires_approval
