"""Workspace path resolution for file-writing tools."""

from __future__ import annotations

from pathlib import Path


class OutsideWorkspaceError(ValueError):
    """Raised when a tool path resolves outside the workspace root."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Operation outside workspace: {path}")


def is_within(path: Path, root: Path) -> bool:
    """Check if ``path`` equals ``root`` or sits below it."""
    return path == root or root in path.parents


def resolve_workspace_path(path: str, base_dir: str | Path) -> Path:
    """Resolve a tool path against the workspace root.

    Relative paths are joined to ``base_dir``; absolute paths are normalized
    as given. Symlinks are resolved on both sides.

    Args:
        path: Path supplied by the agent
        base_dir: Workspace root

    Returns:
        The resolved absolute path

    Raises:
        OutsideWorkspaceError: If the resolved path leaves ``base_dir``
    """
    root = Path(base_dir).resolve()
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = root / candidate
    resolved = candidate.resolve()

    if not is_within(resolved, root):
        raise OutsideWorkspaceError(path)
    return resolved
