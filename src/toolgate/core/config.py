from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

LOG_LEVELS = frozenset(
    {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}
)

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"", "0", "false", "no", "off"})


@dataclass(frozen=True, slots=True)
class GateConfig:
    """Safety gate configuration loaded at process startup."""

    workspace_root: str
    edit_mode: bool = False
    log_level: str = "INFO"


def _parse_bool(name: str, default: str) -> bool:
    value = os.environ.get(name, default).strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be one of: 1, true, yes, on, 0, false, no, off")


def load_gate_config_from_env() -> GateConfig:
    """Load gate config from env and validate it."""
    root_value = os.environ.get("TOOLGATE_WORKSPACE_ROOT", "").strip()
    workspace_root = Path(root_value) if root_value else Path.cwd()
    if not workspace_root.is_absolute():
        workspace_root = workspace_root.resolve()
    if workspace_root.exists() and not workspace_root.is_dir():
        raise ValueError("TOOLGATE_WORKSPACE_ROOT must point to a directory")

    edit_mode = _parse_bool("TOOLGATE_EDIT_MODE", "false")

    log_level = os.environ.get("TOOLGATE_LOG_LEVEL", "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(
            "TOOLGATE_LOG_LEVEL must be one of: " + ", ".join(sorted(LOG_LEVELS))
        )

    return GateConfig(
        workspace_root=str(workspace_root),
        edit_mode=edit_mode,
        log_level=log_level,
    )
