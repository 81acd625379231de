"""Path risk analysis shared by every command handler.

The analyzer is a pure function of its input. Rules live in ``PATH_RULES`` and
are evaluated top to bottom; the first rule that returns a ``PathRisk`` wins,
so precedence between the tiers is exactly the order of that tuple.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import posixpath

from toolgate.core.safety.constants import (
    ABSOLUTE_HOME_DOTFILE,
    HOME_PATTERNS,
    HOME_PREFIX,
    SAFE_DEVICES,
    SAFE_JSON_FILES,
    SENSITIVE_EXTENSIONS,
    SENSITIVE_HOME_ENTRIES,
    SENSITIVE_STORES,
    SUSPICIOUS_JSON_PATTERNS,
    SYSTEM_PATHS,
)
from toolgate.core.safety.tiers import SafetyTier

__all__ = [
    "PATH_RULES",
    "PathCandidate",
    "PathRisk",
    "PathRule",
    "analyze_path_risk",
    "assess_path",
]


@dataclass(frozen=True, slots=True)
class PathRisk:
    """Outcome of analyzing one path-like argument."""

    tier: SafetyTier
    category: str
    reason: str = ""


BENIGN = PathRisk(SafetyTier.GREEN, "benign")


@dataclass(frozen=True, slots=True)
class PathCandidate:
    """A trimmed argument plus the facts every rule needs."""

    text: str
    workspace_root: str | None

    @property
    def is_absolute(self) -> bool:
        return self.text.startswith("/")

    @property
    def basename(self) -> str:
        return posixpath.basename(self.text.rstrip("/")) or self.text

    @property
    def segments(self) -> list[str]:
        return [segment for segment in self.text.split("/") if segment]

    @property
    def within_workspace(self) -> bool:
        if not self.is_absolute or not self.workspace_root:
            return False
        root = posixpath.normpath(self.workspace_root)
        normalized = posixpath.normpath(self.text)
        return normalized == root or normalized.startswith(root.rstrip("/") + "/")


@dataclass(frozen=True, slots=True)
class PathRule:
    """A named check returning a ``PathRisk`` or None to fall through."""

    name: str
    check: Callable[[PathCandidate], PathRisk | None]


def _is_credential_json(filename: str) -> bool:
    return filename.lower().endswith(".json") and any(
        pattern.match(filename) for pattern in SUSPICIOUS_JSON_PATTERNS
    )


def _safe_device(candidate: PathCandidate) -> PathRisk | None:
    if candidate.text in SAFE_DEVICES:
        return PathRisk(SafetyTier.GREEN, "safe_device")
    return None


def _home_directory(candidate: PathCandidate) -> PathRisk | None:
    if candidate.within_workspace:
        return None
    if not any(pattern.match(candidate.text) for pattern in HOME_PATTERNS):
        return None

    below_home = HOME_PREFIX.sub("", candidate.text, count=1)
    if below_home in ("", "/"):
        return PathRisk(SafetyTier.RED, "home", "home directory access")

    if below_home.startswith("/.") or any(
        entry in below_home for entry in SENSITIVE_HOME_ENTRIES
    ):
        return PathRisk(SafetyTier.RED, "home", "home dotfile or config")

    filename = candidate.basename
    if _is_credential_json(filename):
        return PathRisk(
            SafetyTier.RED, "home", "credential-shaped JSON in home directory"
        )
    if filename.endswith(SENSITIVE_EXTENSIONS):
        return PathRisk(SafetyTier.RED, "home", "sensitive file in home directory")
    return None


def _sensitive_store(candidate: PathCandidate) -> PathRisk | None:
    if any(segment in SENSITIVE_STORES for segment in candidate.segments):
        return PathRisk(SafetyTier.RED, "sensitive_store", "credential store")
    if "/.gitconfig" in candidate.text or candidate.text == ".gitconfig":
        return PathRisk(SafetyTier.RED, "sensitive_store", "git credentials config")
    return None


def _traversal(candidate: PathCandidate) -> PathRisk | None:
    if candidate.text in ("/", "//"):
        return PathRisk(SafetyTier.RED, "traversal", "filesystem root")
    if ".." in candidate.text.split("/"):
        return PathRisk(SafetyTier.RED, "traversal", "directory traversal")
    return None


def _system_directory(candidate: PathCandidate) -> PathRisk | None:
    if not candidate.is_absolute:
        return None
    for system_path in SYSTEM_PATHS:
        if candidate.text == system_path or candidate.text.startswith(
            system_path + "/"
        ):
            return PathRisk(SafetyTier.RED, "system", "absolute system path")
    return None


def _absolute_home_dotfile(candidate: PathCandidate) -> PathRisk | None:
    if candidate.within_workspace:
        return None
    if ABSOLUTE_HOME_DOTFILE.match(candidate.text):
        return PathRisk(SafetyTier.RED, "home", "absolute home dotfile")
    return None


def _outside_workspace(candidate: PathCandidate) -> PathRisk | None:
    if candidate.is_absolute and not candidate.within_workspace:
        return PathRisk(
            SafetyTier.YELLOW, "outside_workspace", "absolute path outside workspace"
        )
    return None


def _json_file(candidate: PathCandidate) -> PathRisk | None:
    filename = candidate.basename
    if not filename.lower().endswith(".json"):
        return None
    if filename.lower() in SAFE_JSON_FILES:
        return BENIGN
    if _is_credential_json(filename):
        return PathRisk(
            SafetyTier.YELLOW, "credential_json", "credential-shaped JSON filename"
        )
    return BENIGN


def _hidden_file(candidate: PathCandidate) -> PathRisk | None:
    if candidate.basename.startswith(".") and candidate.basename not in (".", ".."):
        return PathRisk(SafetyTier.YELLOW, "hidden", "hidden file")
    return None


def _sensitive_extension(candidate: PathCandidate) -> PathRisk | None:
    if candidate.basename.endswith(SENSITIVE_EXTENSIONS):
        return PathRisk(
            SafetyTier.YELLOW, "sensitive_extension", "sensitive file extension"
        )
    return None


PATH_RULES: tuple[PathRule, ...] = (
    PathRule("safe_device", _safe_device),
    PathRule("home", _home_directory),
    PathRule("sensitive_store", _sensitive_store),
    PathRule("traversal", _traversal),
    PathRule("system", _system_directory),
    PathRule("absolute_home_dotfile", _absolute_home_dotfile),
    PathRule("outside_workspace", _outside_workspace),
    PathRule("json", _json_file),
    PathRule("hidden", _hidden_file),
    PathRule("sensitive_extension", _sensitive_extension),
)


def assess_path(path: str | None, *, workspace_root: str | None = None) -> PathRisk:
    """Classify a path-like argument and report which rule decided it.

    Args:
        path: Literal path, glob, redirect target, or opaque token
        workspace_root: Absolute project root; absolute paths below it are
            treated like relative ones

    Returns:
        PathRisk with tier, rule category and a short reason
    """
    text = (path or "").strip()
    if not text:
        return BENIGN

    candidate = PathCandidate(text=text, workspace_root=workspace_root)
    for rule in PATH_RULES:
        risk = rule.check(candidate)
        if risk is not None:
            return risk
    return BENIGN


def analyze_path_risk(
    path: str | None, *, workspace_root: str | None = None
) -> SafetyTier:
    """Return only the tier for a path-like argument."""
    return assess_path(path, workspace_root=workspace_root).tier
