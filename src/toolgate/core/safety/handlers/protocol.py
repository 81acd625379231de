"""Command handler protocol and helpers shared by the handler variants."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from toolgate.core.safety.constants import HEREDOC_REDIRECTS
from toolgate.core.safety.path_analysis import PathRisk
from toolgate.core.safety.shell_ast import ShellArgument, SimpleCommand
from toolgate.core.safety.tiers import ClassificationVerdict, SafetyTier

PathAnalyzer = Callable[[str | None], PathRisk]


@runtime_checkable
class CommandHandler(Protocol):
    """
    Protocol for per-program classification refinements.

    A handler receives one simple command (program plus arguments in source
    order) and a path analyzer already bound to the workspace root. It returns
    a fresh verdict; the classifier folds it into the overall result.

    Example:
        class EchoHandler:
            def handle(
                self, command: SimpleCommand, analyze_path: PathAnalyzer
            ) -> ClassificationVerdict:
                verdict = ClassificationVerdict()
                analyze_redirects(command, analyze_path, verdict)
                return verdict
    """

    def handle(
        self, command: SimpleCommand, analyze_path: PathAnalyzer
    ) -> ClassificationVerdict:
        """Classify a single simple command."""
        ...


def apply_path_risk(
    verdict: ClassificationVerdict,
    argument: ShellArgument,
    analyze_path: PathAnalyzer,
    *,
    label: str = "argument",
) -> PathRisk | None:
    """Escalate ``verdict`` with the risk of one path-like argument.

    Opaque arguments are YELLOW without consulting the analyzer.

    Returns:
        The analyzer result, or None for opaque arguments
    """
    if argument.is_opaque:
        verdict.escalate(SafetyTier.YELLOW, f"opaque {label} (substitution)")
        return None
    risk = analyze_path(argument.text)
    verdict.escalate(risk.tier, f"{label} {argument.text}: {risk.reason}")
    return risk


def analyze_redirect(
    verdict: ClassificationVerdict,
    argument: ShellArgument,
    analyze_path: PathAnalyzer,
) -> None:
    """Path-analyze a redirect target; heredoc delimiters are not paths."""
    if argument.redirect in HEREDOC_REDIRECTS:
        return
    apply_path_risk(
        verdict, argument, analyze_path, label=f"redirect {argument.redirect}"
    )


def analyze_redirects(
    command: SimpleCommand,
    analyze_path: PathAnalyzer,
    verdict: ClassificationVerdict,
) -> None:
    for argument in command.redirects:
        analyze_redirect(verdict, argument, analyze_path)
