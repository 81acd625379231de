"""git refinement: read-only subcommands are GREEN, everything else needs approval."""

from __future__ import annotations

from toolgate.core.safety.constants import (
    GIT_DANGEROUS_FLAG_PREFIXES,
    READ_ONLY_GIT_COMMANDS,
    WRITE_GIT_COMMANDS,
)
from toolgate.core.safety.handlers.protocol import PathAnalyzer, analyze_redirects
from toolgate.core.safety.shell_ast import ShellArgument, SimpleCommand
from toolgate.core.safety.tiers import ClassificationVerdict, SafetyTier


def _find_subcommand(words: list[ShellArgument]) -> ShellArgument | None:
    for argument in words:
        if not argument.is_flag:
            return argument
    return None


def _dangerous_flag(words: list[ShellArgument]) -> str | None:
    for argument in words:
        if argument.text is not None and argument.text.startswith(
            GIT_DANGEROUS_FLAG_PREFIXES
        ):
            return argument.text
    return None


class GitCommandHandler:
    """Classifies git invocations by subcommand."""

    def handle(
        self, command: SimpleCommand, analyze_path: PathAnalyzer
    ) -> ClassificationVerdict:
        verdict = ClassificationVerdict()
        analyze_redirects(command, analyze_path, verdict)

        words = command.words
        subcommand = _find_subcommand(words)
        if subcommand is None:
            verdict.escalate(SafetyTier.YELLOW, "git without subcommand")
            return verdict
        if subcommand.is_opaque:
            verdict.escalate(SafetyTier.YELLOW, "git subcommand is not literal")
            return verdict

        name = subcommand.text
        if name in WRITE_GIT_COMMANDS:
            verdict.escalate(SafetyTier.YELLOW, f"git {name} (write operation)")
        elif name in READ_ONLY_GIT_COMMANDS:
            flag = _dangerous_flag(words)
            if flag is not None:
                verdict.escalate(
                    SafetyTier.YELLOW, f"git {name} with dangerous flag {flag}"
                )
        else:
            verdict.escalate(SafetyTier.YELLOW, f"git {name} (unknown subcommand)")
        return verdict
