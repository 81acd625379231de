from __future__ import annotations

from toolgate.core.safety.handlers.protocol import (
    PathAnalyzer,
    analyze_redirect,
    apply_path_risk,
)
from toolgate.core.safety.shell_ast import SimpleCommand
from toolgate.core.safety.tiers import ClassificationVerdict


class GenericCommandHandler:
    """Fallback handler: every non-flag argument and redirect is a path."""

    def handle(
        self, command: SimpleCommand, analyze_path: PathAnalyzer
    ) -> ClassificationVerdict:
        verdict = ClassificationVerdict()
        for argument in command.arguments:
            if argument.is_redirect:
                analyze_redirect(verdict, argument, analyze_path)
            elif argument.is_flag:
                continue
            else:
                apply_path_risk(verdict, argument, analyze_path)
        return verdict
