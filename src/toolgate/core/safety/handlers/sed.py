from __future__ import annotations

import re

from toolgate.core.safety.constants import (
    OUTPUT_REDIRECTS,
    SED_SCRIPT_FILE_FLAGS,
    SED_SCRIPT_FLAGS,
)
from toolgate.core.safety.handlers.protocol import (
    PathAnalyzer,
    analyze_redirect,
    apply_path_risk,
)
from toolgate.core.safety.shell_ast import ShellArgument, SimpleCommand
from toolgate.core.safety.tiers import ClassificationVerdict, SafetyTier

# -i, -i.bak, -Ei and --in-place[=SUFFIX]
IN_PLACE_FLAG = re.compile(r"^(-[A-Za-z]*i|--in-place)")


def is_in_place_flag(text: str) -> bool:
    return bool(IN_PLACE_FLAG.match(text))


def _split_long_option(text: str) -> tuple[str, str | None]:
    if text.startswith("--") and "=" in text:
        name, _, value = text.partition("=")
        return name, value
    return text, None


class SedCommandHandler:
    """Rejects in-place edits and audits sed output and input files."""

    def handle(
        self, command: SimpleCommand, analyze_path: PathAnalyzer
    ) -> ClassificationVerdict:
        verdict = ClassificationVerdict()

        for argument in command.arguments:
            if argument.text is not None and not argument.is_redirect:
                if is_in_place_flag(argument.text):
                    verdict.escalate(
                        SafetyTier.RED, f"sed in-place edit: {argument.text}"
                    )
                    return verdict

        for argument in command.redirects:
            if argument.redirect in OUTPUT_REDIRECTS:
                verdict.escalate(
                    SafetyTier.YELLOW, f"sed output redirect {argument.redirect}"
                )
            analyze_redirect(verdict, argument, analyze_path)

        self._analyze_words(command.words, analyze_path, verdict)
        return verdict

    def _analyze_words(
        self,
        words: list[ShellArgument],
        analyze_path: PathAnalyzer,
        verdict: ClassificationVerdict,
    ) -> None:
        script_given = False
        pending: str | None = None

        for argument in words:
            if pending is not None:
                # Value of -e (script text) or -f (script file)
                if pending in SED_SCRIPT_FILE_FLAGS:
                    apply_path_risk(
                        verdict, argument, analyze_path, label="sed script file"
                    )
                elif argument.is_opaque:
                    verdict.escalate(SafetyTier.YELLOW, "opaque sed script")
                pending = None
                continue

            if argument.is_flag:
                name, value = _split_long_option(argument.text or "")
                if name in SED_SCRIPT_FLAGS:
                    script_given = True
                    if value is None:
                        pending = name
                elif name in SED_SCRIPT_FILE_FLAGS:
                    script_given = True
                    if value is None:
                        pending = name
                    else:
                        apply_path_risk(
                            verdict,
                            ShellArgument(text=value),
                            analyze_path,
                            label="sed script file",
                        )
                continue

            if not script_given:
                script_given = True
                if argument.is_opaque:
                    verdict.escalate(SafetyTier.YELLOW, "opaque sed script")
                continue

            apply_path_risk(verdict, argument, analyze_path, label="sed input")
