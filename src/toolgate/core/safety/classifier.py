"""Shell command classifier.

Parses a command line with bashlex and walks the tree, folding the tier of
every simple command, substitution and redirect into one verdict. Tiers only
ever escalate, so the result is the most restrictive tier seen anywhere.
"""

from __future__ import annotations

from typing import Any

from toolgate.core.safety.constants import ALLOWED_COMMANDS, BLOCKED_COMMANDS
from toolgate.core.safety.handlers.protocol import analyze_redirect
from toolgate.core.safety.handlers.registry import (
    GENERIC_HANDLER,
    get_command_handler,
)
from toolgate.core.safety.logger import SafetyAuditLogger
from toolgate.core.safety.path_analysis import PathRisk, assess_path
from toolgate.core.safety.shell_ast import (
    ShellArgument,
    build_simple_command,
    child_nodes,
    hidden_substitutions,
    parse_command_line,
    substitutions_in,
    word_text,
)
from toolgate.core.safety.tiers import ClassificationVerdict, SafetyTier

# Node kinds whose children are walked without extra checks
_STRUCTURAL_KINDS = frozenset(
    {"list", "pipeline", "compound", "if", "for", "while", "until", "function"}
)


class CommandClassifier:
    """Classifies shell command lines as GREEN, YELLOW or RED."""

    def __init__(
        self,
        workspace_root: str | None = None,
        audit_logger: SafetyAuditLogger | None = None,
    ) -> None:
        self._workspace_root = workspace_root
        self._audit = audit_logger or SafetyAuditLogger()

    @property
    def workspace_root(self) -> str | None:
        return self._workspace_root

    def classify(self, command: str) -> SafetyTier:
        """Return the safety tier for a command line."""
        return self.classify_verdict(command).tier

    def classify_verdict(self, command: str) -> ClassificationVerdict:
        """Return the tier plus the reasons that produced it.

        Never raises for malformed input: anything bashlex cannot parse
        classifies as YELLOW.
        """
        self._audit.classification_started(command)
        verdict = ClassificationVerdict()

        if not command.strip():
            verdict.escalate(SafetyTier.YELLOW, "empty command")
            self._audit.classification_completed(command, verdict)
            return verdict

        try:
            nodes = parse_command_line(command)
        except Exception as e:
            self._audit.parse_failed(command, e)
            verdict.escalate(SafetyTier.YELLOW, "command could not be parsed")
            self._audit.classification_completed(command, verdict)
            return verdict

        for node in nodes:
            self._visit(node, verdict)

        self._audit.classification_completed(command, verdict)
        return verdict

    def _analyze_path(self, path: str | None) -> PathRisk:
        risk = assess_path(path, workspace_root=self._workspace_root)
        if risk.tier is not SafetyTier.GREEN and path:
            self._audit.path_flagged(path, risk)
        return risk

    def _visit(self, node: Any, verdict: ClassificationVerdict) -> None:
        kind = getattr(node, "kind", None)
        if kind == "command":
            self._visit_command(node, verdict)
        elif kind in _STRUCTURAL_KINDS:
            for child in child_nodes(node):
                self._visit(child, verdict)
        elif kind in ("word", "assignment"):
            for inner in substitutions_in(node):
                self._visit(inner, verdict)
            self._visit_hidden(node, verdict)
        elif kind == "redirect":
            self._visit_redirect(node, verdict)

    def _visit_redirect(self, node: Any, verdict: ClassificationVerdict) -> None:
        # Redirects attached to compound commands, e.g. `(ls) > out.txt`
        self._visit_hidden(node, verdict)
        target = getattr(node, "output", None)
        if getattr(target, "kind", None) != "word":
            return
        for inner in substitutions_in(target):
            self._visit(inner, verdict)
        argument = ShellArgument(text=word_text(target), redirect=str(node.type))
        analyze_redirect(verdict, argument, self._analyze_path)

    def _visit_hidden(self, node: Any, verdict: ClassificationVerdict) -> None:
        # Substitutions inside ${...} or heredoc bodies are reparsed from text
        for text in hidden_substitutions(node):
            verdict.escalate(
                SafetyTier.YELLOW, "command substitution inside expansion or heredoc"
            )
            try:
                inner_nodes = parse_command_line(text)
            except Exception as e:
                self._audit.parse_failed(text, e)
                continue
            for inner in inner_nodes:
                self._visit(inner, verdict)

    def _visit_command(self, node: Any, verdict: ClassificationVerdict) -> None:
        command, nested = build_simple_command(node)
        for inner in nested:
            self._visit(inner, verdict)
        for part in getattr(node, "parts", None) or []:
            self._visit_hidden(part, verdict)

        if command.opaque_program:
            verdict.escalate(SafetyTier.YELLOW, "command name is not literal")
            verdict.merge(GENERIC_HANDLER.handle(command, self._analyze_path))
            return
        if command.program is None:
            # Assignment or redirect only
            verdict.merge(GENERIC_HANDLER.handle(command, self._analyze_path))
            return

        name = command.name
        if name in BLOCKED_COMMANDS:
            verdict.escalate(SafetyTier.RED, f"blocked command: {name}")
            return
        if name not in ALLOWED_COMMANDS:
            verdict.escalate(SafetyTier.YELLOW, f"unknown command: {name}")

        handler = get_command_handler(name)
        verdict.merge(handler.handle(command, self._analyze_path))


def classify_command(command: str, *, workspace_root: str | None = None) -> SafetyTier:
    """Classify a command line with a one-off classifier."""
    return CommandClassifier(workspace_root=workspace_root).classify(command)
