"""find refinement.

Three passes over the arguments, in order:

1. Dangerous execution: ``-delete`` or an execution clause that can modify
   files, spawn a process, or smuggle shell syntax. Any hit is RED.
2. Suspicious flags: the first of file output, symlink following, SUID/SGID
   permission searches, inode lookups or a read-only execution clause is
   YELLOW.
3. Search roots and other path arguments go through the path analyzer, with
   system directories relaxed to YELLOW since searching them is read-only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import posixpath

from toolgate.core.safety.constants import (
    FIND_DESTRUCTIVE_PROGRAMS,
    FIND_EXEC_FLAGS,
    FIND_EXEC_TERMINATORS,
    FIND_FILE_OUTPUT_FLAGS,
    FIND_GLOB_CHARACTERS,
    FIND_PATTERN_FLAGS,
    FIND_SPAWNING_PROGRAMS,
    FIND_SUID_NUMERIC,
    FIND_SUID_SYMBOLIC,
    FIND_SYMLINK_FLAGS,
    SENSITIVE_HOME_ENTRIES,
    SHELL_METACHARACTERS,
)
from toolgate.core.safety.handlers.protocol import PathAnalyzer, analyze_redirect
from toolgate.core.safety.shell_ast import ShellArgument, SimpleCommand
from toolgate.core.safety.tiers import ClassificationVerdict, SafetyTier


@dataclass(slots=True)
class ExecClause:
    """An ``-exec``-style clause: flag position, body and terminator position."""

    flag: str
    start: int
    body: list[ShellArgument] = field(default_factory=list)
    end: int | None = None

    @property
    def terminated(self) -> bool:
        return self.end is not None

    def covers(self, index: int) -> bool:
        stop = self.end if self.end is not None else float("inf")
        return self.start <= index <= stop


def collect_exec_clauses(arguments: tuple[ShellArgument, ...]) -> list[ExecClause]:
    """Split out every execution clause, including unterminated ones."""
    clauses: list[ExecClause] = []
    index = 0
    while index < len(arguments):
        argument = arguments[index]
        if argument.is_redirect or argument.text not in FIND_EXEC_FLAGS:
            index += 1
            continue

        clause = ExecClause(flag=argument.text or "", start=index)
        index += 1
        while index < len(arguments):
            current = arguments[index]
            if not current.is_redirect and current.text in FIND_EXEC_TERMINATORS:
                clause.end = index
                break
            clause.body.append(current)
            index += 1
        clauses.append(clause)
        index += 1
    return clauses


def _is_spawning_program(program: str) -> bool:
    name = posixpath.basename(program) or program
    return name in FIND_SPAWNING_PROGRAMS


def dangerous_clause_reason(clause: ExecClause) -> str | None:
    """Return why an execution clause is forbidden, or None if read-only."""
    if not clause.terminated:
        return f"find {clause.flag} without terminator"
    if not clause.body:
        return f"find {clause.flag} with empty command"
    if any(argument.is_redirect for argument in clause.body):
        return f"find {clause.flag} with redirection"
    if any(argument.is_opaque for argument in clause.body):
        return f"find {clause.flag} with command substitution"

    program = clause.body[0].text or ""
    if program == "{}":
        return f"find {clause.flag} runs matched files"
    if (posixpath.basename(program) or program) in FIND_DESTRUCTIVE_PROGRAMS:
        return f"find {clause.flag} {program} (destructive)"
    if _is_spawning_program(program):
        return f"find {clause.flag} {program} (spawns arbitrary code)"

    for argument in clause.body:
        if argument.text and SHELL_METACHARACTERS.search(argument.text):
            return f"find {clause.flag} with shell metacharacters: {argument.text}"
    return None


def dangerous_execution_reason(
    arguments: tuple[ShellArgument, ...], clauses: list[ExecClause]
) -> str | None:
    if any(
        not argument.is_redirect and argument.text == "-delete"
        for argument in arguments
    ):
        return "find -delete"
    for clause in clauses:
        reason = dangerous_clause_reason(clause)
        if reason is not None:
            return reason
    return None


def suspicious_flag_reason(words: list[ShellArgument]) -> str | None:
    """Return the reason for the first suspicious flag, if any."""
    for index, argument in enumerate(words):
        text = argument.text
        if not text:
            continue
        if text.startswith(FIND_FILE_OUTPUT_FLAGS):
            return f"find {text} (file output)"
        if text in FIND_SYMLINK_FLAGS:
            return f"find {text} (symlink following)"
        if text == "-perm" and index + 1 < len(words):
            value = words[index + 1].text
            if value and (
                FIND_SUID_NUMERIC.search(value) or FIND_SUID_SYMBOLIC.search(value)
            ):
                return f"find -perm {value} (SUID/SGID search)"
        if text == "-inum":
            return "find -inum (inode lookup bypasses path checks)"
        if text in FIND_EXEC_FLAGS:
            return f"find {text} (command execution)"
    return None


def _skip_as_path(text: str) -> bool:
    if text in (".", "./"):
        return True
    if FIND_GLOB_CHARACTERS.search(text):
        return True
    # Regex-like tokens
    return "\\" in text


def _names_sensitive_dotfile(text: str) -> bool:
    return any(
        text.endswith(entry) or entry + "/" in text for entry in SENSITIVE_HOME_ENTRIES
    )


class FindCommandHandler:
    """Classifies find invocations."""

    def handle(
        self, command: SimpleCommand, analyze_path: PathAnalyzer
    ) -> ClassificationVerdict:
        verdict = ClassificationVerdict()
        arguments = command.arguments
        clauses = collect_exec_clauses(arguments)

        reason = dangerous_execution_reason(arguments, clauses)
        if reason is not None:
            verdict.escalate(SafetyTier.RED, reason)
            return verdict

        reason = suspicious_flag_reason(command.words)
        if reason is not None:
            verdict.escalate(SafetyTier.YELLOW, reason)

        self._analyze_paths(arguments, clauses, analyze_path, verdict)
        return verdict

    def _analyze_paths(
        self,
        arguments: tuple[ShellArgument, ...],
        clauses: list[ExecClause],
        analyze_path: PathAnalyzer,
        verdict: ClassificationVerdict,
    ) -> None:
        skip_next = False
        for index, argument in enumerate(arguments):
            if any(clause.covers(index) for clause in clauses):
                continue
            if argument.is_redirect:
                analyze_redirect(verdict, argument, analyze_path)
                continue
            if skip_next:
                skip_next = False
                if not argument.is_opaque:
                    continue
            if argument.is_opaque:
                verdict.escalate(SafetyTier.YELLOW, "opaque find argument")
                continue

            text = argument.text or ""
            if text.startswith("-"):
                skip_next = text in FIND_PATTERN_FLAGS
                continue
            if _skip_as_path(text):
                continue
            if text in ("/", "//"):
                verdict.escalate(SafetyTier.YELLOW, "find from filesystem root")
                continue

            risk = analyze_path(text)
            if (
                risk.category == "system"
                and risk.tier is SafetyTier.RED
                and not _names_sensitive_dotfile(text)
            ):
                verdict.escalate(SafetyTier.YELLOW, f"find in system path {text}")
            else:
                verdict.escalate(risk.tier, f"find path {text}: {risk.reason}")
