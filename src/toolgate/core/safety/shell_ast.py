"""Helpers turning bashlex syntax trees into handler-friendly commands."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
import posixpath
from typing import Any

import bashlex

__all__ = [
    "ShellArgument",
    "SimpleCommand",
    "build_simple_command",
    "child_nodes",
    "embedded_commands",
    "hidden_substitutions",
    "parse_command_line",
    "substitutions_in",
    "word_text",
]

SUBSTITUTION_KINDS = frozenset({"commandsubstitution", "processsubstitution"})

# Heredoc operators whose body bash expands when the delimiter is unquoted
EXPANDING_HEREDOCS = frozenset({"<<", "<<-"})


@dataclass(frozen=True, slots=True)
class ShellArgument:
    """One argument of a simple command, in source order.

    ``text`` is None when the word holds a substitution that cannot be
    flattened into literal text. Redirects carry their operator in
    ``redirect`` and their target in ``text``.
    """

    text: str | None
    redirect: str | None = None

    @property
    def is_redirect(self) -> bool:
        return self.redirect is not None

    @property
    def is_opaque(self) -> bool:
        return self.text is None

    @property
    def is_flag(self) -> bool:
        return self.text is not None and self.text.startswith("-")


@dataclass(frozen=True, slots=True)
class SimpleCommand:
    """A single program invocation extracted from the syntax tree.

    ``program`` is None both for assignment or redirect only commands and for
    names built from substitutions; ``opaque_program`` tells them apart.
    """

    program: str | None
    arguments: tuple[ShellArgument, ...] = ()
    opaque_program: bool = False

    @property
    def name(self) -> str | None:
        """Program basename, so ``/bin/rm`` and ``rm`` resolve alike."""
        if self.program is None:
            return None
        return posixpath.basename(self.program) or self.program

    @property
    def words(self) -> list[ShellArgument]:
        return [arg for arg in self.arguments if not arg.is_redirect]

    @property
    def redirects(self) -> list[ShellArgument]:
        return [arg for arg in self.arguments if arg.is_redirect]


def parse_command_line(command: str) -> list[Any]:
    """Parse a command line into bashlex top-level nodes.

    Raises whatever bashlex raises for invalid or unsupported syntax.
    """
    return list(bashlex.parse(command))


def _is_node(value: Any) -> bool:
    return hasattr(value, "kind")


def _has_substitution_syntax(text: str) -> bool:
    return "$(" in text or "`" in text


def embedded_commands(text: str) -> list[str]:
    """Extract the bodies of ``$(...)`` and backtick substitutions in raw text.

    An unbalanced substitution yields everything up to the end of the text.
    """
    commands: list[str] = []
    index = 0
    while index < len(text):
        if text.startswith("$(", index):
            depth = 1
            cursor = index + 2
            while cursor < len(text) and depth:
                if text[cursor] == "(":
                    depth += 1
                elif text[cursor] == ")":
                    depth -= 1
                cursor += 1
            end = cursor - 1 if depth == 0 else cursor
            commands.append(text[index + 2 : end])
            index = cursor
        elif text[index] == "`":
            end = text.find("`", index + 1)
            if end == -1:
                end = len(text)
            commands.append(text[index + 1 : end])
            index = end + 1
        else:
            index += 1
    return commands


def _parameter_values(node: Any) -> list[str]:
    values: list[str] = []
    for part in getattr(node, "parts", None) or []:
        if getattr(part, "kind", None) == "parameter":
            value = getattr(part, "value", None)
            if isinstance(value, str):
                values.append(value)
    return values


def _quoted_delimiter(delimiter: str) -> bool:
    return any(character in delimiter for character in "'\"\\")


def hidden_substitutions(node: Any) -> list[str]:
    """Return command substitutions bashlex left unparsed inside a node.

    bashlex keeps ``${x:-$(cmd)}`` as a single parameter part and stores
    heredoc bodies as raw text, yet bash still runs the commands in both.
    Accepts word, assignment and redirect nodes.
    """
    if not _is_node(node):
        return []
    if node.kind == "redirect":
        target = getattr(node, "output", None)
        commands = hidden_substitutions(target)
        heredoc = getattr(node, "heredoc", None)
        if (
            str(node.type) in EXPANDING_HEREDOCS
            and heredoc is not None
            and not _quoted_delimiter(str(getattr(target, "word", "")))
        ):
            body = getattr(heredoc, "value", "") or ""
            commands.extend(embedded_commands(body))
        return commands

    commands = []
    for value in _parameter_values(node):
        commands.extend(embedded_commands(value))
    return commands


def word_text(node: Any) -> str | None:
    """Return literal text for a word node, or None if it is opaque."""
    if not _is_node(node):
        return None
    parts = getattr(node, "parts", None) or []
    if any(getattr(part, "kind", None) in SUBSTITUTION_KINDS for part in parts):
        return None
    if any(_has_substitution_syntax(value) for value in _parameter_values(node)):
        return None
    text = getattr(node, "word", None)
    return text if isinstance(text, str) else None


def substitutions_in(node: Any) -> Iterator[Any]:
    """Yield the command trees of substitutions embedded in a word."""
    if not _is_node(node):
        return
    for part in getattr(node, "parts", None) or []:
        if getattr(part, "kind", None) in SUBSTITUTION_KINDS:
            inner = getattr(part, "command", None)
            if inner is not None:
                yield inner


def _redirect_argument(node: Any) -> ShellArgument | None:
    target = getattr(node, "output", None)
    if not _is_node(target):
        # File-descriptor duplication such as 2>&1 or >&-
        return None
    return ShellArgument(text=word_text(target), redirect=str(node.type))


def build_simple_command(node: Any) -> tuple[SimpleCommand, list[Any]]:
    """Convert a ``command`` node into a SimpleCommand.

    Returns:
        The command plus the substitution trees found in its words,
        assignments and redirect targets, which must be classified on their
        own.
    """
    program: str | None = None
    seen_program = False
    arguments: list[ShellArgument] = []
    nested: list[Any] = []

    for part in getattr(node, "parts", None) or []:
        kind = getattr(part, "kind", None)
        if kind == "assignment":
            nested.extend(substitutions_in(part))
            if not seen_program:
                continue
            arguments.append(ShellArgument(text=word_text(part)))
        elif kind == "word":
            nested.extend(substitutions_in(part))
            if not seen_program:
                seen_program = True
                program = word_text(part)
                continue
            arguments.append(ShellArgument(text=word_text(part)))
        elif kind == "redirect":
            nested.extend(substitutions_in(getattr(part, "output", None)))
            argument = _redirect_argument(part)
            if argument is not None:
                arguments.append(argument)

    command = SimpleCommand(
        program=program,
        arguments=tuple(arguments),
        opaque_program=seen_program and program is None,
    )
    return command, nested


def child_nodes(node: Any) -> list[Any]:
    """Return the structural children of a list, pipeline or compound node."""
    children: list[Any] = []
    for attribute in ("parts", "list", "redirects"):
        value = getattr(node, attribute, None)
        if isinstance(value, list):
            children.extend(value)
    return children
