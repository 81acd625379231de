from __future__ import annotations


class CommandSafetyError(Exception):
    """Base class for errors raised by the command safety gate."""


class EmptyCommandError(CommandSafetyError, ValueError):
    """Raised when the validator is given an empty or non-string command."""


class ForbiddenCommandError(CommandSafetyError):
    """Raised for RED commands. Callers must treat this as a terminal failure."""

    def __init__(self, command: str, reasons: list[str] | None = None) -> None:
        self.command = command
        self.reasons = list(reasons or [])
        super().__init__("Command classified as RED (forbidden)")
