"""Read-only lookup from program name to its command handler."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from toolgate.core.safety.handlers.find import FindCommandHandler
from toolgate.core.safety.handlers.generic import GenericCommandHandler
from toolgate.core.safety.handlers.git import GitCommandHandler
from toolgate.core.safety.handlers.protocol import CommandHandler
from toolgate.core.safety.handlers.sed import SedCommandHandler

GENERIC_HANDLER: CommandHandler = GenericCommandHandler()

COMMAND_HANDLERS: Mapping[str, CommandHandler] = MappingProxyType(
    {
        "git": GitCommandHandler(),
        "find": FindCommandHandler(),
        "sed": SedCommandHandler(),
    }
)


def get_command_handler(name: str | None) -> CommandHandler:
    """Return the specialized handler for ``name`` or the generic fallback."""
    if name is None:
        return GENERIC_HANDLER
    return COMMAND_HANDLERS.get(name, GENERIC_HANDLER)
