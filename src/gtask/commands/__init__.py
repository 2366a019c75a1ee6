"""
gtask commands

`build_registry()` is called once at startup; the registry it returns is
passed to the dispatcher and not changed afterwards.
"""

from ..registry import Registry
from .info import HelpCommand, VersionCommand
from .listing import ListCommand, ListsCommand
from .session import LoginCommand, LogoutCommand
from .tasklists import CreateListCommand, RmListCommand
from .tasks import AddCommand, DoneCommand, RmCommand

COMMAND_CLASSES = (
    ListCommand,
    ListsCommand,
    AddCommand,
    DoneCommand,
    RmCommand,
    CreateListCommand,
    RmListCommand,
    LoginCommand,
    LogoutCommand,
    HelpCommand,
    VersionCommand,
)


def build_registry() -> Registry:
    """Create a registry holding every gtask command"""
    registry = Registry()
    for command_class in COMMAND_CLASSES:
        registry.register(command_class())
    return registry


__all__ = ['COMMAND_CLASSES', 'build_registry']
