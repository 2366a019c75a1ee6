"""
Commands and the command registry
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import IO, Any, Dict, List, Optional, Tuple

from .config import Config
from .flags import FlagSet
from .source import TaskSource


class RegistrationError(ValueError):
    """A command name or alias is already taken"""


@dataclass
class Invocation:
    """Everything a single command run works with"""
    registry: 'Registry'
    config: Config
    args: List[str]
    out: IO[str]
    err: IO[str]
    options: Dict[str, Any] = field(default_factory=dict)
    source: Optional[TaskSource] = None

    def say(self, line: str) -> None:
        """Print an informational line unless --quiet was given"""
        if not self.config.quiet:
            print(line, file=self.out)


class Command(ABC):
    """
    A named unit of behaviour

    Subclasses set the class attributes and implement `run`. Command objects
    are shared by every invocation and must not keep per-run state; parsed
    flag values arrive on the `Invocation`.
    """

    name: str = ''
    aliases: Tuple[str, ...] = ()
    synopsis: str = ''
    usage: str = ''
    requires_auth: bool = True

    def register_flags(self, flags: FlagSet) -> None:
        """Add command-specific flags (default: none)"""

    @abstractmethod
    def run(self, inv: Invocation) -> None:
        """
        Execute the command

        Args:
            inv: The invocation; `inv.source` is set when requires_auth is True

        Raises:
            GtaskError: Any failure, reported by the dispatcher
        """


class Registry:
    """Commands keyed by name and by every alias"""

    def __init__(self):
        self._commands: Dict[str, Command] = {}

    def register(self, command: Command) -> None:
        """
        Add a command

        Raises:
            RegistrationError: The name or an alias is already registered
        """
        if command.name in self._commands:
            raise RegistrationError(f"command already registered: {command.name}")

        taken = {command.name}
        for alias in command.aliases:
            if alias in self._commands or alias in taken:
                raise RegistrationError(f"command alias already registered: {alias}")
            taken.add(alias)

        self._commands[command.name] = command
        for alias in command.aliases:
            self._commands[alias] = command

    def find(self, token: str) -> Optional[Command]:
        """Return the command named or aliased exactly `token`, or None"""
        return self._commands.get(token)

    def all(self) -> List[Command]:
        """Return every command once, sorted by primary name"""
        unique = {cmd.name: cmd for cmd in self._commands.values()}
        return [unique[name] for name in sorted(unique)]
