"""
Command dispatch

Grammar:

    gtask                              -> list, no arguments
    gtask <command> [flags] [args...]

Flags are only accepted after the command name. Each phase stops the
invocation on its first failure; the failure becomes one `error: ` line on
the error stream and an exit code.
"""

import sys
import logging
from typing import IO, Callable, List, Optional, Sequence, Tuple

from .config import Config, setup_logging
from .errors import EXIT_SUCCESS, GtaskError, UnknownCommand
from .flags import FlagSet
from .integrations.google_tasks import connect
from .registry import Command, Invocation, Registry
from .source import TaskSource

SourceFactory = Callable[[Config], TaskSource]

DEFAULT_COMMAND = 'list'

logger = logging.getLogger("gtask.Dispatcher")


def register_common_flags(flags: FlagSet) -> None:
    """Flags every command accepts"""
    flags.add_string('config')
    flags.add_bool('quiet')
    flags.add_bool('debug')


class Dispatcher:
    """Select, parse and run one command"""

    def __init__(self, registry: Registry, source_factory: SourceFactory = connect):
        """
        Initialize dispatcher

        Args:
            registry: Fully populated command registry
            source_factory: Builds the authenticated task source for
                commands that require one
        """
        self.registry = registry
        self.source_factory = source_factory

    def run(self, args: Sequence[str], out: Optional[IO[str]] = None, err: Optional[IO[str]] = None) -> int:
        """
        Run one invocation

        Args:
            args: Process arguments without the program name
            out: Standard output stream (default: sys.stdout)
            err: Error stream (default: sys.stderr)

        Returns:
            Exit code
        """
        out = out if out is not None else sys.stdout
        err = err if err is not None else sys.stderr

        try:
            self._dispatch(list(args), out, err)
        except GtaskError as e:
            message = str(e).replace('\r', ' ').replace('\n', ' ')
            print(f"error: {message}", file=err)
            return e.exit_code

        return EXIT_SUCCESS

    def select(self, args: List[str]) -> Tuple[Command, List[str]]:
        """
        Pick the command and the tokens that follow it

        Raises:
            UnknownCommand: Leading flag or unregistered name
        """
        if not args:
            command = self.registry.find(DEFAULT_COMMAND)
            if command is None:
                raise UnknownCommand(DEFAULT_COMMAND)
            return command, []

        token = args[0]
        if token.startswith('-'):
            raise UnknownCommand(token)

        command = self.registry.find(token)
        if command is None:
            raise UnknownCommand(token)

        return command, args[1:]

    def _dispatch(self, args: List[str], out: IO[str], err: IO[str]) -> None:
        command, rest = self.select(args)

        flags = FlagSet(command.name)
        register_common_flags(flags)
        command.register_flags(flags)

        options, positional = flags.parse(rest)

        config = Config(
            config_dir=options.pop('config') or None,
            quiet=options.pop('quiet'),
            debug=options.pop('debug')
        )
        setup_logging(config.debug)
        logger.debug(f"Dispatching '{command.name}' with args {positional}")

        source = None
        if command.requires_auth:
            # Raises AuthError/ConfigError/BackendError; the body never runs then
            source = self.source_factory(config)

        command.run(Invocation(
            registry=self.registry,
            config=config,
            args=positional,
            out=out,
            err=err,
            options=options,
            source=source
        ))
