"""
Informational commands: help, version
"""

from .. import __version__
from ..registry import Command, Invocation

USAGE_WIDTH = 52

COMMON_FLAGS_HELP = """Common flags:
  --config <dir>   Override config directory
  --quiet          Suppress informational output
  --debug          Print debug logs to stderr
"""


def help_text(commands) -> str:
    """Build usage text from the registered commands"""
    lines = ['Usage:', f"  {'gtask':<{USAGE_WIDTH}} List all open tasks"]

    for command in commands:
        line = f"  {command.usage:<{USAGE_WIDTH}} {command.synopsis}"
        if command.aliases:
            line += f" (alias: {', '.join(command.aliases)})"
        lines.append(line)

    return '\n'.join(lines) + '\n\n' + COMMON_FLAGS_HELP


class HelpCommand(Command):
    name = 'help'
    synopsis = 'Print usage'
    usage = 'gtask help'
    requires_auth = False

    def run(self, inv: Invocation) -> None:
        inv.out.write(help_text(inv.registry.all()))


class VersionCommand(Command):
    name = 'version'
    synopsis = 'Print version'
    usage = 'gtask version'
    requires_auth = False

    def run(self, inv: Invocation) -> None:
        print(f"gtask {__version__}", file=inv.out)
