"""
Command-line flags

A small flag parser with the rules gtask needs and argparse does not
offer: flags come only before the positional arguments, parsing stops at
the first token that does not start with `-`, and every token after that
is positional even if it looks like a flag.

Accepted spellings: `-name`, `--name`, `-name=value`, `--name value`.
Boolean flags take no separate value but accept `=true` / `=false`.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .errors import FlagNeedsArgument, InvalidFlagValue, UnknownFlag

_TRUE = {'1', 't', 'T', 'true', 'TRUE', 'True'}
_FALSE = {'0', 'f', 'F', 'false', 'FALSE', 'False'}


@dataclass(frozen=True)
class Flag:
    """Definition of a single flag"""
    name: str
    kind: str  # string, bool, int
    dest: str
    default: Any


class FlagSet:
    """Flags accepted by one invocation"""

    def __init__(self, name: str):
        self.name = name
        self._flags: Dict[str, Flag] = {}

    def _add(self, name: str, kind: str, default: Any, dest: Optional[str]) -> None:
        if name in self._flags:
            raise ValueError(f"flag redefined: {name}")
        self._flags[name] = Flag(name=name, kind=kind, dest=dest or name, default=default)

    def add_string(self, name: str, default: str = '', dest: Optional[str] = None) -> None:
        self._add(name, 'string', default, dest)

    def add_bool(self, name: str, default: bool = False, dest: Optional[str] = None) -> None:
        self._add(name, 'bool', default, dest)

    def add_int(self, name: str, default: int = 0, dest: Optional[str] = None) -> None:
        self._add(name, 'int', default, dest)

    def defaults(self) -> Dict[str, Any]:
        values = {}
        for flag in self._flags.values():
            values.setdefault(flag.dest, flag.default)
        return values

    def parse(self, tokens: Sequence[str]) -> Tuple[Dict[str, Any], List[str]]:
        """
        Parse flags from the front of tokens

        Args:
            tokens: Arguments following the command name

        Returns:
            Tuple of (flag values keyed by dest, positional arguments)

        Raises:
            UnknownFlag: A `-` token in the flag region is not defined
            FlagNeedsArgument: A value flag is last with no `=value`
            InvalidFlagValue: A value that does not convert
        """
        values = self.defaults()
        i = 0

        while i < len(tokens):
            token = tokens[i]
            if not token.startswith('-'):
                break

            spelled, sep, value = token.partition('=')
            name = spelled[2:] if spelled.startswith('--') else spelled[1:]

            flag = self._flags.get(name)
            if flag is None:
                raise UnknownFlag(spelled)

            if flag.kind == 'bool':
                if not sep:
                    converted = True
                elif value in _TRUE:
                    converted = True
                elif value in _FALSE:
                    converted = False
                else:
                    raise InvalidFlagValue(spelled, value)
                i += 1
            else:
                if sep:
                    i += 1
                else:
                    if i + 1 >= len(tokens):
                        raise FlagNeedsArgument(spelled)
                    value = tokens[i + 1]
                    i += 2

                if flag.kind == 'int':
                    try:
                        converted = int(value)
                    except ValueError:
                        raise InvalidFlagValue(spelled, value) from None
                else:
                    converted = value

            values[flag.dest] = converted

        return values, list(tokens[i:])
