"""
Task reference parsing

A reference names one task on the command line:

- `7`      task 7 of the default list (or of the list given with --list)
- `a7`     task 7 of the list that was printed under letter `a`
- `a 7`    same as `a7`, written as two tokens

Letters are lowercase only. `A7` is not a reference.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .errors import InvalidReference, ReferenceRequired

_DIGITS = re.compile(r'[0-9]+')
_LETTER = re.compile(r'[a-z]')
_COMBINED = re.compile(r'([a-z])([0-9]+)')


@dataclass(frozen=True)
class TaskReference:
    """A parsed task reference"""
    number: int
    letter: Optional[str] = None

    @property
    def has_letter(self) -> bool:
        return self.letter is not None

    def __str__(self) -> str:
        if self.letter is None:
            return str(self.number)
        return f"{self.letter}{self.number}"


def _is_digits(token: str) -> bool:
    return _DIGITS.fullmatch(token) is not None


def _parse_one(tokens: Sequence[str], start: int):
    """
    Parse the reference beginning at tokens[start]

    Returns:
        Tuple of (TaskReference, number of tokens consumed)
    """
    token = tokens[start]

    if _is_digits(token):
        return TaskReference(number=int(token)), 1

    match = _COMBINED.fullmatch(token)
    if match:
        return TaskReference(number=int(match.group(2)), letter=match.group(1)), 1

    # Lone letter: the number is the next token
    if _LETTER.fullmatch(token):
        if start + 1 >= len(tokens):
            raise ReferenceRequired()
        following = tokens[start + 1]
        if not _is_digits(following):
            raise InvalidReference(f"{token} {following}")
        return TaskReference(number=int(following), letter=token), 2

    raise InvalidReference(token)


def parse_task_refs(tokens: Sequence[str]) -> List[TaskReference]:
    """
    Parse every reference in tokens, left to right

    Args:
        tokens: Positional arguments of the command

    Returns:
        References in the order they were written

    Raises:
        ReferenceRequired: No tokens, or a trailing letter without a number
        InvalidReference: A token that is not a reference
    """
    if not tokens:
        raise ReferenceRequired()

    refs = []
    i = 0
    while i < len(tokens):
        ref, consumed = _parse_one(tokens, i)
        refs.append(ref)
        i += consumed
    return refs


def parse_task_ref(tokens: Sequence[str]) -> TaskReference:
    """
    Parse exactly one reference

    Args:
        tokens: Positional arguments of the command

    Returns:
        The single reference

    Raises:
        ReferenceRequired: No tokens, or a letter without a number
        InvalidReference: Not a reference, or tokens left over after it
    """
    if not tokens:
        raise ReferenceRequired()

    ref, consumed = _parse_one(tokens, 0)
    if consumed < len(tokens):
        raise InvalidReference(tokens[consumed])
    return ref
