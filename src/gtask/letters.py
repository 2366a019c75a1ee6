"""
List letters

Named lists that currently have open tasks are addressed by a letter,
assigned `a`, `b`, `c`... in provider order. The default list never gets a
letter and empty lists do not use one up. Letters only mean something
within a single invocation, so the mapping is rebuilt every time.
"""

import logging
from typing import Callable, Dict, Iterable

from .errors import ListLetterNotFound, TooManyLists
from .source import TaskList

logger = logging.getLogger("gtask.Letters")

FIRST_LETTER = 'a'
LAST_LETTER = 'z'


class ListLetterAssigner:
    """Hands out list letters in order, failing after `z`"""

    def __init__(self):
        self._next = FIRST_LETTER

    def assign(self, task_list: TaskList) -> str:
        """
        Give the next letter to a list

        Args:
            task_list: A non-default list with open tasks

        Returns:
            The assigned letter

        Raises:
            TooManyLists: All 26 letters are already taken
        """
        if self._next > LAST_LETTER:
            raise TooManyLists()

        letter = self._next
        self._next = chr(ord(letter) + 1)
        logger.debug(f"List '{task_list.title}' ({task_list.id}) -> {letter}")
        return letter


def build_list_letter_map(
    lists: Iterable[TaskList],
    has_open_tasks: Callable[[str], bool]
) -> Dict[str, TaskList]:
    """
    Assign letters to named lists with open tasks

    Args:
        lists: List collection in provider order
        has_open_tasks: Predicate queried per non-default list id

    Returns:
        Mapping letter -> list, in assignment order

    Raises:
        TooManyLists: More than 26 lists need a letter
    """
    assigner = ListLetterAssigner()
    by_letter = {}

    for task_list in lists:
        if task_list.is_default:
            continue
        if not has_open_tasks(task_list.id):
            continue
        by_letter[assigner.assign(task_list)] = task_list

    return by_letter


def resolve_list_by_letter(by_letter: Dict[str, TaskList], letter: str) -> TaskList:
    try:
        return by_letter[letter]
    except KeyError:
        raise ListLetterNotFound(letter) from None
