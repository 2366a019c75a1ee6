"""
Task commands: add, done, rm
"""

import logging
from abc import abstractmethod
from typing import List, Optional, Tuple

from ..errors import UserError
from ..flags import FlagSet
from ..letters import build_list_letter_map, resolve_list_by_letter
from ..locator import TaskLocator
from ..references import TaskReference, parse_task_refs
from ..registry import Command, Invocation
from ..source import Task, TaskList, TaskSource, default_list, resolve_list

logger = logging.getLogger("gtask.Commands")


class TargetResolver:
    """
    Turns references into (list, task) pairs for one invocation

    Lists, letters and pages are each fetched once and shared by all
    references of the invocation.
    """

    def __init__(self, source: TaskSource, list_name: str = ''):
        """
        Initialize resolver

        Args:
            source: Task source of the invocation
            list_name: Value of --list; numeric references use this list
                instead of the default one
        """
        self.source = source
        self.list_name = list_name
        self.locator = TaskLocator(source)
        self._lists: Optional[List[TaskList]] = None
        self._letters = None
        self._numeric_list: Optional[TaskList] = None

    @property
    def lists(self) -> List[TaskList]:
        if self._lists is None:
            self._lists = self.source.list_collections()
        return self._lists

    def numeric_list(self) -> TaskList:
        if self._numeric_list is None:
            if self.list_name:
                self._numeric_list = resolve_list(self.lists, self.list_name)
            else:
                self._numeric_list = default_list(self.lists)
        return self._numeric_list

    def list_for(self, ref: TaskReference) -> TaskList:
        if not ref.has_letter:
            return self.numeric_list()
        if self._letters is None:
            self._letters = build_list_letter_map(self.lists, self.source.has_open_tasks)
        return resolve_list_by_letter(self._letters, ref.letter)

    def resolve(self, refs: List[TaskReference]) -> List[Tuple[TaskList, Task]]:
        """
        Resolve every reference before anything is changed

        Numbering must stay the one the user saw, so all lookups happen
        up front. A task referenced twice is returned once.

        Raises:
            UserError: --list combined with a letter, unknown letter,
                unknown list, or a number out of range
        """
        if self.list_name and any(ref.has_letter for ref in refs):
            raise UserError("cannot use both --list and list letter")

        targets = []
        seen = set()
        for ref in refs:
            task_list = self.list_for(ref)
            task = self.locator.find(task_list.id, ref.number)

            key = (task_list.id, task.id)
            if key in seen:
                logger.debug(f"Skipping duplicate reference {ref}")
                continue
            seen.add(key)
            targets.append((task_list, task))

        return targets


class AddCommand(Command):
    name = 'add'
    aliases = ('create',)
    synopsis = 'Create a task'
    usage = 'gtask add [common flags] [--list <list-name>] <title...>'

    def register_flags(self, flags: FlagSet) -> None:
        flags.add_string('list')
        flags.add_string('l', dest='list')

    def run(self, inv: Invocation) -> None:
        title = ' '.join(inv.args)
        if not title.strip():
            raise UserError("title required")

        list_name = inv.options['list']
        lists = inv.source.list_collections()
        task_list = resolve_list(lists, list_name) if list_name else default_list(lists)

        logger.debug(f"Creating task in '{task_list.title}'")
        inv.source.create_task(task_list.id, title)
        inv.say('ok')


class _ReferenceCommand(Command):
    """Applies one action to every task referenced on the command line"""

    def register_flags(self, flags: FlagSet) -> None:
        flags.add_string('list')

    @abstractmethod
    def apply(self, source: TaskSource, task_list: TaskList, task: Task) -> None:
        """Change one resolved task"""

    def run(self, inv: Invocation) -> None:
        refs = parse_task_refs(inv.args)

        resolver = TargetResolver(inv.source, inv.options['list'])
        targets = resolver.resolve(refs)

        for task_list, task in targets:
            logger.debug(f"{self.name}: '{task.title}' in '{task_list.title}'")
            self.apply(inv.source, task_list, task)

        inv.say('ok')


class DoneCommand(_ReferenceCommand):
    name = 'done'
    synopsis = 'Mark tasks completed'
    usage = 'gtask done [common flags] [--list <list-name>] <ref...>'

    def apply(self, source: TaskSource, task_list: TaskList, task: Task) -> None:
        source.complete_task(task_list.id, task.id)


class RmCommand(_ReferenceCommand):
    name = 'rm'
    synopsis = 'Delete tasks'
    usage = 'gtask rm [common flags] [--list <list-name>] <ref...>'

    def apply(self, source: TaskSource, task_list: TaskList, task: Task) -> None:
        source.delete_task(task_list.id, task.id)
