"""
Listing commands: list, lists
"""

from ..errors import BackendError, ListFetchError, UserError
from ..flags import FlagSet
from ..letters import ListLetterAssigner
from ..locator import TaskLocator
from ..output import (
    format_list_header,
    format_list_name,
    format_task,
    format_task_indented,
    format_task_with_letter,
)
from ..registry import Command, Invocation
from ..source import PAGE_SIZE, default_list, resolve_list


class ListCommand(Command):
    """
    Print open tasks

    Without arguments prints the overview: the default list first, then
    every non-empty named list under its letter. With a list name prints
    one page of that list.
    """

    name = 'list'
    synopsis = 'List tasks'
    usage = 'gtask list [common flags] [--page <n>] <list-name>'

    def register_flags(self, flags: FlagSet) -> None:
        flags.add_int('page', default=1)

    def run(self, inv: Invocation) -> None:
        page = inv.options['page']
        if page < 1:
            raise UserError(f"invalid page number: {page}")

        if not inv.args:
            self.list_all(inv)
        else:
            self.list_one(inv, ' '.join(inv.args), page)

    def list_all(self, inv: Invocation) -> None:
        """
        Print the overview

        Lines are written as each list arrives. A failure part-way leaves
        the lines already printed in place and is reported after them.
        """
        out = inv.out
        locator = TaskLocator(inv.source)
        printed = False

        lists = inv.source.list_collections()
        default = default_list(lists)

        for number, task in enumerate(locator.page(default.id, 1), 1):
            format_task(out, number, task)
            printed = True

        assigner = ListLetterAssigner()
        for task_list in lists:
            if task_list.is_default:
                continue

            try:
                tasks = locator.page(task_list.id, 1)
            except BackendError as e:
                raise ListFetchError(task_list.title, e.detail) from e

            # Empty lists do not use up a letter
            if not tasks:
                continue

            letter = assigner.assign(task_list)
            format_list_header(out, task_list.title)
            for number, task in enumerate(tasks, 1):
                format_task_with_letter(out, letter, number, task)
            printed = True

        if not printed:
            inv.say('no tasks found')

    def list_one(self, inv: Invocation, list_name: str, page: int) -> None:
        list_name = list_name.strip()
        if not list_name:
            raise UserError("list name required")

        task_list = resolve_list(inv.source.list_collections(), list_name)
        tasks = TaskLocator(inv.source).page(task_list.id, page)

        # Header is printed even for an empty page
        format_list_header(inv.out, task_list.title, task_list.is_default)

        start = (page - 1) * PAGE_SIZE + 1
        for offset, task in enumerate(tasks):
            format_task_indented(inv.out, start + offset, task)


class ListsCommand(Command):
    name = 'lists'
    synopsis = 'Print all lists'
    usage = 'gtask lists [common flags]'

    def run(self, inv: Invocation) -> None:
        for task_list in inv.source.list_collections():
            format_list_name(inv.out, task_list)
