"""
List management commands: createlist, rmlist
"""

from ..errors import AmbiguousList, ListNotFound, UserError
from ..flags import FlagSet
from ..registry import Command, Invocation
from ..source import resolve_list


def _list_name(inv: Invocation) -> str:
    name = ' '.join(inv.args).strip()
    if not name:
        raise UserError("list name required")
    return name


class CreateListCommand(Command):
    name = 'createlist'
    aliases = ('addlist',)
    synopsis = 'Create a new list'
    usage = 'gtask createlist [common flags] <list-name>'

    def run(self, inv: Invocation) -> None:
        name = _list_name(inv)

        try:
            resolve_list(inv.source.list_collections(), name)
        except ListNotFound:
            pass
        except AmbiguousList:
            raise UserError(f"list already exists: {name}") from None
        else:
            raise UserError(f"list already exists: {name}")

        inv.source.create_list(name)
        inv.say('ok')


class RmListCommand(Command):
    name = 'rmlist'
    synopsis = 'Delete a list'
    usage = 'gtask rmlist [common flags] [--force] <list-name>'

    def register_flags(self, flags: FlagSet) -> None:
        flags.add_bool('force')

    def run(self, inv: Invocation) -> None:
        name = _list_name(inv)
        task_list = resolve_list(inv.source.list_collections(), name)

        if task_list.is_default:
            raise UserError("cannot delete default list")

        if not inv.options['force'] and inv.source.has_open_tasks(task_list.id):
            raise UserError("list not empty (use --force)")

        inv.source.delete_list(task_list.id)
        inv.say('ok')
