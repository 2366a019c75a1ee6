"""
Task source capability

Everything the commands know about the provider goes through `TaskSource`.
Lists and tasks come back in provider order; nothing here sorts them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence

from .errors import AmbiguousList, BackendError, ListNotFound

DEFAULT_LIST_ID = '@default'
PAGE_SIZE = 100


@dataclass(frozen=True)
class Task:
    """A single open or completed task"""
    id: str
    title: str
    status: str = 'needsAction'
    position: str = ''


@dataclass(frozen=True)
class TaskList:
    """A task list as reported by the provider"""
    id: str
    title: str
    is_default: bool = False


class TaskSource(ABC):
    """
    Backend-agnostic access to task lists

    Implementations raise `BackendError` for provider failures and
    `AuthError` when credentials are rejected.
    """

    @abstractmethod
    def list_collections(self) -> List[TaskList]:
        """Return all task lists in provider order, default list included"""

    @abstractmethod
    def open_tasks_page(self, list_id: str, page: int) -> List[Task]:
        """
        Return one page of open tasks

        Args:
            list_id: List to read
            page: 1-based page number, PAGE_SIZE tasks per page

        Returns:
            Tasks in provider order; empty once the provider has no more data
        """

    @abstractmethod
    def has_open_tasks(self, list_id: str) -> bool:
        """Return True if the list has at least one open task"""

    @abstractmethod
    def create_task(self, list_id: str, title: str) -> None:
        ...

    @abstractmethod
    def complete_task(self, list_id: str, task_id: str) -> None:
        ...

    @abstractmethod
    def delete_task(self, list_id: str, task_id: str) -> None:
        ...

    @abstractmethod
    def create_list(self, title: str) -> None:
        ...

    @abstractmethod
    def delete_list(self, list_id: str) -> None:
        ...


def default_list(lists: Sequence[TaskList]) -> TaskList:
    """Return the default list from a list collection"""
    for task_list in lists:
        if task_list.is_default:
            return task_list
    raise BackendError("no default list")


def resolve_list(lists: Sequence[TaskList], name: str) -> TaskList:
    """
    Find a list by title

    Matching is case-insensitive and ignores surrounding whitespace.

    Args:
        lists: List collection in provider order
        name: Title typed by the user

    Returns:
        The only list with that title

    Raises:
        ListNotFound: No list has that title
        AmbiguousList: More than one list has that title
    """
    name = name.strip()
    wanted = name.lower()

    matches = [l for l in lists if l.title.strip().lower() == wanted]

    if not matches:
        raise ListNotFound(name)
    if len(matches) > 1:
        raise AmbiguousList(name)
    return matches[0]
