"""
Paginated task locator

Task numbers are absolute 1-based positions in a list's open tasks, in
provider order. The provider serves them in pages of 100, so task 150 is
the 50th task of page 2. Pages fetched during one invocation are kept in a
`PageCache` so several references into the same page cost one call.
"""

import logging
from typing import Dict, List, Optional, Tuple

from .errors import OutOfRange
from .source import PAGE_SIZE, Task, TaskSource

logger = logging.getLogger("gtask.Locator")


def page_for(number: int) -> Tuple[int, int]:
    """
    Split an absolute task number into page coordinates

    Args:
        number: 1-based task number

    Returns:
        Tuple of (1-based page number, 0-based index within the page)
    """
    return (number - 1) // PAGE_SIZE + 1, (number - 1) % PAGE_SIZE


class PageCache:
    """Pages of open tasks fetched during one invocation"""

    def __init__(self):
        self._pages: Dict[Tuple[str, int], List[Task]] = {}

    def get(self, list_id: str, page: int) -> Optional[List[Task]]:
        return self._pages.get((list_id, page))

    def put(self, list_id: str, page: int, tasks: List[Task]) -> None:
        self._pages[(list_id, page)] = tasks


class TaskLocator:
    """
    Resolve task numbers to tasks

    A locator is created per command invocation and discarded with it.
    """

    def __init__(self, source: TaskSource, cache: Optional[PageCache] = None):
        """
        Initialize locator

        Args:
            source: Task source to fetch pages from
            cache: Page cache to share (default: a fresh one)
        """
        self.source = source
        self.cache = cache if cache is not None else PageCache()

    def page(self, list_id: str, page: int) -> List[Task]:
        """
        Return one page of open tasks, fetching it at most once

        Args:
            list_id: List to read
            page: 1-based page number

        Returns:
            Tasks of that page in provider order
        """
        tasks = self.cache.get(list_id, page)
        if tasks is None:
            logger.debug(f"Fetching page {page} of list {list_id}")
            tasks = list(self.source.open_tasks_page(list_id, page))
            self.cache.put(list_id, page, tasks)
        return tasks

    def find(self, list_id: str, number: int) -> Task:
        """
        Return the task at an absolute position

        Args:
            list_id: List to search
            number: 1-based task number as printed by `gtask`

        Returns:
            The task at that position

        Raises:
            OutOfRange: number < 1 or past the last open task
        """
        if number < 1:
            raise OutOfRange(number)

        page, index = page_for(number)
        tasks = self.page(list_id, page)

        # An empty page and a short page are the same to the caller
        if index >= len(tasks):
            raise OutOfRange(number)

        return tasks[index]
