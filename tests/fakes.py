"""
In-memory task source for tests
"""

from dataclasses import replace
from typing import Dict, List, Optional

from gtask.errors import BackendError
from gtask.source import DEFAULT_LIST_ID, PAGE_SIZE, Task, TaskList, TaskSource


class FakeTaskSource(TaskSource):
    """
    TaskSource backed by dicts

    Set `errors[method_name]` to make every call of that method raise, or
    `page_errors[list_id]` to fail page fetches of one list. Every call is
    recorded in `calls` as a tuple (method, *args).
    """

    def __init__(self):
        self.lists: List[TaskList] = [TaskList(DEFAULT_LIST_ID, 'My Tasks', is_default=True)]
        self.tasks: Dict[str, List[Task]] = {DEFAULT_LIST_ID: []}
        self.errors: Dict[str, Exception] = {}
        self.page_errors: Dict[str, Exception] = {}
        self.calls: List[tuple] = []
        self._next_list = 1

    # ==================== Setup helpers ====================

    def add_list(self, list_id: str, title: str) -> TaskList:
        task_list = TaskList(list_id, title)
        self.lists.append(task_list)
        self.tasks.setdefault(list_id, [])
        return task_list

    def add_task(self, list_id: str, task_id: str, title: str) -> Task:
        task = Task(id=task_id, title=title)
        self.tasks[list_id].append(task)
        return task

    def add_tasks(self, list_id: str, count: int, prefix: str = 'Task') -> None:
        for n in range(1, count + 1):
            self.add_task(list_id, f"{list_id}-{n}", f"{prefix} {n}")

    def open_tasks(self, list_id: str) -> List[Task]:
        return [t for t in self.tasks.get(list_id, []) if t.status != 'completed']

    def count(self, method: str, *args) -> int:
        """Number of recorded calls to method, optionally matching leading args"""
        return sum(
            1 for call in self.calls
            if call[0] == method and call[1:1 + len(args)] == args
        )

    def _record(self, method: str, *args) -> None:
        self.calls.append((method,) + args)
        error = self.errors.get(method)
        if error is not None:
            raise error

    def _find(self, list_id: str, task_id: str) -> Optional[int]:
        for i, task in enumerate(self.tasks.get(list_id, [])):
            if task.id == task_id:
                return i
        return None

    # ==================== TaskSource ====================

    def list_collections(self) -> List[TaskList]:
        self._record('list_collections')
        return list(self.lists)

    def open_tasks_page(self, list_id: str, page: int) -> List[Task]:
        self._record('open_tasks_page', list_id, page)
        if list_id in self.page_errors:
            raise self.page_errors[list_id]
        start = (page - 1) * PAGE_SIZE
        return self.open_tasks(list_id)[start:start + PAGE_SIZE]

    def has_open_tasks(self, list_id: str) -> bool:
        self._record('has_open_tasks', list_id)
        return bool(self.open_tasks(list_id))

    def create_task(self, list_id: str, title: str) -> None:
        self._record('create_task', list_id, title)
        self.add_task(list_id, f"new-{len(self.calls)}", title)

    def complete_task(self, list_id: str, task_id: str) -> None:
        self._record('complete_task', list_id, task_id)
        index = self._find(list_id, task_id)
        if index is None:
            raise BackendError('not found')
        tasks = self.tasks[list_id]
        tasks[index] = replace(tasks[index], status='completed')

    def delete_task(self, list_id: str, task_id: str) -> None:
        self._record('delete_task', list_id, task_id)
        index = self._find(list_id, task_id)
        if index is None:
            raise BackendError('not found')
        del self.tasks[list_id][index]

    def create_list(self, title: str) -> None:
        self._record('create_list', title)
        self.add_list(f"created-{self._next_list}", title)
        self._next_list += 1

    def delete_list(self, list_id: str) -> None:
        self._record('delete_list', list_id)
        self.lists = [l for l in self.lists if l.id != list_id]
        self.tasks.pop(list_id, None)
