"""
Output formatting

Pure line layout. Callers decide what to print and in which order.
"""

from typing import IO

from .source import Task, TaskList

LIST_SEPARATOR = '------------'
UNTITLED = '(untitled)'


def normalize_title(title: str) -> str:
    """Put a task title on one line; blank titles become (untitled)"""
    title = title.replace('\r', ' ').replace('\n', ' ')
    if not title.strip():
        return UNTITLED
    return title


def normalize_list_title(title: str) -> str:
    if not title.strip():
        return UNTITLED
    return title


def format_task(out: IO[str], number: int, task: Task) -> None:
    """Default-list line: `   1  Buy milk`"""
    print(f"{number:>4}  {normalize_title(task.title)}", file=out)


def format_task_indented(out: IO[str], number: int, task: Task) -> None:
    """Line inside a list section, without a letter"""
    print(f"    {number:>4}  {normalize_title(task.title)}", file=out)


def format_task_with_letter(out: IO[str], letter: str, number: int, task: Task) -> None:
    """Line inside a lettered list section: `      a1  Buy bread`"""
    ref = f"{letter}{number}"
    print(f"    {ref:>4}  {normalize_title(task.title)}", file=out)


def format_list_header(out: IO[str], title: str, is_default: bool = False) -> None:
    display = normalize_list_title(title)
    if is_default:
        display += ' [default]'
    print(LIST_SEPARATOR, file=out)
    print(display, file=out)
    print(LIST_SEPARATOR, file=out)


def format_list_name(out: IO[str], task_list: TaskList) -> None:
    display = normalize_list_title(task_list.title)
    if task_list.is_default:
        display += ' [default]'
    print(display, file=out)
