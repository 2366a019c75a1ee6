"""
Tests for list letter assignment
"""

import pytest

from gtask.errors import ListLetterNotFound, TooManyLists
from gtask.letters import (
    ListLetterAssigner,
    build_list_letter_map,
    resolve_list_by_letter,
)
from gtask.source import DEFAULT_LIST_ID, TaskList

DEFAULT = TaskList(DEFAULT_LIST_ID, 'My Tasks', is_default=True)


def named(n):
    return [TaskList(f"list{i}", f"List {i}") for i in range(n)]


class TestBuildListLetterMap:

    def test_letters_follow_order_of_non_empty_lists(self):
        empty1 = TaskList('e1', 'Empty 1')
        work = TaskList('work', 'Work')
        empty2 = TaskList('e2', 'Empty 2')
        shopping = TaskList('shopping', 'Shopping')
        lists = [empty1, work, DEFAULT, empty2, shopping]
        has_open = {'work', 'shopping'}

        by_letter = build_list_letter_map(lists, lambda list_id: list_id in has_open)

        assert by_letter == {'a': work, 'b': shopping}
        assert list(by_letter) == ['a', 'b']

    def test_default_list_never_queried(self):
        queried = []

        def has_open(list_id):
            queried.append(list_id)
            return True

        by_letter = build_list_letter_map([DEFAULT] + named(2), has_open)

        assert DEFAULT_LIST_ID not in queried
        assert [l.id for l in by_letter.values()] == ['list0', 'list1']

    def test_no_lists(self):
        assert build_list_letter_map([DEFAULT], lambda list_id: True) == {}

    def test_26_lists(self):
        by_letter = build_list_letter_map(named(26), lambda list_id: True)
        assert ''.join(by_letter) == 'abcdefghijklmnopqrstuvwxyz'
        assert by_letter['z'].id == 'list25'

    def test_27_lists(self):
        with pytest.raises(TooManyLists) as exc:
            build_list_letter_map(named(27), lambda list_id: True)
        assert str(exc.value) == 'too many lists (max 26)'

    def test_27_lists_with_one_empty(self):
        lists = named(27)
        by_letter = build_list_letter_map(lists, lambda list_id: list_id != 'list3')
        assert len(by_letter) == 26
        assert by_letter['d'].id == 'list4'


class TestListLetterAssigner:

    def test_sequence(self):
        assigner = ListLetterAssigner()
        letters = [assigner.assign(l) for l in named(3)]
        assert letters == ['a', 'b', 'c']

    def test_fails_after_z(self):
        assigner = ListLetterAssigner()
        for task_list in named(26):
            assigner.assign(task_list)
        with pytest.raises(TooManyLists):
            assigner.assign(TaskList('extra', 'Extra'))


class TestLetterMapFromSource:

    def test_uses_source_order(self, source):
        source.add_list('shopping', 'Shopping')
        source.add_list('work', 'Work')
        source.add_task('work', 't1', 'Finish report')

        by_letter = build_list_letter_map(source.list_collections(), source.has_open_tasks)

        assert list(by_letter) == ['a']
        assert by_letter['a'].title == 'Work'

    def test_resolve_unknown_letter(self, source):
        with pytest.raises(ListLetterNotFound) as exc:
            resolve_list_by_letter(
                build_list_letter_map(source.list_collections(), source.has_open_tasks), 'z'
            )
        assert str(exc.value) == 'list letter not found: z'
