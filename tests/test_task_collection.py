# tests/test_task_collection.py

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from taskdeck.database import INVALID_TASK_ID, Database
from taskdeck.errors import StorageError
from taskdeck.models import SortKey
from taskdeck.task_collection import TaskCollection, TaskStatistics

NOW = datetime(2024, 6, 10, 15, 30, tzinfo=timezone.utc)


@pytest.fixture()
def collection(db: Database, make_task) -> TaskCollection:
    db.insert(make_task(title="banana", due=(2024, 6, 20), priority=1))
    db.insert(make_task(title="apple", due=(2024, 6, 5), priority=2))
    db.insert(make_task(title="cherry", due=(2024, 6, 12), priority=0))
    db.insert(make_task(title="date", due=(2024, 6, 1), priority=1, completed=True))
    return TaskCollection(db)


def titles(collection: TaskCollection) -> list[str]:
    return [task.title for task in collection.tasks]


class TestSelection:
    def test_starts_unselected_in_store_order(self, collection: TaskCollection) -> None:
        assert collection.selected_index is None
        assert collection.get_selected() is None
        assert titles(collection) == ["banana", "apple", "cherry", "date"]

    def test_select_next_from_unselected_picks_first(self, collection: TaskCollection) -> None:
        collection.select_next()
        assert collection.selected_index == 0
        assert collection.get_selected().title == "banana"

    def test_select_next_wraps(self, collection: TaskCollection) -> None:
        collection.select_next()
        first = collection.selected_index
        for _ in range(len(collection)):
            collection.select_next()
        assert collection.selected_index == first

        collection.selected_index = 3
        collection.select_next()
        assert collection.selected_index == 0

    def test_select_previous_wraps_to_last(self, collection: TaskCollection) -> None:
        collection.select_previous()
        assert collection.selected_index == 0
        collection.select_previous()
        assert collection.selected_index == 3
        collection.select_previous()
        assert collection.selected_index == 2

    def test_empty_collection_selects_zero(self, db: Database) -> None:
        empty = TaskCollection(db)

        empty.select_next()
        assert empty.selected_index == 0
        empty.select_previous()
        assert empty.selected_index == 0
        assert empty.get_selected() is None

    def test_unselect(self, collection: TaskCollection) -> None:
        collection.select_next()
        collection.unselect()
        assert collection.get_selected() is None


class TestSorting:
    def test_sort_by_name(self, collection: TaskCollection) -> None:
        collection.set_sort(SortKey.NAME)
        assert titles(collection) == ["apple", "banana", "cherry", "date"]
        assert collection.sort_key is SortKey.NAME

    def test_sort_by_due_date(self, collection: TaskCollection) -> None:
        collection.set_sort(SortKey.DUE_DATE)
        assert titles(collection) == ["date", "apple", "cherry", "banana"]

    def test_sort_by_priority_is_stable(self, collection: TaskCollection) -> None:
        collection.set_sort(SortKey.PRIORITY)
        assert titles(collection) == ["cherry", "banana", "date", "apple"]

    @pytest.mark.parametrize("key", list(SortKey))
    def test_same_key_twice_reverses(self, collection: TaskCollection, key: SortKey) -> None:
        collection.set_sort(key)
        before = list(collection.tasks)

        collection.set_sort(key)

        assert collection.tasks == before[::-1]
        collection.set_sort(key)
        assert collection.tasks == before

    def test_repeat_reverses_instead_of_resorting(self, collection: TaskCollection) -> None:
        # Ties in priority keep their reversed order, which a descending sort would not.
        collection.set_sort(SortKey.PRIORITY)
        collection.set_sort(SortKey.PRIORITY)
        assert titles(collection) == ["apple", "date", "banana", "cherry"]

    def test_key_change_does_full_sort(self, collection: TaskCollection) -> None:
        collection.set_sort(SortKey.NAME)
        collection.set_sort(SortKey.NAME)
        collection.set_sort(SortKey.DUE_DATE)
        assert titles(collection) == ["date", "apple", "cherry", "banana"]
        assert collection.sort_key is SortKey.DUE_DATE


class TestViews:
    def test_uncompleted(self, collection: TaskCollection) -> None:
        assert [t.title for t in collection.uncompleted()] == ["banana", "apple", "cherry"]

    def test_due_within_next_week(self, collection: TaskCollection) -> None:
        assert [t.title for t in collection.due_within_next_week(NOW)] == ["apple", "cherry"]

    def test_overdue_uses_start_of_day(self, db: Database, make_task) -> None:
        db.insert(make_task(title="today", due=(2024, 6, 10)))
        db.insert(make_task(title="yesterday", due=(2024, 6, 9)))
        db.insert(make_task(title="done late", due=(2024, 6, 1), completed=True))
        tasks = TaskCollection(db)

        assert [t.title for t in tasks.overdue(NOW)] == ["yesterday"]

    def test_statistics(self, collection: TaskCollection) -> None:
        assert collection.statistics(NOW) == TaskStatistics(
            total=4, uncompleted=3, due_next_week=2, overdue=1
        )

    def test_views_do_not_mutate(self, collection: TaskCollection) -> None:
        before = list(collection.tasks)
        collection.uncompleted()
        collection.overdue(NOW)
        collection.due_within_next_week(NOW)
        assert collection.tasks == before


class TestMutations:
    def test_toggle_completed_writes_through(self, db: Database, collection: TaskCollection) -> None:
        collection.select_next()
        collection.toggle_completed()

        assert collection.get_selected().completed is True
        assert db.list_all()[0].completed is True

        collection.toggle_completed()
        assert db.list_all()[0].completed is False

    def test_toggle_without_selection_is_noop(self, db: Database, collection: TaskCollection) -> None:
        collection.toggle_completed()
        assert [t.completed for t in db.list_all()] == [False, False, False, True]

    def test_toggle_keeps_local_state_on_storage_error(self, make_task) -> None:
        store = MagicMock(spec=Database)
        store.list_all.return_value = [replace(make_task(), id=1)]
        store.update.side_effect = StorageError("disk full")
        tasks = TaskCollection(store)
        tasks.select_next()

        with pytest.raises(StorageError):
            tasks.toggle_completed()
        assert tasks.get_selected().completed is False

    def test_delete_selected_reloads(self, db: Database, collection: TaskCollection) -> None:
        collection.set_sort(SortKey.NAME)
        collection.select_next()

        collection.delete_selected()

        assert titles(collection) == ["banana", "cherry", "date"]
        assert [t.title for t in db.list_all()] == ["banana", "cherry", "date"]
        assert collection.selected_index is None
        assert collection.sort_key is SortKey.NAME

    def test_same_key_after_reload_reverses_store_order(self, collection: TaskCollection) -> None:
        collection.set_sort(SortKey.NAME)
        collection.reload()
        assert titles(collection) == ["banana", "apple", "cherry", "date"]

        collection.set_sort(SortKey.NAME)

        assert titles(collection) == ["date", "cherry", "apple", "banana"]
        assert collection.sort_key is SortKey.NAME

    def test_same_key_after_delete_reverses_store_order(self, collection: TaskCollection) -> None:
        collection.set_sort(SortKey.DUE_DATE)
        collection.delete_selected()

        collection.set_sort(SortKey.DUE_DATE)

        assert titles(collection) == ["date", "cherry", "apple", "banana"]

    def test_delete_without_id_uses_invalid_id(self, make_task) -> None:
        store = MagicMock(spec=Database)
        store.list_all.return_value = [make_task()]
        store.delete.return_value = 0
        tasks = TaskCollection(store)
        tasks.select_next()

        tasks.delete_selected()

        store.delete.assert_called_once_with(INVALID_TASK_ID)

    def test_delete_without_selection_only_reloads(self, db: Database, collection: TaskCollection) -> None:
        collection.delete_selected()
        assert len(collection) == 4
