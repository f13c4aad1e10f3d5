"""In-memory task list with selection, sorting and filtered views."""

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone

from taskdeck.database import INVALID_TASK_ID, Database
from taskdeck.models import SortKey, Task

logger = logging.getLogger(__name__)

_SORT_FIELDS = {
    SortKey.DUE_DATE: lambda task: task.due_date,
    SortKey.NAME: lambda task: task.title,
    SortKey.PRIORITY: lambda task: task.priority,
}


@dataclass(frozen=True)
class TaskStatistics:
    """Counts shown in the statistics panel."""

    total: int
    uncompleted: int
    due_next_week: int
    overdue: int


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TaskCollection:
    """Cache of the stored tasks plus the list's selection and sort state.

    Mutations write through to the database before local state changes, so
    a StorageError leaves the cached tasks as they were.
    """

    def __init__(self, database: Database) -> None:
        self._database = database
        self.tasks: list[Task] = database.list_all()
        self.selected_index: int | None = None
        self.sort_key: SortKey | None = None

    def __len__(self) -> int:
        return len(self.tasks)

    def reload(self) -> None:
        """Refresh the tasks from the database.

        Indices no longer line up after a reload, so the selection is
        cleared. The sort key is kept: the tasks come back in store order,
        and asking for the same key again reverses that order.
        """
        self.tasks = self._database.list_all()
        self.selected_index = None

    # -------------------- selection --------------------

    def select_next(self) -> None:
        """Move the selection down, wrapping to the first task."""
        if self.selected_index is None or not self.tasks:
            self.selected_index = 0
        elif self.selected_index >= len(self.tasks) - 1:
            self.selected_index = 0
        else:
            self.selected_index += 1

    def select_previous(self) -> None:
        """Move the selection up, wrapping to the last task."""
        if self.selected_index is None or not self.tasks:
            self.selected_index = 0
        elif self.selected_index == 0:
            self.selected_index = len(self.tasks) - 1
        else:
            self.selected_index -= 1

    def unselect(self) -> None:
        self.selected_index = None

    def get_selected(self) -> Task | None:
        if self.selected_index is None or self.selected_index >= len(self.tasks):
            return None
        return self.tasks[self.selected_index]

    # -------------------- mutations --------------------

    def toggle_completed(self) -> None:
        """Flip the completed flag of the selected task and save it."""
        task = self.get_selected()
        if task is None:
            return
        toggled = replace(task, completed=not task.completed)
        self._database.update(toggled)
        self.tasks[self.selected_index] = toggled
        logger.info("Task %s marked %s", task.id, "done" if toggled.completed else "to do")

    def delete_selected(self) -> None:
        """Delete the selected task from the database, then reload."""
        task = self.get_selected()
        if task is not None:
            task_id = task.id if task.id is not None else INVALID_TASK_ID
            self._database.delete(task_id)
            logger.info("Task %s deleted", task_id)
        self.reload()

    # -------------------- views --------------------

    def uncompleted(self) -> list[Task]:
        return [task for task in self.tasks if not task.completed]

    def due_within_next_week(self, now: datetime | None = None) -> list[Task]:
        """Uncompleted tasks due before one week from now."""
        limit = (now or _utc_now()) + timedelta(weeks=1)
        return [task for task in self.uncompleted() if task.due_date < limit]

    def overdue(self, now: datetime | None = None) -> list[Task]:
        """Uncompleted tasks due before the start of today (UTC)."""
        now = (now or _utc_now()).astimezone(timezone.utc)
        start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
        return [task for task in self.uncompleted() if task.due_date < start_of_day]

    def statistics(self, now: datetime | None = None) -> TaskStatistics:
        now = now or _utc_now()
        return TaskStatistics(
            total=len(self.tasks),
            uncompleted=len(self.uncompleted()),
            due_next_week=len(self.due_within_next_week(now)),
            overdue=len(self.overdue(now)),
        )

    # -------------------- sorting --------------------

    def set_sort(self, sort_key: SortKey) -> None:
        """Sort the tasks by the given key.

        Asking for the key that is already active reverses the current order
        instead of sorting again, so repeated presses flip the list.
        """
        if self.sort_key == sort_key:
            self.tasks.reverse()
        else:
            self.tasks.sort(key=_SORT_FIELDS[sort_key])
        self.sort_key = sort_key
