"""Side panels: key help and task statistics."""

from textual.widgets import Static

from taskdeck.task_collection import TaskStatistics

INSTRUCTIONS = (
    "Enter - toggle do/done",
    "a - add a task",
    "e - edit a task",
    "x - delete a task",
    "d - sort by due date",
    "f - sort by name",
    "g - sort by priority",
    "q - quit",
)


def format_statistics(stats: TaskStatistics) -> str:
    return "\n".join(
        [
            f"Total tasks: {stats.total}",
            f"Uncompleted tasks: {stats.uncompleted}",
            f"Due next week: {stats.due_next_week}",
            f"Late: {stats.overdue}",
        ]
    )


class CommandsPanel(Static):
    """Static list of the list-mode keys."""

    DEFAULT_CSS = """
    CommandsPanel {
        height: 1fr;
        border: round $secondary;
        padding: 0 1;
    }
    """

    def __init__(self) -> None:
        super().__init__("\n".join(INSTRUCTIONS))

    def on_mount(self) -> None:
        self.border_title = "Commands"


class StatisticsPanel(Static):
    """Counts of all, open, soon due and late tasks."""

    DEFAULT_CSS = """
    StatisticsPanel {
        height: 1fr;
        border: round $secondary;
        padding: 0 1;
    }
    """

    def on_mount(self) -> None:
        self.border_title = "Statistics"

    def show_statistics(self, stats: TaskStatistics) -> None:
        self.update(format_statistics(stats))
