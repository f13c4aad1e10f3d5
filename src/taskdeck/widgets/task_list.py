"""Task list widget."""

from rich.text import Text
from textual.widgets import Static

from taskdeck.models import PRIORITY_ELEVATED, PRIORITY_URGENT, Task
from taskdeck.task_collection import TaskCollection

PRIORITY_COLORS = {
    PRIORITY_ELEVATED: "yellow",
    PRIORITY_URGENT: "red",
}
HIGHLIGHT_SYMBOL = ">> "
HIGHLIGHT_STYLE = "bold on green"
EMPTY_MESSAGE = "No tasks yet. Press 'a' to add one."


def render_task(task: Task, selected: bool = False) -> Text:
    """Render one task as two lines: status and title, then due date and description."""
    prefix = HIGHLIGHT_SYMBOL if selected else " " * len(HIGHLIGHT_SYMBOL)
    marker = "[✓] " if task.completed else "[ ] "

    text = Text(prefix + marker)
    text.append(task.title, style=PRIORITY_COLORS.get(task.priority, "white"))
    text.append("\n")
    text.append(" " * len(prefix))
    text.append(f"    Due: {task.due_date_text()}")
    text.append(f" Description: {task.description}")
    if selected:
        text.stylize(HIGHLIGHT_STYLE)
    return text


def render_task_list(tasks: list[Task], selected_index: int | None) -> Text:
    """Render the whole list, highlighting the selected row."""
    if not tasks:
        return Text(EMPTY_MESSAGE, style="dim")
    rows = [render_task(task, i == selected_index) for i, task in enumerate(tasks)]
    return Text("\n").join(rows)


class TaskListView(Static):
    """Scrollable list of tasks drawn from a TaskCollection."""

    DEFAULT_CSS = """
    TaskListView {
        width: 60%;
        height: 100%;
        border: round $primary;
        padding: 0 1;
    }
    """

    def on_mount(self) -> None:
        self.border_title = "List"

    def show_tasks(self, collection: TaskCollection) -> None:
        """Redraw from the collection's current order and selection."""
        self.update(render_task_list(collection.tasks, collection.selected_index))
