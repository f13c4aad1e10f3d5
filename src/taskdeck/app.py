"""Main application module."""

import logging
import sys
from typing import Callable

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Header

from taskdeck.cli import run_cli
from taskdeck.config import DEFAULT_THEME, Config, load_config
from taskdeck.database import Database
from taskdeck.editor import EditorState
from taskdeck.errors import StorageError
from taskdeck.logging_setup import setup_logging
from taskdeck.models import SortKey, Task
from taskdeck.screens import TaskEditModal
from taskdeck.task_collection import TaskCollection
from taskdeck.widgets import CommandsPanel, StatisticsPanel, TaskListView

logger = logging.getLogger(__name__)

# Actions that only make sense while the task list has the keyboard.
LIST_ACTIONS = {
    "quit",
    "delete_selected",
    "unselect",
    "select_next",
    "select_previous",
    "open_create",
    "open_edit",
    "sort",
    "toggle_completed",
}


class TaskdeckApp(App):
    """A Textual app for taskdeck."""

    TITLE = "Taskdeck"

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("x", "delete_selected", "Delete"),
        Binding("left", "unselect", "Unselect", show=False),
        Binding("down", "select_next", "Next", show=False),
        Binding("up", "select_previous", "Previous", show=False),
        ("a", "open_create", "Add"),
        ("e", "open_edit", "Edit"),
        ("d", "sort('due_date')", "By due date"),
        ("f", "sort('name')", "By name"),
        ("g", "sort('priority')", "By priority"),
        ("enter", "toggle_completed", "Toggle done"),
    ]

    CSS = """
    #main {
        height: 1fr;
    }

    #side {
        width: 40%;
        height: 100%;
    }
    """

    def __init__(self, config: Config | None = None) -> None:
        """Initialize the application."""
        super().__init__()
        self._config = config or load_config()
        self.database = Database(self._config.database_path)
        self.collection: TaskCollection | None = None
        self.editor = EditorState(self.database, on_saved=self._on_task_saved)

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        """Disable list-mode keys while the editor is open or before tasks are loaded."""
        if action in LIST_ACTIONS:
            return self.collection is not None and not self.editor.active
        return True

    def compose(self) -> ComposeResult:
        """Create child widgets for the app."""
        yield Header()
        with Horizontal(id="main"):
            yield TaskListView(id="task-list")
            with Vertical(id="side"):
                yield CommandsPanel()
                yield StatisticsPanel()
        yield Footer()

    def on_mount(self) -> None:
        """Open the database and load the tasks."""
        self._apply_theme()
        try:
            self.database.ensure_schema()
            self.collection = TaskCollection(self.database)
        except StorageError as e:
            logger.exception("Failed to open database")
            self.notify(f"Failed to open database: {e}", severity="error")
            self.exit(return_code=1)
            return
        logger.info("Loaded %d tasks from %s", len(self.collection), self.database.db_path)
        self._refresh_view()

    def _apply_theme(self) -> None:
        """Apply the configured theme, falling back to the default."""
        if self._config.theme in self.available_themes:
            self.theme = self._config.theme
        else:
            logger.warning("Unknown theme %r, using %s", self._config.theme, DEFAULT_THEME)
            self.theme = DEFAULT_THEME

    def _refresh_view(self) -> None:
        """Redraw the list and the statistics from the collection."""
        if self.collection is None:
            return
        # The editor modal may be the active screen, so query the main one.
        main_screen = self.screen_stack[0]
        main_screen.query_one(TaskListView).show_tasks(self.collection)
        main_screen.query_one(StatisticsPanel).show_statistics(self.collection.statistics())
        self.refresh_bindings()

    def _run_list_action(self, action: Callable[[], None], description: str) -> None:
        """Run a collection mutation, reporting storage failures to the user."""
        try:
            action()
        except StorageError as e:
            logger.exception("Failed to %s", description)
            self.notify(f"Failed to {description}: {e}", severity="error")
        self._refresh_view()

    def _on_task_saved(self, task: Task) -> None:
        """Reload the list after the editor saved a task."""
        if self.collection is None:
            return
        self._run_list_action(self.collection.reload, "reload tasks")

    def _on_editor_closed(self, saved: bool | None) -> None:
        self._refresh_view()

    def action_select_next(self) -> None:
        self.collection.select_next()
        self._refresh_view()

    def action_select_previous(self) -> None:
        self.collection.select_previous()
        self._refresh_view()

    def action_unselect(self) -> None:
        self.collection.unselect()
        self._refresh_view()

    def action_sort(self, key: str) -> None:
        """Sort by the given key; the same key again reverses the list."""
        self.collection.set_sort(SortKey(key))
        self._refresh_view()

    def action_toggle_completed(self) -> None:
        self._run_list_action(self.collection.toggle_completed, "update task")

    def action_delete_selected(self) -> None:
        self._run_list_action(self.collection.delete_selected, "delete task")

    def action_open_create(self) -> None:
        self.editor.open_create()
        self.push_screen(TaskEditModal(self.editor), self._on_editor_closed)
        self.refresh_bindings()

    def action_open_edit(self) -> None:
        task = self.collection.get_selected()
        if task is None:
            return
        self.editor.open_edit(task)
        self.push_screen(TaskEditModal(self.editor), self._on_editor_closed)
        self.refresh_bindings()


def main() -> None:
    """Run a command line command, or the application when none is given."""
    config = load_config()
    setup_logging(config.log_file, config.log_level_value)

    exit_code = run_cli(config=config)
    if exit_code is not None:
        sys.exit(exit_code)

    app = TaskdeckApp(config)
    app.run()
    sys.exit(app.return_code or 0)


if __name__ == "__main__":
    main()
