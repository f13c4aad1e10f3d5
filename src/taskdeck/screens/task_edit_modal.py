"""Task add/edit modal dialog."""

import logging

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Label, Static

from taskdeck.editor import FIELD_LABELS, MAX_ROW, PLACEHOLDERS, EditorState
from taskdeck.errors import StorageError

logger = logging.getLogger(__name__)

LABEL_WIDTH = 13
CURSOR_STYLE = "black on white"
PLACEHOLDER_STYLE = "grey30"
HELP_TEXT = "Enter - save, Esc - cancel"


def render_editor(editor: EditorState) -> Text:
    """Render the four fields, the cursor, the error message and the help line."""
    column, cursor_row = editor.cursor
    text = Text()

    for row in range(MAX_ROW + 1):
        value = editor.fields[row]
        placeholder = PLACEHOLDERS[row]
        text.append(FIELD_LABELS[row].ljust(LABEL_WIDTH))

        if not value:
            # Empty field shows its placeholder, first char under the cursor
            if row == cursor_row:
                text.append(placeholder[:1], style=CURSOR_STYLE)
                text.append(placeholder[1:], style=PLACEHOLDER_STYLE)
            else:
                text.append(placeholder, style=PLACEHOLDER_STYLE)
        elif row == cursor_row:
            text.append(value[:column])
            text.append(value[column : column + 1], style=CURSOR_STYLE)
            text.append(value[column + 1 :])
            if column == len(value):
                text.append(" ", style=CURSOR_STYLE)
        else:
            text.append(value)
        text.append("\n")

    if editor.error:
        text.append("\n")
        text.append(editor.error, style="red")
        text.append("\n")

    text.append("\n")
    text.append(HELP_TEXT)
    return text


class TaskEditModal(ModalScreen[bool]):
    """Modal dialog driving an EditorState.

    Dismisses with True once the task was saved, False when cancelled.
    """

    CSS = """
    TaskEditModal {
        align: center middle;
        background: $background 60%;
    }

    TaskEditModal > Vertical {
        width: 60;
        height: auto;
        background: $surface;
        border: solid $primary-muted;
        padding: 1 2;
    }

    TaskEditModal #modal-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    def __init__(self, editor: EditorState) -> None:
        """Initialize the modal with an already opened editor."""
        super().__init__()
        self._editor = editor

    def compose(self) -> ComposeResult:
        """Create dialog widgets."""
        title = "Add Task" if self._editor.is_create else "Edit Task"
        with Vertical():
            yield Label(title, id="modal-title")
            yield Static(render_editor(self._editor), id="editor-fields")

    def _refresh_fields(self) -> None:
        self.query_one("#editor-fields", Static).update(render_editor(self._editor))

    def on_key(self, event: events.Key) -> None:
        """Map editor-mode keys onto the editor state machine."""
        editor = self._editor
        key = event.key
        if key == "up":
            editor.move_up()
        elif key == "down":
            editor.move_down()
        elif key == "left":
            editor.move_left()
        elif key == "right":
            editor.move_right()
        elif key == "backspace":
            editor.delete_char()
        elif key == "escape":
            editor.cancel()
            self.dismiss(False)
        elif key == "enter":
            self._save()
        elif event.is_printable and event.character:
            editor.insert_char(event.character)
        else:
            return

        event.prevent_default()
        event.stop()
        if editor.active:
            self._refresh_fields()

    def _save(self) -> None:
        """Commit the editor; stay open on invalid input or storage failure."""
        try:
            saved = self._editor.commit()
        except StorageError as e:
            logger.exception("Saving task failed")
            self.app.notify(f"Failed to save task: {e}", severity="error")
            return
        if saved:
            self.dismiss(True)
