"""State machine behind the add/edit task dialog.

The dialog has four single-line fields (title, description, due date and
priority) and one text cursor stored as ``(column, row)``. Every keystroke
of the dialog maps to one method here; rendering lives in
``taskdeck.screens.task_edit_modal``.
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from taskdeck.database import Database
from taskdeck.errors import ValidationError
from taskdeck.models import DATE_FORMAT, PRIORITY_DIGITS, PRIORITY_NORMAL, Task

logger = logging.getLogger(__name__)

TITLE_ROW = 0
DESCRIPTION_ROW = 1
DUE_DATE_ROW = 2
PRIORITY_ROW = 3

# Fixed number of editor rows; not derived from the field list.
MAX_ROW = 3

FIELD_LABELS = ("Title:", "Description:", "Due date:", "Priority:")
PLACEHOLDERS = ("My task name", "My description", "23.11.2023", "0")

DATE_ERROR = "Date should be in format dd.mm.yyyy"
TITLE_ERROR = "Title cannot be empty"
DESCRIPTION_ERROR = "Description cannot be empty"


def _empty_fields() -> list[str]:
    return ["", "", "", ""]


class EditorState:
    """Buffers, cursor and validation for creating or editing one task."""

    def __init__(
        self,
        database: Database,
        on_saved: Callable[[Task], None] | None = None,
    ) -> None:
        self._database = database
        self._on_saved = on_saved
        self.active = False
        self.target_id: int | None = None
        self.fields: list[str] = _empty_fields()
        self.cursor: tuple[int, int] = (0, 0)
        self.error: str | None = None

    @property
    def is_create(self) -> bool:
        return self.target_id is None

    def current_field(self) -> str:
        return self.fields[self.cursor[1]]

    # -------------------- open / close --------------------

    def open_create(self) -> None:
        """Open the dialog for a new task."""
        self.active = True
        self.target_id = None
        self.fields = _empty_fields()
        self.error = None
        # Starts past the title placeholder; the first keystroke resets it.
        self.cursor = (len(PLACEHOLDERS[TITLE_ROW]), TITLE_ROW)

    def open_edit(self, task: Task) -> None:
        """Open the dialog pre-filled with an existing task."""
        self.active = True
        self.target_id = task.id
        self.fields = [
            task.title,
            task.description,
            task.due_date_text(),
            str(task.priority),
        ]
        self.error = None
        self.cursor = (0, TITLE_ROW)

    def cancel(self) -> None:
        """Close the dialog and discard everything typed."""
        self.active = False
        self.target_id = None
        self.fields = _empty_fields()
        self.error = None
        self.cursor = (0, 0)

    # -------------------- cursor motion --------------------

    def move_down(self) -> None:
        if not self.active:
            return
        column, row = self.cursor
        row = min(row + 1, MAX_ROW)
        self.cursor = (min(column, len(self.fields[row])), row)

    def move_up(self) -> None:
        # Column is not reclamped against the new row.
        if not self.active:
            return
        column, row = self.cursor
        self.cursor = (column, max(row - 1, 0))

    def move_left(self) -> None:
        if not self.active:
            return
        column, row = self.cursor
        self.cursor = (max(column - 1, 0), row)

    def move_right(self) -> None:
        if not self.active:
            return
        column, row = self.cursor
        self.cursor = (min(column + 1, len(self.fields[row])), row)

    # -------------------- editing --------------------

    def insert_char(self, char: str) -> None:
        """Type one character into the field under the cursor.

        The priority field holds a single digit: 0, 1 or 2 replace it and
        anything else is ignored.
        """
        if not self.active:
            return
        column, row = self.cursor
        if not self.fields[row]:
            column = 0
            self.cursor = (column, row)

        if row == PRIORITY_ROW:
            if char in PRIORITY_DIGITS:
                self.fields[row] = char
        else:
            text = self.fields[row]
            self.fields[row] = text[:column] + char + text[column:]

        self.move_right()

    def delete_char(self) -> None:
        """Backspace: remove a character and step the cursor left."""
        if not self.active:
            return
        column, row = self.cursor
        if column == 0:
            return

        text = self.fields[row]
        # At or past the end, the last character is the one removed.
        position = len(text) - 1 if column >= len(text) else column
        if row != PRIORITY_ROW and text:
            self.fields[row] = text[:position] + text[position + 1 :]

        self.move_left()

    # -------------------- validation / commit --------------------

    def validate(self) -> Task:
        """Build the task described by the buffers.

        Raises:
            ValidationError: On the first invalid field, checked in the order
                due date, title, description.
        """
        title, description, due_text, priority_text = self.fields
        try:
            due_date = datetime.strptime(due_text, DATE_FORMAT).replace(
                tzinfo=timezone.utc
            )
        except ValueError as e:
            raise ValidationError(DATE_ERROR) from e
        if not title:
            raise ValidationError(TITLE_ERROR)
        if not description:
            raise ValidationError(DESCRIPTION_ERROR)

        return Task(
            id=self.target_id,
            title=title,
            description=description,
            due_date=due_date,
            priority=int(priority_text) if priority_text else PRIORITY_NORMAL,
            completed=False,
        )

    def commit(self) -> bool:
        """Validate and save the task.

        Returns:
            True if the task was saved and the dialog closed, False if the
            dialog stays open (closed dialog or invalid input).

        Raises:
            StorageError: If saving fails. The dialog stays open and no
                error message is set on it.
        """
        if not self.active:
            return False

        try:
            task = self.validate()
        except ValidationError as e:
            self.error = str(e)
            return False

        self.error = None
        if task.id is not None:
            self._database.update(task)
            logger.info("Task %s updated", task.id)
        else:
            task.id = self._database.insert(task)
            logger.info("Task %s created", task.id)

        self.cancel()
        if self._on_saved is not None:
            self._on_saved(task)
        return True
