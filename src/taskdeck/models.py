"""Data models for Taskdeck."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

PRIORITY_NORMAL = 0
PRIORITY_ELEVATED = 1
PRIORITY_URGENT = 2
PRIORITY_DIGITS = ("0", "1", "2")

# Date format used both for display and for the editor's due date field.
DATE_FORMAT = "%d.%m.%Y"


class SortKey(Enum):
    """Possible task list sorting orders."""

    DUE_DATE = "due_date"
    NAME = "name"
    PRIORITY = "priority"


@dataclass
class Task:
    """Represents a task in the database."""

    id: int | None
    title: str
    description: str
    due_date: datetime
    priority: int = PRIORITY_NORMAL
    completed: bool = False

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Task":
        """Create a Task from a SQLite row dictionary.

        Raises:
            KeyError, TypeError, ValueError: If the row is malformed.
        """
        title = row["Title"]
        description = row["Description"]
        if not isinstance(title, str) or not title:
            raise ValueError(f"invalid title: {title!r}")
        if not isinstance(description, str) or not description:
            raise ValueError(f"invalid description: {description!r}")

        priority = row["PriorityLevel"]
        if not isinstance(priority, int):
            raise TypeError(f"invalid priority: {priority!r}")

        completed = row["Completed"]
        if completed not in (0, 1):
            raise ValueError(f"invalid completed flag: {completed!r}")

        return cls(
            id=row["Id"],
            title=title,
            description=description,
            due_date=parse_stored_date(row["DueDate"]),
            priority=priority,
            completed=bool(completed),
        )

    def to_params(self) -> tuple[str, str, str, int, int]:
        """Return the column values in table order (without the id)."""
        return (
            self.title,
            self.description,
            format_stored_date(self.due_date),
            self.priority,
            int(self.completed),
        )

    def due_date_text(self) -> str:
        """Render the due date the way the user types it (dd.mm.yyyy)."""
        # strftime("%Y") does not zero-pad years below 1000 on every platform.
        d = self.due_date
        return f"{d.day:02d}.{d.month:02d}.{d.year:04d}"


def parse_stored_date(value: Any) -> datetime:
    """Parse a DueDate column value into an aware UTC datetime."""
    if not isinstance(value, str):
        raise TypeError(f"invalid due date: {value!r}")
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_stored_date(value: datetime) -> str:
    """Format a datetime for the DueDate column (ISO 8601, UTC offset)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()
