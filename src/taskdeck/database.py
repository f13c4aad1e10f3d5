"""Database management for Taskdeck."""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from taskdeck.errors import StorageError
from taskdeck.models import Task

logger = logging.getLogger(__name__)

TABLE_NAME = "task_item"

# Sent to delete() for a task that was never persisted; matches no row.
INVALID_TASK_ID = -1


class Database:
    """SQLite store for tasks.

    One instance is the single handle to the task database for a session.
    Every operation opens its own short-lived connection.
    """

    def __init__(self, db_path: Path) -> None:
        """Initialize database with path."""
        self.db_path = db_path

    @contextmanager
    def connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Context manager for database connections with dict-like row access.

        Any sqlite3 or OS level failure is re-raised as StorageError.
        """
        try:
            conn = sqlite3.connect(self.db_path)
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Cannot open database at {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        except sqlite3.Error as e:
            raise StorageError(f"Database error: {e}") from e
        finally:
            conn.close()

    def ensure_schema(self) -> None:
        """Create the task table if it doesn't exist."""
        with self.connection() as conn:
            conn.execute(f"""
                CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
                    Id INTEGER PRIMARY KEY AUTOINCREMENT,
                    Title TEXT,
                    Description TEXT,
                    DueDate DATETIME,
                    PriorityLevel INT,
                    Completed TINYINT
                )
            """)
            conn.commit()
        logger.debug("Schema ensured at %s", self.db_path)

    def verify_connection(self) -> bool:
        """Verify the database connection and schema are valid."""
        try:
            with self.connection() as conn:
                conn.execute(f"SELECT 1 FROM {TABLE_NAME} LIMIT 1")
                return True
        except StorageError:
            return False

    def insert(self, task: Task) -> int:
        """Insert a new task and return its freshly assigned id."""
        if task.id is not None:
            raise ValueError(f"Task already has id {task.id}; use update()")

        with self.connection() as conn:
            cursor = conn.execute(
                f"INSERT INTO {TABLE_NAME} (Title, Description, DueDate, PriorityLevel, Completed) "
                "VALUES (?, ?, ?, ?, ?)",
                task.to_params(),
            )
            conn.commit()
            new_id = cursor.lastrowid
        logger.debug("Inserted task %s", new_id)
        return new_id

    def update(self, task: Task) -> int:
        """Update the row matching task.id.

        Returns:
            Number of updated rows; 0 means the id is stale or missing.
        """
        if task.id is None:
            raise ValueError("Task has no id; use insert()")

        with self.connection() as conn:
            cursor = conn.execute(
                f"UPDATE {TABLE_NAME} SET Title = ?, Description = ?, DueDate = ?, "
                "PriorityLevel = ?, Completed = ? WHERE Id = ?",
                task.to_params() + (task.id,),
            )
            conn.commit()
            count = cursor.rowcount
        if count == 0:
            logger.warning("Update matched no row for task %s", task.id)
        else:
            logger.debug("Updated task %s", task.id)
        return count

    def delete(self, task_id: int) -> int:
        """Delete a task by ID and return the number of deleted rows."""
        with self.connection() as conn:
            cursor = conn.execute(f"DELETE FROM {TABLE_NAME} WHERE Id = ?", (task_id,))
            conn.commit()
            count = cursor.rowcount
        logger.debug("Deleted task %s (%d rows)", task_id, count)
        return count

    def list_all(self) -> list[Task]:
        """Fetch all tasks in insertion order.

        Malformed rows are dropped (and logged) so that one corrupt record
        does not hide the rest of the list.
        """
        with self.connection() as conn:
            rows = conn.execute(
                f"SELECT Id, Title, Description, DueDate, PriorityLevel, Completed "
                f"FROM {TABLE_NAME} ORDER BY Id"
            ).fetchall()

        tasks = []
        for row in rows:
            try:
                tasks.append(Task.from_row(dict(row)))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Dropping malformed task row %s: %s", row["Id"], e)
        return tasks

    def get(self, task_id: int) -> Task | None:
        """Find a task by ID; None if missing or malformed."""
        for task in self.list_all():
            if task.id == task_id:
                return task
        return None
