# tests/conftest.py

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

import pytest

from taskdeck.database import Database
from taskdeck.models import Task


@pytest.fixture()
def db(tmp_path: Path) -> Database:
    """A fresh task database with the schema in place."""
    database = Database(tmp_path / "tasks.db")
    database.ensure_schema()
    return database


@pytest.fixture()
def make_task() -> Callable[..., Task]:
    """Factory for unsaved tasks with sensible defaults."""

    def _make(
        title: str = "Task",
        description: str = "Something to do",
        due: tuple[int, int, int] = (2024, 1, 15),
        priority: int = 0,
        completed: bool = False,
    ) -> Task:
        return Task(
            id=None,
            title=title,
            description=description,
            due_date=datetime(*due, tzinfo=timezone.utc),
            priority=priority,
            completed=completed,
        )

    return _make
