"""Screen modules for Taskdeck."""

from taskdeck.screens.task_edit_modal import TaskEditModal

__all__ = ["TaskEditModal"]
