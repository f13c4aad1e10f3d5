"""Widgets for Taskdeck."""

from taskdeck.widgets.info_panels import CommandsPanel, StatisticsPanel
from taskdeck.widgets.task_list import TaskListView

__all__ = ["CommandsPanel", "StatisticsPanel", "TaskListView"]
