"""Taskdeck - a terminal task manager."""

__version__ = "0.1.0"
