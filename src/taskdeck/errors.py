"""Error types shared by the store, the task list and the editor."""


class TaskdeckError(Exception):
    """Base class for Taskdeck errors."""


class StorageError(TaskdeckError):
    """A schema, read or write failure in the task database.

    Fatal to the single operation that triggered it.
    """


class ValidationError(TaskdeckError):
    """Editor input that cannot be saved yet."""
