"""CLI commands for Taskdeck."""

import argparse
import json
import logging
import sys
from dataclasses import replace

from taskdeck.config import Config, load_config
from taskdeck.database import Database
from taskdeck.errors import StorageError
from taskdeck.models import Task

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="taskdeck",
        description="Taskdeck - A TUI task manager",
    )
    subparsers = parser.add_subparsers(dest="command")

    # ls command
    ls_parser = subparsers.add_parser("ls", help="List all tasks")
    ls_parser.add_argument(
        "--json", action="store_true", dest="json_output", help="Output as JSON"
    )

    # mark command
    mark_parser = subparsers.add_parser("mark", help="Mark a task complete/incomplete")
    mark_parser.add_argument(
        "--id", type=int, required=True, dest="task_id", help="Task ID to mark"
    )
    mark_group = mark_parser.add_mutually_exclusive_group(required=True)
    mark_group.add_argument(
        "--complete", action="store_true", help="Mark task as completed"
    )
    mark_group.add_argument(
        "--incomplete", action="store_true", help="Mark task as not completed"
    )

    # rm command
    rm_parser = subparsers.add_parser("rm", help="Delete a task")
    rm_parser.add_argument(
        "--id", type=int, required=True, dest="task_id", help="Task ID to delete"
    )

    return parser


def get_database(config: Config) -> Database | None:
    """Get database connection if the database file exists."""
    db_path = config.database_path
    if not db_path.exists():
        print(
            f"Error: No database found at {db_path}.\n"
            "Run 'taskdeck' to create a database first.",
            file=sys.stderr,
        )
        return None
    return Database(db_path)


def task_to_dict(task: Task) -> dict:
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "due_date": task.due_date_text(),
        "priority": task.priority,
        "completed": task.completed,
    }


def cmd_ls(db: Database, args: argparse.Namespace) -> int:
    """List all tasks."""
    tasks = db.list_all()

    if args.json_output:
        print(json.dumps([task_to_dict(t) for t in tasks], indent=2))
    else:
        # Table output
        print(f"{'ID':<4} {'DONE':<5} {'DUE':<11} {'PRIO':<5} TITLE")
        for task in tasks:
            done = "x" if task.completed else "-"
            print(
                f"{task.id:<4} {done:<5} {task.due_date_text():<11} {task.priority:<5} {task.title}"
            )

    return 0


def cmd_mark(db: Database, args: argparse.Namespace) -> int:
    """Mark a task as complete or incomplete."""
    task = db.get(args.task_id)
    if task is None:
        print(f"Error: Task with ID {args.task_id} not found.", file=sys.stderr)
        return 1

    db.update(replace(task, completed=args.complete))
    status_word = "completed" if args.complete else "not completed"
    print(f"Marked task {args.task_id} as {status_word}.")
    return 0


def cmd_rm(db: Database, args: argparse.Namespace) -> int:
    """Delete a task."""
    if db.delete(args.task_id) == 0:
        print(f"Error: Task with ID {args.task_id} not found.", file=sys.stderr)
        return 1
    print(f"Deleted task {args.task_id}.")
    return 0


COMMANDS = {
    "ls": cmd_ls,
    "mark": cmd_mark,
    "rm": cmd_rm,
}


def run_cli(argv: list[str] | None = None, config: Config | None = None) -> int | None:
    """Parse arguments and dispatch to command handlers.

    Returns:
        Exit code (0 for success, non-zero for error) if a command was handled,
        None if no command was specified (should launch TUI).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        return None

    db = get_database(config or load_config())
    if db is None:
        return 1

    try:
        return COMMANDS[args.command](db, args)
    except StorageError as e:
        logger.exception("Command %s failed", args.command)
        print(f"Error: {e}", file=sys.stderr)
        return 1
