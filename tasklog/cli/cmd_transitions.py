"""
tasklog transitions command implementations.

Handles status changes: todo, start, done, cancel. Any status can move to
any other one.
"""

import sys
import argparse
import logging

from tasklog.core.exceptions import TaskLogError
from tasklog.core.formatting import friendly_duration
from tasklog.core.models import Status, StatusChanged, utc_now

logger = logging.getLogger(__name__)


def change_status(cli_instance, uid: int, status: Status) -> int:
    """Append a status change to a task.

    When the task already has ``status`` an event is still recorded, unless
    the configuration disables ``record_self_transitions``.

    Returns:
        Exit code (0 on success, 1 on error)
    """
    config = cli_instance.config
    alias = config.status_alias(status)

    try:
        store = cli_instance.repository.load()
        task = store.get(uid)
        now = utc_now()

        if task.project(now).status is status and not config.record_self_transitions:
            print(f"Task {uid} is already {alias}; nothing recorded")
            return 0

        store.append_event(uid, StatusChanged(at=now, new_status=status))
        cli_instance.repository.save(store)

        projected = task.project(now)
        logger.info(f"Task {uid} moved to {status.value}")
        message = f"Task {uid} is now {alias}: {projected.name}"
        if status.is_terminal and projected.spent.total_seconds() > 0:
            message += f" (spent {friendly_duration(projected.spent)})"
        print(message)
        return 0

    except TaskLogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_todo(cli_instance, args: argparse.Namespace) -> int:
    """Mark a task as todo.

    Args:
        cli_instance: TaskLogCLI instance with config and repository
        args: Parsed command-line arguments with: uid

    Returns:
        Exit code (0 on success, 1 on error)
    """
    return change_status(cli_instance, args.uid, Status.TODO)


def cmd_start(cli_instance, args: argparse.Namespace) -> int:
    """Start working on a task (time is tracked while it is wip)."""
    return change_status(cli_instance, args.uid, Status.WIP)


def cmd_done(cli_instance, args: argparse.Namespace) -> int:
    """Mark a task as done."""
    return change_status(cli_instance, args.uid, Status.DONE)


def cmd_cancel(cli_instance, args: argparse.Namespace) -> int:
    """Mark a task as cancelled."""
    return change_status(cli_instance, args.uid, Status.CANCELLED)
