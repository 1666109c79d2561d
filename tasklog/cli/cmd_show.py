"""
tasklog show and history command implementations.
"""

import sys
import argparse

from tasklog.cli import render
from tasklog.core.exceptions import TaskLogError


def cmd_show(cli_instance, args: argparse.Namespace) -> int:
    """Display a task's details and notes.

    Args:
        cli_instance: TaskLogCLI instance with config and repository
        args: Parsed command-line arguments with: uid

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        store = cli_instance.repository.load()
        task = store.get(args.uid).project()
    except TaskLogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for line in render.render_task(task, cli_instance.config):
        print(line)
    return 0


def cmd_history(cli_instance, args: argparse.Namespace) -> int:
    """Display every recorded event of a task, oldest first.

    Args:
        cli_instance: TaskLogCLI instance with config and repository
        args: Parsed command-line arguments with: uid

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        store = cli_instance.repository.load()
        task = store.get(args.uid)
    except TaskLogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for line in render.render_history(task.uid, task.history, cli_instance.config):
        print(line)
    return 0
