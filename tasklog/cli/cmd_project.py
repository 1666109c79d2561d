"""
tasklog project command implementation.
"""

import sys
import argparse

from tasklog.core.exceptions import TaskLogError


def cmd_project_rename(cli_instance, args: argparse.Namespace) -> int:
    """Rename a project on every task currently assigned to it.

    Args:
        cli_instance: TaskLogCLI instance with config and repository
        args: Parsed command-line arguments with: current_project, new_project

    Returns:
        Exit code (0 on success, 1 on error)
    """
    current = args.current_project.lstrip("@")
    new = args.new_project.lstrip("@")
    if not current or not new:
        print("Error: project names cannot be empty", file=sys.stderr)
        return 1

    try:
        store = cli_instance.repository.load()
        count = store.rename_project(current, new)
        if count:
            cli_instance.repository.save(store)
    except TaskLogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if count:
        print(f"Updated {count} task(s)")
    else:
        print(f"No task for project {current}")
    return 0
