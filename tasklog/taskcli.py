#!/usr/bin/env python3
"""
tasklog: Task tracking CLI.

Commands:
  add      Add a task from text like "@project +h #tag description"
  edit     Change a task's name or metadata
  show     Show a task's details and notes
  todo     Mark a task as todo
  start    Start working on a task
  done     Mark a task as done
  cancel   Mark a task as cancelled
  list     List tasks (default: active tasks)
  note     Add or edit a task's notes
  history  Show a task's event history
  project  Manipulate projects
  config   Manage the configuration file
"""

import argparse
import sys
import logging

from tasklog.cli import TaskLogCLI
from tasklog.core.exceptions import TaskLogError
from tasklog.support.config import load_config

logger = logging.getLogger(__name__)


def _uid(value: str) -> int:
    """argparse type for task and note UIDs."""
    try:
        uid = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid UID: {value!r}")
    if uid < 1:
        raise argparse.ArgumentTypeError(f"UIDs are positive, got {uid}")
    return uid


def _add_list_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-t", "--todo", action="store_true", help="Show todo tasks")
    parser.add_argument("-s", "--start", action="store_true", help="Show started (wip) tasks")
    parser.add_argument("-d", "--done", action="store_true", help="Show done tasks")
    parser.add_argument(
        "-c", "--cancelled", action="store_true", help="Show cancelled tasks"
    )
    parser.add_argument(
        "-a", "--all", action="store_true", help="Show tasks in every status"
    )
    parser.add_argument(
        "-C",
        "--case-sensitive",
        action="store_true",
        help="Match free-text filters case-sensitively (default: ignore case)",
    )
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument(
        "filter",
        nargs="*",
        help="Metadata filters (@project, +l/+m/+h/+c, #tag) and words to search",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tasklog", description="Task tracking with projects, priorities, tags and notes"
    )
    parser.add_argument(
        "--config",
        metavar="DIR",
        help="Data directory holding config.yaml and tasks (default: $TASKLOG_HOME or ~/.config/tasklog)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # 'add' command
    add_parser = subparsers.add_parser("add", aliases=["a"], help="Add a task")
    status_group = add_parser.add_mutually_exclusive_group()
    status_group.add_argument(
        "--start", action="store_true", help="Create the task as started (wip)"
    )
    status_group.add_argument("--done", action="store_true", help="Create the task as done")
    add_parser.add_argument(
        "-n", "--note", action="store_true", help="Write a note right after creating the task"
    )
    add_parser.add_argument(
        "content", nargs="+", help="Description with optional @project, +priority and #tags"
    )

    # 'edit' command
    edit_parser = subparsers.add_parser(
        "edit", aliases=["e"], help="Change a task's name or metadata"
    )
    edit_parser.add_argument("uid", type=_uid, help="Task UID")
    edit_parser.add_argument(
        "content", nargs="*", help="New name and/or @project, +priority, #tags to add"
    )
    edit_parser.add_argument(
        "--untag", action="append", default=[], metavar="TAG", help="Remove a tag (repeatable)"
    )
    edit_parser.add_argument(
        "--no-project", action="store_true", help="Remove the task's project"
    )

    # 'show' command
    show_parser = subparsers.add_parser("show", aliases=["s"], help="Show a task")
    show_parser.add_argument("uid", type=_uid, help="Task UID")

    # status transitions
    for name, help_text in (
        ("todo", "Mark a task as todo"),
        ("start", "Start working on a task"),
        ("done", "Mark a task as done"),
        ("cancel", "Mark a task as cancelled"),
    ):
        transition_parser = subparsers.add_parser(name, help=help_text)
        transition_parser.add_argument("uid", type=_uid, help="Task UID")

    # 'list' command
    list_parser = subparsers.add_parser("list", aliases=["ls", "l"], help="List tasks")
    _add_list_arguments(list_parser)

    # 'note' command
    note_parser = subparsers.add_parser("note", help="Add or edit notes")
    note_subparsers = note_parser.add_subparsers(dest="note_command")
    note_add_parser = note_subparsers.add_parser("add", aliases=["a"], help="Add a note")
    note_add_parser.add_argument("uid", type=_uid, help="Task UID")
    note_edit_parser = note_subparsers.add_parser(
        "edit", aliases=["e"], help="Edit an existing note"
    )
    note_edit_parser.add_argument("uid", type=_uid, help="Task UID")
    note_edit_parser.add_argument("note_uid", type=_uid, help="Note UID")
    for sub in (note_add_parser, note_edit_parser):
        sub.add_argument(
            "--no-history",
            action="store_true",
            help="Do not show previous notes in the editor (overrides the configuration)",
        )

    # 'history' command
    history_parser = subparsers.add_parser("history", help="Show a task's event history")
    history_parser.add_argument("uid", type=_uid, help="Task UID")

    # 'project' command
    project_parser = subparsers.add_parser(
        "project", aliases=["proj"], help="Manipulate projects"
    )
    project_subparsers = project_parser.add_subparsers(dest="project_command")
    rename_parser = project_subparsers.add_parser(
        "rename", help="Rename a project on every task using it"
    )
    rename_parser.add_argument("current_project", help="Project to rename")
    rename_parser.add_argument("new_project", help="New project name")

    # 'config' command
    config_parser = subparsers.add_parser("config", help="Manage the configuration")
    config_subparsers = config_parser.add_subparsers(dest="config_command")
    init_parser = config_subparsers.add_parser(
        "init", help="Write a configuration file with default values"
    )
    init_parser.add_argument(
        "--force", action="store_true", help="Overwrite an existing configuration"
    )

    return parser


COMMAND_ALIASES = {
    "a": "add",
    "e": "edit",
    "s": "show",
    "ls": "list",
    "l": "list",
    "proj": "project",
}


def dispatch(cli: TaskLogCLI, args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    """Route parsed arguments to the matching CLI command."""
    command = COMMAND_ALIASES.get(args.command, args.command)

    if command is None:
        # no subcommand: list active tasks
        defaults = parser.parse_args(["list"])
        return cli.cmd_list(defaults)
    elif command == "add":
        return cli.cmd_add(args)
    elif command == "edit":
        return cli.cmd_edit(args)
    elif command == "show":
        return cli.cmd_show(args)
    elif command == "todo":
        return cli.cmd_todo(args)
    elif command == "start":
        return cli.cmd_start(args)
    elif command == "done":
        return cli.cmd_done(args)
    elif command == "cancel":
        return cli.cmd_cancel(args)
    elif command == "list":
        return cli.cmd_list(args)
    elif command == "history":
        return cli.cmd_history(args)
    elif command == "note":
        note_command = COMMAND_ALIASES.get(args.note_command, args.note_command)
        if note_command == "add":
            return cli.cmd_note_add(args)
        elif note_command == "edit":
            return cli.cmd_note_edit(args)
    elif command == "project":
        if args.project_command == "rename":
            return cli.cmd_project_rename(args)
    elif command == "config":
        if args.config_command == "init":
            return cli.cmd_config_init(args)

    parser.print_help()
    return 1


def main(argv=None) -> int:
    """Main entry point for tasklog CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        cli = TaskLogCLI(load_config(args.config))
        return dispatch(cli, args, parser)
    except TaskLogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("Unexpected failure")
        print(f"Unexpected error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
