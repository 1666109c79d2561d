"""
tasklog add command implementation.

Creates a task from free-form text such as ``@work +h #bug fix the login``.
"""

import sys
import argparse

from tasklog.cli import render
from tasklog.cli.cmd_note import record_new_note
from tasklog.core.exceptions import MissingDescription, TaskLogError
from tasklog.core.metadata import split_metadata, tokenize
from tasklog.core.models import Status, StatusChanged, utc_now
from tasklog.pipeline.listing import ListingRow


def cmd_add(cli_instance, args: argparse.Namespace) -> int:
    """Add a new task.

    The task starts as todo, or directly as wip/done with --start/--done.
    With --note an editor is opened afterwards to write a first note.

    Args:
        cli_instance: TaskLogCLI instance with config and repository
        args: Parsed command-line arguments with: content, start, done, note

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        summary = split_metadata(tokenize(*args.content))
        if not summary.text:
            raise MissingDescription()

        store = cli_instance.repository.load()
        now = utc_now()
        uid = store.create(
            summary.text,
            project=summary.project,
            priority=summary.priority,
            tags=summary.tags,
            at=now,
        )

        if getattr(args, "start", False):
            store.append_event(uid, StatusChanged(at=now, new_status=Status.WIP))
        elif getattr(args, "done", False):
            store.append_event(uid, StatusChanged(at=now, new_status=Status.DONE))

        cli_instance.repository.save(store)

        task = store.get(uid).project(now)
        for line in render.render_rows([ListingRow.from_projection(task)], cli_instance.config):
            print(line)

    except TaskLogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if getattr(args, "note", False):
        return record_new_note(cli_instance, uid, with_history=False)

    return 0
