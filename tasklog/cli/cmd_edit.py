"""
tasklog edit command implementation.

Changes a task's name and metadata. Metadata in the text (``@proj``, ``+h``,
``#tag``) is applied; remaining words, if any, become the new name.
"""

import sys
import argparse
from typing import List

from tasklog.cli import render
from tasklog.core.exceptions import ConflictingEdit, TaskLogError
from tasklog.core.metadata import MetadataSummary, split_metadata, tokenize
from tasklog.core.models import (
    Event,
    NameChanged,
    PriorityChanged,
    ProjectChanged,
    TagsChanged,
    utc_now,
)
from tasklog.pipeline.listing import ListingRow


def build_edit_events(
    summary: MetadataSummary,
    untag: List[str],
    clear_project: bool,
) -> List[Event]:
    """Translate an edit request into the events to append.

    Raises:
        ConflictingEdit: If the project is both set and cleared.
    """
    if clear_project and summary.project is not None:
        raise ConflictingEdit("project")

    now = utc_now()
    events: List[Event] = []

    if summary.text:
        events.append(NameChanged(at=now, new_name=summary.text))
    if summary.project is not None:
        events.append(ProjectChanged(at=now, new_project=summary.project))
    elif clear_project:
        events.append(ProjectChanged(at=now, new_project=None))
    if summary.priority is not None:
        events.append(PriorityChanged(at=now, new_priority=summary.priority))

    removed = frozenset(tag.lstrip("#") for tag in untag if tag.lstrip("#"))
    if summary.tags or removed:
        events.append(TagsChanged(at=now, added=summary.tags, removed=removed))

    return events


def cmd_edit(cli_instance, args: argparse.Namespace) -> int:
    """Edit a task.

    Args:
        cli_instance: TaskLogCLI instance with config and repository
        args: Parsed command-line arguments with: uid, content, untag, no_project

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        summary = split_metadata(tokenize(*args.content))
        events = build_edit_events(
            summary,
            getattr(args, "untag", None) or [],
            getattr(args, "no_project", False),
        )

        store = cli_instance.repository.load()
        task = store.get(args.uid)

        if not events:
            print(f"Nothing to change for task {args.uid}")
            return 0

        store.append_events(args.uid, events)
        cli_instance.repository.save(store)

        row = ListingRow.from_projection(task.project())
        for line in render.render_rows([row], cli_instance.config):
            print(line)
        return 0

    except TaskLogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
