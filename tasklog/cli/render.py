"""
Plain-text rendering of listings, task details and task history.

Columns with no data in any row are left out, so a listing of tasks without
projects has no Project column.
"""

from typing import Callable, List, Sequence, Tuple

from tasklog.core.formatting import (
    format_project,
    format_tags,
    format_timestamp,
    friendly_duration,
    friendly_spent_time,
)
from tasklog.core.metadata import MetadataToken
from tasklog.core.models import (
    Created,
    Event,
    NameChanged,
    NoteAdded,
    NoteEdited,
    PriorityChanged,
    ProjectChanged,
    ProjectedTask,
    StatusChanged,
    TagsChanged,
)
from tasklog.core.query import TaskQuery
from tasklog.pipeline.listing import ListingRow
from tasklog.support.config import Config


def _spent_cell(row: ListingRow) -> str:
    text = friendly_spent_time(row.spent)
    if text and row.spent_is_stale:
        # time recorded during an earlier work period
        return f"({text})"
    return text


def _columns(config: Config) -> List[Tuple[str, Callable[[ListingRow], str], bool]]:
    """(header, cell getter, always shown) for each listing column."""
    return [
        ("UID", lambda r: str(r.uid), True),
        ("Age", lambda r: friendly_duration(r.age), True),
        ("Spent", _spent_cell, False),
        ("Prio", lambda r: r.priority.short_name, True),
        ("Project", lambda r: format_project(r.project), False),
        ("Tags", lambda r: format_tags(r.tags), False),
        ("Status", lambda r: config.status_alias(r.status), True),
        ("Notes", lambda r: str(r.note_count) if r.note_count else "", False),
        ("Description", lambda r: r.name, True),
    ]


def render_rows(rows: Sequence[ListingRow], config: Config) -> List[str]:
    """Render listing rows as aligned text lines (header first).

    Returns an empty list when there is nothing to show.
    """
    if not rows:
        return []

    table = []
    for header, getter, always in _columns(config):
        cells = [getter(row) for row in rows]
        if always or any(cells):
            table.append((header, cells))

    widths = [max(len(header), *(len(c) for c in cells)) for header, cells in table]
    last = len(table) - 1

    def line(values: Sequence[str]) -> str:
        padded = [v if i == last else v.ljust(widths[i]) for i, v in enumerate(values)]
        return " ".join(padded).rstrip()

    lines = [line([header for header, _ in table])]
    for index in range(len(rows)):
        lines.append(line([cells[index] for _, cells in table]))
    return lines


def describe_query(tokens: Sequence[MetadataToken], query: TaskQuery) -> str:
    """One-line summary of active filters, e.g. ``[ @work, #bug ] [ contains: fix ]``."""
    if not query.has_filters:
        return ""

    parts = []
    if tokens:
        parts.append("[ " + ", ".join(t.filter_like() for t in tokens) + " ]")
    if query.terms:
        parts.append("[ contains: " + ", ".join(query.terms) + " ]")
    return " ".join(parts)


def render_task(task: ProjectedTask, config: Config) -> List[str]:
    """Detailed view of a single task, notes included."""
    lines = [
        f" Description: {task.name}",
        f" UID: {task.uid}",
        f" Age: {friendly_duration(task.age)}",
    ]

    if task.spent.total_seconds() > 0:
        lines.append(f" Spent: {friendly_duration(task.spent)}")
    else:
        lines.append(" Spent: not started yet")

    lines.append(f" Prio: {task.priority.short_name}")
    if task.project:
        lines.append(f" Project: {task.project}")
    if task.tags:
        lines.append(f" Tags: {format_tags(task.tags)}")
    lines.append(f" Status: {config.status_alias(task.status)}")

    for note in task.notes:
        lines.append("")
        header = f" Note #{note.uid}, on {format_timestamp(note.created_at)}"
        if note.edited:
            header += f", edited on {format_timestamp(note.modified_at)}"
        lines.append(header)
        lines.append(note.text.strip())

    return lines


def describe_event(event: Event, uid: int, config: Config) -> str:
    """Human readable description of a history event."""
    if isinstance(event, Created):
        text = f"Task created with uid {uid}: {event.name}"
        extras = [format_project(event.project), event.priority.short_name, format_tags(event.tags)]
        extras = [e for e in extras if e]
        return f"{text} ({', '.join(extras)})" if extras else text
    if isinstance(event, NameChanged):
        return f"Renamed to {event.new_name}"
    if isinstance(event, ProjectChanged):
        if event.new_project is None:
            return "Project removed"
        return f"Project set to {event.new_project}"
    if isinstance(event, PriorityChanged):
        return f"Priority set to {event.new_priority.short_name}"
    if isinstance(event, TagsChanged):
        changes = [f"+#{t}" for t in sorted(event.added)]
        changes += [f"-#{t}" for t in sorted(event.removed)]
        return f"Tags changed: {' '.join(changes)}"
    if isinstance(event, StatusChanged):
        return f"Status changed to {config.status_alias(event.new_status)}"
    if isinstance(event, NoteAdded):
        return f"Note {event.note_uid} added: {_first_line(event.text)}"
    if isinstance(event, NoteEdited):
        return f"Note {event.note_uid} updated: {_first_line(event.text)}"
    return repr(event)


def render_history(uid: int, history: Sequence[Event], config: Config) -> List[str]:
    return [
        f"{format_timestamp(event.at)}: {describe_event(event, uid, config)}"
        for event in history
    ]


def _first_line(text: str) -> str:
    stripped = text.strip()
    return stripped.splitlines()[0] if stripped else ""
