"""Core package: event model, projection, metadata parser, query compiler and exceptions."""

from tasklog.core.models import (
    Created,
    Event,
    NameChanged,
    Note,
    NoteAdded,
    NoteEdited,
    Priority,
    PriorityChanged,
    ProjectChanged,
    ProjectedTask,
    Status,
    StatusChanged,
    TagsChanged,
    Task,
    project,
    utc_now,
)
from tasklog.core.exceptions import (
    TaskLogError,
    TaskNotFound,
    NoteNotFound,
    AmbiguousMetadata,
    InvalidHistory,
    AbortedByUser,
    EditorUnavailable,
)
from tasklog.core.metadata import tokenize, free_text, split_metadata
from tasklog.core.query import TaskQuery, compile_query, select_statuses

__all__ = [
    "Created",
    "Event",
    "NameChanged",
    "Note",
    "NoteAdded",
    "NoteEdited",
    "Priority",
    "PriorityChanged",
    "ProjectChanged",
    "ProjectedTask",
    "Status",
    "StatusChanged",
    "TagsChanged",
    "Task",
    "project",
    "utc_now",
    "TaskLogError",
    "TaskNotFound",
    "NoteNotFound",
    "AmbiguousMetadata",
    "InvalidHistory",
    "AbortedByUser",
    "EditorUnavailable",
    "tokenize",
    "free_text",
    "split_metadata",
    "TaskQuery",
    "compile_query",
    "select_statuses",
]
