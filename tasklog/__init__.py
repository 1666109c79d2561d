"""tasklog package: single-user task tracking backed by per-task event histories."""

from tasklog.store import TaskStore, TaskRepository
from tasklog.core.models import Task, ProjectedTask, Status, Priority

__all__ = [
    "TaskStore",
    "TaskRepository",
    "Task",
    "ProjectedTask",
    "Status",
    "Priority",
]
