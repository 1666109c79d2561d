"""In-memory task collection keyed by UID; every mutation is an event append."""

import logging
from datetime import datetime
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence

from tasklog.core.exceptions import TaskNotFound
from tasklog.core.models import (
    Created,
    Event,
    Priority,
    ProjectChanged,
    Task,
    utc_now,
)

logger = logging.getLogger(__name__)


class TaskStore:
    """Task collection for one command invocation.

    The store does no domain validation beyond task existence and never
    persists by itself; see TaskRepository for load/save.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: Dict[int, Task] = {}
        for task in tasks or ():
            if task.uid in self._tasks:
                raise ValueError(f"Duplicate task uid {task.uid}")
            self._tasks[task.uid] = task

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, uid: int) -> bool:
        return uid in self._tasks

    def get(self, uid: int) -> Task:
        """
        Get a task by UID.

        Raises:
            TaskNotFound: If no task has this UID
        """
        try:
            return self._tasks[uid]
        except KeyError:
            raise TaskNotFound(uid)

    def next_uid(self) -> int:
        return max(self._tasks, default=0) + 1

    def create(
        self,
        name: str,
        project: Optional[str] = None,
        priority: Optional[Priority] = None,
        tags: FrozenSet[str] = frozenset(),
        at: Optional[datetime] = None,
    ) -> int:
        """
        Create a task from its initial metadata.

        Args:
            name: Task description
            project: Optional project label
            priority: Priority (defaults to low)
            tags: Initial tags
            at: Creation timestamp (defaults to now)

        Returns:
            UID of the new task
        """
        uid = self.next_uid()
        created = Created(
            at=at or utc_now(),
            name=name,
            project=project,
            priority=priority or Priority.LOW,
            tags=frozenset(tags),
        )
        self._tasks[uid] = Task(uid=uid, history=[created])
        logger.debug(f"Created task {uid}: {name!r}")
        return uid

    def append_event(self, uid: int, event: Event) -> None:
        """Append an event to a task's history.

        Raises:
            TaskNotFound: If no task has this UID
        """
        self.get(uid).append(event)

    def append_events(self, uid: int, events: Sequence[Event]) -> None:
        """Append several events; nothing is appended if the task is missing."""
        task = self.get(uid)
        for event in events:
            task.append(event)
        logger.debug(f"Appended {len(events)} event(s) to task {uid}")

    def all(self) -> List[Task]:
        """Get all tasks ordered by UID."""
        return [self._tasks[uid] for uid in sorted(self._tasks)]

    def next_note_uid(self, uid: int) -> int:
        return self.get(uid).next_note_uid()

    def rename_project(
        self, current: str, new: str, at: Optional[datetime] = None
    ) -> int:
        """
        Move every task whose current project is ``current`` to ``new``.

        Returns:
            Number of tasks updated
        """
        at = at or utc_now()
        renamed = 0
        for task in self.all():
            if task.project(at).project == current:
                task.append(ProjectChanged(at=at, new_project=new))
                renamed += 1
        logger.info(f"Renamed project {current!r} to {new!r} on {renamed} task(s)")
        return renamed
