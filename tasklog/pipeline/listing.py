"""
Listing pipeline: project, filter, sort and emit task rows.

Stages:
1. project every task at a single ``now``
2. keep tasks matching the compiled query
3. sort by priority (desc), creation date (older first), status rank, UID
4. emit one ListingRow per task
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from tasklog.core.models import Priority, ProjectedTask, Status, utc_now
from tasklog.core.query import TaskQuery
from tasklog.store.memory import TaskStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListingRow:
    """Fields the renderer needs for one listed task."""

    uid: int
    age: timedelta
    spent: timedelta
    spent_is_stale: bool
    priority: Priority
    project: Optional[str]
    tags: Tuple[str, ...]
    status: Status
    name: str
    note_count: int

    @classmethod
    def from_projection(cls, task: ProjectedTask) -> "ListingRow":
        return cls(
            uid=task.uid,
            age=task.age,
            spent=task.spent,
            spent_is_stale=task.spent_is_stale,
            priority=task.priority,
            project=task.project,
            tags=tuple(sorted(task.tags)),
            status=task.status,
            name=task.name,
            note_count=task.note_count,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert row to a JSON-friendly dictionary."""
        return {
            "uid": self.uid,
            "age_seconds": int(self.age.total_seconds()),
            "spent_seconds": int(self.spent.total_seconds()),
            "spent_is_stale": self.spent_is_stale,
            "priority": self.priority.value,
            "project": self.project,
            "tags": list(self.tags),
            "status": self.status.value,
            "name": self.name,
            "note_count": self.note_count,
        }


def sort_key(task: ProjectedTask) -> Tuple[int, datetime, int, int]:
    """Total ordering key; the UID makes any two tasks distinct."""
    return (
        -task.priority.rank,
        task.created_at,
        task.status.listing_rank,
        task.uid,
    )


def project_all(store: TaskStore, now: datetime) -> List[ProjectedTask]:
    return [task.project(now) for task in store.all()]


def list_tasks(
    store: TaskStore, query: TaskQuery, now: Optional[datetime] = None
) -> List[ListingRow]:
    """Produce the ordered rows for a listing.

    Args:
        store: Loaded task collection.
        query: Compiled predicate (see ``compile_query``).
        now: Snapshot instant shared by every row (defaults to now).

    Returns:
        Rows in display order; empty when nothing matches.
    """
    now = now or utc_now()
    projected = project_all(store, now)
    matching = [task for task in projected if query.matches(task)]
    matching.sort(key=sort_key)

    logger.debug(f"Listing {len(matching)} of {len(projected)} task(s)")
    return [ListingRow.from_projection(task) for task in matching]
