"""
Store layer for task collections and their persistence.

Canonical exports:
- TaskStore: In-memory tasks keyed by UID, mutated by event appends
- TaskRepository: JSONL persistence with file locking and atomic writes
"""

from tasklog.store.memory import TaskStore
from tasklog.store.repository import TaskRepository

__all__ = [
    "TaskStore",
    "TaskRepository",
]
