"""
Task repository: JSONL persistence of task event histories with file locking and atomic writes.
"""

import fcntl
import json
import logging
from pathlib import Path
from typing import List, Union

from tasklog.core.exceptions import StoreError
from tasklog.core.models import Task
from tasklog.store.memory import TaskStore

logger = logging.getLogger(__name__)


class TaskRepository:
    """JSONL task file with one task (UID + full history) per line."""

    def __init__(self, tasks_file: Union[str, Path]):
        """
        Initialize task repository.

        Args:
            tasks_file: Path to JSONL file for tasks (created on first save).
        """
        self.tasks_file = Path(tasks_file)
        self._file_lock_handle = None

    @property
    def lock_file(self) -> Path:
        return self.tasks_file.with_suffix(self.tasks_file.suffix + ".lock")

    def _acquire_file_lock(self) -> None:
        """Acquire exclusive file lock."""
        if self._file_lock_handle is not None:
            return  # Already locked

        self.lock_file.parent.mkdir(parents=True, exist_ok=True)
        self._file_lock_handle = open(self.lock_file, "a+")
        fcntl.flock(self._file_lock_handle.fileno(), fcntl.LOCK_EX)

    def _release_file_lock(self) -> None:
        """Release file lock."""
        if self._file_lock_handle is not None:
            fcntl.flock(self._file_lock_handle.fileno(), fcntl.LOCK_UN)
            self._file_lock_handle.close()
            self._file_lock_handle = None

    def _read_all_tasks(self) -> List[Task]:
        """Read all tasks from the JSONL file (must be called within lock context)."""
        tasks = []
        if not self.tasks_file.exists() or self.tasks_file.stat().st_size == 0:
            return tasks

        try:
            with open(self.tasks_file, "r", encoding="utf-8") as f:
                for lineno, line in enumerate(f, start=1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        tasks.append(Task.from_dict(json.loads(line)))
                    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                        raise StoreError(
                            f"Error reading {self.tasks_file} line {lineno}: {e}"
                        )
        except OSError as e:
            raise StoreError(f"Cannot open {self.tasks_file}: {e}")

        return tasks

    def _write_all_tasks(self, tasks: List[Task]) -> None:
        """Write all tasks to the JSONL file atomically (must be called within lock context)."""
        # Write to temporary file first, then atomically rename
        temp_file = self.tasks_file.with_suffix(self.tasks_file.suffix + ".tmp")
        try:
            with open(temp_file, "w", encoding="utf-8") as f:
                for task in tasks:
                    f.write(json.dumps(task.to_dict(), ensure_ascii=False) + "\n")
            # Atomic rename
            temp_file.replace(self.tasks_file)
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            raise StoreError(f"Cannot save {self.tasks_file}: {e}")

    def load(self) -> TaskStore:
        """
        Load every task with its full history.

        Returns:
            TaskStore holding the persisted tasks (empty if no file yet)

        Raises:
            StoreError: If the file is unreadable or contains invalid records
        """
        if not self.tasks_file.exists():
            logger.debug(f"No tasks file at {self.tasks_file}; starting empty")
            return TaskStore()

        self._acquire_file_lock()
        try:
            tasks = self._read_all_tasks()
        finally:
            self._release_file_lock()

        try:
            store = TaskStore(tasks)
        except ValueError as e:
            raise StoreError(f"Error reading {self.tasks_file}: {e}")

        logger.debug(f"Loaded {len(store)} task(s) from {self.tasks_file}")
        return store

    def save(self, store: TaskStore) -> None:
        """
        Replace the persisted collection with the store's content.

        Raises:
            StoreError: If the file cannot be written
        """
        self.tasks_file.parent.mkdir(parents=True, exist_ok=True)
        self._acquire_file_lock()
        try:
            self._write_all_tasks(store.all())
        finally:
            self._release_file_lock()

        logger.debug(f"Saved {len(store)} task(s) to {self.tasks_file}")
