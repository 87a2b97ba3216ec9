# src/todotxt/tasks/task_store.py

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Sequence
from pathlib import Path

from .task_models import Task
from .task_parser import format_task, parse_tasks

logger = logging.getLogger(__name__)


class TaskFileError(OSError):
    """A todo file could not be read or written; the OS error is chained as __cause__."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class TaskStore:
    """
    Ordered list of tasks bound to a todo.txt file.

    Invariants:
    - ids are always 1..N in list order (renumbered after every removal)
    - the whole file is read on load and rewritten on save; there is no locking,
      so concurrent writers race and the last one wins
    """

    def __init__(self, path: str | Path, tasks: list[Task] | None = None) -> None:
        self.path = Path(path).expanduser()
        self._tasks: list[Task] = []
        for task in tasks or []:
            self.add(task)

    @classmethod
    def load(cls, path: str | Path) -> TaskStore:
        """Read a todo file. A missing file gives an empty store."""
        store = cls(path)
        if not store.path.exists():
            logger.info("Todo file %s does not exist yet; starting empty.", store.path)
            return store

        try:
            with store.path.open("r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except OSError as exc:
            raise TaskFileError(f"failed to read {store.path}: {exc}", store.path) from exc

        store._tasks = parse_tasks(lines)
        logger.debug("Loaded %d tasks from %s", len(store._tasks), store.path)
        return store

    def save(self, path: str | Path | None = None) -> None:
        """Rewrite the whole file: write a sibling temp file, then replace the target."""
        target = Path(path).expanduser() if path is not None else self.path
        tmp = target.with_name(target.name + ".tmp")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8", newline="\n") as f:
                for task in self._tasks:
                    f.write(format_task(task) + "\n")
            os.replace(tmp, target)
        except OSError as exc:
            raise TaskFileError(f"failed to write {target}: {exc}", target) from exc
        logger.debug("Saved %d tasks to %s", len(self._tasks), target)

    # ---- membership ----

    @property
    def tasks(self) -> Sequence[Task]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(tuple(self._tasks))

    def add(self, task: Task) -> Task:
        task.id = len(self._tasks) + 1
        self._tasks.append(task)
        return task

    def get_by_id(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def delete(self, task_id: int) -> bool:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                del self._tasks[i]
                self._reindex()
                return True
        return False

    def archive_completed(self, archive: TaskStore) -> list[Task]:
        """Move completed tasks to the end of `archive`; both stores stay densely numbered."""
        moved = [t for t in self._tasks if t.complete]
        if not moved:
            return []
        self._tasks = [t for t in self._tasks if not t.complete]
        self._reindex()
        for task in moved:
            archive.add(task)
        logger.info("Archived %d completed tasks to %s", len(moved), archive.path)
        return moved

    def _reindex(self) -> None:
        for i, task in enumerate(self._tasks, start=1):
            task.id = i

    # ---- queries ----

    def search(self, query: str) -> list[Task]:
        """Case-insensitive substring match on description, projects or contexts."""
        needle = query.lower()
        return [
            t
            for t in self._tasks
            if needle in t.description.lower()
            or any(needle in p.lower() for p in t.projects)
            or any(needle in c.lower() for c in t.contexts)
        ]

    def filter_by_project(self, project: str) -> list[Task]:
        return [t for t in self._tasks if project in t.projects]

    def filter_by_context(self, context: str) -> list[Task]:
        return [t for t in self._tasks if context in t.contexts]

    def get_completed(self) -> list[Task]:
        return [t for t in self._tasks if t.complete]

    def get_incomplete(self) -> list[Task]:
        return [t for t in self._tasks if not t.complete]
