# src/todotxt/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field

from ..config import Settings
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    """Explicit application state handed to every command (no module-level store)."""

    settings: Settings
    store: TaskStore

    # Opened on first use; most commands never touch the archive.
    _archive: TaskStore | None = field(default=None, repr=False)

    def archive_store(self) -> TaskStore:
        if self._archive is None:
            self._archive = TaskStore.load(self.settings.done_file)
        return self._archive
