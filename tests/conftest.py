# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todotxt.core.state import AppState
from todotxt.tasks.task_store import TaskStore

from .samples import SAMPLE_LINES


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than reading the real
    environment, to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        todo_file=tmp_path / "todo.txt",
        done_file=tmp_path / "done.txt",
        log_level="WARNING",
        log_dir=None,
    )


@pytest.fixture()
def todo_file(settings: SimpleNamespace) -> Path:
    settings.todo_file.write_text("\n".join(SAMPLE_LINES) + "\n", encoding="utf-8")
    return settings.todo_file


@pytest.fixture()
def state(settings: SimpleNamespace, todo_file: Path) -> AppState:
    return AppState(settings=settings, store=TaskStore.load(todo_file))
