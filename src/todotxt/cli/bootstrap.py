# src/todotxt/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root": it takes settings once and wires the
primary TaskStore into AppState.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings: Settings | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the CLI easy to test against tmp files.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    store = TaskStore.load(settings.todo_file)
    logger.debug("Using todo file %s (%d tasks)", store.path, len(store))
    return AppState(settings=settings, store=store)
