# src/todotxt/tasks/task_query.py

"""
Sorting, date-window filters and grouping over a sequence of tasks.

All functions are pure: they return new lists/dicts and never reorder or mutate
the sequence they are given.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from datetime import date, datetime, time, timedelta
from enum import StrEnum
from typing import Any

from .task_models import Task

NO_PROJECT = "No Project"
NO_CONTEXT = "No Context"


class SortKey(StrEnum):
    ID = "id"
    PRIORITY = "priority"
    CREATED = "created"
    DUE = "due"
    DESCRIPTION = "description"
    COMPLETE = "complete"

    @classmethod
    def parse(cls, raw: str | None) -> SortKey:
        if not raw:
            return cls.ID
        try:
            return cls(raw.strip().lower())
        except ValueError:
            valid = ", ".join(k.value for k in cls)
            raise ValueError(f"unknown sort key: {raw!r} (expected one of: {valid})") from None


# Primary key per sort; None means "attribute missing", which always sorts last.
_SORT_ATTRS: dict[SortKey, Callable[[Task], Any]] = {
    SortKey.ID: lambda t: t.id,
    SortKey.PRIORITY: lambda t: t.priority,
    SortKey.CREATED: lambda t: t.creation_date,
    SortKey.DUE: lambda t: t.due_date,
    SortKey.DESCRIPTION: lambda t: t.description,
    SortKey.COMPLETE: lambda t: t.complete,
}


def sort_tasks(
    tasks: Iterable[Task], key: SortKey | str = SortKey.ID, *, reverse: bool = False
) -> list[Task]:
    """
    Return tasks ordered by `key`.

    - ties (including two missing values) fall back to ascending id
    - tasks missing the attribute come after all others, in either direction
    - for COMPLETE, incomplete tasks come first
    """
    attr = _SORT_ATTRS[SortKey(key)]
    by_id = sorted(tasks, key=lambda t: t.id)

    present = [t for t in by_id if attr(t) is not None]
    missing = [t for t in by_id if attr(t) is None]

    # list.sort is stable even with reverse=True, so id order survives within ties.
    present.sort(key=attr, reverse=reverse)
    return present + missing


def _start_of_day(d: date) -> datetime:
    return datetime.combine(d, time.min)


def _due_within(
    tasks: Iterable[Task], start: datetime | None, end: datetime | None
) -> list[Task]:
    """Incomplete tasks whose due midnight falls in `[start, end)`; None leaves a side open."""
    out: list[Task] = []
    for task in tasks:
        if task.complete:
            continue
        due = task.due_date
        if due is None:
            continue
        due_at = _start_of_day(due)
        if start is not None and due_at < start:
            continue
        if end is not None and due_at >= end:
            continue
        out.append(task)
    return out


def filter_overdue(tasks: Iterable[Task], *, now: datetime | None = None) -> list[Task]:
    """Incomplete tasks whose due date (taken at midnight) is strictly before `now`."""
    now = now or datetime.now()
    return _due_within(tasks, None, now)


def filter_today(tasks: Iterable[Task], *, now: datetime | None = None) -> list[Task]:
    now = now or datetime.now()
    today = _start_of_day(now.date())
    return _due_within(tasks, today, today + timedelta(days=1))


def filter_this_week(tasks: Iterable[Task], *, now: datetime | None = None) -> list[Task]:
    now = now or datetime.now()
    return _due_within(tasks, now, now + timedelta(days=7))


def _group(
    tasks: Iterable[Task], labels: Callable[[Task], Sequence[str]], empty_key: str
) -> dict[str, list[Task]]:
    groups: dict[str, list[Task]] = {}
    unlabelled: list[Task] = []
    for task in tasks:
        names = labels(task)
        if not names:
            unlabelled.append(task)
            continue
        for name in names:
            groups.setdefault(name, []).append(task)
    if unlabelled:
        groups[empty_key] = unlabelled
    return groups


def group_by_project(tasks: Iterable[Task]) -> dict[str, list[Task]]:
    """Project -> tasks. A task with several projects appears in each group."""
    return _group(tasks, lambda t: t.projects, NO_PROJECT)


def group_by_context(tasks: Iterable[Task]) -> dict[str, list[Task]]:
    """Context -> tasks. A task with several contexts appears in each group."""
    return _group(tasks, lambda t: t.contexts, NO_CONTEXT)
