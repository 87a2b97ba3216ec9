# src/todotxt/tasks/task_models.py

from __future__ import annotations

import re
import string
from dataclasses import dataclass, field
from datetime import date, datetime

DATE_FORMAT = "%Y-%m-%d"
DATE_REGEX = re.compile(r"\d{4}-\d{2}-\d{2}")

# A is the highest priority, Z the lowest.
PRIORITIES = string.ascii_uppercase


def normalize_priority(value: str | None) -> str | None:
    """Return an uppercase priority letter, or None for "no priority"."""
    if value is None or value == "":
        return None
    letter = value.strip().upper()
    if len(letter) != 1 or letter not in PRIORITIES:
        raise ValueError(f"invalid priority: {value!r} (must be A-Z)")
    return letter


def parse_date(raw: str) -> date | None:
    """Parse a strict YYYY-MM-DD date. Anything else (2025-1-8, 2025-13-40) is None."""
    if not DATE_REGEX.fullmatch(raw):
        return None
    try:
        return datetime.strptime(raw, DATE_FORMAT).date()
    except ValueError:
        return None


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


@dataclass(slots=True)
class Task:
    """
    One line of a todo.txt file.

    Notes:
    - id is position-derived and owned by the store; 0 means "not assigned yet".
    - priority is always None on a completed task.
    - tags keep first-seen order so the rendered line is deterministic.
    """

    id: int = 0
    complete: bool = False
    priority: str | None = None
    creation_date: date | None = None
    completion_date: date | None = None
    description: str = ""
    projects: list[str] = field(default_factory=list)
    contexts: list[str] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)
    raw: str = ""

    @classmethod
    def new(cls, description: str, *, today: date | None = None) -> Task:
        return cls(
            creation_date=today or date.today(),
            description=description,
            raw=description,
        )

    def set_priority(self, value: str | None) -> None:
        priority = normalize_priority(value)
        if self.complete:
            return
        self.priority = priority

    def mark_complete(self, today: date | None = None) -> None:
        self.complete = True
        self.completion_date = today or date.today()
        self.priority = None

    def mark_incomplete(self) -> None:
        self.complete = False
        self.completion_date = None

    def add_project(self, project: str) -> None:
        if project not in self.projects:
            self.projects.append(project)

    def add_context(self, context: str) -> None:
        if context not in self.contexts:
            self.contexts.append(context)

    def add_tag(self, key: str, value: str) -> None:
        self.tags[key] = value

    @property
    def due_date(self) -> date | None:
        raw = self.tags.get("due")
        if raw is None:
            return None
        return parse_date(raw)
