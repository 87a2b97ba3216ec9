# src/todotxt/tasks/task_parser.py

"""
todo.txt line parser and serializer.

Line format:
    [x [completion-date [creation-date]]] [(PRIORITY)] [creation-date] words...

Words may be interleaved with +project, @context and key:value markers anywhere.

Parsing is permissive: it never raises. A date-shaped word that is not a real
calendar date (2025-02-30) is kept as description text.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from .task_models import DATE_REGEX, Task, format_date, parse_date

logger = logging.getLogger(__name__)

COMPLETE_MARKER = "x "
PRIORITY_REGEX = re.compile(r"\(([A-Z])\) ")
TAG_REGEX = re.compile(r"(\w+):(\S+)")

PROJECT_PREFIX = "+"
CONTEXT_PREFIX = "@"


def _take_completion_dates(task: Task, words: list[str]) -> list[str]:
    """
    Pick the first two date-shaped words of a completed line:
    the first is the completion date, the second the creation date.
    """
    slots = 0
    out: list[str] = []
    for word in words:
        if slots < 2 and DATE_REGEX.fullmatch(word):
            slots += 1
            parsed = parse_date(word)
            if parsed is None:
                logger.debug("Keeping malformed date %r as text", word)
                out.append(word)
                continue
            if slots == 1:
                task.completion_date = parsed
            else:
                task.creation_date = parsed
            continue
        out.append(word)
    return out


def _add_marker_or_word(task: Task, word: str, description: list[str]) -> None:
    if len(word) > 1 and word.startswith(PROJECT_PREFIX):
        task.add_project(word[1:])
        return
    if len(word) > 1 and word.startswith(CONTEXT_PREFIX):
        task.add_context(word[1:])
        return
    match = TAG_REGEX.fullmatch(word)
    if match:
        task.add_tag(match.group(1), match.group(2))
        return
    description.append(word)


def parse_task(line: str) -> Task | None:
    """Parse one line. Returns None for a blank line."""
    if not line.strip():
        return None

    task = Task(raw=line)
    rest = line

    if rest.startswith(COMPLETE_MARKER):
        task.complete = True
        rest = rest[len(COMPLETE_MARKER) :]
    else:
        match = PRIORITY_REGEX.match(rest)
        if match:
            task.priority = match.group(1)
            rest = rest[match.end() :]

    words = rest.split()

    if task.complete:
        words = _take_completion_dates(task, words)
    elif words:
        created = parse_date(words[0])
        if created is not None:
            task.creation_date = created
            words = words[1:]

    description: list[str] = []
    for word in words:
        _add_marker_or_word(task, word, description)

    task.description = " ".join(description)
    return task


def parse_tasks(lines: Iterable[str]) -> list[Task]:
    """Parse lines in order, skipping blanks; ids are 1..K over the parsed tasks."""
    tasks: list[Task] = []
    for line in lines:
        task = parse_task(line)
        if task is None:
            continue
        task.id = len(tasks) + 1
        tasks.append(task)
    return tasks


def format_task(task: Task) -> str:
    """
    Render a task back into a todo.txt line.

    A marker whose literal text already occurs inside the description is not
    rendered a second time, and a marker listed twice is rendered once.

    Tasks that carry no text at all do not survive a reload: an empty task
    renders as "" (a blank line, skipped by `parse_tasks`), and a completed
    task with no dates or text renders as "x", which parses back as an
    incomplete task described as "x".
    """
    parts: list[str] = []

    if task.complete:
        parts.append("x")
        if task.completion_date is not None:
            parts.append(format_date(task.completion_date))
        if task.creation_date is not None:
            parts.append(format_date(task.creation_date))
    else:
        if task.priority:
            parts.append(f"({task.priority})")
        if task.creation_date is not None:
            parts.append(format_date(task.creation_date))

    body = task.description
    markers = [PROJECT_PREFIX + p for p in task.projects]
    markers += [CONTEXT_PREFIX + c for c in task.contexts]
    markers += [f"{key}:{value}" for key, value in task.tags.items()]
    emitted: set[str] = set()
    for marker in markers:
        if marker in task.description or marker in emitted:
            continue
        emitted.add(marker)
        body = f"{body} {marker}" if body else marker

    if body:
        parts.append(body)
    return " ".join(parts)
