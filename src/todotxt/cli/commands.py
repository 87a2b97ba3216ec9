# src/todotxt/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from ..core.state import AppState
from ..tasks.task_models import Task
from ..tasks.task_parser import format_task, parse_task
from ..tasks.task_query import (
    NO_CONTEXT,
    NO_PROJECT,
    SortKey,
    filter_overdue,
    filter_this_week,
    filter_today,
    group_by_context,
    group_by_project,
    sort_tasks,
)

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """A command could not run; the message is shown to the user as-is."""


class CommandRegistry:
    """Command registry used by the CLI entrypoint (add, list, do, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, name: str, args: list[str]) -> str:
        handler = self._handlers.get(name.lower())
        if not handler:
            raise CommandError(f"unknown command: {name}")
        logger.debug("Running command %s args=%s", name, args)
        return handler(state, args)

    def build_help(self) -> str:
        lines = [
            "todo.txt - Simple and powerful task management",
            "",
            "Usage:",
            "  todo <command> [arguments]",
            "",
            "Commands:",
        ]
        for help_text in self._help.values():
            lines.append(f"  {help_text}")
        lines += [
            "",
            "Task Format:",
            "  (A) Task description +project @context due:2025-01-15",
            "",
            "Environment Variables:",
            "  TODO_FILE            Path to todo.txt file (default: ~/todo.txt)",
            "  DONE_FILE            Path to done.txt file (default: ~/done.txt)",
        ]
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----


def _parse_id(args: list[str]) -> int:
    if not args:
        raise CommandError("no task ID provided")
    try:
        return int(args[0])
    except ValueError:
        raise CommandError(f"invalid task ID: {args[0]}") from None


def _get_task(state: AppState, args: list[str]) -> Task:
    task_id = _parse_id(args)
    task = state.store.get_by_id(task_id)
    if task is None:
        raise CommandError(f"task with ID {task_id} not found")
    return task


def _pop_sort_option(args: list[str]) -> tuple[list[str], SortKey]:
    rest: list[str] = []
    key = SortKey.ID
    it = iter(args)
    for arg in it:
        if arg == "--sort" or arg.startswith("--sort="):
            raw = arg.partition("=")[2] or next(it, "")
            if not raw:
                raise CommandError("--sort needs a key")
            try:
                key = SortKey.parse(raw)
            except ValueError as exc:
                raise CommandError(str(exc)) from None
            continue
        rest.append(arg)
    return rest, key


def _render_list(tasks: list[Task]) -> str:
    if not tasks:
        return "No tasks found."
    lines = []
    for task in tasks:
        status = "x" if task.complete else " "
        lines.append(f"[{status}] {task.id:3d}: {format_task(task)}")
    return "\n".join(lines)


def _render_counts(title: str, groups: dict[str, list[Task]], empty_key: str, prefix: str) -> str:
    if not groups:
        return f"No {title.lower()} found."
    counts = {
        ("(none)" if name == empty_key else f"{prefix}{name}"): len(tasks)
        for name, tasks in groups.items()
    }
    lines = [f"{title}:"]
    for label in sorted(counts):
        lines.append(f"  {label}: {counts[label]} task(s)")
    return "\n".join(lines)


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    if not args:
        raise CommandError("no task description provided")
    task = parse_task(" ".join(args))
    if task is None:
        raise CommandError("no task description provided")
    if not task.complete and task.creation_date is None:
        task.creation_date = date.today()
    state.store.add(task)
    state.store.save()
    return f"Added: {format_task(task)}"


def cmd_list(state: AppState, args: list[str]) -> str:
    args, key = _pop_sort_option(args)
    store = state.store
    if not args:
        tasks = store.get_incomplete()
    elif args[0] == "all":
        tasks = list(store.tasks)
    elif args[0] == "done":
        tasks = store.get_completed()
    elif args[0].startswith("+"):
        tasks = store.filter_by_project(args[0][1:])
    elif args[0].startswith("@"):
        tasks = store.filter_by_context(args[0][1:])
    else:
        tasks = store.search(" ".join(args))
    return _render_list(sort_tasks(tasks, key))


def cmd_do(state: AppState, args: list[str]) -> str:
    task = _get_task(state, args)
    task.mark_complete()
    state.store.save()
    return f"Completed: {format_task(task)}"


def cmd_undo(state: AppState, args: list[str]) -> str:
    task = _get_task(state, args)
    task.mark_incomplete()
    state.store.save()
    return f"Uncompleted: {format_task(task)}"


def cmd_delete(state: AppState, args: list[str]) -> str:
    task = _get_task(state, args)
    line = format_task(task)
    if not state.store.delete(task.id):
        raise CommandError(f"failed to delete task with ID {task.id}")
    state.store.save()
    return f"Deleted: {line}"


def cmd_priority(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        raise CommandError("usage: priority <ID> <A-Z>")
    task = _get_task(state, args)
    try:
        task.set_priority(args[1])
    except ValueError as exc:
        raise CommandError(str(exc)) from None
    state.store.save()
    return f"Updated priority: {format_task(task)}"


def cmd_depri(state: AppState, args: list[str]) -> str:
    task = _get_task(state, args)
    task.set_priority(None)
    state.store.save()
    return f"Removed priority: {format_task(task)}"


def cmd_projects(state: AppState, args: list[str]) -> str:
    include_done = bool(args) and args[0] == "all"
    tasks = list(state.store.tasks) if include_done else state.store.get_incomplete()
    return _render_counts("Projects", group_by_project(tasks), NO_PROJECT, "+")


def cmd_contexts(state: AppState, args: list[str]) -> str:
    include_done = bool(args) and args[0] == "all"
    tasks = list(state.store.tasks) if include_done else state.store.get_incomplete()
    return _render_counts("Contexts", group_by_context(tasks), NO_CONTEXT, "@")


_DUE_WINDOWS = {
    "overdue": filter_overdue,
    "today": filter_today,
    "week": filter_this_week,
}


def cmd_due(state: AppState, args: list[str]) -> str:
    window = args[0].lower() if args else "week"
    select = _DUE_WINDOWS.get(window)
    if select is None:
        raise CommandError(f"unknown due window: {args[0]} (expected overdue, today or week)")
    return _render_list(sort_tasks(select(state.store.tasks), SortKey.DUE))


def cmd_archive(state: AppState, args: list[str]) -> str:
    archive = state.archive_store()
    moved = state.store.archive_completed(archive)
    archive.save()
    state.store.save()
    return f"Archived {len(moved)} completed tasks to {archive.path}"


registry.register("add", cmd_add, "add <task>           Add a new task")
registry.register(
    "list",
    cmd_list,
    "list [filter]        List tasks (all, done, +project, @context, or search); --sort KEY",
    aliases=["ls"],
)
registry.register("do", cmd_do, "do <ID>              Mark task as complete", aliases=["done", "complete"])
registry.register("undo", cmd_undo, "undo <ID>            Mark task as incomplete", aliases=["undone"])
registry.register("delete", cmd_delete, "delete <ID>          Delete a task", aliases=["del", "rm"])
registry.register("priority", cmd_priority, "priority <ID> <A-Z>  Set task priority", aliases=["pri"])
registry.register("depri", cmd_depri, "depri <ID>           Remove task priority")
registry.register("projects", cmd_projects, "projects [all]       List all projects", aliases=["proj"])
registry.register("contexts", cmd_contexts, "contexts [all]       List all contexts", aliases=["ctx"])
registry.register("due", cmd_due, "due [overdue|today|week]  List tasks by due date")
registry.register("archive", cmd_archive, "archive              Move completed tasks to done.txt")
registry.register("help", cmd_help, "help                 Show this help message")
