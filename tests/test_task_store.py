# tests/test_task_store.py

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from todotxt.tasks.task_models import Task
from todotxt.tasks.task_store import TaskFileError, TaskStore

from .samples import SAMPLE_LINES


def _ids(store: TaskStore) -> list[int]:
    return [t.id for t in store]


def test_load_missing_file_is_empty(tmp_path: Path) -> None:
    store = TaskStore.load(tmp_path / "nope" / "todo.txt")
    assert len(store) == 0
    assert store.tasks == ()


def test_load_sample_and_delete_reindexes(todo_file: Path) -> None:
    store = TaskStore.load(todo_file)
    assert _ids(store) == [1, 2, 3]

    t1, t2, t3 = store.tasks
    assert t1.priority == "A" and not t1.complete and t1.description == "Call Mom"
    assert t2.complete
    assert t2.completion_date == date(2025, 1, 9)
    assert t2.creation_date == date(2025, 1, 8)
    assert t2.description == "Write tests"
    assert t3.projects == ["Work"] and t3.contexts == ["office"]
    assert t3.description == "Review PR"

    assert store.delete(2) is True
    assert _ids(store) == [1, 2]
    assert store.get_by_id(2) is t3
    assert store.get_by_id(3) is None


def test_load_skips_blank_lines(tmp_path: Path) -> None:
    path = tmp_path / "todo.txt"
    path.write_text("first\n\n   \nsecond\n", encoding="utf-8")
    store = TaskStore.load(path)
    assert [(t.id, t.description) for t in store] == [(1, "first"), (2, "second")]


def test_add_and_delete_keep_ids_dense(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "todo.txt")
    for name in "abcde":
        store.add(Task(description=name))
    assert _ids(store) == [1, 2, 3, 4, 5]

    assert store.delete(1)
    assert store.delete(3)
    assert not store.delete(42)
    store.add(Task(description="f"))

    assert _ids(store) == [1, 2, 3, 4]
    assert [t.description for t in store] == ["b", "c", "e", "f"]


def test_save_then_load_round_trips(tmp_path: Path, todo_file: Path) -> None:
    store = TaskStore.load(todo_file)
    out = tmp_path / "nested" / "dir" / "copy.txt"
    store.save(out)

    assert out.read_text(encoding="utf-8").splitlines() == SAMPLE_LINES
    assert not (out.parent / "copy.txt.tmp").exists()

    again = TaskStore.load(out)
    assert [t.description for t in again] == ["Call Mom", "Write tests", "Review PR"]


def test_empty_task_is_dropped_on_reload(tmp_path: Path) -> None:
    path = tmp_path / "todo.txt"
    store = TaskStore(path)
    for task in (Task(description="first"), Task(), Task(description="third")):
        store.add(task)
    store.save()

    again = TaskStore.load(path)
    assert [(t.id, t.description) for t in again] == [(1, "first"), (2, "third")]


def test_save_defaults_to_bound_path(tmp_path: Path) -> None:
    path = tmp_path / "todo.txt"
    store = TaskStore(path)
    store.add(Task(description="Buy milk", priority="B"))
    store.save()
    assert path.read_text(encoding="utf-8") == "(B) Buy milk\n"


def test_load_unreadable_path_raises(tmp_path: Path) -> None:
    # A directory exists at the path but cannot be read as a file.
    path = tmp_path / "todo.txt"
    path.mkdir()
    with pytest.raises(TaskFileError) as info:
        TaskStore.load(path)
    assert isinstance(info.value, OSError)
    assert isinstance(info.value.__cause__, OSError)
    assert info.value.path == path


def test_save_failure_raises(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    store = TaskStore(blocker / "todo.txt")
    store.add(Task(description="x"))
    with pytest.raises(TaskFileError):
        store.save()


def test_search_is_case_insensitive_across_fields(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "todo.txt")
    milk = store.add(Task(description="Buy milk", projects=["Family"]))
    store.add(Task(description="Walk dog", contexts=["park"]))

    assert store.search("milk") == [milk]
    assert store.search("MILK") == [milk]
    assert store.search("family") == [milk]
    assert store.search("bread") == []
    assert [t.description for t in store.search("PARK")] == ["Walk dog"]


def test_search_returns_each_task_once(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "todo.txt")
    task = store.add(Task(description="work work", projects=["work"], contexts=["work"]))
    assert store.search("work") == [task]


def test_filters_and_partitions(state) -> None:
    store = state.store
    assert [t.id for t in store.filter_by_project("Work")] == [3]
    assert store.filter_by_project("work") == []
    assert [t.id for t in store.filter_by_context("office")] == [3]
    assert [t.id for t in store.get_completed()] == [2]
    assert [t.id for t in store.get_incomplete()] == [1, 3]


def test_archive_completed_moves_and_reindexes(state, tmp_path: Path) -> None:
    archive = TaskStore(tmp_path / "done.txt")
    archive.add(Task(complete=True, description="older"))

    moved = state.store.archive_completed(archive)

    assert [t.description for t in moved] == ["Write tests"]
    assert [(t.id, t.description) for t in state.store] == [(1, "Call Mom"), (2, "Review PR")]
    assert [(t.id, t.description) for t in archive] == [(1, "older"), (2, "Write tests")]
