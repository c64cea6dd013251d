# tests/test_commands.py

from __future__ import annotations

import pytest

from status_board.core.commands import (
    AddTask,
    CompleteTask,
    RemoveSchedule,
    RemoveTask,
    SetSchedule,
    UpdateTask,
    apply,
    commit_message,
)
from status_board.core.models import StatusDocument, TaskStatus
from status_board.errors import DuplicateIdError, NotFoundError


def _doc(empty_document: dict) -> StatusDocument:
    return StatusDocument.from_dict(empty_document)


def _run(doc: StatusDocument, command, now: str = "T1", actor: str = "me@host") -> StatusDocument:
    return apply(command, doc, actor=actor, now=now)


def test_add_creates_waiting_task_and_touches_meta(empty_document) -> None:
    doc = _run(_doc(empty_document), AddTask(task_id="t1", title="X", category="infra"))

    assert [t.to_dict() for t in doc.tasks] == [
        {
            "id": "t1",
            "title": "X",
            "status": "waiting",
            "category": "infra",
            "started_at": None,
            "updated_at": "T1",
            "progress": 0,
            "note": "",
        }
    ]
    assert doc.meta.updated_at == "T1"
    assert doc.meta.updated_by == "me@host"


def test_add_duplicate_id_fails(empty_document) -> None:
    doc = _run(_doc(empty_document), AddTask(task_id="t1", title="X"))
    with pytest.raises(DuplicateIdError):
        _run(doc, AddTask(task_id="t1", title="again"))
    assert sum(1 for t in doc.tasks if t.id == "t1") == 1


def test_apply_does_not_mutate_input(empty_document) -> None:
    doc = _doc(empty_document)
    _run(doc, AddTask(task_id="t1", title="X"))
    assert doc.tasks == []
    assert doc.meta.updated_by == "seed"


def test_update_is_partial(empty_document) -> None:
    doc = _run(_doc(empty_document), AddTask(task_id="t1", title="X", category="infra", note="n"))
    doc = _run(doc, UpdateTask(task_id="t1", progress=50), now="T2")

    task = doc.find_task("t1")
    assert task is not None
    assert task.progress == 50
    assert (task.title, task.category, task.note, task.status) == ("X", "infra", "n", "waiting")
    assert task.updated_at == "T2"


def test_update_unknown_id_fails(empty_document) -> None:
    with pytest.raises(NotFoundError):
        _run(_doc(empty_document), UpdateTask(task_id="nope", progress=1))


def test_started_at_is_set_once(empty_document) -> None:
    doc = _run(_doc(empty_document), AddTask(task_id="t1", title="X"))
    doc = _run(doc, UpdateTask(task_id="t1", status="in_progress"), now="T2")
    assert doc.find_task("t1").started_at == "T2"

    doc = _run(doc, UpdateTask(task_id="t1", status="blocked"), now="T3")
    doc = _run(doc, UpdateTask(task_id="t1", status="in_progress"), now="T4")
    assert doc.find_task("t1").started_at == "T2"
    assert doc.find_task("t1").status == TaskStatus.IN_PROGRESS


def test_open_status_values_are_accepted(empty_document) -> None:
    doc = _run(_doc(empty_document), AddTask(task_id="t1", title="X"))
    doc = _run(doc, UpdateTask(task_id="t1", status="review"))
    assert doc.find_task("t1").status == "review"
    assert doc.find_task("t1").started_at is None


def test_empty_labels_are_rejected() -> None:
    with pytest.raises(ValueError):
        UpdateTask(task_id="t1", status="")
    with pytest.raises(ValueError):
        AddTask(task_id="t1", title="X", category="  ")


def test_done_normalizes_status_and_progress(empty_document) -> None:
    doc = _run(_doc(empty_document), AddTask(task_id="t1", title="X"))
    doc = _run(doc, UpdateTask(task_id="t1", status="blocked", progress=7))
    doc = _run(doc, CompleteTask(task_id="t1"))
    task = doc.find_task("t1")
    assert (task.status, task.progress) == ("done", 100)


def test_done_unknown_id_fails(empty_document) -> None:
    with pytest.raises(NotFoundError):
        _run(_doc(empty_document), CompleteTask(task_id="ghost"))


def test_schedule_sorted_and_upserted_by_time(empty_document) -> None:
    doc = _doc(empty_document)
    for time, label in [("15:00", "review"), ("09:30", "standup"), ("12:00", "lunch")]:
        doc = _run(doc, SetSchedule(time=time, label=label))
    doc = _run(doc, SetSchedule(time="09:30", label="daily"))

    assert [(s.time, s.label) for s in doc.schedule] == [
        ("09:30", "daily"),
        ("12:00", "lunch"),
        ("15:00", "review"),
    ]


def test_schedule_relabel_resorts_unsorted_input(empty_document) -> None:
    empty_document["schedule"] = [{"time": "18:00", "label": "a"}, {"time": "08:00", "label": "b"}]
    doc = _run(_doc(empty_document), SetSchedule(time="18:00", label="c"))
    assert [s.time for s in doc.schedule] == ["08:00", "18:00"]
    assert len(doc.schedule) == 2


def test_remove_task(empty_document) -> None:
    doc = _run(_doc(empty_document), AddTask(task_id="t1", title="X"))
    doc = _run(doc, AddTask(task_id="t2", title="Y"))
    doc = _run(doc, RemoveTask(task_id="t1"))
    assert [t.id for t in doc.tasks] == ["t2"]
    with pytest.raises(NotFoundError):
        _run(doc, RemoveTask(task_id="t1"))


def test_remove_schedule(empty_document) -> None:
    doc = _run(_doc(empty_document), SetSchedule(time="10:00", label="x"))
    doc = _run(doc, RemoveSchedule(time="10:00"))
    assert doc.schedule == []
    with pytest.raises(NotFoundError):
        _run(doc, RemoveSchedule(time="10:00"))


def test_commit_messages() -> None:
    assert commit_message(AddTask(task_id="t1", title="X")) == "add task t1: X"
    assert commit_message(UpdateTask(task_id="t1")) == "update task t1"
    assert commit_message(CompleteTask(task_id="t1")) == "complete task t1"
    assert commit_message(SetSchedule(time="15:00", label="L")) == "add schedule 15:00: L"
    assert commit_message(RemoveTask(task_id="t1")) == "remove task t1"
    assert commit_message(RemoveSchedule(time="15:00")) == "remove schedule 15:00"
