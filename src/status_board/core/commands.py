# src/status_board/core/commands.py

"""
Commands (one variant per CLI subcommand) and the mutators that apply them.

apply() is called once per attempt of the optimistic update loop, each time
against a freshly fetched document. It never mutates its input; a failed
precondition (unknown id, duplicate id) raises and aborts the whole update.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass

from ..errors import DuplicateIdError, NotFoundError
from .models import DEFAULT_CATEGORY, ScheduleEntry, StatusDocument, Task, TaskStatus, validate_label


@dataclass(frozen=True, slots=True)
class AddTask:
    task_id: str
    title: str
    category: str = DEFAULT_CATEGORY
    note: str = ""

    def __post_init__(self) -> None:
        validate_label(self.task_id, "id")
        validate_label(self.category, "category")


@dataclass(frozen=True, slots=True)
class UpdateTask:
    """Partial update: only fields that are not None are applied."""

    task_id: str
    status: str | None = None
    progress: int | None = None
    note: str | None = None
    title: str | None = None
    category: str | None = None

    def __post_init__(self) -> None:
        validate_label(self.task_id, "id")
        if self.status is not None:
            validate_label(self.status, "status")
        if self.category is not None:
            validate_label(self.category, "category")


@dataclass(frozen=True, slots=True)
class CompleteTask:
    task_id: str


@dataclass(frozen=True, slots=True)
class SetSchedule:
    time: str
    label: str

    def __post_init__(self) -> None:
        validate_label(self.time, "time")


@dataclass(frozen=True, slots=True)
class RemoveTask:
    task_id: str


@dataclass(frozen=True, slots=True)
class RemoveSchedule:
    time: str


Command = AddTask | UpdateTask | CompleteTask | SetSchedule | RemoveTask | RemoveSchedule


def commit_message(command: Command) -> str:
    match command:
        case AddTask(task_id=tid, title=title):
            return f"add task {tid}: {title}"
        case UpdateTask(task_id=tid):
            return f"update task {tid}"
        case CompleteTask(task_id=tid):
            return f"complete task {tid}"
        case SetSchedule(time=time, label=label):
            return f"add schedule {time}: {label}"
        case RemoveTask(task_id=tid):
            return f"remove task {tid}"
        case RemoveSchedule(time=time):
            return f"remove schedule {time}"
    raise TypeError(f"unknown command: {command!r}")


def apply(command: Command, document: StatusDocument, *, actor: str, now: str) -> StatusDocument:
    """Return a new document with `command` applied and meta refreshed."""
    doc = copy.deepcopy(document)

    match command:
        case AddTask():
            _add_task(doc, command, now)
        case UpdateTask():
            _update_task(doc, command, now)
        case CompleteTask(task_id=tid):
            task = _require_task(doc, tid)
            task.status = TaskStatus.DONE
            task.progress = 100
            task.updated_at = now
        case SetSchedule(time=time, label=label):
            _set_schedule(doc, time, label)
        case RemoveTask(task_id=tid):
            remaining = [t for t in doc.tasks if t.id != tid]
            if len(remaining) == len(doc.tasks):
                raise NotFoundError(f"Task {tid} not found")
            doc.tasks = remaining
        case RemoveSchedule(time=time):
            remaining_entries = [s for s in doc.schedule if s.time != time]
            if len(remaining_entries) == len(doc.schedule):
                raise NotFoundError(f"Schedule entry at {time} not found")
            doc.schedule = remaining_entries
        case _:
            raise TypeError(f"unknown command: {command!r}")

    doc.touch(actor=actor, now=now)
    return doc


def _require_task(doc: StatusDocument, task_id: str) -> Task:
    task = doc.find_task(task_id)
    if task is None:
        raise NotFoundError(f"Task {task_id} not found")
    return task


def _add_task(doc: StatusDocument, cmd: AddTask, now: str) -> None:
    if doc.find_task(cmd.task_id) is not None:
        raise DuplicateIdError(f"Task {cmd.task_id} already exists")
    doc.tasks.append(
        Task(
            id=cmd.task_id,
            title=cmd.title,
            status=TaskStatus.WAITING,
            category=cmd.category,
            started_at=None,
            updated_at=now,
            progress=0,
            note=cmd.note,
        )
    )


def _update_task(doc: StatusDocument, cmd: UpdateTask, now: str) -> None:
    task = _require_task(doc, cmd.task_id)
    if cmd.status is not None:
        task.status = cmd.status
        # started_at is set once: first transition into in_progress only.
        if cmd.status == TaskStatus.IN_PROGRESS and task.started_at is None:
            task.started_at = now
    if cmd.progress is not None:
        task.progress = cmd.progress
    if cmd.note is not None:
        task.note = cmd.note
    if cmd.title is not None:
        task.title = cmd.title
    if cmd.category is not None:
        task.category = cmd.category
    task.updated_at = now


def _set_schedule(doc: StatusDocument, time: str, label: str) -> None:
    entry = doc.find_schedule(time)
    if entry is not None:
        entry.label = label
    else:
        doc.schedule.append(ScheduleEntry(time=time, label=label))
    doc.schedule.sort(key=lambda s: s.time or "")
