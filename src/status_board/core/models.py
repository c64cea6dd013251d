# src/status_board/core/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """
    Conventional task statuses.

    Notes:
    - status is an open label: any non-empty string is stored as-is,
      these four are just the values the dashboard knows how to colour.
    """

    WAITING = "waiting"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    BLOCKED = "blocked"


DEFAULT_CATEGORY = "general"

_TASK_KEYS = ("id", "title", "status", "category", "started_at", "updated_at", "progress", "note")
_SCHEDULE_KEYS = ("time", "label")


def validate_label(value: str, field_name: str = "value") -> str:
    """Open-enum check for status/category: reject empty, accept anything else."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field_name} must be a non-empty string")
    return value


def _known_to_dict(obj: Any, keys: tuple[str, ...], present: set[str]) -> dict[str, Any]:
    # A key absent from the source stays absent unless a mutator gave it a value.
    out: dict[str, Any] = {}
    for key in keys:
        value = getattr(obj, key)
        if key in present or value is not None:
            out[key] = str(value) if isinstance(value, StrEnum) else value
    return out


@dataclass(slots=True)
class Task:
    """
    One task record.

    Fields read from the remote document are kept exactly as found (including
    nulls and non-string values); defaults belong to `add` and to the Notion
    property mapping, not to parsing.
    """

    id: str | None
    title: str | None
    status: str | None = TaskStatus.WAITING
    category: str | None = DEFAULT_CATEGORY
    started_at: str | None = None
    updated_at: str | None = None
    progress: int | None = 0
    note: str | None = ""

    # Keys we don't know about (written by other tools / the viewer); kept verbatim.
    extra: dict[str, Any] = field(default_factory=dict)
    present: set[str] = field(default_factory=lambda: set(_TASK_KEYS), repr=False, compare=False)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        return cls(
            **{k: raw.get(k) for k in _TASK_KEYS},
            extra={k: v for k, v in raw.items() if k not in _TASK_KEYS},
            present={k for k in _TASK_KEYS if k in raw},
        )

    def to_dict(self) -> dict[str, Any]:
        out = _known_to_dict(self, _TASK_KEYS, self.present)
        out.update(self.extra)
        return out


@dataclass(slots=True)
class ScheduleEntry:
    time: str | None
    label: str | None
    extra: dict[str, Any] = field(default_factory=dict)
    present: set[str] = field(default_factory=lambda: set(_SCHEDULE_KEYS), repr=False, compare=False)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> ScheduleEntry:
        return cls(
            time=raw.get("time"),
            label=raw.get("label"),
            extra={k: v for k, v in raw.items() if k not in _SCHEDULE_KEYS},
            present={k for k in _SCHEDULE_KEYS if k in raw},
        )

    def to_dict(self) -> dict[str, Any]:
        out = _known_to_dict(self, _SCHEDULE_KEYS, self.present)
        out.update(self.extra)
        return out


@dataclass(slots=True)
class Meta:
    updated_at: str | None = None
    updated_by: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: dict[str, Any] | None) -> Meta:
        raw = raw or {}
        return cls(
            updated_at=raw.get("updated_at"),
            updated_by=raw.get("updated_by"),
            extra={k: v for k, v in raw.items() if k not in ("updated_at", "updated_by")},
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = dict(self.extra)
        out["updated_at"] = self.updated_at
        out["updated_by"] = self.updated_by
        return out


@dataclass(slots=True)
class StatusDocument:
    """The remote status.json: {meta, tasks, schedule} (+ any other top-level keys)."""

    meta: Meta = field(default_factory=Meta)
    tasks: list[Task] = field(default_factory=list)
    schedule: list[ScheduleEntry] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> StatusDocument:
        if not isinstance(raw, dict):
            raise ValueError("status document must be a JSON object")
        return cls(
            meta=Meta.from_dict(raw.get("meta")),
            tasks=[Task.from_dict(t) for t in raw.get("tasks") or []],
            schedule=[ScheduleEntry.from_dict(s) for s in raw.get("schedule") or []],
            extra={k: v for k, v in raw.items() if k not in ("meta", "tasks", "schedule")},
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "meta": self.meta.to_dict(),
            "tasks": [t.to_dict() for t in self.tasks],
            "schedule": [s.to_dict() for s in self.schedule],
        }
        out.update(self.extra)
        return out

    def find_task(self, task_id: str) -> Task | None:
        return next((t for t in self.tasks if t.id == task_id), None)

    def find_schedule(self, time: str) -> ScheduleEntry | None:
        return next((s for s in self.schedule if s.time == time), None)

    def touch(self, *, actor: str, now: str) -> None:
        self.meta.updated_at = now
        self.meta.updated_by = actor
