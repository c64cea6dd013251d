# src/status_board/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the engine and the dispatcher.

The engine depends on Protocols instead of the concrete GitHub / Notion clients.
This keeps the remote services swappable and makes testing easier.
"""

from dataclasses import dataclass
from typing import Any, Protocol

from .models import Task

JsonDocument = dict[str, Any]


@dataclass(frozen=True, slots=True)
class Snapshot:
    """One read of the remote document: content + the opaque revision it was read at."""

    document: JsonDocument
    revision: str


class DocumentStore(Protocol):
    """Versioned JSON document store (compare-and-swap on the revision token)."""

    def fetch(self, path: str) -> Snapshot: ...

    def write(self, path: str, document: JsonDocument, revision: str, message: str) -> str:
        """
        Persist `document` only if the remote is still at `revision`.
        Returns the new revision; raises ConflictError if another writer won.
        """
        ...


class MirrorClient(Protocol):
    """Best-effort secondary replica of task records, keyed by task id."""

    def upsert(self, task: Task) -> None: ...

    def archive(self, task_id: str) -> None: ...
