# src/status_board/cli/dispatcher.py

"""
Two-phase dispatch of one Command.

Phase 1 (primary): optimistic update of status.json. Errors propagate and are fatal.
Phase 2 (mirror): optional Notion sync. Errors are logged as warnings and never
undo phase 1; the primary store is the source of truth.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.clock import Clock, now_timestamp
from ..core.commands import AddTask, Command, CompleteTask, RemoveTask, UpdateTask, apply, commit_message
from ..core.models import StatusDocument
from ..core.ports import DocumentStore, JsonDocument, MirrorClient
from ..errors import StatusBoardError
from ..store.engine import update_with_retry

logger = logging.getLogger(__name__)

MirrorFactory = Callable[[], MirrorClient]


def run_primary(
    command: Command,
    *,
    store: DocumentStore,
    path: str,
    actor: str,
    max_attempts: int = 3,
    clock: Clock = now_timestamp,
) -> StatusDocument:
    def mutate(raw: JsonDocument) -> JsonDocument:
        document = StatusDocument.from_dict(raw)
        return apply(command, document, actor=actor, now=clock()).to_dict()

    result = update_with_retry(store, path, mutate, commit_message(command), max_attempts=max_attempts)
    return StatusDocument.from_dict(result)


def run_mirror(command: Command, document: StatusDocument, mirror_factory: MirrorFactory) -> bool:
    """Mirror the affected task. Returns False (after a warning) on any failure."""
    match command:
        case AddTask(task_id=tid) | UpdateTask(task_id=tid) | CompleteTask(task_id=tid):
            task = document.find_task(tid)
            if task is None:
                logger.warning("[WARN] Task %s missing after write, skipping Notion mirroring", tid)
                return False
        case RemoveTask(task_id=tid):
            task = None
        case _:
            logger.info("[INFO] No task to mirror to Notion (schedule changes are not mirrored)")
            return True

    # The primary write is already committed: nothing raised here may escape.
    try:
        mirror = mirror_factory()
        if task is not None:
            mirror.upsert(task)
        else:
            mirror.archive(tid)
    except StatusBoardError as e:
        logger.warning("[WARN] Notion mirroring failed: %s", e)
        return False
    except Exception as e:
        logger.warning("[WARN] Notion mirroring failed unexpectedly: %s: %s", e.__class__.__name__, e)
        logger.debug("Notion mirroring traceback", exc_info=True)
        return False
    return True


def dispatch(
    command: Command,
    *,
    store: DocumentStore,
    path: str,
    actor: str,
    mirror_factory: MirrorFactory | None = None,
    max_attempts: int = 3,
    clock: Clock = now_timestamp,
) -> StatusDocument:
    """Run the primary update, then (if a mirror factory is given) the best-effort mirror."""
    document = run_primary(
        command,
        store=store,
        path=path,
        actor=actor,
        max_attempts=max_attempts,
        clock=clock,
    )
    if mirror_factory is not None:
        run_mirror(command, document, mirror_factory)
    return document
