# src/status_board/store/engine.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.ports import DocumentStore, JsonDocument
from ..errors import ConflictError, ConflictExhausted

logger = logging.getLogger(__name__)

Mutation = Callable[[JsonDocument], JsonDocument]


def update_with_retry(
    store: DocumentStore,
    path: str,
    mutate: Mutation,
    message: str,
    *,
    max_attempts: int = 3,
) -> JsonDocument:
    """
    Compare-and-swap update of one remote document.

    Each attempt re-fetches, so `mutate` always runs against the latest state
    and a losing writer simply reapplies its change on top of the winner's.

    - ConflictError from write -> retry immediately (no backoff)
    - anything raised by mutate or any other write error -> propagates, no retry
    - all attempts conflicted -> ConflictExhausted
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    for attempt in range(1, max_attempts + 1):
        snapshot = store.fetch(path)
        updated = mutate(snapshot.document)
        try:
            store.write(path, updated, snapshot.revision, message)
        except ConflictError:
            logger.warning("[CONFLICT] Retry %d/%d...", attempt, max_attempts)
            continue
        logger.info("[OK] %s", message)
        return updated

    raise ConflictExhausted(
        f"Max retries exceeded on revision conflict ({max_attempts} attempts) for {path}",
        attempts=max_attempts,
    )
