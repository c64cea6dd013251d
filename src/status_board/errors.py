# src/status_board/errors.py

"""
Error taxonomy.

Primary-store errors are fatal for the invocation (the CLI exits with 1).
MirrorError is always downgraded to a warning by the dispatcher.
"""

from __future__ import annotations


class StatusBoardError(Exception):
    """Base class for every error the tool reports to the user."""


class CredentialsError(StatusBoardError):
    """Credentials file is missing, unreadable or lacks a required token."""


class AuthError(StatusBoardError):
    """A remote service rejected our credentials (HTTP 401/403)."""


class NotFoundError(StatusBoardError):
    """Remote resource, task or schedule entry does not exist."""


class DuplicateIdError(StatusBoardError):
    """`add` was called with a task id that already exists."""


class ConflictError(StatusBoardError):
    """The remote revision advanced between fetch and write (HTTP 409)."""


class ConflictExhausted(StatusBoardError):
    """Every attempt of the optimistic update loop ended in a conflict."""

    def __init__(self, message: str, attempts: int) -> None:
        super().__init__(message)
        self.attempts = attempts


class TransientError(StatusBoardError):
    """Network failure, timeout or 5xx response."""


class RemoteError(StatusBoardError):
    """Any other unexpected response from the remote document store."""

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(f"remote returned {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class MirrorError(StatusBoardError):
    """The secondary (Notion) mirror could not be updated."""
