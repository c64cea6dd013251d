# src/status_board/cli/main.py

"""
CLI entrypoint.

    status-board add --id task-004 --title "ALB log analysis" --category analysis
    status-board update --id task-004 --status in_progress --progress 30 --note "analysing"
    status-board done --id task-004
    status-board schedule --time "15:00" --label "incident review"
    status-board remove --id task-004
    status-board remove-schedule --time "15:00"

Global flags (before or after the subcommand):
    --notion    also mirror the change to the Notion dashboard database
    --by NAME   override meta.updated_by (default: $USER@host)

Exit status: 0 on success, 1 on any fatal error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import NoReturn

import httpx

from ..config import get_settings
from ..core.clock import make_clock
from ..core.commands import (
    AddTask,
    Command,
    CompleteTask,
    RemoveSchedule,
    RemoveTask,
    SetSchedule,
    UpdateTask,
)
from ..core.models import DEFAULT_CATEGORY
from ..credentials import Credentials, load_credentials
from ..errors import ConflictExhausted, StatusBoardError
from ..logging_setup import setup_logging
from ..mirror.notion_mirror import NotionMirror
from ..store.github_store import GitHubContentStore
from .dispatcher import MirrorFactory, dispatch

logger = logging.getLogger(__name__)

SUBCOMMANDS = ("add", "update", "done", "schedule", "remove", "remove-schedule")


class _Parser(argparse.ArgumentParser):
    """argparse exits with 2 on usage errors; this tool reports every failure as 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _label(raw: str) -> str:
    if not raw.strip():
        raise argparse.ArgumentTypeError("must be a non-empty string")
    return raw


def build_parser() -> argparse.ArgumentParser:
    # SUPPRESS defaults so a flag given before the subcommand is not reset by the subparser.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--notion", action="store_true", default=argparse.SUPPRESS, help="Also mirror to Notion")
    common.add_argument("--by", metavar="NAME", default=argparse.SUPPRESS, help="Override updated_by")
    common.add_argument("-v", "--verbose", action="store_true", default=argparse.SUPPRESS, help="Debug logging")

    parser = _Parser(
        prog="status-board",
        description="Update the shared status.json dashboard (GitHub-backed).",
        parents=[common],
    )
    sub = parser.add_subparsers(dest="subcommand", metavar="<" + "|".join(SUBCOMMANDS) + ">")

    p = sub.add_parser("add", parents=[common], help="Add a new task")
    p.add_argument("--id", required=True, type=_label)
    p.add_argument("--title", required=True)
    p.add_argument("--category", default=DEFAULT_CATEGORY, type=_label)
    p.add_argument("--note", default="")

    p = sub.add_parser("update", parents=[common], help="Update an existing task")
    p.add_argument("--id", required=True, type=_label)
    p.add_argument("--status", default=None, type=_label)
    p.add_argument("--progress", type=int, default=None)
    p.add_argument("--note", default=None)
    p.add_argument("--title", default=None)
    p.add_argument("--category", default=None, type=_label)

    p = sub.add_parser("done", parents=[common], help="Mark a task as done")
    p.add_argument("--id", required=True, type=_label)

    p = sub.add_parser("schedule", parents=[common], help="Add or relabel a schedule entry")
    p.add_argument("--time", required=True, type=_label)
    p.add_argument("--label", required=True)

    p = sub.add_parser("remove", parents=[common], help="Remove a task")
    p.add_argument("--id", required=True, type=_label)

    p = sub.add_parser("remove-schedule", parents=[common], help="Remove a schedule entry")
    p.add_argument("--time", required=True, type=_label)

    return parser


def command_from_args(args: argparse.Namespace) -> Command:
    match args.subcommand:
        case "add":
            return AddTask(task_id=args.id, title=args.title, category=args.category, note=args.note)
        case "update":
            return UpdateTask(
                task_id=args.id,
                status=args.status,
                progress=args.progress,
                note=args.note,
                title=args.title,
                category=args.category,
            )
        case "done":
            return CompleteTask(task_id=args.id)
        case "schedule":
            return SetSchedule(time=args.time, label=args.label)
        case "remove":
            return RemoveTask(task_id=args.id)
        case "remove-schedule":
            return RemoveSchedule(time=args.time)
    raise ValueError(f"Unknown subcommand: {args.subcommand}")


def _mirror_factory(http: httpx.Client, creds: Credentials, settings) -> MirrorFactory:
    def build() -> NotionMirror:
        return NotionMirror(
            http,
            token=creds.notion_token,
            database_id=settings.notion_database_id,
            api_url=settings.notion_api_url,
            notion_version=settings.notion_version,
        )

    return build


def run(
    argv: Sequence[str] | None,
    *,
    settings,
    transport: httpx.BaseTransport | None = None,
) -> int:
    """Parse, load credentials, dispatch. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if getattr(args, "verbose", False):
        logging.getLogger("status_board").setLevel(logging.DEBUG)
        for h in logging.getLogger().handlers:
            h.setLevel(logging.DEBUG)

    if args.subcommand is None:
        parser.print_help(sys.stderr)
        return 1

    command = command_from_args(args)
    actor = getattr(args, "by", None) or settings.updated_by
    notion = bool(getattr(args, "notion", False))

    try:
        creds = load_credentials(settings.credentials_path)
    except StatusBoardError as e:
        logger.error("[ERROR] %s", e)
        return 1

    with httpx.Client(timeout=settings.http_timeout_seconds, transport=transport) as http:
        try:
            store = GitHubContentStore.connect(
                http,
                token=creds.github_token,
                owner=settings.github_owner,
                repo=settings.github_repo,
                branch=settings.github_branch,
                api_url=settings.github_api_url,
            )
            dispatch(
                command,
                store=store,
                path=settings.status_file_path,
                actor=actor,
                mirror_factory=_mirror_factory(http, creds, settings) if notion else None,
                max_attempts=settings.max_attempts,
                clock=make_clock(settings.utc_offset_hours),
            )
        except ConflictExhausted as e:
            logger.error("[ERROR] Gave up after %d conflicting writes: %s", e.attempts, e)
            return 1
        except StatusBoardError as e:
            logger.error("[ERROR] %s", e)
            return 1

    return 0


def main(argv: Sequence[str] | None = None) -> int:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return run(argv, settings=settings)


if __name__ == "__main__":
    raise SystemExit(main())
