# src/status_board/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole tool.
- No secrets in settings: tokens live in the credentials file (see credentials.py).
- Legacy variable names from the old shell updater are still honoured where it used them.
"""

from __future__ import annotations

import os
import socket
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

ENV_PREFIX = "STATUS"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except ImportError:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def default_actor() -> str:
    """`$USER@<short hostname>`, the attribution used when --by is not given."""
    user = os.getenv("USER") or os.getenv("USERNAME") or "unknown"
    host = socket.gethostname().split(".")[0] or "localhost"
    return f"{user}@{host}"


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Logging ----
    log_level: str
    log_dir: Optional[Path]

    # ---- Credentials ----
    credentials_path: Path

    # ---- GitHub (primary store) ----
    github_api_url: str
    github_owner: str
    github_repo: str
    github_branch: str
    status_file_path: str

    # ---- Notion (mirror) ----
    notion_api_url: str
    notion_version: str
    notion_database_id: str

    # ---- Behaviour ----
    http_timeout_seconds: float
    max_attempts: int
    utc_offset_hours: int
    updated_by: str

    @staticmethod
    def from_env() -> "Settings":
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        raw_log_dir = _env(_k("LOG_DIR"), "").strip()
        log_dir = Path(raw_log_dir).expanduser() if raw_log_dir else None

        credentials_path = _env_path(
            _k("CREDENTIALS_FILE"),
            Path("~/.config/status-board/credentials.json").expanduser(),
        )

        github_api_url = _env(_k("GITHUB_API_URL"), "https://api.github.com").rstrip("/")
        github_owner = _env(_k("GITHUB_OWNER"), "").strip()
        # Legacy: STATUS_REPO_NAME / STATUS_FILE_PATH were exported by the shell wrapper.
        github_repo = (_first_env(_k("GITHUB_REPO"), _k("REPO_NAME"), default="schdule-check") or "").strip()
        github_branch = _env(_k("GITHUB_BRANCH"), "").strip()
        status_file_path = (_first_env(_k("FILE_PATH"), default="data/status.json") or "").strip()

        notion_api_url = _env(_k("NOTION_API_URL"), "https://api.notion.com/v1").rstrip("/")
        notion_version = _env(_k("NOTION_VERSION"), "2022-06-28")
        notion_database_id = (
            _first_env(_k("NOTION_DATABASE_ID"), "NOTION_DASHBOARD_DB_ID", default="") or ""
        ).strip()

        http_timeout_seconds = _env_float(_k("HTTP_TIMEOUT_SECONDS"), 10.0)
        max_attempts = max(1, _env_int(_k("MAX_ATTEMPTS"), 3))
        utc_offset_hours = _env_int(_k("UTC_OFFSET_HOURS"), 9)
        updated_by = (_first_env(_k("UPDATED_BY"), default=None) or default_actor()).strip()

        return Settings(
            log_level=log_level,
            log_dir=log_dir,
            credentials_path=credentials_path,
            github_api_url=github_api_url,
            github_owner=github_owner,
            github_repo=github_repo,
            github_branch=github_branch,
            status_file_path=status_file_path,
            notion_api_url=notion_api_url,
            notion_version=notion_version,
            notion_database_id=notion_database_id,
            http_timeout_seconds=http_timeout_seconds,
            max_attempts=max_attempts,
            utc_offset_hours=utc_offset_hours,
            updated_by=updated_by,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
