# tests/conftest.py

from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace

import pytest

from .fakes import FakeDocumentStore


@pytest.fixture()
def empty_document() -> dict:
    return {
        "meta": {"updated_at": "2026-01-01T09:00:00+09:00", "updated_by": "seed"},
        "tasks": [],
        "schedule": [],
    }


@pytest.fixture()
def store(empty_document: dict) -> FakeDocumentStore:
    return FakeDocumentStore(empty_document)


@pytest.fixture()
def credentials_file(tmp_path: Path) -> Path:
    path = tmp_path / "credentials.json"
    path.write_text(
        json.dumps(
            {
                "github": {"personal_access_token": "ghp_test"},
                "notion": {"integration_token": "secret_test"},
            }
        ),
        "utf-8",
    )
    return path


@pytest.fixture()
def settings(credentials_file: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with cli.main.run().

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment.
    """
    return SimpleNamespace(
        log_level="INFO",
        log_dir=None,
        credentials_path=credentials_file,
        github_api_url="https://api.github.test",
        github_owner="",
        github_repo="board",
        github_branch="",
        status_file_path="data/status.json",
        notion_api_url="https://api.notion.test/v1",
        notion_version="2022-06-28",
        notion_database_id="db1",
        http_timeout_seconds=5.0,
        max_attempts=3,
        utc_offset_hours=9,
        updated_by="tester@box",
    )
