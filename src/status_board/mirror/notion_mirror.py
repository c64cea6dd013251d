# src/status_board/mirror/notion_mirror.py

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.models import DEFAULT_CATEGORY, Task, TaskStatus
from ..errors import MirrorError

logger = logging.getLogger(__name__)

# Title property of the dashboard database; it holds the task id.
KEY_PROPERTY = "Task ID"


def _rich_text(value: str) -> dict[str, Any]:
    return {"rich_text": [{"text": {"content": value}}]}


def task_properties(task: Task) -> dict[str, Any]:
    """Fixed Task -> Notion property mapping of the dashboard database."""
    props: dict[str, Any] = {
        KEY_PROPERTY: {"title": [{"text": {"content": task.id}}]},
        "제목": _rich_text(task.title or ""),
        "상태": {"select": {"name": str(task.status or TaskStatus.WAITING)}},
        "카테고리": {"select": {"name": task.category or DEFAULT_CATEGORY}},
        "진행률": {"number": task.progress if task.progress is not None else 0},
        "메모": _rich_text(task.note or ""),
    }
    if task.updated_at:
        props["최종 업데이트"] = {"date": {"start": task.updated_at}}
    return props


class NotionMirror:
    """
    MirrorClient over the Notion REST API.

    Records are found by querying the database for KEY_PROPERTY == task id,
    so upsert converges instead of creating duplicates.
    """

    def __init__(
        self,
        http: httpx.Client,
        *,
        token: str,
        database_id: str,
        api_url: str = "https://api.notion.com/v1",
        notion_version: str = "2022-06-28",
    ) -> None:
        if not token:
            raise MirrorError("Notion token not found in credentials, skipping")
        if not database_id:
            raise MirrorError("Notion database id not set (STATUS_NOTION_DATABASE_ID), skipping Notion mirroring")
        self._http = http
        self._token = token
        self.database_id = database_id
        self._api_url = api_url.rstrip("/")
        self._version = notion_version

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Notion-Version": self._version,
            "Content-Type": "application/json",
        }

    def _request(self, method: str, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            resp = self._http.request(method, url, headers=self._headers(), json=payload)
        except httpx.HTTPError as e:
            raise MirrorError(f"Notion request failed: {e}") from e
        if resp.status_code >= 400:
            raise MirrorError(f"Notion returned {resp.status_code} for {method} {url}: {resp.text[:300]}")
        try:
            return resp.json()
        except ValueError as e:
            raise MirrorError(f"Notion returned non-JSON body for {method} {url}") from e

    def find_page_id(self, task_id: str) -> str | None:
        body = self._request(
            "POST",
            f"{self._api_url}/databases/{self.database_id}/query",
            {"filter": {"property": KEY_PROPERTY, "title": {"equals": task_id}}},
        )
        results = body.get("results") if isinstance(body, dict) else None
        if not isinstance(results, list):
            raise MirrorError(f"Notion query for {task_id} returned malformed results")
        if not results:
            return None
        if len(results) > 1:
            logger.debug("Notion: %d pages match %s, using the first", len(results), task_id)
        first = results[0]
        page_id = first.get("id") if isinstance(first, dict) else None
        if not page_id:
            raise MirrorError(f"Notion query for {task_id} returned a page without an id")
        return str(page_id)

    # ---- MirrorClient ----

    def upsert(self, task: Task) -> None:
        properties = task_properties(task)
        page_id = self.find_page_id(task.id)
        if page_id is not None:
            self._request("PATCH", f"{self._api_url}/pages/{page_id}", {"properties": properties})
            logger.info("[Notion] Updated page for %s", task.id)
        else:
            self._request(
                "POST",
                f"{self._api_url}/pages",
                {"parent": {"database_id": self.database_id}, "properties": properties},
            )
            logger.info("[Notion] Created page for %s", task.id)

    def archive(self, task_id: str) -> None:
        page_id = self.find_page_id(task_id)
        if page_id is None:
            logger.info("[Notion] No page for %s, nothing to archive", task_id)
            return
        self._request("PATCH", f"{self._api_url}/pages/{page_id}", {"archived": True})
        logger.info("[Notion] Archived page for %s", task_id)
