# tests/fakes.py

from __future__ import annotations

import base64
import copy
import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from status_board.core.models import Task
from status_board.core.ports import JsonDocument, Snapshot
from status_board.errors import ConflictError, MirrorError, NotFoundError


class FakeDocumentStore:
    """
    In-memory DocumentStore with an integer revision counter.

    - `conflicts` makes the next N writes fail with ConflictError
    - `before_conflict` runs right before a simulated conflict, standing in for
      the other writer that won the race (it may edit `self.document`)
    """

    def __init__(self, document: JsonDocument | None = None, *, path: str = "data/status.json") -> None:
        self.path = path
        self.document: JsonDocument | None = copy.deepcopy(document)
        self.revision = 1
        self.conflicts = 0
        self.before_conflict: Callable[[FakeDocumentStore], None] | None = None
        self.write_error: Exception | None = None

        self.fetches = 0
        self.write_attempts = 0
        self.writes = 0
        self.messages: list[str] = []

    def fetch(self, path: str) -> Snapshot:
        if path != self.path or self.document is None:
            raise NotFoundError(f"{path} not found")
        self.fetches += 1
        return Snapshot(document=copy.deepcopy(self.document), revision=str(self.revision))

    def write(self, path: str, document: JsonDocument, revision: str, message: str) -> str:
        self.write_attempts += 1
        if self.write_error is not None:
            raise self.write_error
        if self.conflicts > 0:
            self.conflicts -= 1
            if self.before_conflict is not None:
                self.before_conflict(self)
            self.revision += 1
            raise ConflictError("stale revision")
        if revision != str(self.revision):
            raise ConflictError("stale revision")
        self.document = copy.deepcopy(document)
        self.revision += 1
        self.writes += 1
        self.messages.append(message)
        return str(self.revision)


@dataclass(slots=True)
class FakeMirror:
    """MirrorClient that records calls; `fail=True` makes every call raise MirrorError."""

    upserts: list[Task] = field(default_factory=list)
    archived: list[str] = field(default_factory=list)
    fail: bool = False

    def upsert(self, task: Task) -> None:
        if self.fail:
            raise MirrorError("mirror down")
        self.upserts.append(task)

    def archive(self, task_id: str) -> None:
        if self.fail:
            raise MirrorError("mirror down")
        self.archived.append(task_id)


class FakeGitHub:
    """
    Request handler for httpx.MockTransport emulating the bits of the GitHub API we use:
    GET /user, GET/PUT /repos/{owner}/{repo}/contents/{path}.
    """

    def __init__(self, document: JsonDocument, *, owner: str = "octo", repo: str = "board", path: str = "data/status.json") -> None:
        self.owner = owner
        self.repo = repo
        self.path = path
        self.document = copy.deepcopy(document)
        self.sha_counter = 1
        self.forced: dict[str, httpx.Response] = {}  # method -> canned response
        self.requests: list[httpx.Request] = []

    @property
    def sha(self) -> str:
        return f"sha{self.sha_counter}"

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method in self.forced:
            return self.forced[request.method]

        if request.url.path == "/user":
            return httpx.Response(200, json={"login": self.owner})

        expected = f"/repos/{self.owner}/{self.repo}/contents/{self.path}"
        if request.url.path != expected:
            return httpx.Response(404, json={"message": "Not Found"})

        if request.method == "GET":
            text = json.dumps(self.document, ensure_ascii=False)
            return httpx.Response(
                200,
                json={"sha": self.sha, "content": base64.encodebytes(text.encode("utf-8")).decode("ascii")},
            )

        if request.method == "PUT":
            body = json.loads(request.content)
            if body.get("sha") != self.sha:
                return httpx.Response(409, json={"message": "does not match"})
            self.document = json.loads(base64.b64decode(body["content"]).decode("utf-8"))
            self.sha_counter += 1
            return httpx.Response(200, json={"content": {"sha": self.sha}, "commit": {"message": body["message"]}})

        return httpx.Response(405, json={"message": "Method Not Allowed"})


class FakeNotion:
    """httpx.MockTransport handler emulating database query, page create and page patch."""

    def __init__(
        self,
        database_id: str = "db1",
        *,
        status_code: int | None = None,
        query_body: Any = None,
    ) -> None:
        self.database_id = database_id
        self.status_code = status_code
        self.query_body = query_body  # canned response for database queries
        self.pages: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []

    def add_page(self, page_id: str, task_id: str) -> None:
        self.pages[page_id] = {
            "archived": False,
            "properties": {"Task ID": {"title": [{"text": {"content": task_id}}]}},
        }

    @staticmethod
    def _task_id(page: dict[str, Any]) -> str:
        return page["properties"]["Task ID"]["title"][0]["text"]["content"]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code is not None:
            return httpx.Response(self.status_code, json={"message": "boom"})

        body = json.loads(request.content) if request.content else {}
        path = request.url.path

        if request.method == "POST" and path == f"/v1/databases/{self.database_id}/query":
            if self.query_body is not None:
                return httpx.Response(200, json=self.query_body)
            wanted = body["filter"]["title"]["equals"]
            hits = [
                {"id": pid}
                for pid, page in self.pages.items()
                if not page["archived"] and self._task_id(page) == wanted
            ]
            return httpx.Response(200, json={"results": hits})

        if request.method == "POST" and path == "/v1/pages":
            pid = f"page{len(self.pages) + 1}"
            self.pages[pid] = {"archived": False, "properties": body["properties"]}
            return httpx.Response(200, json={"id": pid})

        if request.method == "PATCH" and path.startswith("/v1/pages/"):
            pid = path.rsplit("/", 1)[-1]
            page = self.pages[pid]
            if "properties" in body:
                page["properties"] = body["properties"]
            if "archived" in body:
                page["archived"] = body["archived"]
            return httpx.Response(200, json={"id": pid})

        return httpx.Response(404, json={"message": "not found"})
