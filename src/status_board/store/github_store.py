# src/status_board/store/github_store.py

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any

import httpx

from ..core.ports import JsonDocument, Snapshot
from ..errors import AuthError, ConflictError, NotFoundError, RemoteError, TransientError

logger = logging.getLogger(__name__)

_ACCEPT = "application/vnd.github.v3+json"


def encode_content(document: JsonDocument) -> str:
    """JSON (2-space indent, UTF-8 kept readable) -> base64 text for the contents API."""
    text = json.dumps(document, indent=2, ensure_ascii=False)
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_content(content: str) -> JsonDocument:
    # The API wraps base64 at 60 columns; b64decode drops the newlines.
    try:
        raw = base64.b64decode(content)
        data = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise RemoteError(200, f"file content is not valid base64 JSON: {e}") from e
    if not isinstance(data, dict):
        raise RemoteError(200, "file content is not a JSON object")
    return data


def _detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:500]
    if isinstance(body, dict) and "message" in body:
        return str(body["message"])
    return resp.text[:500]


def _raise_for_status(resp: httpx.Response, what: str) -> None:
    code = resp.status_code
    if code < 400:
        return
    if code in (401, 403):
        raise AuthError(f"GitHub rejected credentials for {what} ({code}): {_detail(resp)}")
    if code == 404:
        raise NotFoundError(f"GitHub: {what} not found")
    if code == 409:
        raise ConflictError(f"GitHub: revision conflict on {what}")
    if code >= 500:
        raise TransientError(f"GitHub returned {code} for {what}: {_detail(resp)}")
    raise RemoteError(code, _detail(resp))


def _json_object(resp: httpx.Response, what: str) -> dict[str, Any]:
    """Body of a successful response, which must be a JSON object."""
    try:
        body = resp.json()
    except ValueError as e:
        raise RemoteError(resp.status_code, f"GitHub returned a non-JSON body for {what}") from e
    if not isinstance(body, dict):
        raise RemoteError(resp.status_code, f"GitHub returned an unexpected body for {what}")
    return body


class GitHubContentStore:
    """
    DocumentStore over the GitHub REST contents API.

    The revision token is the blob sha GitHub returns on read; a PUT carrying a
    stale sha is rejected with 409, which is what the update engine retries on.
    """

    def __init__(
        self,
        http: httpx.Client,
        *,
        token: str,
        owner: str,
        repo: str,
        branch: str = "",
        api_url: str = "https://api.github.com",
    ) -> None:
        self._http = http
        self._token = token
        self.owner = owner
        self.repo = repo
        self.branch = branch
        self._api_url = api_url.rstrip("/")

    @classmethod
    def connect(
        cls,
        http: httpx.Client,
        *,
        token: str,
        repo: str,
        owner: str = "",
        branch: str = "",
        api_url: str = "https://api.github.com",
    ) -> GitHubContentStore:
        """Build a store, detecting the owner from the token when not configured."""
        if not owner:
            owner = detect_owner(http, token=token, api_url=api_url)
            logger.debug("Detected GitHub owner=%s", owner)
        return cls(http, token=token, owner=owner, repo=repo, branch=branch, api_url=api_url)

    # ---- low-level helpers ----

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"token {self._token}", "Accept": _ACCEPT}

    def _url(self, path: str) -> str:
        return f"{self._api_url}/repos/{self.owner}/{self.repo}/contents/{path.lstrip('/')}"

    def _send(self, method: str, url: str, what: str, **kwargs: Any) -> httpx.Response:
        try:
            return self._http.request(method, url, headers=self._headers(), **kwargs)
        except httpx.TimeoutException as e:
            raise TransientError(f"GitHub timed out on {what}") from e
        except httpx.TransportError as e:
            raise TransientError(f"GitHub unreachable on {what}: {e}") from e

    # ---- DocumentStore ----

    def fetch(self, path: str) -> Snapshot:
        params = {"ref": self.branch} if self.branch else None
        resp = self._send("GET", self._url(path), path, params=params)
        _raise_for_status(resp, path)
        data = _json_object(resp, path)
        if "sha" not in data:
            raise RemoteError(resp.status_code, f"{path} is not a file")
        return Snapshot(document=decode_content(data.get("content", "")), revision=str(data["sha"]))

    def write(self, path: str, document: JsonDocument, revision: str, message: str) -> str:
        payload: dict[str, Any] = {
            "message": message,
            "content": encode_content(document),
            "sha": revision,
        }
        if self.branch:
            payload["branch"] = self.branch
        resp = self._send("PUT", self._url(path), path, json=payload)
        _raise_for_status(resp, path)
        body = _json_object(resp, path)
        content = body.get("content")
        new_sha = content.get("sha", "") if isinstance(content, dict) else ""
        logger.debug("Wrote %s rev=%s -> %s", path, revision, new_sha)
        return str(new_sha)


def detect_owner(http: httpx.Client, *, token: str, api_url: str = "https://api.github.com") -> str:
    """Login of the token's user (GET /user)."""
    try:
        resp = http.get(
            f"{api_url.rstrip('/')}/user",
            headers={"Authorization": f"token {token}", "Accept": _ACCEPT},
        )
    except httpx.TimeoutException as e:
        raise TransientError("GitHub timed out on /user") from e
    except httpx.TransportError as e:
        raise TransientError(f"GitHub unreachable on /user: {e}") from e
    _raise_for_status(resp, "/user")
    login = _json_object(resp, "/user").get("login")
    if not login:
        raise RemoteError(resp.status_code, "GitHub /user response has no login")
    return str(login)
