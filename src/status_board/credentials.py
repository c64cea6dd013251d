# src/status_board/credentials.py

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import CredentialsError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Credentials:
    github_token: str
    notion_token: str = ""

    def __repr__(self) -> str:
        # Never leak tokens into logs or tracebacks.
        notion = "***" if self.notion_token else ""
        return f"Credentials(github_token=***, notion_token={notion})"


def load_credentials(path: str | Path) -> Credentials:
    """
    Load the nested credentials file:

        {"github": {"personal_access_token": "..."},
         "notion": {"integration_token": "..."}}

    The GitHub token is mandatory; the Notion token is optional (mirroring is
    then skipped with a warning).
    """
    path = Path(path).expanduser()
    try:
        raw = path.read_text("utf-8")
    except FileNotFoundError as e:
        raise CredentialsError(f"credentials file not found: {path}") from e
    except OSError as e:
        raise CredentialsError(f"cannot read credentials file {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CredentialsError(f"credentials file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise CredentialsError(f"credentials file {path} must contain a JSON object")

    github = data.get("github")
    token = github.get("personal_access_token") if isinstance(github, dict) else None
    if not isinstance(token, str) or not token.strip():
        raise CredentialsError(f"github.personal_access_token missing in {path}")

    notion = data.get("notion")
    notion_token = notion.get("integration_token", "") if isinstance(notion, dict) else ""
    if not isinstance(notion_token, str):
        notion_token = ""

    logger.debug("Loaded credentials from %s (notion=%s)", path, bool(notion_token))
    return Credentials(github_token=token.strip(), notion_token=notion_token.strip())
