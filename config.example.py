# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Tokens never go in env vars or here: they live in the credentials file
(STATUS_CREDENTIALS_FILE), shaped like

    {"github": {"personal_access_token": "..."},
     "notion": {"integration_token": "..."}}

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # Logging
    "STATUS_LOG_LEVEL": "Console logging level (default: INFO).",
    "STATUS_LOG_DIR": "If set, also write full debug logs to <dir>/status-board.log.",
    # Credentials
    "STATUS_CREDENTIALS_FILE": "Credentials JSON path (default: ~/.config/status-board/credentials.json).",
    # GitHub (primary store)
    "STATUS_GITHUB_API_URL": "GitHub API base URL (default: https://api.github.com).",
    "STATUS_GITHUB_OWNER": "Repo owner; empty => detected from the token via GET /user.",
    "STATUS_GITHUB_REPO": "Repository holding status.json (default: schdule-check).",
    "STATUS_GITHUB_BRANCH": "Branch to read/write; empty => repository default branch.",
    "STATUS_FILE_PATH": "Path of the document inside the repo (default: data/status.json).",
    # Notion (mirror, only used with --notion)
    "STATUS_NOTION_API_URL": "Notion API base URL (default: https://api.notion.com/v1).",
    "STATUS_NOTION_VERSION": "Notion-Version header (default: 2022-06-28).",
    "STATUS_NOTION_DATABASE_ID": "Dashboard database id (legacy name: NOTION_DASHBOARD_DB_ID).",
    # Behaviour
    "STATUS_HTTP_TIMEOUT_SECONDS": "Per-request timeout (default: 10).",
    "STATUS_MAX_ATTEMPTS": "Optimistic update attempts before giving up on conflicts (default: 3).",
    "STATUS_UTC_OFFSET_HOURS": "Offset used for timestamps (default: 9, KST).",
    "STATUS_UPDATED_BY": "Default meta.updated_by (default: $USER@<short hostname>; --by overrides).",
}
