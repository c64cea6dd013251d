# src/status_board/__init__.py

"""Updater for the shared status.json dashboard (GitHub-backed, optional Notion mirror)."""

__version__ = "0.1.0"
