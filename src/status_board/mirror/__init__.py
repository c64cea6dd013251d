"""
Mirror (best effort).

Components:
- notion_mirror.py: upsert/archive task pages in a Notion database keyed by "Task ID"
"""
