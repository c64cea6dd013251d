"""
Primary store.

Components:
- github_store.py: versioned status.json over the GitHub contents API
- engine.py: optimistic fetch -> mutate -> write loop, retried on revision conflict
"""
