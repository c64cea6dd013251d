"""
Command-line surface.

Components:
- dispatcher.py: primary write (fatal on error), then the mirror step (warnings only)
- main.py: argparse parser, credential loading, HTTP wiring, exit codes
"""
