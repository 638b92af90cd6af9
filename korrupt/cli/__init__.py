"""Korrupt CLI Package.

Public API:
- main: CLI entry point
"""

from korrupt.cli.main import main

__all__ = ["main"]
