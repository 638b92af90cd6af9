"""CLI utilities."""

from .argument_parser import VERSION, create_parser

__all__ = ["VERSION", "create_parser"]
