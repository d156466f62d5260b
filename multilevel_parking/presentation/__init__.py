"""Presentation layer: the console shell."""

from .console import ConsoleShell

__all__ = ["ConsoleShell"]
