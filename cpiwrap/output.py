#!/usr/bin/env python3
"""
CPI Wrap console output
Shared rich consoles for informational and error messages
"""

from rich.console import Console
from rich.markup import escape

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)

_quiet = False


def set_quiet(quiet: bool):
    """Enable or disable informational output"""
    global _quiet
    _quiet = quiet


def info(message: str):
    """Print an informational message unless quiet mode is on"""
    if not _quiet:
        console.print(message, markup=False)


def status(message: str):
    """Print a styled progress line unless quiet mode is on"""
    if not _quiet:
        console.print(message)


def warn(message: str):
    """Print a warning on stderr"""
    err_console.print(f"[yellow]{escape(message)}[/yellow]")
