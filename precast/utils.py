"""Shared utility functions for Precast.

Provides the Rich console, the ``Logger`` handed to the engine and to
plugins, and a few file-system helpers.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from rich.console import Console
from rich.markup import escape

console = Console()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------


class Logger:
    """Leveled console logger backed by Rich.

    ``debug`` lines are only printed when the logger was created with
    ``debug=True`` (or, when left unset, when the ``DEBUG`` environment
    variable is set).  Messages are escaped so paths containing square
    brackets are printed verbatim.
    """

    def __init__(self, debug: bool | None = None, out: Console | None = None) -> None:
        if debug is None:
            debug = bool(os.environ.get("DEBUG"))
        self.debug_enabled = debug
        self.console = out or console

    def info(self, message: str) -> None:
        self.console.print(escape(message))

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def warn(self, message: str) -> None:
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {escape(message)}")

    def debug(self, message: str) -> None:
        if self.debug_enabled:
            self.console.print(f"[dim]{escape('[DEBUG]')}[/dim] {escape(message)}")


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Returns:
        The ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def is_empty_dir(path: str | Path) -> bool:
    """Return ``True`` if *path* is missing or an empty directory."""
    dir_path = Path(path)
    if not dir_path.exists():
        return True
    return dir_path.is_dir() and not any(dir_path.iterdir())


def remove_tree(path: str | Path) -> None:
    """Delete a directory tree if it exists."""
    dir_path = Path(path)
    if dir_path.exists():
        shutil.rmtree(dir_path)
