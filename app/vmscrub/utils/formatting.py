"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from vmscrub.core.theme import get_rich_theme

if TYPE_CHECKING:
    from vmscrub.core.theme import ThemeColors


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=get_rich_theme(), color_system=_detect_color_system(), highlight=False)
err_console = Console(
    theme=get_rich_theme(),
    stderr=True,
    color_system=_detect_color_system(),
    highlight=False,
)


@contextmanager
def use_colors(colors: ThemeColors) -> Iterator[None]:
    """Temporarily apply configured colors to both shared consoles.

    Args:
        colors: Colors loaded from the configuration file.
    """
    theme = get_rich_theme(colors)
    with console.use_theme(theme), err_console.use_theme(theme):
        yield


def print_action(marker: str, description: str, style: str) -> None:
    """Print a command line prefixed by a marker.

    The description is printed verbatim (no markup, no wrapping) so the
    operator sees exactly the command that is or would be run.

    Args:
        marker: Prefix such as ``[DRY-RUN]`` or an arrow.
        description: The command line.
        style: Theme style applied to the marker.
    """
    console.print(f"[{style}]{escape(marker)}[/] {escape(description)}", soft_wrap=True)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]", soft_wrap=True)


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}", soft_wrap=True)


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}", soft_wrap=True)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]", soft_wrap=True)
