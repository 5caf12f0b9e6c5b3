"""Rich display functions for the cleanup run.

Provides the confirmation banner and the start/completion reports.
"""

from datetime import datetime

from vmscrub.core.runner import DRY_RUN_MARKER
from vmscrub.utils.formatting import console, print_action, print_success

_BANNER_LINES = (
    "This will PERMANENTLY delete:",
    "  • all non-root users and their home directories",
    "  • all manually installed packages (leaving only ubuntu-minimal/standard)",
    "  • all logs, caches, temp files under /var, /home, /tmp, /root (except SSH keys)",
    "Are you sure you want to proceed? (yes/no)",
)


def format_timestamp(moment: datetime | None = None) -> str:
    """Format a timestamp the way date(1) does.

    Args:
        moment: Time to format. Defaults to now, in local time.

    Returns:
        String such as ``Mon Oct  5 14:03:11 UTC 2026``; the day is
        space-padded.
    """
    moment = moment or datetime.now().astimezone()
    return f"{moment:%a %b} {moment.day:2d} {moment:%H:%M:%S %Z %Y}"


def print_warning_banner() -> None:
    """Print the irreversible-loss warning shown before the prompt."""
    console.print("[banner]*** WARNING ***[/]")
    for line in _BANNER_LINES:
        console.print(line, markup=False, soft_wrap=True)


def print_start() -> None:
    """Print the start-of-run message."""
    console.print(f"Starting cleanup at {format_timestamp()}.")


def print_completion(dry_run: bool) -> None:
    """Print the completion report.

    Args:
        dry_run: Whether the run only reported its actions.
    """
    console.print(f"Cleanup complete at {format_timestamp()}.")
    if dry_run:
        print_action(DRY_RUN_MARKER, "Skipped actual cleanup.", "dry_run")
    else:
        print_success("Please reboot the VM now: sudo reboot")
