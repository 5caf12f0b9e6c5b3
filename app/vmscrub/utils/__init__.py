"""Utility modules for vmscrub.

This module exports commonly used utility functions.
"""

from vmscrub.utils.formatting import (
    console,
    err_console,
    print_action,
    print_error,
    print_info,
    print_success,
    print_warning,
    use_colors,
)
from vmscrub.utils.shell import CommandResult, run_command, run_passthrough

__all__ = [
    "CommandResult",
    "console",
    "err_console",
    "print_action",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
    "run_passthrough",
    "use_colors",
]
