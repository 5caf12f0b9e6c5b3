"""Action models for cleanup commands.

This module defines data structures for representing a single
destructive command and the outcome of dispatching it.
"""

import shlex
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Action:
    """A single external command to be executed by the cleanup run.

    This is an immutable data structure that describes what command
    should be run and how its failure is treated.

    Attributes:
        argv: Command and arguments.
        tolerate_failure: If True, a non-zero exit is logged and ignored.
        quiet: If True, the command's standard output is discarded.
        expand_globs: If True, wildcard arguments are expanded right before
            execution the way a shell would.
    """

    argv: tuple[str, ...]
    tolerate_failure: bool = False
    quiet: bool = False
    expand_globs: bool = False

    def __post_init__(self) -> None:
        """Validate action data after initialization."""
        if not self.argv or not self.argv[0]:
            msg = "Action command cannot be empty"
            raise ValueError(msg)

    @property
    def description(self) -> str:
        """Human-readable command line.

        Glob arguments are shown unquoted, as a shell user would type them.
        """
        if self.expand_globs:
            return " ".join(self.argv)
        return shlex.join(self.argv)


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Result of dispatching an action.

    Attributes:
        action: The action that was dispatched.
        returncode: Exit code of the command (0 when not executed).
        dry_run: True if the action was only reported.
        skipped: True if glob expansion left nothing to operate on.
    """

    action: Action
    returncode: int = 0
    dry_run: bool = False
    skipped: bool = False

    @property
    def success(self) -> bool:
        """Check if the action completed successfully."""
        return self.returncode == 0

    @property
    def failed(self) -> bool:
        """Check if the action failed."""
        return not self.success


def create_action(*argv: str, **options: bool) -> Action:
    """Create an action from command words.

    Args:
        *argv: Command and arguments.
        **options: Action flags (tolerate_failure, quiet, expand_globs).

    Returns:
        Action for the given command.
    """
    return Action(argv=tuple(argv), **options)
