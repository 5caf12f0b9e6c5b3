"""Action dispatch with dry-run support.

Every destructive command of a cleanup run goes through
:meth:`ActionRunner.run`. It is the only place where the dry-run
decision is made.
"""

import glob
import logging
import subprocess

from vmscrub.models.action import Action, ActionResult
from vmscrub.utils.formatting import print_action, print_error
from vmscrub.utils.shell import COMMAND_NOT_FOUND, TIMED_OUT, run_passthrough

logger = logging.getLogger(__name__)

DRY_RUN_MARKER = "[DRY-RUN]"
EXECUTE_MARKER = "→"

_GLOB_CHARS = frozenset("*?[")


class CommandFailedError(Exception):
    """Raised when a non-tolerated action exits non-zero.

    Attributes:
        action: The action that failed.
        returncode: Exit code reported for the command.
    """

    def __init__(self, action: Action, returncode: int) -> None:
        self.action = action
        self.returncode = returncode
        super().__init__(f"'{action.description}' failed with exit code {returncode}")

    @property
    def exit_code(self) -> int:
        """Exit code to terminate the process with.

        Commands killed by a signal report a negative return code; these
        map to 128 + signal number like a shell does.
        """
        if self.returncode < 0:
            return 128 - self.returncode
        return self.returncode


def _has_glob(arg: str) -> bool:
    return any(ch in _GLOB_CHARS for ch in arg)


def expand_globs(argv: tuple[str, ...]) -> list[str] | None:
    """Expand wildcard arguments of a command line.

    Like an unquoted shell ``*``, matches exclude dot-files at the
    pattern's level. Patterns without matches are dropped.

    Args:
        argv: Command line possibly containing wildcard arguments.

    Returns:
        The expanded command line, or None if the command had patterns
        and none of them matched anything.
    """
    expanded = [argv[0]]
    patterns = 0
    matched = 0

    for arg in argv[1:]:
        if not _has_glob(arg):
            expanded.append(arg)
            continue

        patterns += 1
        matches = sorted(glob.glob(arg))
        if not matches:
            logger.debug("Pattern %s matched nothing", arg)
            continue
        matched += len(matches)
        expanded.extend(matches)

    if patterns and not matched:
        return None
    return expanded


class ActionRunner:
    """Dispatches actions, either executing or only reporting them.

    Attributes:
        dry_run: If True, actions are printed but never executed.

    Example:
        >>> runner = ActionRunner(dry_run=True)
        >>> runner.run(create_action("apt-get", "clean"))
        [DRY-RUN] apt-get clean
    """

    def __init__(self, dry_run: bool = False, timeout: float | None = None) -> None:
        """Initialize the runner.

        Args:
            dry_run: If True, only report actions without executing them.
            timeout: Per-command timeout in seconds. None waits forever.
        """
        self._dry_run = dry_run
        self._timeout = timeout

    @property
    def dry_run(self) -> bool:
        """Check if runner is in dry-run mode."""
        return self._dry_run

    def run(self, action: Action) -> ActionResult:
        """Dispatch a single action.

        Args:
            action: The action to dispatch.

        Returns:
            ActionResult describing the outcome.

        Raises:
            CommandFailedError: If the command fails and the action does
                not tolerate failure.
        """
        if self._dry_run:
            print_action(DRY_RUN_MARKER, action.description, "dry_run")
            return ActionResult(action=action, dry_run=True)

        print_action(EXECUTE_MARKER, action.description, "execute")

        argv: list[str] | None = list(action.argv)
        if action.expand_globs:
            argv = expand_globs(action.argv)
            if argv is None:
                logger.debug("Nothing to operate on for '%s'", action.description)
                return ActionResult(action=action, skipped=True)

        returncode = self._execute(argv, quiet=action.quiet)

        if returncode != 0:
            if action.tolerate_failure:
                logger.warning(
                    "Ignoring failure of '%s' (exit code %d)",
                    action.description,
                    returncode,
                )
                return ActionResult(action=action, returncode=returncode)
            raise CommandFailedError(action, returncode)

        return ActionResult(action=action, returncode=returncode)

    def _execute(self, argv: list[str], quiet: bool) -> int:
        """Run a command line and return its exit code.

        Missing executables and timeouts are reported with their shell
        exit codes instead of raising.
        """
        try:
            return run_passthrough(argv, quiet=quiet, timeout=self._timeout)
        except FileNotFoundError:
            print_error(f"{argv[0]}: command not found")
            return COMMAND_NOT_FOUND
        except subprocess.TimeoutExpired:
            print_error(f"{argv[0]}: timed out after {self._timeout} seconds")
            return TIMED_OUT
