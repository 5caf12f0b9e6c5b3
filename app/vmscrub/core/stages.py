"""The ordered cleanup stages.

A cleanup run is seven stages executed in a fixed order. Every command a
stage issues is dispatched through the :class:`ActionRunner`, so dry-run
mode covers all of them.

Failure policy: stage 2 (reclassifying packages) and each single account
deletion in stage 5 tolerate failure. Everything else is fatal and
propagates :class:`CommandFailedError` or :class:`QueryError`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from vmscrub.models.action import create_action
from vmscrub.scanners.accounts import AccountScanner
from vmscrub.scanners.apt import AptScanner
from vmscrub.scanners.errors import QueryError
from vmscrub.utils.formatting import console, print_info, print_warning

if TYPE_CHECKING:
    from vmscrub.config import CleanupConfig
    from vmscrub.core.runner import ActionRunner

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Stage:
    """One step of the cleanup run.

    Attributes:
        number: Position in the run (1-based).
        title: Progress message printed before the stage starts.
        execute: Callable performing the stage.
    """

    number: int
    title: str
    execute: Callable[[], None]


class CleanupPlan:
    """Builds and runs the cleanup stages.

    Package and account sets are queried when their stage starts, never
    ahead of time.

    Args:
        runner: Dispatcher for every destructive command.
        config: Settings of the run.
        apt: APT query interface (defaults to AptScanner()).
        accounts: Account database scanner (defaults to one reading
            ``config.passwd_file``).
    """

    def __init__(
        self,
        runner: ActionRunner,
        config: CleanupConfig,
        apt: AptScanner | None = None,
        accounts: AccountScanner | None = None,
    ) -> None:
        self._runner = runner
        self._config = config
        self._apt = apt or AptScanner()
        self._accounts = accounts or AccountScanner(config.passwd_file)
        self._protected: set[str] = set()

    @property
    def stages(self) -> list[Stage]:
        """All stages in execution order."""
        return [
            Stage(1, "Protecting base packages...", self.protect_base_packages),
            Stage(2, "Marking remaining packages as auto-installed...", self.mark_others_auto),
            Stage(3, "Purging auto-installed packages...", self.purge_auto_packages),
            Stage(4, "Cleaning up APT...", self.clean_apt),
            Stage(5, "Deleting non-root users...", self.delete_users),
            Stage(6, "Removing files and logs...", self.wipe_files),
            Stage(7, "Clearing journal logs...", self.vacuum_journal),
        ]

    def run(self) -> None:
        """Execute every stage in order, stopping at the first fatal error."""
        for stage in self.stages:
            console.print(f"[bold_header]{stage.title}[/]")
            logger.debug("Starting stage %d", stage.number)
            stage.execute()

    def protect_base_packages(self) -> None:
        """Stage 1: mark the base groups and their dependencies manual."""
        dependencies = self._apt.depends(self._config.dependency_root)

        packages: list[str] = []
        for name in [*self._config.base_packages, *dependencies]:
            if name not in packages:
                packages.append(name)

        self._protected = set(packages)
        self._runner.run(create_action("apt-mark", "manual", *packages, quiet=True))

    def mark_others_auto(self) -> None:
        """Stage 2: mark every other manual package auto-installed.

        Any failure here, including the query, is only a warning.
        """
        try:
            manual = self._apt.manual_packages()
        except QueryError as e:
            print_warning(f"Could not list manually installed packages: {e}")
            return

        packages = [pkg for pkg in manual if pkg not in self._protected]
        if not packages:
            print_info("No other manually installed packages.")
            return

        self._runner.run(
            create_action("apt-mark", "auto", *packages, quiet=True, tolerate_failure=True)
        )

    def purge_auto_packages(self) -> None:
        """Stage 3: purge all auto-installed packages in a single batch."""
        packages = self._apt.auto_packages()
        if not packages:
            print_info("Nothing to purge.")
            return

        self._runner.run(create_action("apt-get", "-y", "purge", *packages))

    def clean_apt(self) -> None:
        """Stage 4: remove orphaned dependencies and the download cache."""
        self._runner.run(create_action("apt-get", "-y", "autoremove", "--purge"))
        self._runner.run(create_action("apt-get", "clean"))

    def delete_users(self) -> None:
        """Stage 5: delete every non-root account with its home directory.

        A failed deletion does not stop the remaining ones.
        """
        for account in self._accounts.accounts_from(self._config.min_uid):
            self._runner.run(
                create_action("userdel", "-r", account.name, tolerate_failure=True)
            )

    def wipe_files(self) -> None:
        """Stage 6: remove user data, temp files, root's files and logs."""
        config = self._config
        self._runner.run(create_action("rm", "-rf", *config.wipe_globs, expand_globs=True))
        self._runner.run(
            create_action(
                "find",
                str(config.root_dir),
                "-mindepth",
                "1",
                "!",
                "-path",
                config.root_keep_path,
                "-delete",
            )
        )
        self._runner.run(create_action("rm", "-rf", *config.log_globs, expand_globs=True))

    def vacuum_journal(self) -> None:
        """Stage 7: rotate the journal and vacuum everything older than the limit."""
        self._runner.run(create_action("journalctl", "--rotate"))
        self._runner.run(
            create_action("journalctl", f"--vacuum-time={self._config.journal_vacuum_time}")
        )
