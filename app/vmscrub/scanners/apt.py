"""APT package scanner implementation.

Queries the manual/auto installation marks with apt-mark and the direct
dependencies of a package with apt-cache. All queries are read-only and
run even in dry-run mode.
"""

import logging
import subprocess

from vmscrub.scanners.errors import QueryError
from vmscrub.utils.shell import COMMAND_NOT_FOUND, TIMED_OUT, run_command

logger = logging.getLogger(__name__)


class AptScanner:
    """Read-only view of the APT package database.

    Results are never cached: every call queries the package manager
    again, since earlier cleanup stages change the answers.
    """

    # Timeout for apt queries
    _QUERY_TIMEOUT: float = 120.0

    def manual_packages(self) -> list[str]:
        """List packages marked as manually installed.

        Raises:
            QueryError: If apt-mark showmanual fails.
        """
        return self._list_packages("showmanual")

    def auto_packages(self) -> list[str]:
        """List packages marked as automatically installed.

        Raises:
            QueryError: If apt-mark showauto fails.
        """
        return self._list_packages("showauto")

    def depends(self, package: str) -> list[str]:
        """List the direct dependencies of a package.

        Parses the ``Depends:`` lines (including alternatives and
        PreDepends) of ``apt-cache depends``. Virtual packages, shown in
        angle brackets, are skipped since apt-mark cannot mark them.

        Args:
            package: Package whose dependencies are listed.

        Returns:
            Dependency names in output order, without duplicates.

        Raises:
            QueryError: If apt-cache depends fails.
        """
        result = self._query(["apt-cache", "depends", package])

        names: list[str] = []
        for line in result.splitlines():
            if "Depends:" not in line:
                continue
            fields = line.split()
            if len(fields) < 2:
                continue
            name = fields[1]
            if name.startswith("<"):
                logger.debug("Skipping virtual dependency %s of %s", name, package)
                continue
            if name not in names:
                names.append(name)

        logger.debug("%s depends on %d package(s)", package, len(names))
        return names

    def _list_packages(self, command: str) -> list[str]:
        """Run an apt-mark listing command and return the package names."""
        output = self._query(["apt-mark", command])
        return [pkg.strip() for pkg in output.splitlines() if pkg.strip()]

    def _query(self, args: list[str]) -> str:
        """Run a query and return its stdout.

        Raises:
            QueryError: If the command is missing, times out or exits non-zero.
        """
        try:
            result = run_command(args, timeout=self._QUERY_TIMEOUT)
        except FileNotFoundError as e:
            raise QueryError(f"{args[0]}: command not found", returncode=COMMAND_NOT_FOUND) from e
        except subprocess.TimeoutExpired as e:
            msg = f"{' '.join(args)} timed out after {e.timeout:g} seconds"
            raise QueryError(msg, returncode=TIMED_OUT) from e

        if not result.success:
            stderr = result.stderr.strip()
            msg = f"{' '.join(args)} failed: {stderr or 'unknown error'}"
            raise QueryError(msg, returncode=result.returncode, stderr=stderr)

        return result.stdout
