"""Account database scanner.

Reads the colon-delimited system account database (``/etc/passwd``
format) to find the accounts removed by the cleanup run.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from vmscrub.scanners.errors import QueryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Account:
    """A single record of the account database.

    Attributes:
        name: Login name.
        uid: Numeric user id.
    """

    name: str
    uid: int


class AccountScanner:
    """Scanner for the system account database.

    Attributes:
        passwd_file: Path to the colon-delimited account database.
    """

    def __init__(self, passwd_file: Path = Path("/etc/passwd")) -> None:
        self.passwd_file = passwd_file

    def scan(self) -> Iterator[Account]:
        """Yield every well-formed record in database order.

        Comment lines, records with fewer than three fields, and records
        with a non-numeric uid are skipped.

        Raises:
            QueryError: If the database cannot be read.
        """
        try:
            content = self.passwd_file.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise QueryError(f"Cannot read account database {self.passwd_file}: {e}") from e

        for line in content.splitlines():
            if not line.strip() or line.startswith("#"):
                continue

            account = self._parse_line(line)
            if account is not None:
                yield account

    def accounts_from(self, min_uid: int) -> list[Account]:
        """List accounts whose uid is at least ``min_uid``.

        Args:
            min_uid: Lowest uid to include.

        Returns:
            Matching accounts in database order.
        """
        return [account for account in self.scan() if account.uid >= min_uid]

    def _parse_line(self, line: str) -> Account | None:
        parts = line.split(":")
        if len(parts) < 3 or not parts[0]:
            logger.debug("Skipping malformed account record: %r", line[:100])
            return None

        try:
            uid = int(parts[2])
        except ValueError:
            logger.debug("Skipping account %s with non-numeric uid %r", parts[0], parts[2])
            return None

        return Account(name=parts[0], uid=uid)
