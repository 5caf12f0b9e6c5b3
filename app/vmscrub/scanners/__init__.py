"""Read-only system scanners.

This module provides the queries the cleanup stages use to decide what
to remove: APT installation marks and the account database.
"""

from vmscrub.scanners.accounts import Account, AccountScanner
from vmscrub.scanners.apt import AptScanner
from vmscrub.scanners.errors import QueryError

__all__ = ["Account", "AccountScanner", "AptScanner", "QueryError"]
