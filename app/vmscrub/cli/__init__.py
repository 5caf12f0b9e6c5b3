"""CLI package for vmscrub.

This package contains the Typer application and its display helpers.
"""

from vmscrub.cli.main import app

__all__ = ["app"]
