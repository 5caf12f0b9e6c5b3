"""Allow running vmscrub as ``python -m vmscrub``."""

from vmscrub.cli.main import app

if __name__ == "__main__":
    app()
