"""vmscrub - deep-clean a cloud VM down to a minimal Ubuntu install."""

__version__ = "0.1.0"
