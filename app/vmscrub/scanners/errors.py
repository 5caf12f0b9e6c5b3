"""Exceptions raised by read-only system queries."""


class QueryError(RuntimeError):
    """Raised when a system query fails.

    Attributes:
        returncode: Exit code of the failed query (1 for I/O errors).
        stderr: Diagnostic text of the failed query.
    """

    def __init__(self, message: str, returncode: int = 1, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
