"""Error type shared by the renderer, reader and queue adapter."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """What went wrong, independent of where."""

    VALIDATION = "validation"              # document rule violated at render time
    INVALID_ARGUMENT = "invalid_argument"  # bad arguments or configuration
    RUNTIME = "runtime"                    # a collaborator failed
    NOT_AVAILABLE = "not_available"        # operation not supported


class FeedWriterError(Exception):
    """Single exception raised by feedwriter.

    The failure mode is carried by ``kind``. When the error wraps a failure
    from a collaborator, the original exception is kept in ``cause``.
    """

    def __init__(self, kind: ErrorKind, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"

    def __repr__(self) -> str:
        return f"FeedWriterError(kind={self.kind.value!r}, message={self.message!r})"
