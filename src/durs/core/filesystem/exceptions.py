"""Error types raised by filesystem traversal."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, override

type Operation = Literal["stat", "scandir"]


class TraversalError(OSError):
    """I/O failure raised when a path cannot be inspected or enumerated.

    Carries the failing path, the operation that failed and the underlying
    ``OSError``. ``errno``, ``strerror`` and ``filename`` mirror the cause so
    callers handling plain ``OSError`` keep working.
    """

    def __init__(self, path: str | os.PathLike[str], operation: Operation, cause: OSError) -> None:
        """Initialize the traversal error.

        Args:
            path: Path whose inspection failed
            operation: Filesystem operation that failed
            cause: Underlying error reported by the operating system
        """
        super().__init__(cause.errno, cause.strerror or str(cause), os.fspath(path))
        self.path: Path = Path(path)
        self.operation: Operation = operation
        self.cause: OSError = cause

    @override
    def __str__(self) -> str:
        reason = self.cause.strerror or str(self.cause)
        return f"Cannot {self.operation} {self.path}: {reason}"

    @override
    def __reduce__(self) -> tuple[type[TraversalError], tuple[Path, Operation, OSError]]:
        return (type(self), (self.path, self.operation, self.cause))
