"""
Storage Exceptions

Failures of the physical storage side-channel. Every OSError raised by the
real filesystem is wrapped in a StorageIOError before it leaves the storage
layer.

Version: 1.0.0
"""

from typing import Optional, Any

from .fs_exceptions import FileSystemException


class StorageIOError(FileSystemException):
    """
    An operation on the physical directory tree failed.

    Attributes:
        operation: Storage operation that failed (e.g. "move_dir")
        cause: The underlying OSError, if any

    Example:
        >>> raise StorageIOError("write_file", "/tmp/x", cause=PermissionError())
    """

    def __init__(
        self,
        operation: str,
        path: str,
        cause: Optional[BaseException] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["operation"] = operation
        reason = ""
        if cause is not None:
            reason = f": {getattr(cause, 'strerror', None) or cause}"
        super().__init__(
            message=f"Storage {operation} failed for {path}{reason}",
            path=path,
            error_code=4100,
            context=ctx
        )
        self.operation = operation
        self.cause = cause
