"""
Filesystem Exceptions

Exceptions raised by the entity tree, the path resolver and the tree manager.
Each one maps to a user-visible failure of a shell command.

Version: 1.0.0
"""

from typing import Optional, Any


class FileSystemException(Exception):
    """
    Base exception for all filesystem-related errors.

    Attributes:
        message: Human-readable error description
        path: Path associated with the error (if applicable)
        error_code: Numeric error code for programmatic handling
        context: Additional details about the failure
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.error_code = error_code or 4000
        self.context = context or {}
        if path:
            self.context["path"] = path

    def __str__(self) -> str:
        return f"[Error {self.error_code}] {self.message}"


class EntityNotFoundError(FileSystemException):
    """
    No file or folder exists at the given path.

    Example:
        >>> raise EntityNotFoundError("/docs/missing.txt")
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"File or folder not found: {path}",
            path=path,
            error_code=4001,
            context=context
        )


class ParentNotFoundError(FileSystemException):
    """
    The directory part of a path does not resolve to a folder.

    Example:
        >>> raise ParentNotFoundError("/nowhere/file.txt")
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Parent directory not found: {path}",
            path=path,
            error_code=4002,
            context=context
        )


class DuplicateNameError(FileSystemException):
    """
    A sibling with the same name (case-insensitive) already exists.

    Example:
        >>> raise DuplicateNameError("notes.txt", folder="/docs")
    """

    def __init__(
        self,
        name: str,
        folder: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if folder:
            ctx["folder"] = folder
        where = f" in '{folder}'" if folder else ""
        super().__init__(
            message=f"An entity named '{name}' already exists{where}",
            error_code=4003,
            context=ctx
        )
        self.name = name
        self.folder = folder


class EmptyNameError(FileSystemException):
    """The path has no final component to use as a name."""

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Name cannot be empty: '{path}'",
            path=path,
            error_code=4004,
            context=context
        )


class InvalidNameError(FileSystemException):
    """A rename target is empty or whitespace."""

    def __init__(
        self,
        name: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Invalid name: '{name}'",
            error_code=4005,
            context=context
        )
        self.name = name


class RootProtectedError(FileSystemException):
    """
    The root folder cannot be deleted, renamed or moved.

    Example:
        >>> raise RootProtectedError(operation="delete")
    """

    def __init__(
        self,
        operation: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["operation"] = operation
        super().__init__(
            message=f"Cannot {operation} the root folder",
            path="/",
            error_code=4006,
            context=ctx
        )
        self.operation = operation


class NotAFolderError(FileSystemException):
    """A folder operation was attempted on a file."""

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"'{path}' is a file, not a folder",
            path=path,
            error_code=4007,
            context=context
        )


class NotAFileError(FileSystemException):
    """A file operation was attempted on a folder."""

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"'{path}' is a folder, not a file",
            path=path,
            error_code=4008,
            context=context
        )


class DestinationInvalidError(FileSystemException):
    """
    A move or copy destination is missing, a file, or inside the source.

    Example:
        >>> raise DestinationInvalidError("/a/b", reason="inside source")
    """

    def __init__(
        self,
        path: str,
        reason: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if reason:
            ctx["reason"] = reason
        detail = reason or "folder not found or is a file"
        super().__init__(
            message=f"Invalid destination '{path}': {detail}",
            path=path,
            error_code=4009,
            context=ctx
        )
        self.reason = reason


class LineNumberOutOfRangeError(FileSystemException):
    """
    A line number passed to a line edit is outside the file.

    Example:
        >>> raise LineNumberOutOfRangeError(7, minimum=1, maximum=4)
    """

    def __init__(
        self,
        line_number: int,
        minimum: int = 1,
        maximum: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["line_number"] = line_number
        if maximum is not None:
            ctx["valid_range"] = f"{minimum}..{maximum}"
        super().__init__(
            message=f"Line number out of range: {line_number}",
            error_code=4010,
            context=ctx
        )
        self.line_number = line_number
        self.minimum = minimum
        self.maximum = maximum


class FolderInUseError(FileSystemException):
    """
    A folder cannot be deleted because the current folder is inside it.

    Example:
        >>> raise FolderInUseError("/projects")
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Cannot delete '{path}': the current folder is inside it",
            path=path,
            error_code=4011,
            context=context
        )
