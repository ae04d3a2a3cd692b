"""
MirrorFS Exception Hierarchy

Architecture:
    FileSystemException
    ├── EntityNotFoundError
    ├── ParentNotFoundError
    ├── DuplicateNameError
    ├── EmptyNameError
    ├── InvalidNameError
    ├── RootProtectedError
    ├── NotAFolderError
    ├── NotAFileError
    ├── DestinationInvalidError
    ├── LineNumberOutOfRangeError
    ├── FolderInUseError
    └── StorageIOError
    StartupException
    ├── BootFailureError
    └── ConfigValidationError
"""

from .fs_exceptions import (
    FileSystemException,
    EntityNotFoundError,
    ParentNotFoundError,
    DuplicateNameError,
    EmptyNameError,
    InvalidNameError,
    RootProtectedError,
    NotAFolderError,
    NotAFileError,
    DestinationInvalidError,
    LineNumberOutOfRangeError,
    FolderInUseError,
)

from .storage_exceptions import StorageIOError

from .startup_exceptions import (
    StartupException,
    BootFailureError,
    ConfigValidationError,
)

__all__ = [
    # Filesystem exceptions
    "FileSystemException",
    "EntityNotFoundError",
    "ParentNotFoundError",
    "DuplicateNameError",
    "EmptyNameError",
    "InvalidNameError",
    "RootProtectedError",
    "NotAFolderError",
    "NotAFileError",
    "DestinationInvalidError",
    "LineNumberOutOfRangeError",
    "FolderInUseError",
    # Storage exceptions
    "StorageIOError",
    # Startup exceptions
    "StartupException",
    "BootFailureError",
    "ConfigValidationError",
]
