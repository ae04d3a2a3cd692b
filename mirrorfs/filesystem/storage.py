"""
Physical Storage Module

The side-channel between the in-memory tree and the real directory it
mirrors. Every operation works on absolute ``Path`` objects below a base
directory and converts OSError into StorageIOError.

Version: 1.0.0
"""

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Union

from mirrorfs.exceptions import StorageIOError
from mirrorfs.logger import get_logger


PathLike = Union[str, Path]


@dataclass(frozen=True)
class StorageStat:
    """Metadata of one object on disk."""
    created: float
    modified: float
    accessed: float
    size: int
    is_dir: bool


class PhysicalStorage:
    """
    Physical directory tree rooted at a base storage directory.

    Example:
        >>> storage = PhysicalStorage('FileStorage')
        >>> storage.write_file(storage.base_path / 'root' / 'a.txt', b'hi')
        >>> storage.read_file(storage.base_path / 'root' / 'a.txt')
        b'hi'
    """

    def __init__(self, base_dir: PathLike, encoding: str = 'utf-8'):
        self._base_path = Path(base_dir).expanduser().resolve()
        self._encoding = encoding
        self._logger = get_logger('storage')

    @property
    def base_path(self) -> Path:
        return self._base_path

    @property
    def encoding(self) -> str:
        return self._encoding

    def _fail(self, operation: str, path: PathLike, cause: OSError) -> StorageIOError:
        self._logger.warning(
            f"Storage {operation} failed",
            context={'path': str(path), 'error': cause}
        )
        return StorageIOError(operation, str(path), cause=cause)

    def _check_target(self, operation: str, old: PathLike, new: PathLike) -> None:
        # A case-only rename points at the same object on case-insensitive disks
        if self.exists(new) and not os.path.samefile(old, new):
            raise StorageIOError(operation, str(new), cause=FileExistsError(f"{new} exists"))

    def ensure_base(self) -> None:
        """Create the base directory if it does not exist yet."""
        self.create_dir(self._base_path)

    # Queries

    def exists(self, path: PathLike) -> bool:
        return os.path.lexists(path)

    def is_dir(self, path: PathLike) -> bool:
        return os.path.isdir(path)

    def is_file(self, path: PathLike) -> bool:
        return os.path.isfile(path)

    def stat(self, path: PathLike) -> StorageStat:
        """
        Read timestamps and size of a disk object.

        ``created`` is the birth time where the platform records one and
        the inode change time otherwise.
        """
        try:
            st = os.stat(path)
        except OSError as e:
            raise self._fail('stat', path, e)
        created = getattr(st, 'st_birthtime', None) or st.st_ctime
        return StorageStat(
            created=created,
            modified=st.st_mtime,
            accessed=st.st_atime,
            size=st.st_size,
            is_dir=os.path.isdir(path),
        )

    def file_size(self, path: PathLike) -> int:
        return self.stat(path).size

    def list_dir(self, path: PathLike) -> Tuple[List[str], List[str]]:
        """
        List a directory.

        Returns:
            Tuple of (directory names, file names), each sorted by name
        """
        dirs: List[str] = []
        files: List[str] = []
        try:
            with os.scandir(path) as entries:
                for entry in entries:
                    if entry.is_dir(follow_symlinks=False):
                        dirs.append(entry.name)
                    elif entry.is_file(follow_symlinks=False):
                        files.append(entry.name)
        except OSError as e:
            raise self._fail('list_dir', path, e)
        return sorted(dirs), sorted(files)

    # Directories

    def create_dir(self, path: PathLike) -> None:
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            raise self._fail('create_dir', path, e)

    def delete_dir(self, path: PathLike, recursive: bool = True) -> None:
        try:
            if recursive:
                shutil.rmtree(path)
            else:
                os.rmdir(path)
        except OSError as e:
            raise self._fail('delete_dir', path, e)

    def move_dir(self, old: PathLike, new: PathLike) -> None:
        self._check_target('move_dir', old, new)
        try:
            shutil.move(os.fspath(old), os.fspath(new))
        except OSError as e:
            raise self._fail('move_dir', old, e)

    # Files

    def read_file(self, path: PathLike) -> bytes:
        try:
            with open(path, 'rb') as f:
                return f.read()
        except OSError as e:
            raise self._fail('read_file', path, e)

    def write_file(self, path: PathLike, data: bytes) -> None:
        """Write ``data`` to ``path``, replacing any previous content."""
        try:
            with open(path, 'wb') as f:
                f.write(data)
        except OSError as e:
            raise self._fail('write_file', path, e)

    def read_text(self, path: PathLike) -> str:
        return self.read_file(path).decode(self._encoding, errors='replace')

    def write_text(self, path: PathLike, text: str) -> None:
        self.write_file(path, text.encode(self._encoding))

    def delete_file(self, path: PathLike) -> None:
        try:
            os.remove(path)
        except OSError as e:
            raise self._fail('delete_file', path, e)

    def copy_file(self, old: PathLike, new: PathLike) -> None:
        """Copy a file with its metadata; the target must not exist."""
        if self.exists(new):
            raise StorageIOError('copy_file', str(new), cause=FileExistsError(f"{new} exists"))
        try:
            shutil.copy2(old, new)
        except OSError as e:
            raise self._fail('copy_file', old, e)

    def move_file(self, old: PathLike, new: PathLike) -> None:
        self._check_target('move_file', old, new)
        try:
            shutil.move(os.fspath(old), os.fspath(new))
        except OSError as e:
            raise self._fail('move_file', old, e)
