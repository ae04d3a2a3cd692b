"""
File Module

A leaf entity whose content is written through to a physical file.

Version: 1.0.0
"""

import os
from typing import Optional, List, TYPE_CHECKING

from .entity import Entity, EntityType, EntityTable
from mirrorfs.exceptions import LineNumberOutOfRangeError

if TYPE_CHECKING:
    from .folder import Folder


LINE_TERMINATOR = os.linesep


class File(Entity):
    """
    A file in the tree.

    Content follows a write-through contract with no cache window:

    - reading ``content`` re-reads the disk file whenever it exists, so an
      outside edit always wins over the in-memory copy;
    - assigning ``content`` overwrites the disk file immediately.

    Constructing a File writes the initial content to disk when no file
    exists at its location yet.
    """

    entity_type = EntityType.FILE

    def __init__(
        self,
        table: EntityTable,
        name: str,
        parent: Optional['Folder'] = None,
        content: str = ""
    ):
        super().__init__(table, name, parent)
        self._content = content

        path = self.full_path()
        try:
            if not self.storage.exists(path):
                self.storage.write_text(path, content)
        except Exception:
            table.discard(self)
            raise

    @property
    def content(self) -> str:
        self.touch_accessed()
        path = self.full_path()
        if self.storage.is_file(path):
            self._content = self.storage.read_text(path)
        return self._content

    @content.setter
    def content(self, value: str) -> None:
        self._content = value
        self.touch_modified()
        self.storage.write_text(self.full_path(), value)

    @property
    def size(self) -> int:
        path = self.full_path()
        if self.storage.is_file(path):
            return self.storage.file_size(path)
        return len(self._content)

    def edit(self, new_content: str) -> None:
        """Replace the whole content."""
        self.content = new_content

    def append(self, text: str) -> None:
        self.content = self.content + text

    def prepend(self, text: str) -> None:
        self.content = text + self.content

    def lines(self) -> List[str]:
        return self.content.split(LINE_TERMINATOR)

    def insert_line(self, line_number: int, text: str) -> None:
        """
        Insert ``text`` as line ``line_number`` (1-based).

        ``line_count + 1`` appends after the last line.

        Raises:
            LineNumberOutOfRangeError: If the line number is outside
                ``1..line_count + 1``
        """
        lines = self.lines()
        if line_number < 1 or line_number > len(lines) + 1:
            raise LineNumberOutOfRangeError(line_number, maximum=len(lines) + 1)

        lines.insert(line_number - 1, text)
        self.content = LINE_TERMINATOR.join(lines)

    def delete_line(self, line_number: int) -> None:
        """
        Delete line ``line_number`` (1-based).

        Raises:
            LineNumberOutOfRangeError: If the line number is outside
                ``1..line_count``
        """
        lines = self.lines()
        if line_number < 1 or line_number > len(lines):
            raise LineNumberOutOfRangeError(line_number, maximum=len(lines))

        del lines[line_number - 1]
        self.content = LINE_TERMINATOR.join(lines)
