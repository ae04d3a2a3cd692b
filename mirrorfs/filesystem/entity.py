"""
Entity Module

The common base of files and folders, and the table that owns them.

Entities never reference each other directly: every entity lives in an
EntityTable under an integer id, and parent/child links are stored as ids.
The table also carries the PhysicalStorage every entity writes through.

Version: 1.0.0
"""

import time
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Optional, Iterator, TYPE_CHECKING

from mirrorfs.exceptions import DuplicateNameError, InvalidNameError

if TYPE_CHECKING:
    from .folder import Folder
    from .storage import PhysicalStorage


RESERVED_NAMES = ('.', '..')


class EntityType(Enum):
    """Closed set of entity kinds; the value is the listing tag."""
    FILE = 'FIL'
    FOLDER = 'DIR'


def validate_name(name: str) -> str:
    """
    Check that ``name`` can be used as a single path component.

    Raises:
        InvalidNameError: If the name is blank, reserved or contains a separator
    """
    if name is None or not name.strip():
        raise InvalidNameError(name or '')
    if name in RESERVED_NAMES or '/' in name or '\\' in name:
        raise InvalidNameError(name)
    return name


class Entity(ABC):
    """
    A node of the in-memory tree.

    Attributes:
        created: Creation time (POSIX timestamp)
        modified: Last modification time
        accessed: Last access time

    All three only ever move forward; see :meth:`_bump`.
    """

    entity_type: EntityType

    def __init__(self, table: 'EntityTable', name: str, parent: Optional['Folder'] = None):
        self._table = table
        self._name = name
        self._parent_id: Optional[int] = parent.id if parent is not None else None

        now = time.time()
        self.created = now
        self.modified = now
        self.accessed = now

        self._id = table.register(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id}, path={self.tree_path!r})"

    @property
    def id(self) -> int:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def table(self) -> 'EntityTable':
        return self._table

    @property
    def storage(self) -> 'PhysicalStorage':
        return self._table.storage

    @property
    def parent_id(self) -> Optional[int]:
        return self._parent_id

    @property
    def parent(self) -> Optional['Folder']:
        if self._parent_id is None:
            return None
        return self._table.get(self._parent_id)

    @property
    def is_root(self) -> bool:
        return self._parent_id is None

    @property
    def is_file(self) -> bool:
        return self.entity_type is EntityType.FILE

    @property
    def is_folder(self) -> bool:
        return self.entity_type is EntityType.FOLDER

    @property
    def tag(self) -> str:
        """'DIR' or 'FIL'."""
        return self.entity_type.value

    def _bump(self, attribute: str) -> None:
        """Move a timestamp to now, never backwards."""
        setattr(self, attribute, max(getattr(self, attribute), time.time()))

    def touch_accessed(self) -> None:
        self._bump('accessed')

    def touch_modified(self) -> None:
        self._bump('modified')

    def full_path(self) -> Path:
        """
        Location of this entity on disk.

        Recomputed on every call by walking parent links, so renames and
        moves are always reflected. The root lives directly below the
        storage base directory.
        """
        parent = self.parent
        if parent is None:
            return self.storage.base_path / self._name
        return parent.full_path() / self._name

    @property
    def tree_path(self) -> str:
        """Location of this entity in the tree, ``/`` for the root."""
        parent = self.parent
        if parent is None:
            return '/'
        return parent.tree_path.rstrip('/') + '/' + self._name

    def rename(self, new_name: str) -> None:
        """
        Change the in-memory name.

        The disk object is not touched; relocating it is up to the caller.

        Raises:
            InvalidNameError: If ``new_name`` is blank or not a valid component
            DuplicateNameError: If a sibling already uses ``new_name``
        """
        validate_name(new_name)

        parent = self.parent
        if parent is not None:
            existing = parent.get_child(new_name)
            if existing is not None and existing is not self:
                raise DuplicateNameError(new_name, folder=parent.tree_path)

        self._name = new_name
        self.touch_modified()

    @property
    @abstractmethod
    def size(self) -> int:
        """Size in bytes."""

    def copy_times_from(self, created: float, modified: float, accessed: float) -> None:
        """Adopt timestamps read from disk."""
        self.created = created
        self.modified = modified
        self.accessed = accessed


class EntityTable:
    """
    Arena owning every entity of one tree.

    Example:
        >>> table = EntityTable(storage)
        >>> root = Folder(table, 'root')
        >>> table.get(root.id) is root
        True
    """

    def __init__(self, storage: 'PhysicalStorage'):
        self._storage = storage
        self._entities: dict[int, Entity] = {}
        self._next_id = 1

    @property
    def storage(self) -> 'PhysicalStorage':
        return self._storage

    def register(self, entity: Entity) -> int:
        eid = self._next_id
        self._next_id += 1
        self._entities[eid] = entity
        return eid

    def get(self, eid: Optional[int]) -> Optional[Entity]:
        if eid is None:
            return None
        return self._entities.get(eid)

    def __getitem__(self, eid: int) -> Entity:
        return self._entities[eid]

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Entity):
            return self._entities.get(item.id) is item
        return item in self._entities

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entities.values()))

    def discard(self, entity: Entity) -> None:
        """Drop an entity and, for folders, everything below it."""
        if entity.entity_type is EntityType.FOLDER:
            for child in entity.children:
                self.discard(child)
        elif entity.entity_type is not EntityType.FILE:
            raise TypeError(f"Unknown entity type: {entity.entity_type!r}")
        self._entities.pop(entity.id, None)
