"""
Folder Module

A container entity that owns its children and its physical directory.

Version: 1.0.0
"""

from dataclasses import dataclass
from typing import Optional, List

from .entity import Entity, EntityType, EntityTable
from mirrorfs.exceptions import DuplicateNameError, EntityNotFoundError


@dataclass
class ListingEntry:
    """One row of a folder listing."""
    name: str
    entity_type: EntityType
    size: Optional[int] = None
    created: Optional[float] = None
    modified: Optional[float] = None
    accessed: Optional[float] = None

    @property
    def tag(self) -> str:
        return self.entity_type.value

    @property
    def display_name(self) -> str:
        if self.entity_type is EntityType.FOLDER:
            return self.name + '/'
        return self.name


class Folder(Entity):
    """
    A folder in the tree.

    Children are kept in insertion order as ids into the owning
    EntityTable; names are unique among them, ignoring case.

    Constructing a Folder guarantees its directory exists on disk. When
    the directory had to be created, the folder's timestamps are taken
    from it.
    """

    entity_type = EntityType.FOLDER

    def __init__(self, table: EntityTable, name: str, parent: Optional['Folder'] = None):
        super().__init__(table, name, parent)
        self._child_ids: List[int] = []

        path = self.full_path()
        try:
            if not self.storage.is_dir(path):
                self.storage.create_dir(path)
                st = self.storage.stat(path)
                self.copy_times_from(st.created, st.modified, st.accessed)
        except Exception:
            table.discard(self)
            raise

    @property
    def children(self) -> List[Entity]:
        return [self.table[eid] for eid in self._child_ids]

    def get_child(self, name: str) -> Optional[Entity]:
        """Find a direct child by name, ignoring case."""
        wanted = name.casefold()
        for child in self.children:
            if child.name.casefold() == wanted:
                return child
        return None

    def add_child(self, entity: Entity) -> None:
        """
        Attach ``entity`` to this folder. In-memory only.

        Raises:
            DuplicateNameError: If a child with the same name exists
        """
        if self.get_child(entity.name) is not None:
            raise DuplicateNameError(entity.name, folder=self.tree_path)

        self._child_ids.append(entity.id)
        entity._parent_id = self.id
        self.touch_modified()

    def detach_child(self, entity: Entity) -> None:
        """
        Unlink ``entity`` from this folder without touching disk.

        Used when the entity is about to be attached elsewhere.

        Raises:
            EntityNotFoundError: If ``entity`` is not a direct child
        """
        if entity.id not in self._child_ids:
            raise EntityNotFoundError(entity.tree_path)

        self._child_ids.remove(entity.id)
        self.touch_modified()

    def remove_child(self, entity: Entity) -> None:
        """
        Remove ``entity`` from this folder and delete it from disk.

        Folders are deleted recursively. A disk object that is already
        gone is not an error. The tree is only changed once the disk
        delete has succeeded.

        Raises:
            EntityNotFoundError: If ``entity`` is not a direct child
            StorageIOError: If the disk object cannot be deleted
        """
        if entity.id not in self._child_ids:
            raise EntityNotFoundError(entity.tree_path)

        path = entity.full_path()

        if entity.entity_type is EntityType.FOLDER:
            if self.storage.is_dir(path):
                self.storage.delete_dir(path, recursive=True)
        elif entity.entity_type is EntityType.FILE:
            if self.storage.exists(path):
                self.storage.delete_file(path)
        else:
            raise TypeError(f"Unknown entity type: {entity.entity_type!r}")

        self._child_ids.remove(entity.id)
        self.table.discard(entity)
        self.touch_modified()

    @property
    def size(self) -> int:
        return sum(child.size for child in self.children)

    def list_contents(self, detailed: bool = False) -> List[ListingEntry]:
        """
        List children sorted by name.

        Sizes and timestamps are filled in only for a detailed listing,
        since folder sizes are computed recursively.
        """
        self.touch_accessed()

        entries = []
        for child in sorted(self.children, key=lambda e: (e.name.casefold(), e.name)):
            if detailed:
                entries.append(ListingEntry(
                    name=child.name,
                    entity_type=child.entity_type,
                    size=child.size,
                    created=child.created,
                    modified=child.modified,
                    accessed=child.accessed,
                ))
            else:
                entries.append(ListingEntry(name=child.name, entity_type=child.entity_type))
        return entries

    def walk(self):
        """Yield every descendant, depth-first, in insertion order."""
        for child in self.children:
            yield child
            if child.entity_type is EntityType.FOLDER:
                yield from child.walk()
