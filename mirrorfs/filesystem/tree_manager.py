"""
Tree Manager Module

Orchestrates every operation on the in-memory tree and keeps the
physical directory in step with it.

Every mutating operation follows the same shape:

    resolve paths -> validate -> mutate the tree -> touch the disk -> report

Failures are raised as FileSystemException subclasses. Nothing is rolled
back: a storage failure halfway through a move or rename leaves the tree
already updated.

Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, List

from .entity import Entity, EntityType, EntityTable, validate_name
from .file import File
from .folder import Folder, ListingEntry
from .path_resolver import PathResolver
from .storage import PhysicalStorage
from mirrorfs.exceptions import (
    FileSystemException,
    EntityNotFoundError,
    ParentNotFoundError,
    DuplicateNameError,
    EmptyNameError,
    RootProtectedError,
    NotAFolderError,
    NotAFileError,
    DestinationInvalidError,
    FolderInUseError,
)
from mirrorfs.logger import get_logger, log_operation
from mirrorfs.monitoring.history import HistoryLogger


@dataclass
class SearchHit:
    """One search result."""
    entity: Entity
    path: str

    @property
    def tag(self) -> str:
        return self.entity.tag


@dataclass
class SkippedEntry:
    """A child left out of a recursive copy."""
    path: str
    reason: str


@dataclass
class CopyResult:
    """Outcome of a copy: the new top-level entity and what was skipped."""
    entity: Entity
    skipped: List[SkippedEntry] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.skipped


class TreeManager:
    """
    The file tree of one session.

    Owns the entity table, the root folder and the current folder. The
    current folder changes only through a successful :meth:`navigate`.

    Example:
        >>> storage = PhysicalStorage('FileStorage')
        >>> tree = TreeManager(storage)
        >>> tree.create_folder('docs')
        >>> tree.create_file('docs/notes.txt', 'hello')
        >>> [hit.path for hit in tree.search('hello')]
        ['/docs/notes.txt']
    """

    def __init__(
        self,
        storage: PhysicalStorage,
        history: Optional[HistoryLogger] = None,
        root_name: str = "root"
    ):
        self._storage = storage
        self._history = history
        self._logger = get_logger('tree')

        storage.ensure_base()
        self._table = EntityTable(storage)
        self._root = Folder(self._table, validate_name(root_name))
        self._current = self._root
        self._resolver = PathResolver(self._root)

        self._logger.info(
            "Tree initialized",
            context={'root': str(self._root.full_path())}
        )

    @property
    def root(self) -> Folder:
        return self._root

    @property
    def current_folder(self) -> Folder:
        return self._current

    @property
    def table(self) -> EntityTable:
        return self._table

    @property
    def storage(self) -> PhysicalStorage:
        return self._storage

    @property
    def history(self) -> Optional[HistoryLogger]:
        return self._history

    @property
    def resolver(self) -> PathResolver:
        return self._resolver

    # ---- resolution helpers ----

    def resolve(self, path: str) -> Optional[Entity]:
        """Resolve ``path`` against the current folder; None if missing."""
        return self._resolver.resolve(path, self._current)

    def get(self, path: str) -> Entity:
        """
        Resolve ``path`` or fail.

        Raises:
            EntityNotFoundError: If the path does not resolve
        """
        entity = self.resolve(path)
        if entity is None:
            raise EntityNotFoundError(path)
        return entity

    def _get_folder(self, path: str) -> Folder:
        entity = self.get(path)
        if entity.entity_type is not EntityType.FOLDER:
            raise NotAFolderError(path)
        return entity

    def _get_file(self, path: str) -> File:
        entity = self.get(path)
        if entity.entity_type is not EntityType.FILE:
            raise NotAFileError(path)
        return entity

    def _get_destination(self, path: str) -> Folder:
        entity = self.resolve(path)
        if entity is None or entity.entity_type is not EntityType.FOLDER:
            raise DestinationInvalidError(path)
        return entity

    def _prepare_create(self, path: str):
        parent = self._resolver.parent_folder_of(path, self._current)
        if parent is None:
            raise ParentNotFoundError(path)

        name = self._resolver.name_from_path(path)
        if not name.strip():
            raise EmptyNameError(path)
        validate_name(name)

        if parent.get_child(name) is not None:
            raise DuplicateNameError(name, folder=parent.tree_path)

        return parent, name

    @staticmethod
    def _is_within(folder: Folder, ancestor: Entity) -> bool:
        """True if ``folder`` is ``ancestor`` or one of its descendants."""
        node: Optional[Entity] = folder
        while node is not None:
            if node.id == ancestor.id:
                return True
            node = node.parent
        return False

    def _log_access(self, entity: Entity) -> None:
        if self._history is not None:
            self._history.log_access(entity.full_path())

    # ---- creation ----

    @log_operation('create_file')
    def create_file(self, path: str, content: str = "") -> File:
        """
        Create a file and write ``content`` to disk.

        A stale disk file already at that location is overwritten.

        Raises:
            ParentNotFoundError: If the containing folder does not resolve
            EmptyNameError: If the path ends without a name
            DuplicateNameError: If the folder already has that name
        """
        parent, name = self._prepare_create(path)

        preexisting = self._storage.is_file(parent.full_path() / name)
        file = File(self._table, name, parent, content)
        if preexisting:
            file.content = content
        parent.add_child(file)

        self._log_access(file)
        return file

    @log_operation('create_folder')
    def create_folder(self, path: str) -> Folder:
        """
        Create a folder and its directory.

        Raises:
            ParentNotFoundError: If the containing folder does not resolve
            EmptyNameError: If the path ends without a name
            DuplicateNameError: If the folder already has that name
        """
        parent, name = self._prepare_create(path)

        folder = Folder(self._table, name, parent)
        parent.add_child(folder)
        return folder

    # ---- mutation ----

    @log_operation('delete')
    def delete(self, path: str) -> None:
        """Delete a file, or a folder with everything in it."""
        entity = self.get(path)
        if entity.is_root:
            raise RootProtectedError('delete')

        if entity.entity_type is EntityType.FOLDER and self._is_within(self._current, entity):
            raise FolderInUseError(entity.tree_path)

        entity.parent.remove_child(entity)

    @log_operation('rename')
    def rename(self, path: str, new_name: str) -> Entity:
        """
        Rename an entity in place.

        The tree is renamed first; the disk object follows if it exists.
        """
        entity = self.get(path)
        if entity.is_root:
            raise RootProtectedError('rename')

        old_path = entity.full_path()
        entity.rename(new_name)
        new_path = entity.full_path()

        if old_path == new_path:
            return entity

        if entity.entity_type is EntityType.FOLDER:
            if self._storage.is_dir(old_path):
                self._storage.move_dir(old_path, new_path)
        elif entity.entity_type is EntityType.FILE:
            if self._storage.is_file(old_path):
                self._storage.move_file(old_path, new_path)
        else:
            raise TypeError(f"Unknown entity type: {entity.entity_type!r}")

        return entity

    @log_operation('move')
    def move(self, source_path: str, destination_path: str) -> Entity:
        """
        Move an entity into another folder.

        Raises:
            EntityNotFoundError: If the source does not resolve
            RootProtectedError: If the source is the root
            DestinationInvalidError: If the destination is not a folder, or
                is the source folder or inside it
            DuplicateNameError: If the destination has a child of that name
        """
        source = self.get(source_path)
        if source.is_root:
            raise RootProtectedError('move')

        destination = self._get_destination(destination_path)
        if source.entity_type is EntityType.FOLDER and self._is_within(destination, source):
            raise DestinationInvalidError(destination_path, reason="inside the source folder")
        if destination.get_child(source.name) is not None:
            raise DuplicateNameError(source.name, folder=destination.tree_path)

        old_path = source.full_path()
        new_path = destination.full_path() / source.name

        if source.entity_type is EntityType.FOLDER:
            if self._storage.is_dir(old_path):
                self._storage.move_dir(old_path, new_path)
        elif source.entity_type is EntityType.FILE:
            if self._storage.is_file(old_path):
                self._storage.move_file(old_path, new_path)
        else:
            raise TypeError(f"Unknown entity type: {source.entity_type!r}")

        source.parent.detach_child(source)
        destination.add_child(source)
        return source

    @log_operation('copy')
    def copy(self, source_path: str, destination_path: str) -> CopyResult:
        """
        Copy an entity into another folder.

        Folders are copied recursively. A child that cannot be copied is
        recorded in :attr:`CopyResult.skipped` and the copy goes on.

        Raises:
            EntityNotFoundError: If the source does not resolve
            DestinationInvalidError: If the destination is not a folder, or
                is the source folder or inside it
            DuplicateNameError: If the destination has a child of that name
        """
        source = self.get(source_path)
        destination = self._get_destination(destination_path)

        if source.entity_type is EntityType.FOLDER and self._is_within(destination, source):
            raise DestinationInvalidError(destination_path, reason="inside the source folder")
        if destination.get_child(source.name) is not None:
            raise DuplicateNameError(source.name, folder=destination.tree_path)

        skipped: List[SkippedEntry] = []
        copied = self._copy_entity(source, destination, skipped)
        return CopyResult(entity=copied, skipped=skipped)

    def _copy_entity(self, source: Entity, destination: Folder, skipped: List[SkippedEntry]) -> Entity:
        if source.entity_type is EntityType.FILE:
            return self._copy_file(source, destination)
        elif source.entity_type is EntityType.FOLDER:
            return self._copy_folder(source, destination, skipped)
        raise TypeError(f"Unknown entity type: {source.entity_type!r}")

    def _copy_file(self, source: File, destination: Folder) -> File:
        content = source.content
        source_path = source.full_path()

        if self._storage.is_file(source_path):
            self._storage.copy_file(source_path, destination.full_path() / source.name)

        # With no disk file to copy, the constructor writes the content
        copied = File(self._table, source.name, destination, content)
        destination.add_child(copied)
        return copied

    def _copy_folder(self, source: Folder, destination: Folder, skipped: List[SkippedEntry]) -> Folder:
        copied = Folder(self._table, source.name, destination)
        destination.add_child(copied)

        for child in source.children:
            try:
                self._copy_entity(child, copied, skipped)
            except FileSystemException as e:
                self._logger.warning(
                    "Copy skipped entry",
                    context={'path': child.tree_path, 'error': e.message}
                )
                skipped.append(SkippedEntry(path=child.tree_path, reason=e.message))

        return copied

    # ---- navigation and queries ----

    @log_operation('navigate')
    def navigate(self, path: str) -> Folder:
        """Make ``path`` the current folder."""
        folder = self._get_folder(path)
        self._current = folder
        return folder

    def working_directory(self) -> Folder:
        return self._current

    @log_operation('list')
    def list(self, path: str = ".", detailed: bool = False) -> List[ListingEntry]:
        """List a folder, sorted by name."""
        return self._get_folder(path).list_contents(detailed)

    @log_operation('search')
    def search(self, term: str) -> List[SearchHit]:
        """
        Find entities whose name, or file content, contains ``term``.

        Matching ignores case. Each entity appears once, results are
        ordered by tree path, and the root itself is never a hit.
        """
        needle = term.casefold()
        hits = {}

        def visit(folder: Folder) -> None:
            for child in folder.children:
                matched = needle in child.name.casefold()
                if child.entity_type is EntityType.FILE:
                    matched = matched or needle in child.content.casefold()
                elif child.entity_type is EntityType.FOLDER:
                    visit(child)
                else:
                    raise TypeError(f"Unknown entity type: {child.entity_type!r}")

                if matched:
                    hits.setdefault(child.id, child)

        visit(self._root)

        results = [SearchHit(entity=e, path=e.tree_path) for e in hits.values()]
        results.sort(key=lambda hit: hit.path)
        return results

    @log_operation('read_file')
    def read_file(self, path: str) -> File:
        """Look up a file for reading and record the access."""
        file = self._get_file(path)
        file.touch_accessed()
        self._log_access(file)
        return file

    @log_operation('edit_file')
    def edit_file(self, path: str, editor: Callable[[str], str]) -> File:
        """
        Run ``editor`` on a file's content and write back its result.

        ``editor`` takes the current content and returns the new content.
        """
        file = self._get_file(path)
        file.edit(editor(file.content))
        self._log_access(file)
        return file

    # ---- synchronization ----

    @log_operation('load_physical_storage')
    def load_physical_storage(self, folder: Optional[Folder] = None) -> int:
        """
        Mirror what is on disk under ``folder`` (default: the root).

        Names already in the tree are not reloaded, but folders among them
        are still searched for new entries. Subfolders are loaded before
        files. An entry that cannot be read is logged and skipped.

        Returns:
            Number of entities added
        """
        if folder is None:
            folder = self._root
        path = folder.full_path()

        if not self._storage.is_dir(path):
            self._storage.create_dir(path)

        directories, files = self._storage.list_dir(path)
        loaded = 0

        for name in directories:
            existing = folder.get_child(name)
            if existing is not None:
                if existing.entity_type is EntityType.FOLDER:
                    loaded += self.load_physical_storage(existing)
                continue
            try:
                st = self._storage.stat(path / name)
                subfolder = Folder(self._table, name, folder)
                subfolder.copy_times_from(st.created, st.modified, st.accessed)
                folder.add_child(subfolder)
            except FileSystemException as e:
                self._logger.warning(
                    "Skipping folder during load",
                    context={'path': str(path / name), 'error': e.message}
                )
                continue
            loaded += 1 + self.load_physical_storage(subfolder)

        for name in files:
            if folder.get_child(name) is not None:
                continue
            file_path = path / name
            try:
                content = self._storage.read_text(file_path)
                st = self._storage.stat(file_path)
                file = File(self._table, name, folder, content)
                file.copy_times_from(st.created, st.modified, st.accessed)
                folder.add_child(file)
            except FileSystemException as e:
                self._logger.warning(
                    "Skipping file during load",
                    context={'path': str(file_path), 'error': e.message}
                )
                continue
            loaded += 1

        self._logger.debug(
            "Loaded from disk",
            context={'folder': folder.tree_path, 'entities': loaded}
        )
        return loaded
