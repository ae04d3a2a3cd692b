"""
Path Resolver Module

Turns shell path strings into entities of the in-memory tree.

Version: 1.0.0
"""

from dataclasses import dataclass
from typing import Optional, List, Tuple

from .entity import Entity, EntityType
from .folder import Folder


ROOT_MARKER = '/'


@dataclass
class ParsedPath:
    """A parsed path with its components."""
    is_absolute: bool
    components: List[str]

    def __str__(self) -> str:
        if self.is_absolute:
            return '/' + '/'.join(self.components)
        return '/'.join(self.components) if self.components else '.'


class PathResolver:
    """
    Resolves paths against a tree.

    Handles:
    - Absolute paths (leading ``/``, starting at the root)
    - Relative paths (starting at the current folder)
    - ``.`` and ``..`` components

    ``..`` above the root does not clamp: it makes the path unresolvable.

    Example:
        >>> resolver = PathResolver(root)
        >>> resolver.resolve('/docs/../docs/notes.txt', current=root)
    """

    def __init__(self, root: Folder):
        self._root = root

    @property
    def root(self) -> Folder:
        return self._root

    @staticmethod
    def parse(path: str) -> ParsedPath:
        """
        Parse a path into components.

        Empty components and ``.`` are dropped; ``..`` is kept.
        """
        is_absolute = path.startswith(ROOT_MARKER)
        components = [c for c in path.split('/') if c and c != '.']
        return ParsedPath(is_absolute=is_absolute, components=components)

    @staticmethod
    def normalize(path: str) -> str:
        """
        Normalize a path string by folding ``.`` and ``..``.

        Purely textual: ``..`` above the top is dropped here, whereas
        :meth:`resolve` treats it as unresolvable.
        """
        parsed = PathResolver.parse(path)

        result: List[str] = []
        for component in parsed.components:
            if component == '..':
                if result:
                    result.pop()
            else:
                result.append(component)

        return str(ParsedPath(is_absolute=parsed.is_absolute, components=result))

    @staticmethod
    def join(*paths: str) -> str:
        """Join path strings; an absolute component restarts the result."""
        if not paths:
            return '.'

        result = paths[0]
        for path in paths[1:]:
            if path.startswith(ROOT_MARKER):
                result = path
            else:
                result = result.rstrip('/') + '/' + path

        return PathResolver.normalize(result)

    @staticmethod
    def is_absolute(path: str) -> bool:
        return path.startswith(ROOT_MARKER)

    @staticmethod
    def split(path: str) -> Tuple[str, str]:
        """
        Split a path into its directory part and final component.

        Unlike a normalizing split, nothing is resolved: ``'a/b/'`` gives
        ``('a/b', '')`` and ``'/x'`` gives ``('/', 'x')``.
        """
        if '/' not in path:
            return ('', path)
        head, tail = path.rsplit('/', 1)
        return (head or ROOT_MARKER, tail)

    @staticmethod
    def name_from_path(path: str) -> str:
        """The final component of ``path``; empty if it ends with ``/``."""
        return PathResolver.split(path)[1]

    def resolve(self, path: str, current: Folder) -> Optional[Entity]:
        """
        Resolve ``path`` to an entity.

        Args:
            path: Absolute or relative path
            current: Folder relative paths start from

        Returns:
            The entity, or None if any component cannot be followed
        """
        if path == ROOT_MARKER:
            return self._root

        parsed = self.parse(path)
        entity: Entity = self._root if parsed.is_absolute else current

        for component in parsed.components:
            if component == '..':
                parent = entity.parent
                if parent is None:
                    return None
                entity = parent
                continue

            if entity.entity_type is not EntityType.FOLDER:
                return None

            child = entity.get_child(component)
            if child is None:
                return None
            entity = child

        return entity

    def parent_folder_of(self, path: str, current: Folder) -> Optional[Folder]:
        """
        Resolve the folder that would contain ``path``.

        A path without a directory part lives in ``current``.

        Returns:
            The folder, or None if the directory part is missing or a file
        """
        directory, _ = self.split(path)
        if not directory:
            return current

        entity = self.resolve(directory, current)
        if entity is None or entity.entity_type is not EntityType.FOLDER:
            return None
        return entity
