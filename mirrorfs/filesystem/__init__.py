"""
MirrorFS File Tree Module

Provides the in-memory file tree and its physical mirror:
- Id-keyed entity table with files and folders
- Path resolution against the tree
- Write-through physical storage
- Tree-wide operations (create, delete, rename, move, copy, search)
"""

from .storage import PhysicalStorage, StorageStat
from .entity import Entity, EntityType, EntityTable, validate_name
from .file import File
from .folder import Folder, ListingEntry
from .path_resolver import PathResolver, ParsedPath
from .tree_manager import TreeManager, SearchHit, CopyResult, SkippedEntry

__all__ = [
    # Storage
    'PhysicalStorage',
    'StorageStat',
    # Entities
    'Entity',
    'EntityType',
    'EntityTable',
    'validate_name',
    'File',
    'Folder',
    'ListingEntry',
    # Path Resolver
    'PathResolver',
    'ParsedPath',
    # Tree Manager
    'TreeManager',
    'SearchHit',
    'CopyResult',
    'SkippedEntry',
]
