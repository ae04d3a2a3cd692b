"""
MirrorFS - A file storage shell mirrored onto a real directory

This package keeps an in-memory tree of folders and files in step with a
physical directory, and provides an interactive shell to work with it.
"""

__version__ = "1.0.0"

# Import main components for convenience
from .core.bootloader import Bootloader, boot_system
from .filesystem.tree_manager import TreeManager
from .filesystem.storage import PhysicalStorage
from .monitoring.history import HistoryLogger
from .shell.shell import Shell, create_shell

__all__ = [
    'Bootloader',
    'boot_system',
    'TreeManager',
    'PhysicalStorage',
    'HistoryLogger',
    'Shell',
    'create_shell',
]
