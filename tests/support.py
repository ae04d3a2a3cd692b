"""
Shared fixtures for the MirrorFS test suite.

Version: 1.0.0
"""

import shutil
import tempfile
import unittest
from pathlib import Path

from mirrorfs.core.config_loader import ConfigLoader
from mirrorfs.filesystem.storage import PhysicalStorage
from mirrorfs.filesystem.tree_manager import TreeManager
from mirrorfs.monitoring.history import HistoryLogger


class TreeTestCase(unittest.TestCase):
    """
    Test case working in its own temporary storage directory.

    Provides ``self.storage``, ``self.history``, ``self.tree`` and
    ``self.disk`` (the physical path of the root folder).
    """

    def setUp(self):
        ConfigLoader().reset()
        self.tmp = Path(tempfile.mkdtemp(prefix='mirrorfs-test-'))
        self.storage = PhysicalStorage(self.tmp / 'FileStorage')
        self.history = HistoryLogger(self.tmp / 'history.log')
        self.tree = TreeManager(self.storage, history=self.history)
        self.disk = self.storage.base_path / 'root'

    def tearDown(self):
        shutil.rmtree(self.tmp, ignore_errors=True)
        ConfigLoader().reset()

    def new_tree(self) -> TreeManager:
        """A second session over the same storage directory."""
        tree = TreeManager(self.storage, history=self.history)
        tree.load_physical_storage()
        return tree
