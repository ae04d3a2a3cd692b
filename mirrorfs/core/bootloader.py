"""
MirrorFS Bootloader

The bootloader is responsible for:
- Loading configuration
- Initializing logging
- Preparing the physical storage directory
- Building the file tree and loading what is already on disk
- Handling startup failures

Version: 1.0.0
"""

from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Optional
import sys
import time

from mirrorfs.logger import Logger, get_logger, LogLevel, LEVEL_NAMES
from mirrorfs.exceptions import BootFailureError
from mirrorfs.core.config_loader import ConfigLoader, get_config
from mirrorfs.filesystem.storage import PhysicalStorage
from mirrorfs.filesystem.tree_manager import TreeManager
from mirrorfs.monitoring.history import HistoryLogger


class BootStage(Enum):
    """Boot process stages."""
    PRE_INIT = auto()
    CONFIG_LOAD = auto()
    LOGGING_INIT = auto()
    STORAGE_INIT = auto()
    TREE_LOAD = auto()
    COMPLETE = auto()
    FAILED = auto()


@dataclass
class BootResult:
    """Result of the boot process."""
    success: bool
    stage: BootStage
    message: str
    elapsed_time: float
    error: Optional[Exception] = None
    failed_stage: Optional[BootStage] = None


class Bootloader:
    """
    The storage system bootloader.

    Boot Sequence:
        1. Pre-initialization checks
        2. Load configuration (defaults when the file is absent)
        3. Initialize logging
        4. Prepare the storage base directory
        5. Build the tree and mirror the disk into it
        6. Complete

    Example:
        >>> bootloader = Bootloader(base_dir='/tmp/storage')
        >>> result = bootloader.boot()
        >>> if result.success:
        ...     tree = bootloader.get_tree()
    """

    def __init__(self, config_path: Optional[str] = "config.json", base_dir: Optional[str] = None):
        self._config_path = config_path
        self._base_dir = base_dir
        self._stage = BootStage.PRE_INIT
        self._logger: Optional[Logger] = None
        self._start_time: float = 0
        self._storage: Optional[PhysicalStorage] = None
        self._history: Optional[HistoryLogger] = None
        self._tree: Optional[TreeManager] = None
        self._config_found = False

    @property
    def stage(self) -> BootStage:
        """Get the current boot stage."""
        return self._stage

    def boot(self) -> BootResult:
        """
        Execute the boot sequence.

        Returns:
            BootResult indicating success or failure
        """
        self._start_time = time.time()

        try:
            self._stage = BootStage.PRE_INIT
            self._pre_init()

            self._stage = BootStage.CONFIG_LOAD
            self._load_config()

            self._stage = BootStage.LOGGING_INIT
            self._init_logging()

            self._logger = get_logger('bootloader')
            self._logger.info(
                "MirrorFS starting",
                context={'config': self._config_path if self._config_found else 'defaults'}
            )

            self._stage = BootStage.STORAGE_INIT
            self._init_storage()

            self._stage = BootStage.TREE_LOAD
            loaded = self._load_tree()

            self._stage = BootStage.COMPLETE
            elapsed = time.time() - self._start_time

            self._logger.info(
                "Boot complete",
                context={'entities': loaded, 'elapsed_ms': f"{elapsed * 1000:.2f}"}
            )

            return BootResult(
                success=True,
                stage=self._stage,
                message="File system initialized",
                elapsed_time=elapsed
            )

        except Exception as e:
            failed_stage = self._stage
            self._stage = BootStage.FAILED
            elapsed = time.time() - self._start_time

            if self._logger:
                self._logger.critical(
                    f"Boot failed at stage {failed_stage.name}: {e}"
                )

            return BootResult(
                success=False,
                stage=self._stage,
                message=f"Boot failed: {e}",
                elapsed_time=elapsed,
                error=e,
                failed_stage=failed_stage
            )

    def _pre_init(self) -> None:
        """Pre-initialization checks."""
        if sys.version_info < (3, 9):
            raise BootFailureError("Python 3.9+ required", stage="pre_init")

    def _load_config(self) -> None:
        """Load configuration; a missing file means defaults."""
        loader = ConfigLoader()
        if self._config_path and Path(self._config_path).exists():
            loader.load(self._config_path)
            self._config_found = True

        if self._base_dir is not None:
            loader.set('storage.base_dir', self._base_dir)

    def _init_logging(self) -> None:
        """Initialize the logging system."""
        config = get_config()

        level = LEVEL_NAMES.get(config.logging.level.upper(), LogLevel.WARNING)

        Logger.initialize(
            level=level,
            log_file=config.logging.log_file,
            use_colors=config.logging.use_colors,
            console_output=config.logging.console_output
        )

    def _init_storage(self) -> None:
        """Create the storage base directory and the access history."""
        config = get_config()

        self._storage = PhysicalStorage(config.storage.base_dir, encoding=config.storage.encoding)
        self._storage.ensure_base()
        self._history = HistoryLogger(
            config.history.log_file,
            timestamp_format=config.history.timestamp_format
        )

        self._logger.debug(
            "Storage ready",
            context={'base_dir': str(self._storage.base_path)}
        )

    def _load_tree(self) -> int:
        """Build the tree and mirror the physical directory into it."""
        config = get_config()

        self._tree = TreeManager(
            self._storage,
            history=self._history,
            root_name=config.storage.root_name
        )
        return self._tree.load_physical_storage()

    def get_tree(self) -> Optional[TreeManager]:
        """Get the tree built by a successful boot."""
        return self._tree

    def get_history(self) -> Optional[HistoryLogger]:
        return self._history

    def shutdown(self) -> None:
        """Shutdown the system."""
        if self._logger:
            self._logger.info("File system shut down")


def boot_system(config_path: Optional[str] = "config.json", base_dir: Optional[str] = None) -> Bootloader:
    """
    Boot the storage system.

    Raises:
        BootFailureError: If any boot stage fails
    """
    bootloader = Bootloader(config_path, base_dir=base_dir)
    result = bootloader.boot()

    if not result.success:
        if isinstance(result.error, BootFailureError):
            raise result.error
        raise BootFailureError(result.message, stage=result.failed_stage.name.lower()) from result.error

    return bootloader
