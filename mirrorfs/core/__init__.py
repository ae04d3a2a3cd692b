"""
MirrorFS Core Module

Provides startup and configuration:
- JSON configuration with dataclass sections
- Staged boot sequence
"""

from .config_loader import (
    Config,
    ConfigLoader,
    StorageConfig,
    HistoryConfig,
    LoggingConfig,
    ShellConfig,
    EditorConfig,
    get_config,
)
from .bootloader import Bootloader, BootStage, BootResult, boot_system

__all__ = [
    # Configuration
    'Config',
    'ConfigLoader',
    'StorageConfig',
    'HistoryConfig',
    'LoggingConfig',
    'ShellConfig',
    'EditorConfig',
    'get_config',
    # Boot
    'Bootloader',
    'BootStage',
    'BootResult',
    'boot_system',
]
