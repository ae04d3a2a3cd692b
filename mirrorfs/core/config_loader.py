"""
MirrorFS Configuration Loader

Configuration management for the storage shell:
- JSON configuration file loading
- Default value handling
- Runtime configuration updates
- Type-safe access to configuration values

Version: 1.0.0
"""

import json
import threading
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

from mirrorfs.exceptions import BootFailureError, ConfigValidationError


@dataclass
class StorageConfig:
    """Physical storage settings."""
    base_dir: str = "FileStorage"
    root_name: str = "root"
    encoding: str = "utf-8"


@dataclass
class HistoryConfig:
    """Access history settings."""
    log_file: str = "file_access_history.log"
    timestamp_format: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "WARNING"
    log_file: Optional[str] = None
    console_output: bool = True
    use_colors: bool = True


@dataclass
class ShellConfig:
    """Shell configuration settings."""
    banner: str = "MirrorFS File Storage System"
    prompt_suffix: str = "> "


@dataclass
class EditorConfig:
    """Line editor command words."""
    save_command: str = "_save_"
    quit_command: str = "_quit_"
    insert_command: str = "_insert_"
    delete_command: str = "_delete_"


@dataclass
class Config:
    """
    Main configuration container.

    Every section has defaults, so an empty or missing configuration
    file yields a working setup.
    """
    storage: StorageConfig = field(default_factory=StorageConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    shell: ShellConfig = field(default_factory=ShellConfig)
    editor: EditorConfig = field(default_factory=EditorConfig)


class ConfigLoader:
    """
    Configuration loader and manager.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('mirrorfs.json')
        >>> print(config.storage.base_dir)
        FileStorage
    """

    _instance: Optional['ConfigLoader'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'ConfigLoader':
        """Singleton pattern for configuration access."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._config = Config()
                cls._instance._loaded = False
            return cls._instance

    def load(self, config_path: str) -> Config:
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Config object with loaded settings

        Raises:
            BootFailureError: If the file cannot be loaded or parsed
        """
        path = Path(config_path)

        if not path.exists():
            raise BootFailureError(
                f"Configuration file not found: {config_path}",
                stage="config"
            )

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise BootFailureError(
                f"Invalid JSON in configuration file: {e}",
                stage="config"
            )
        except OSError as e:
            raise BootFailureError(
                f"Cannot read configuration file: {e}",
                stage="config"
            )

        if not isinstance(data, dict):
            raise BootFailureError(
                "Configuration root must be a JSON object",
                stage="config"
            )

        self._config = self._parse_config(data)
        self._loaded = True
        return self._config

    def _parse_config(self, data: dict[str, Any]) -> Config:
        """Parse configuration data into a Config object."""
        config = Config()

        # Each section only overrides the keys it names
        for section in fields(Config):
            section_data = data.get(section.name)
            if section_data is None:
                continue
            if not isinstance(section_data, dict):
                raise ConfigValidationError(
                    f"Section '{section.name}' must be an object",
                    key=section.name
                )
            current = getattr(config, section.name)
            known = {f.name for f in fields(current)}
            values = {
                name: section_data.get(name, getattr(current, name))
                for name in known
            }
            setattr(config, section.name, type(current)(**values))

        return config

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        return self._config

    @property
    def loaded(self) -> bool:
        return self._loaded

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'storage.base_dir')
            default: Default value if key not found
        """
        obj: Any = self._config

        for part in key.split('.'):
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                return default

        return obj

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value at runtime.

        Changes are not persisted to disk.

        Raises:
            ConfigValidationError: If the key does not name a setting
        """
        parts = key.split('.')
        obj: Any = self._config

        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        final_key = parts[-1]
        if not hasattr(obj, '__dataclass_fields__') or final_key not in obj.__dataclass_fields__:
            raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)
        setattr(obj, final_key, value)

    def reset(self) -> None:
        """Drop any loaded settings and return to defaults."""
        self._config = Config()
        self._loaded = False

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        def dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, '__dataclass_fields__'):
                return {
                    k: dataclass_to_dict(v)
                    for k, v in obj.__dict__.items()
                }
            elif isinstance(obj, list):
                return [dataclass_to_dict(item) for item in obj]
            elif isinstance(obj, dict):
                return {k: dataclass_to_dict(v) for k, v in obj.items()}
            else:
                return obj

        return dataclass_to_dict(self._config)


def get_config() -> Config:
    """Get the global configuration instance."""
    return ConfigLoader().config
