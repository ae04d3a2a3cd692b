"""
MirrorFS Logger Module

Logging for the storage shell:
- Subsystem-specific loggers ('tree', 'storage', 'shell', ...)
- Structured context attached to every record
- Console output on stderr so it never mixes with command output
- Optional file output
- A decorator tracing tree operations

Version: 1.0.0
"""

import logging
import sys
import threading
from datetime import datetime
from enum import IntEnum
from functools import wraps
from pathlib import Path
from typing import Optional, Any

from mirrorfs.exceptions import FileSystemException


class LogLevel(IntEnum):
    """Log level enumeration with numeric values for comparison."""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


LEVEL_NAMES: dict[str, LogLevel] = {level.name: level for level in LogLevel}


class LogFormatter(logging.Formatter):
    """
    Log formatter for MirrorFS.

    Produces lines of the form::

        [2024-01-01 12:00:00.123] WARNING  [tree] Rename failed {path=/a}
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True, stream: Any = None):
        super().__init__()
        self.use_colors = use_colors and self._supports_color(stream or sys.stderr)

    @staticmethod
    def _supports_color(stream: Any) -> bool:
        """Check if the stream is a terminal."""
        isatty = getattr(stream, 'isatty', None)
        if isatty is None:
            return False
        return bool(isatty())

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime(
            '%Y-%m-%d %H:%M:%S.%f'
        )[:-3]

        level = record.levelname
        if self.use_colors and level in self.COLORS:
            level_display = f"{self.COLORS[level]}{level:8s}{self.RESET}"
        else:
            level_display = f"{level:8s}"

        components = [f"[{timestamp}]", level_display]

        if hasattr(record, 'subsystem'):
            components.append(f"[{record.subsystem}]")

        components.append(str(record.getMessage()))

        if getattr(record, 'context', None):
            context_str = " ".join(f"{k}={v}" for k, v in record.context.items())
            components.append(f"{{{context_str}}}")

        message = " ".join(components)

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return message


class Logger:
    """
    Per-subsystem logger.

    One instance exists per subsystem name; all of them hang off the
    ``mirrorfs`` standard-library logger, so handlers installed by
    :meth:`initialize` apply everywhere.

    Example:
        >>> log = Logger('tree')
        >>> log.info("Loaded physical storage", context={'entities': 12})
    """

    _instances: dict[str, 'Logger'] = {}
    _lock = threading.Lock()
    _initialized = False
    _global_level: int = LogLevel.WARNING

    def __new__(cls, subsystem: str = 'mirrorfs') -> 'Logger':
        with cls._lock:
            if subsystem not in cls._instances:
                instance = super().__new__(cls)
                instance._subsystem = subsystem
                instance._logger = logging.getLogger(f'mirrorfs.{subsystem}')
                cls._instances[subsystem] = instance
            return cls._instances[subsystem]

    @property
    def subsystem(self) -> str:
        return self._subsystem

    @classmethod
    def initialize(
        cls,
        level: int = LogLevel.WARNING,
        log_file: Optional[str] = None,
        use_colors: bool = True,
        console_output: bool = True
    ) -> None:
        """
        Install handlers on the ``mirrorfs`` logger.

        Only the first call has an effect.

        Args:
            level: Minimum log level to emit
            log_file: Optional file path for log output
            use_colors: Whether to use ANSI colors on the console
            console_output: Whether to log to stderr at all
        """
        with cls._lock:
            if cls._initialized:
                return

            cls._global_level = level

            root_logger = logging.getLogger('mirrorfs')
            root_logger.setLevel(level)

            if console_output:
                console_handler = logging.StreamHandler(sys.stderr)
                console_handler.setLevel(level)
                console_handler.setFormatter(LogFormatter(use_colors=use_colors))
                root_logger.addHandler(console_handler)
            else:
                root_logger.addHandler(logging.NullHandler())

            if log_file:
                file_path = Path(log_file)
                file_path.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(file_path, encoding='utf-8')
                file_handler.setLevel(level)
                file_handler.setFormatter(LogFormatter(use_colors=False))
                root_logger.addHandler(file_handler)

            cls._initialized = True

    def _log(
        self,
        level: int,
        message: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        extra = {
            'subsystem': self._subsystem,
            'context': context or {},
        }
        self._logger.log(level, message, extra=extra)

    def debug(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self._log(LogLevel.DEBUG, message, context)

    def info(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self._log(LogLevel.INFO, message, context)

    def warning(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self._log(LogLevel.WARNING, message, context)

    def error(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self._log(LogLevel.ERROR, message, context)

    def critical(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self._log(LogLevel.CRITICAL, message, context)

    def exception(
        self,
        message: str,
        exc: Optional[BaseException] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        """Log an error together with its traceback."""
        self._logger.error(
            message,
            exc_info=exc if exc is not None else True,
            extra={
                'subsystem': self._subsystem,
                'context': context or {},
            }
        )


def log_operation(name: Optional[str] = None, logger: Optional[Logger] = None):
    """
    Decorator tracing a tree operation.

    Calls are logged at DEBUG. A FileSystemException raised by the call is an
    ordinary user error and is logged at INFO; anything else is logged at
    ERROR. Either way the exception is re-raised unchanged.

    Example:
        >>> @log_operation('mkdir')
        ... def create_folder(self, path): ...
    """
    def decorator(func):
        op_name = name or func.__name__

        @wraps(func)
        def wrapper(*args, **kwargs):
            log = logger or Logger('operations')
            log.debug(
                f"Calling {op_name}",
                context={'args': str(args[1:])[:100], 'kwargs': str(kwargs)[:100]}
            )
            try:
                result = func(*args, **kwargs)
            except FileSystemException as e:
                log.info(
                    f"{op_name} rejected",
                    context={'error': type(e).__name__, 'detail': e.message}
                )
                raise
            except Exception as e:
                log.error(
                    f"{op_name} failed",
                    context={'error': type(e).__name__, 'detail': str(e)}
                )
                raise
            log.debug(f"{op_name} completed")
            return result

        return wrapper
    return decorator


def get_logger(subsystem: str) -> Logger:
    """
    Get the logger for a subsystem.

    Args:
        subsystem: Name of the subsystem (e.g., 'tree', 'storage', 'shell')
    """
    return Logger(subsystem)
