"""
Access History Module

Plain-text, append-only record of file accesses. One line per access::

    2024-01-01 12:00:00 - Accessed: /srv/FileStorage/root/notes.txt

Version: 1.0.0
"""

from datetime import datetime
from pathlib import Path
from typing import Optional, List, Union

from mirrorfs.logger import get_logger


class HistoryLogger:
    """
    Access history backed by a flat log file.

    Failures to read or write the log are logged and otherwise ignored;
    the history never interrupts a shell command.

    Example:
        >>> history = HistoryLogger('file_access_history.log')
        >>> history.log_access('/data/root/a.txt')
        >>> history.get_history()[-1]
        '2024-01-01 12:00:00 - Accessed: /data/root/a.txt'
    """

    def __init__(
        self,
        log_file: Union[str, Path] = "file_access_history.log",
        timestamp_format: str = "%Y-%m-%d %H:%M:%S"
    ):
        self._log_path = Path(log_file)
        self._timestamp_format = timestamp_format
        self._logger = get_logger('history')

        try:
            self._log_path.parent.mkdir(parents=True, exist_ok=True)
            self._log_path.touch(exist_ok=True)
        except OSError as e:
            self._logger.error(
                "Cannot create history log",
                context={'path': str(self._log_path), 'error': e}
            )

    @property
    def log_path(self) -> Path:
        return self._log_path

    def format_entry(self, path: Union[str, Path], access_time: datetime) -> str:
        return f"{access_time.strftime(self._timestamp_format)} - Accessed: {path}"

    def log_access(
        self,
        path: Union[str, Path],
        access_time: Optional[datetime] = None
    ) -> None:
        """Append one access record."""
        entry = self.format_entry(path, access_time or datetime.now())
        try:
            with open(self._log_path, 'a', encoding='utf-8') as f:
                f.write(entry + '\n')
        except OSError as e:
            self._logger.error(
                "Cannot write history entry",
                context={'path': str(self._log_path), 'error': e}
            )

    def get_history(self) -> List[str]:
        """All records, oldest first."""
        try:
            with open(self._log_path, 'r', encoding='utf-8') as f:
                return f.read().splitlines()
        except OSError as e:
            self._logger.error(
                "Cannot read history log",
                context={'path': str(self._log_path), 'error': e}
            )
            return []
