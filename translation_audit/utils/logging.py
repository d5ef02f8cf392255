"""Logging for translation-audit: colored console, optional log file."""

import logging
import sys
from pathlib import Path
from typing import Optional

from .colors import Colors

LOGGER_NAME = 'translation_audit'
FILE_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


class ColoredFormatter(logging.Formatter):
    """Paints console records by level; INFO stays plain."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.OKCYAN,
        logging.WARNING: Colors.WARNING,
        logging.ERROR: Colors.FAIL,
        logging.CRITICAL: Colors.FAIL + Colors.BOLD,
    }

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True):
        super().__init__(fmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno) if self.use_colors else None
        return Colors.paint(color, text) if color else text


class WarningCounter(logging.Handler):
    """Counts WARNING records so a run can report how many keys were degraded."""

    def __init__(self):
        super().__init__(level=logging.WARNING)
        self.warnings = 0
        self.errors = 0

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno >= logging.ERROR:
            self.errors += 1
        else:
            self.warnings += 1


class Logger:
    """
    Process-wide logger.

    Console messages go to stderr so that printed summaries on stdout stay
    clean. Quiet mode wins over verbose mode.
    """

    _instance: Optional['Logger'] = None
    _initialized: bool = False

    def __new__(cls) -> 'Logger':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if Logger._initialized:
            return

        self._logger = logging.getLogger(LOGGER_NAME)
        self._logger.setLevel(logging.DEBUG)
        self._logger.handlers = []

        self._console = self._console_handler(logging.INFO, use_colors=True)
        self._counter = WarningCounter()
        self._file: Optional[logging.FileHandler] = None
        self._logger.addHandler(self._console)
        self._logger.addHandler(self._counter)

        Logger._initialized = True

    @staticmethod
    def _console_handler(level: int, use_colors: bool) -> logging.StreamHandler:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(ColoredFormatter('%(message)s', use_colors=use_colors))
        return handler

    @staticmethod
    def _file_handler(path: Path) -> logging.FileHandler:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding='utf-8')
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        return handler

    def configure(
        self,
        verbose: bool = False,
        quiet: bool = False,
        log_file: Optional[Path] = None,
        use_colors: bool = True
    ) -> None:
        """
        Replace the console handler and optionally attach a log file.

        Args:
            verbose: Show DEBUG messages on the console
            quiet: Only WARNING and above on the console
            log_file: Also write every record (DEBUG and up) to this file
            use_colors: ANSI colors on the console
        """
        level = logging.WARNING if quiet else logging.DEBUG if verbose else logging.INFO

        self._logger.removeHandler(self._console)
        self._console = self._console_handler(level, use_colors)
        self._logger.addHandler(self._console)

        if log_file:
            if self._file is not None:
                self._logger.removeHandler(self._file)
                self._file.close()
            self._file = self._file_handler(Path(log_file))
            self._logger.addHandler(self._file)

    @property
    def console_level(self) -> int:
        return self._console.level

    @property
    def warning_count(self) -> int:
        return self._counter.warnings

    @property
    def error_count(self) -> int:
        return self._counter.errors

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """The tool logger, or ``translation_audit.<name>``."""
        return logging.getLogger(f'{LOGGER_NAME}.{name}') if name else self._logger

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._logger.error(msg, *args, **kwargs)


_logger: Optional[Logger] = None


def get_logger() -> Logger:
    """Return the global logger instance."""
    global _logger
    if _logger is None:
        _logger = Logger()
    return _logger


def configure_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
    use_colors: bool = True
) -> None:
    get_logger().configure(verbose=verbose, quiet=quiet, log_file=log_file, use_colors=use_colors)


def reset_logger() -> None:
    """Drop the global logger and close its handlers (used by tests)."""
    global _logger
    if _logger is not None:
        tool_logger = _logger._logger
        for handler in list(tool_logger.handlers):
            tool_logger.removeHandler(handler)
            handler.close()
    _logger = None
    Logger._instance = None
    Logger._initialized = False
