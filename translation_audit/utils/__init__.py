"""Utility modules."""

from .colors import Colors
from .config import Config, ConfigValidationError, create_default_config
from .backup import create_backup
from .logging import configure_logging, get_logger
from .progress import progress_bar

__all__ = [
    'Colors',
    'Config',
    'ConfigValidationError',
    'create_default_config',
    'create_backup',
    'configure_logging',
    'get_logger',
    'progress_bar',
]
