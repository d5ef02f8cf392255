"""Backups of translation documents before ingest rewrites them."""

import shutil
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from .colors import Colors
from .logging import get_logger


def create_backup(
    source_dir: Path,
    backup_root: Path,
    backup_name: Optional[str] = None,
    files: Optional[Iterable[Path]] = None,
    prefix: Optional[str] = None,
) -> Path:
    """
    Copy a directory, or selected files inside it, aside.

    Args:
        source_dir: Directory the backup mirrors
        backup_root: Directory that holds all backups
        backup_name: Custom backup name (default: prefix + timestamp)
        files: Paths relative to ``source_dir`` to copy (default: the whole tree)
        prefix: Name prefix for the default backup name (default: directory name)

    Returns:
        Path to the backup directory
    """
    logger = get_logger()

    if backup_name is None:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S_%f')
        backup_name = f'{prefix or source_dir.name}_{timestamp}'

    backup_dir = backup_root / backup_name
    backup_dir.mkdir(parents=True, exist_ok=True)

    if files is not None:
        for relative in files:
            dest_path = backup_dir / relative
            dest_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source_dir / relative, dest_path)
    elif source_dir.exists():
        shutil.copytree(source_dir, backup_dir, dirs_exist_ok=True)

    logger.info(f"   {Colors.success('✓')} Backup created: {backup_dir}")
    return backup_dir
