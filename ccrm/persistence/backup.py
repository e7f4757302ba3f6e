"""
Backups of exported data and directory utilities.
"""

import logging
import os
import shutil
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional, Tuple

from ..config import RecordsConfig
from ..core.exceptions import PersistenceError

MAX_LISTING_DEPTH = 5

logger = logging.getLogger(__name__)


def directory_size(path) -> int:
    """Total size in bytes of every file below ``path``."""
    total = 0
    try:
        entries = list(os.scandir(path))
    except OSError as e:
        logger.debug("Cannot scan %s: %s", path, e)
        return 0
    for entry in entries:
        try:
            if entry.is_dir(follow_symlinks=False):
                total += directory_size(entry.path)
            elif entry.is_file(follow_symlinks=False):
                total += entry.stat().st_size
        except OSError as e:
            logger.debug("Cannot stat %s: %s", entry.path, e)
    return total


def list_files_recursively(path, depth: int = 0) -> Iterator[Tuple[int, Path]]:
    """Yield ``(depth, path)`` for each entry, not descending past depth 5."""
    if depth > MAX_LISTING_DEPTH:
        return
    try:
        children = sorted(Path(path).iterdir())
    except OSError as e:
        logger.debug("Cannot list %s: %s", path, e)
        return
    for child in children:
        yield depth, child
        if child.is_dir():
            yield from list_files_recursively(child, depth + 1)


class BackupService:
    """Copies CSV exports from the data folder into timestamped backups."""

    def __init__(self, config: RecordsConfig):
        self._data_folder = Path(config.data_folder)
        self._backup_root = self._data_folder / "backups"

    @property
    def backup_root(self) -> Path:
        return self._backup_root

    def create_backup(self, timestamp: Optional[datetime] = None) -> Path:
        """Create ``backups/<YYYYmmdd_HHMMSS>`` holding a copy of every export."""
        stamp = (timestamp or datetime.now()).strftime("%Y%m%d_%H%M%S")
        backup_folder = self._backup_root / stamp
        try:
            os.makedirs(backup_folder, exist_ok=False)
            for export in sorted(self._data_folder.glob("*.csv")):
                shutil.copy2(export, backup_folder / export.name)
        except OSError as e:
            raise PersistenceError(f"Failed to create backup: {str(e)}") from e

        logger.info("Backup created at %s, size: %d bytes", backup_folder, directory_size(backup_folder))
        return backup_folder
