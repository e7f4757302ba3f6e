"""
Persistence module: in-memory record stores, CSV import/export and backups.
"""

from .repositories import BaseRepository, StudentRepository, CourseRepository
from .import_export import ImportExportService
from .backup import BackupService, directory_size, list_files_recursively

__all__ = [
    "BaseRepository",
    "StudentRepository",
    "CourseRepository",
    "ImportExportService",
    "BackupService",
    "directory_size",
    "list_files_recursively",
]
