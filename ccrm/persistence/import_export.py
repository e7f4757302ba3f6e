"""
Import and export of records as delimited text files.
"""

import csv
import logging
import os
import threading
from pathlib import Path
from typing import Iterable, List

from ..config import RecordsConfig
from ..core.entities import Course, Student
from ..core.exceptions import PersistenceError, ValidationError
from .repositories import StudentRepository

STUDENT_HEADER = ["id", "fullName", "email", "regNo"]
COURSE_HEADER = ["code", "title", "credits", "semester", "department", "instructor", "active"]

logger = logging.getLogger(__name__)


class ImportExportService:
    """Reads and writes CSV files inside the configured data folder."""

    def __init__(self, config: RecordsConfig):
        self._data_folder = Path(config.data_folder)
        self._lock = threading.RLock()

    def _get_path(self, filename: str) -> Path:
        return self._data_folder / filename

    def export_students(self, filename: str, students: Iterable[Student]) -> Path:
        """Write students with a header row first."""
        path = self._get_path(filename)
        with self._lock:
            try:
                os.makedirs(self._data_folder, exist_ok=True)
                with open(path, "w", encoding="utf-8", newline="") as f:
                    writer = csv.writer(f)
                    writer.writerow(STUDENT_HEADER)
                    count = 0
                    for student in students:
                        writer.writerow([student.id, student.full_name, student.email, student.reg_no])
                        count += 1
            except OSError as e:
                raise PersistenceError(f"Failed to export students: {str(e)}") from e
        logger.info("Exported %d students to %s", count, path)
        return path

    def import_students(self, filename: str, repository: StudentRepository) -> List[Student]:
        """Add the students listed in a file to ``repository``.

        Rows with fewer than four fields are skipped. A missing file imports
        nothing.
        """
        path = self._get_path(filename)
        if not os.path.exists(path):
            logger.warning("Import skipped, %s does not exist", path)
            return []

        imported = []
        with self._lock:
            try:
                with open(path, "r", encoding="utf-8", newline="") as f:
                    reader = csv.reader(f)
                    next(reader, None)
                    for line_num, row in enumerate(reader, 2):
                        if len(row) < len(STUDENT_HEADER):
                            logger.warning("Skipping malformed row at line %d in %s", line_num, path)
                            continue
                        try:
                            student = Student(row[0], row[1], row[2], row[3])
                        except ValidationError as e:
                            logger.warning("Skipping invalid row at line %d in %s: %s", line_num, path, e)
                            continue
                        repository.add(student)
                        imported.append(student)
            except OSError as e:
                raise PersistenceError(f"Failed to import students: {str(e)}") from e
        logger.info("Imported %d students from %s", len(imported), path)
        return imported

    def export_courses(self, filename: str, courses: Iterable[Course]) -> Path:
        """Write courses with a header row first."""
        path = self._get_path(filename)
        with self._lock:
            try:
                os.makedirs(self._data_folder, exist_ok=True)
                with open(path, "w", encoding="utf-8", newline="") as f:
                    writer = csv.writer(f)
                    writer.writerow(COURSE_HEADER)
                    for course in courses:
                        writer.writerow([
                            course.code.value,
                            course.title,
                            course.credits,
                            course.semester.display_name,
                            course.department,
                            course.instructor.full_name if course.instructor else "",
                            str(course.is_active).lower(),
                        ])
            except OSError as e:
                raise PersistenceError(f"Failed to export courses: {str(e)}") from e
        logger.info("Exported courses to %s", path)
        return path
