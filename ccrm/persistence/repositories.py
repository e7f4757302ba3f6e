"""
In-memory record stores for students and courses.
"""

import logging
import threading
from abc import abstractmethod
from collections import Counter
from typing import Callable, Dict, Generic, List, Optional, TypeVar

from ..core.entities import AbstractEntity, Course, Instructor, Student
from ..core.enums import Semester
from ..core.exceptions import ValidationError
from ..core.interfaces import Repository, Searchable

T = TypeVar('T', bound=AbstractEntity)

logger = logging.getLogger(__name__)


class BaseRepository(Repository[T], Generic[T]):
    """Ordered in-memory store keyed by each entity's ``key``.

    Ids are not checked for uniqueness on ``add``; lookups act on the first
    match. Updates and deactivations of unknown ids are silently ignored.
    """

    def __init__(self, entity_type: str):
        self._entity_type = entity_type
        self._entities: List[T] = []
        self._lock = threading.RLock()

    def add(self, entity: T) -> None:
        """Add an entity."""
        if entity is None:
            raise ValidationError(f"{self._entity_type} cannot be None", error_code="missing_entity")
        with self._lock:
            self._entities.append(entity)
        logger.info("Added %s %s", self._entity_type, entity.key)

    def list(self) -> List[T]:
        """Get a copy of all entities in insertion order."""
        with self._lock:
            return self._entities.copy()

    def find_by_id(self, entity_id: str) -> Optional[T]:
        """Find the first entity with the given id."""
        key = self._normalize_key(entity_id)
        with self._lock:
            for entity in self._entities:
                if entity.key == key:
                    return entity
        return None

    def update(self, entity_id: str, value: str) -> None:
        """Set the entity's mutable field; unknown ids are ignored."""
        with self._lock:
            entity = self.find_by_id(entity_id)
            if entity is None:
                logger.debug("Update skipped, no %s with id %s", self._entity_type, entity_id)
                return
            self._apply_update(entity, value)
        logger.info("Updated %s %s", self._entity_type, entity_id)

    def deactivate(self, entity_id: str) -> None:
        """Mark the entity inactive; unknown ids are ignored."""
        with self._lock:
            entity = self.find_by_id(entity_id)
            if entity is None:
                logger.debug("Deactivate skipped, no %s with id %s", self._entity_type, entity_id)
                return
            entity.deactivate()
        logger.info("Deactivated %s %s", self._entity_type, entity_id)

    def search(self, predicate: Callable[[T], bool]) -> List[T]:
        """Find all entities satisfying a predicate."""
        with self._lock:
            return [entity for entity in self._entities if predicate(entity)]

    def count(self) -> int:
        with self._lock:
            return len(self._entities)

    def _normalize_key(self, entity_id: str) -> str:
        return entity_id

    @abstractmethod
    def _apply_update(self, entity: T, value: str) -> None:
        """Write the store's single mutable field."""
        pass


class StudentRepository(BaseRepository[Student]):
    """Store for Student entities; ``update`` changes the full name."""

    def __init__(self):
        super().__init__("student")

    def _apply_update(self, entity: Student, value: str) -> None:
        entity.set_full_name(value)

    def find_by_reg_no(self, reg_no: str) -> Optional[Student]:
        """Find student by registration number."""
        matches = self.search(lambda s: s.reg_no == reg_no)
        return matches[0] if matches else None

    def sorted_reg_nos(self) -> List[str]:
        """Get all registration numbers in sorted order."""
        return sorted(s.reg_no for s in self.list())


class CourseRepository(BaseRepository[Course], Searchable[Course]):
    """Store for Course entities; ``update`` changes the title.

    Course ids are codes and are compared after upper-casing.
    """

    def __init__(self):
        super().__init__("course")

    def _normalize_key(self, entity_id: str) -> str:
        return str(entity_id).upper()

    def _apply_update(self, entity: Course, value: str) -> None:
        entity.set_title(value)

    def search_by_instructor(self, instructor: Instructor) -> List[Course]:
        """Find courses taught by an instructor."""
        return self.search(lambda c: c.instructor is instructor)

    def search_by_department(self, department: str) -> List[Course]:
        """Find courses offered by a department."""
        return self.search(lambda c: c.department == department)

    def search_by_semester(self, semester: Semester) -> List[Course]:
        """Find courses offered in a semester."""
        return self.search(lambda c: c.semester == semester)

    def credit_distribution(self) -> Dict[int, int]:
        """Map each credit count to the number of active courses carrying it."""
        counts = Counter(c.credits for c in self.search(lambda c: c.is_active))
        return dict(sorted(counts.items()))

    def sorted_by_title(self) -> List[Course]:
        """Snapshot of all courses sorted by title (stable)."""
        return sorted(self.list(), key=lambda c: c.title)
