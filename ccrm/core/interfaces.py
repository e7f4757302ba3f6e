"""
Core interfaces and abstract base classes for the CCRM platform.
"""

from abc import ABC, abstractmethod
from typing import Callable, Generic, List, TypeVar

T = TypeVar('T')


class Repository(ABC, Generic[T]):
    """Abstract base class for record stores."""

    @abstractmethod
    def add(self, entity: T) -> None:
        """Add an entity."""
        pass

    @abstractmethod
    def list(self) -> List[T]:
        """List all entities."""
        pass

    @abstractmethod
    def update(self, entity_id: str, value: str) -> None:
        """Update the mutable field of an entity."""
        pass

    @abstractmethod
    def deactivate(self, entity_id: str) -> None:
        """Deactivate an entity."""
        pass

    @abstractmethod
    def search(self, predicate: Callable[[T], bool]) -> List[T]:
        """Find all entities satisfying a predicate."""
        pass


class Searchable(ABC, Generic[T]):
    """Interface for stores that can filter by instructor, department and semester."""

    @abstractmethod
    def search_by_instructor(self, instructor: 'Instructor') -> List[T]:
        pass

    @abstractmethod
    def search_by_department(self, department: str) -> List[T]:
        pass

    @abstractmethod
    def search_by_semester(self, semester: 'Semester') -> List[T]:
        pass
