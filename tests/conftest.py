"""Shared fixtures for CCRM tests."""

import pytest

from ccrm.config import RecordsConfig
from ccrm.core.entities import CourseBuilder, Instructor, new_student
from ccrm.core.enums import Semester
from ccrm.persistence import CourseRepository, StudentRepository
from ccrm.services import EnrollmentService, TranscriptService


@pytest.fixture
def make_course():
    """Build courses with sensible defaults."""
    def _make(code="CS0101", title="Intro CS", credits=3, semester=Semester.FALL,
              department="CSE", instructor=None):
        return (CourseBuilder()
                .code(code)
                .title(title)
                .credits(credits)
                .instructor(instructor)
                .semester(semester)
                .department(department)
                .build())
    return _make


@pytest.fixture
def student():
    """Create a sample student."""
    return new_student("S001", "John Doe", "john@email.com", "REG001")


@pytest.fixture
def instructor():
    return Instructor("I001", "Ada Lovelace", "ada@university.edu", "CSE")


@pytest.fixture
def student_repo():
    return StudentRepository()


@pytest.fixture
def course_repo():
    return CourseRepository()


@pytest.fixture
def enrollment_service():
    return EnrollmentService()


@pytest.fixture
def transcript_service(course_repo):
    return TranscriptService(course_repo)


@pytest.fixture
def config(tmp_path):
    """Configuration pointing at a temporary data folder."""
    return RecordsConfig(data_folder=tmp_path / "data")
