"""
Core entities for the CCRM platform.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from .enums import EntityStatus, Grade, Semester
from .exceptions import ValidationError
from .validators import validate_credits, validate_email
from .value_objects import CourseCode


class AbstractEntity(ABC):
    """Base abstract entity with lifecycle timestamps, status and versioning."""

    def __init__(self):
        self._created_at = datetime.now(timezone.utc)
        self._updated_at = self._created_at
        self._version = 1
        self._status = EntityStatus.ACTIVE

    @property
    @abstractmethod
    def key(self) -> str:
        """Identifier the record stores look entities up by."""
        pass

    @property
    def created_at(self) -> datetime:
        """Get creation timestamp."""
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        """Get last update timestamp."""
        return self._updated_at

    @property
    def version(self) -> int:
        """Get current version."""
        return self._version

    @property
    def status(self) -> EntityStatus:
        """Get entity status."""
        return self._status

    @property
    def is_active(self) -> bool:
        return self._status == EntityStatus.ACTIVE

    def touch(self) -> None:
        """Record a mutation."""
        self._updated_at = datetime.now(timezone.utc)
        self._version += 1

    def activate(self) -> None:
        """Activate the entity."""
        self._status = EntityStatus.ACTIVE
        self.touch()

    def deactivate(self) -> None:
        """Deactivate the entity."""
        self._status = EntityStatus.INACTIVE
        self.touch()

    def to_dict(self) -> Dict[str, Any]:
        """Convert entity to dictionary."""
        return {
            'created_at': self._created_at.isoformat(),
            'updated_at': self._updated_at.isoformat(),
            'version': self._version,
            'status': self._status.value,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(key={self.key}, status={self._status.value})"


class Person(AbstractEntity):
    """Abstract base class for all persons in the system."""

    def __init__(self, person_id: str, full_name: str, email: str):
        if not person_id:
            raise ValidationError("ID cannot be empty", error_code="missing_id")
        super().__init__()
        self._id = person_id
        self._full_name = full_name
        self._email = email
        self._created_date = date.today()

    @property
    def key(self) -> str:
        return self._id

    @property
    def id(self) -> str:
        return self._id

    @property
    def full_name(self) -> str:
        return self._full_name

    @property
    def email(self) -> str:
        return self._email

    @property
    def created_date(self) -> date:
        return self._created_date

    @property
    @abstractmethod
    def role(self) -> str:
        pass

    def set_full_name(self, full_name: str) -> None:
        self._full_name = full_name
        self.touch()

    def set_email(self, email: str) -> None:
        self._email = email
        self.touch()

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            'id': self._id,
            'full_name': self._full_name,
            'email': self._email,
            'role': self.role,
        })
        return base_dict

    def __str__(self) -> str:
        return (f"{self.__class__.__name__}(id='{self._id}', name='{self._full_name}', "
                f"email='{self._email}', created={self._created_date})")


class Student(Person):
    """Student entity.

    The enrollment engine is the only owner of a student's enrollments; the
    ``enrollments`` property is a read-only view resolved through it.
    """

    def __init__(self, student_id: str, full_name: str, email: str, reg_no: str):
        super().__init__(student_id, full_name, email)
        self._reg_no = reg_no
        self._enrollment_lookup: Optional[Callable[[str], List['Enrollment']]] = None

    @property
    def role(self) -> str:
        return "Student"

    @property
    def reg_no(self) -> str:
        return self._reg_no

    @property
    def enrollments(self) -> Tuple['Enrollment', ...]:
        """Enrollments held by the engine for this student, in enrollment order."""
        if self._enrollment_lookup is None:
            return ()
        return tuple(self._enrollment_lookup(self._id))

    def attach_enrollment_lookup(self, lookup: Callable[[str], List['Enrollment']]) -> None:
        """Bind the enrollment view to an engine's lookup by student id."""
        self._enrollment_lookup = lookup

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            'reg_no': self._reg_no,
            'active': self.is_active,
        })
        return base_dict


class Instructor(Person):
    """Instructor entity."""

    def __init__(self, instructor_id: str, full_name: str, email: str, department: str):
        super().__init__(instructor_id, full_name, email)
        self._department = department

    @property
    def role(self) -> str:
        return "Instructor"

    @property
    def department(self) -> str:
        return self._department

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict['department'] = self._department
        return base_dict


class Course(AbstractEntity):
    """Course entity. Build instances with ``CourseBuilder``."""

    def __init__(self, builder: 'CourseBuilder'):
        super().__init__()
        self._code: CourseCode = builder._code
        self._title: str = builder._title
        self._credits: int = builder._credits
        self._instructor: Optional[Instructor] = builder._instructor
        self._semester: Semester = builder._semester
        self._department: str = builder._department

    @property
    def key(self) -> str:
        return self._code.value

    @property
    def code(self) -> CourseCode:
        return self._code

    @property
    def title(self) -> str:
        return self._title

    @property
    def credits(self) -> int:
        return self._credits

    @property
    def instructor(self) -> Optional[Instructor]:
        return self._instructor

    @property
    def semester(self) -> Semester:
        return self._semester

    @property
    def department(self) -> str:
        return self._department

    def set_title(self, title: str) -> None:
        self._title = title
        self.touch()

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            'code': self._code.value,
            'title': self._title,
            'credits': self._credits,
            'instructor': self._instructor.full_name if self._instructor else None,
            'semester': self._semester.display_name,
            'department': self._department,
            'active': self.is_active,
        })
        return base_dict

    def __str__(self) -> str:
        instructor = self._instructor.full_name if self._instructor else "TBD"
        return (f"Course(code={self._code}, title='{self._title}', credits={self._credits}, "
                f"instructor={instructor}, semester={self._semester.display_name}, dept='{self._department}')")


class CourseBuilder:
    """Staged construction of a ``Course``; ``build()`` validates before creating it."""

    def __init__(self):
        self._code: Optional[CourseCode] = None
        self._title: str = ""
        self._credits: int = 0
        self._instructor: Optional[Instructor] = None
        self._semester: Optional[Semester] = None
        self._department: str = ""

    def code(self, code) -> 'CourseBuilder':
        self._code = code if isinstance(code, CourseCode) else CourseCode(code)
        return self

    def title(self, title: str) -> 'CourseBuilder':
        self._title = title
        return self

    def credits(self, credits: int) -> 'CourseBuilder':
        self._credits = credits
        return self

    def instructor(self, instructor: Optional[Instructor]) -> 'CourseBuilder':
        self._instructor = instructor
        return self

    def semester(self, semester: Semester) -> 'CourseBuilder':
        self._semester = semester
        return self

    def department(self, department: str) -> 'CourseBuilder':
        self._department = department
        return self

    def build(self) -> Course:
        if self._code is None:
            raise ValidationError("Course code is required", error_code="missing_code")
        if not validate_credits(self._credits):
            raise ValidationError(f"Invalid credits: {self._credits}", error_code="invalid_credits")
        if not isinstance(self._semester, Semester):
            raise ValidationError("Semester is required", error_code="missing_semester")
        return Course(self)


class Enrollment:
    """Links one student to one course, carrying a grade and the enrollment date."""

    def __init__(self, student: Student, course: Course):
        self._student = student
        self._course = course
        self._grade = Grade.I
        self._enrolled_on = date.today()

    @property
    def student(self) -> Student:
        return self._student

    @property
    def course(self) -> Course:
        return self._course

    @property
    def grade(self) -> Grade:
        return self._grade

    @property
    def enrolled_on(self) -> date:
        return self._enrolled_on

    def set_grade(self, grade: Grade) -> None:
        if not isinstance(grade, Grade):
            raise ValidationError(f"Invalid grade: {grade!r}", error_code="invalid_grade")
        self._grade = grade

    def to_dict(self) -> Dict[str, Any]:
        return {
            'student_id': self._student.id,
            'course_code': self._course.code.value,
            'credits': self._course.credits,
            'grade': self._grade.name,
            'enrolled_on': self._enrolled_on.isoformat(),
        }

    def __repr__(self) -> str:
        return (f"Enrollment(student={self._student.full_name}, course={self._course.code}, "
                f"grade={self._grade.name}, date={self._enrolled_on})")


def new_student(student_id: str, full_name: str, email: str, reg_no: str) -> Student:
    """Create a student record, rejecting malformed emails."""
    if not validate_email(email):
        raise ValidationError(f"Invalid email: {email!r}", error_code="invalid_email")
    return Student(student_id, full_name, email, reg_no)
