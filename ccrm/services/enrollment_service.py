"""
Enrollment service enforcing the duplicate-enrollment and credit-cap rules.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

from ..core.entities import Course, Enrollment, Student
from ..core.enums import Grade
from ..core.exceptions import CreditLimitExceededError, DuplicateEnrollmentError, ValidationError

MAX_CREDITS = 18

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Service owning every student's enrollments.

    The ``student_id -> [Enrollment]`` map held here is the single source of
    truth; ``Student.enrollments`` reads through ``get_enrollments``. Each
    check-then-mutate sequence runs under one lock.
    """

    def __init__(self, max_credits: int = MAX_CREDITS):
        self._max_credits = max_credits
        self._enrollments: Dict[str, List[Enrollment]] = {}
        self._lock = threading.RLock()

    @property
    def max_credits(self) -> int:
        return self._max_credits

    def enroll(self, student: Student, course: Course) -> Enrollment:
        """Enroll a student in a course.

        Raises:
            DuplicateEnrollmentError: the student already holds an enrollment
                for this course.
            CreditLimitExceededError: the course would take the student's
                total credits above the cap. No enrollment is created.
        """
        if student is None or course is None:
            raise ValidationError("Student and course are required", error_code="missing_argument")

        with self._lock:
            current = self._enrollments.get(student.id, [])

            if self._find(current, course.code.value) is not None:
                logger.warning("Duplicate enrollment rejected: %s in %s", student.id, course.code)
                raise DuplicateEnrollmentError(
                    f"Student {student.id} is already enrolled in {course.code}",
                    error_code="duplicate_enrollment",
                    details={'student_id': student.id, 'course_code': course.code.value},
                )

            total = self._sum_credits(current) + course.credits
            if total > self._max_credits:
                logger.warning("Credit limit exceeded: %s would carry %d credits", student.id, total)
                raise CreditLimitExceededError(
                    f"Enrolling {student.id} in {course.code} would reach {total} credits "
                    f"(max {self._max_credits})",
                    error_code="credit_limit_exceeded",
                    details={'student_id': student.id, 'course_code': course.code.value,
                             'requested_total': total, 'max_credits': self._max_credits},
                )

            enrollment = Enrollment(student, course)
            self._enrollments.setdefault(student.id, []).append(enrollment)
            student.attach_enrollment_lookup(self.get_enrollments)

        logger.info("Enrolled %s in %s (%d credits)", student.id, course.code, total)
        return enrollment

    def unenroll(self, student_id: str, course_code: str) -> None:
        """Remove a student's enrollment in a course; unknown pairs are ignored."""
        with self._lock:
            current = self._enrollments.get(student_id, [])
            enrollment = self._find(current, course_code)
            if enrollment is None:
                logger.debug("Unenroll skipped, %s not enrolled in %s", student_id, course_code)
                return
            current.remove(enrollment)
        logger.info("Unenrolled %s from %s", student_id, course_code)

    def record_grade(self, student_id: str, course_code: str, grade: Grade) -> None:
        """Overwrite the grade of an enrollment; unknown pairs are ignored."""
        if not isinstance(grade, Grade):
            raise ValidationError(f"Invalid grade: {grade!r}", error_code="invalid_grade")

        with self._lock:
            enrollment = self._find(self._enrollments.get(student_id, []), course_code)
            if enrollment is None:
                logger.debug("Grade not recorded, %s not enrolled in %s", student_id, course_code)
                return
            enrollment.set_grade(grade)
        logger.info("Recorded grade %s for %s in %s", grade.name, student_id, course_code)

    def get_enrollments(self, student_id: str) -> List[Enrollment]:
        """Get a copy of a student's enrollments in enrollment order."""
        with self._lock:
            return list(self._enrollments.get(student_id, []))

    def get_enrollment(self, student_id: str, course_code: str) -> Optional[Enrollment]:
        with self._lock:
            return self._find(self._enrollments.get(student_id, []), course_code)

    def total_credits(self, student_id: str) -> int:
        """Get the credits a student currently carries."""
        with self._lock:
            return self._sum_credits(self._enrollments.get(student_id, []))

    def get_statistics(self) -> Dict[str, Any]:
        """Get enrollment statistics."""
        with self._lock:
            all_enrollments = [e for enrollments in self._enrollments.values() for e in enrollments]
            return {
                'students_enrolled': sum(1 for enrollments in self._enrollments.values() if enrollments),
                'total_enrollments': len(all_enrollments),
                'graded_enrollments': sum(1 for e in all_enrollments if e.grade != Grade.I),
                'max_credits': self._max_credits,
            }

    @staticmethod
    def _find(enrollments: List[Enrollment], course_code: str) -> Optional[Enrollment]:
        code = str(course_code).upper()
        for enrollment in enrollments:
            if enrollment.course.code.value == code:
                return enrollment
        return None

    @staticmethod
    def _sum_credits(enrollments: List[Enrollment]) -> int:
        return sum(e.course.credits for e in enrollments)
