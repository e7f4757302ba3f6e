"""
Reporting: GPA, transcripts and credit distribution.
"""

import logging
from typing import Dict, List

from ..core.entities import Student
from ..core.enums import Grade
from ..persistence.repositories import CourseRepository

logger = logging.getLogger(__name__)


def compute_gpa(student: Student) -> float:
    """Mean grade points over the student's current enrollments, 0.0 with none."""
    enrollments = student.enrollments
    if not enrollments:
        return 0.0
    return sum(e.grade.points for e in enrollments) / len(enrollments)


class TranscriptService:
    """Derives read-only summaries from the current records."""

    def __init__(self, course_repository: CourseRepository):
        self._course_repository = course_repository

    def compute_gpa(self, student: Student) -> float:
        return compute_gpa(student)

    def grades(self, student: Student) -> List[Grade]:
        return [e.grade for e in student.enrollments]

    def generate_transcript(self, student: Student) -> str:
        """Format the student's name, GPA and grades in enrollment order."""
        grades = ", ".join(g.name for g in self.grades(student))
        transcript = (f"Transcript for {student.full_name}\n"
                      f"GPA: {compute_gpa(student):.2f}\n"
                      f"Grades: [{grades}]")
        logger.debug("Generated transcript for %s", student.id)
        return transcript

    def credit_distribution(self) -> Dict[int, int]:
        """Active course count per credit value."""
        return self._course_repository.credit_distribution()
