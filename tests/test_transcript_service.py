"""Unit tests for GPA, transcripts and credit distribution reports."""

from ccrm.core.enums import Grade
from ccrm.services import compute_gpa


class TestComputeGpa:
    def test_no_enrollments_is_zero(self, transcript_service, student):
        assert transcript_service.compute_gpa(student) == 0.0

    def test_mean_of_grade_points(self, enrollment_service, transcript_service, student, make_course):
        enrollment_service.enroll(student, make_course("CS0101"))
        enrollment_service.enroll(student, make_course("MA0201"))
        enrollment_service.record_grade("S001", "CS0101", Grade.A)
        enrollment_service.record_grade("S001", "MA0201", Grade.C)
        assert compute_gpa(student) == 3.0

    def test_incomplete_counts_as_zero(self, enrollment_service, student, make_course):
        enrollment_service.enroll(student, make_course("CS0101"))
        enrollment_service.enroll(student, make_course("MA0201"))
        enrollment_service.record_grade("S001", "CS0101", Grade.B)
        assert compute_gpa(student) == 1.5

    def test_unenrolled_courses_drop_out(self, enrollment_service, student, make_course):
        enrollment_service.enroll(student, make_course("CS0101"))
        enrollment_service.enroll(student, make_course("MA0201"))
        enrollment_service.record_grade("S001", "CS0101", Grade.A)
        enrollment_service.unenroll("S001", "MA0201")
        assert compute_gpa(student) == 4.0


class TestGenerateTranscript:
    def test_scenario(self, enrollment_service, transcript_service, student, make_course):
        """Test the enroll, grade and report flow for a single course."""
        enrollment = enrollment_service.enroll(student, make_course("CS0101", credits=3))
        assert enrollment.grade is Grade.I

        enrollment_service.record_grade("S001", "CS0101", Grade.A)
        assert enrollment.grade is Grade.A
        assert transcript_service.compute_gpa(student) == 4.0

        transcript = transcript_service.generate_transcript(student)
        assert "Transcript for John Doe" in transcript
        assert "GPA: 4.00" in transcript
        assert "Grades: [A]" in transcript

    def test_grades_in_enrollment_order(self, enrollment_service, transcript_service, student, make_course):
        enrollment_service.enroll(student, make_course("CS0101"))
        enrollment_service.enroll(student, make_course("MA0201"))
        enrollment_service.record_grade("S001", "MA0201", Grade.B)
        transcript = transcript_service.generate_transcript(student)
        assert "Grades: [I, B]" in transcript
        assert "GPA: 1.50" in transcript

    def test_empty_transcript(self, transcript_service, student):
        transcript = transcript_service.generate_transcript(student)
        assert "GPA: 0.00" in transcript
        assert "Grades: []" in transcript


class TestCreditDistribution:
    def test_delegates_to_course_store(self, course_repo, transcript_service, make_course):
        course_repo.add(make_course("CS0101", credits=3))
        course_repo.add(make_course("MA0201", credits=4))
        course_repo.deactivate("CS0101")
        assert transcript_service.credit_distribution() == {4: 1}
