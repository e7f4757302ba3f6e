"""Unit tests for the student and course record stores."""

import pytest

from ccrm.core.entities import new_student
from ccrm.core.enums import Semester
from ccrm.core.exceptions import ValidationError


class TestStudentRepository:
    """Tests for student store operations."""

    def test_add_rejects_none(self, student_repo):
        with pytest.raises(ValidationError):
            student_repo.add(None)
        assert student_repo.list() == []

    def test_list_is_defensive_copy(self, student_repo, student):
        student_repo.add(student)
        listed = student_repo.list()
        listed.clear()
        assert student_repo.list() == [student]

    def test_duplicate_ids_are_not_checked(self, student_repo):
        """Test that uniqueness is left to callers."""
        student_repo.add(new_student("S001", "First", "first@email.com", "REG001"))
        student_repo.add(new_student("S001", "Second", "second@email.com", "REG002"))
        assert student_repo.count() == 2
        assert student_repo.find_by_id("S001").full_name == "First"

    def test_update_first_match(self, student_repo, student):
        student_repo.add(student)
        student_repo.update("S001", "Jane Doe")
        assert student.full_name == "Jane Doe"

    def test_update_unknown_id_is_noop(self, student_repo, student):
        student_repo.add(student)
        student_repo.update("S999", "Nobody")
        assert student.full_name == "John Doe"
        assert student.version == 1

    def test_deactivate(self, student_repo, student):
        student_repo.add(student)
        student_repo.deactivate("S001")
        student_repo.deactivate("S999")
        assert not student.is_active
        assert student_repo.list() == [student]

    def test_search_and_sorted_reg_nos(self, student_repo):
        student_repo.add(new_student("S002", "Bob", "bob@email.com", "REG009"))
        student_repo.add(new_student("S001", "Alice", "alice@email.com", "REG001"))
        assert student_repo.sorted_reg_nos() == ["REG001", "REG009"]
        assert [s.id for s in student_repo.search(lambda s: s.full_name.startswith("A"))] == ["S001"]
        assert student_repo.find_by_reg_no("REG009").id == "S002"


class TestCourseRepository:
    """Tests for course store operations and aggregates."""

    def test_update_title_matches_code_case_insensitively(self, course_repo, make_course):
        course = make_course()
        course_repo.add(course)
        course_repo.update("cs0101", "Programming I")
        assert course.title == "Programming I"

    def test_update_unknown_code_is_noop(self, course_repo, make_course):
        course = make_course()
        course_repo.add(course)
        course_repo.update("XX9999", "Ghost")
        assert course.title == "Intro CS"

    def test_search_filters(self, course_repo, make_course, instructor):
        cs = make_course("CS0101", instructor=instructor)
        ma = make_course("MA0201", "Linear Algebra", 4, Semester.SPRING, "MATH")
        ph = make_course("PH0110", "Physics I", 4, Semester.FALL, "PHY")
        for course in (cs, ma, ph):
            course_repo.add(course)

        assert course_repo.search_by_instructor(instructor) == [cs]
        assert course_repo.search_by_department("MATH") == [ma]
        assert course_repo.search_by_semester(Semester.FALL) == [cs, ph]
        assert course_repo.search(lambda c: c.credits > 3) == [ma, ph]

    def test_credit_distribution_counts_active_only(self, course_repo, make_course):
        """Test that a deactivated course leaves the distribution but not the store."""
        course_repo.add(make_course("CS0101", credits=3))
        course_repo.add(make_course("CS0102", credits=3))
        course_repo.add(make_course("MA0201", credits=4))
        assert course_repo.credit_distribution() == {3: 2, 4: 1}

        course_repo.deactivate("CS0101")
        assert course_repo.credit_distribution() == {3: 1, 4: 1}
        assert course_repo.count() == 3

        course_repo.deactivate("CS0102")
        assert course_repo.credit_distribution() == {4: 1}

    def test_sorted_by_title_is_stable_snapshot(self, course_repo, make_course):
        first = make_course("AA0001", title="Same")
        second = make_course("BB0002", title="Same")
        third = make_course("CC0003", title="Algebra")
        for course in (first, second, third):
            course_repo.add(course)

        assert course_repo.sorted_by_title() == [third, first, second]
        assert course_repo.list() == [first, second, third]
