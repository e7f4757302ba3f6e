"""Unit tests for the CourseCode value object."""

import pytest

from ccrm.core.exceptions import ValidationError
from ccrm.core.value_objects import CourseCode


class TestCourseCode:
    """Tests for course code validation and normalisation."""

    @pytest.mark.parametrize("raw", ["cs0101", "Cs0101", "CS0101", "cS0101"])
    def test_case_variants_are_equal(self, raw):
        """Test that casing does not affect equality or hashing."""
        code = CourseCode(raw)
        assert code == CourseCode("CS0101")
        assert hash(code) == hash(CourseCode("cs0101"))
        assert str(code) == "CS0101"

    def test_usable_as_dict_key(self):
        """Test that differently cased codes collapse to one key."""
        credits = {CourseCode("ma0201"): 4}
        assert credits[CourseCode("MA0201")] == 4

    @pytest.mark.parametrize("raw", [None, "", "CS101", "CS01011", 123456])
    def test_invalid_codes_rejected(self, raw):
        """Test that anything but a 6-character string fails."""
        with pytest.raises(ValidationError):
            CourseCode(raw)

    def test_immutable(self):
        """Test that the value cannot be reassigned."""
        code = CourseCode("CS0101")
        with pytest.raises(AttributeError):
            code.value = "XX0000"
