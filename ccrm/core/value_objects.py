"""
Immutable value objects.
"""

from dataclasses import dataclass

from .exceptions import ValidationError

COURSE_CODE_LENGTH = 6


@dataclass(frozen=True)
class CourseCode:
    """Six-character course code, normalised to upper case."""
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or len(self.value) != COURSE_CODE_LENGTH:
            raise ValidationError(
                f"Invalid course code: {self.value!r} (expected {COURSE_CODE_LENGTH} characters)",
                error_code="invalid_course_code",
            )
        object.__setattr__(self, "value", self.value.upper())

    def __str__(self) -> str:
        return self.value
