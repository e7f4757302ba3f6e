"""
Enumerations and constants for the CCRM platform.
"""

from enum import Enum


class EntityStatus(Enum):
    """Status of an entity in the system."""
    ACTIVE = "active"
    INACTIVE = "inactive"


class Semester(Enum):
    """Academic semesters, ordered within a year."""
    SPRING = ("Spring", 1)
    SUMMER = ("Summer", 2)
    FALL = ("Fall", 3)

    def __init__(self, display_name: str, order: int):
        self.display_name = display_name
        self.order = order

    @classmethod
    def from_name(cls, name: str) -> "Semester":
        """Look up a semester by member or display name, case-insensitively."""
        for semester in cls:
            if name.strip().upper() in (semester.name, semester.display_name.upper()):
                return semester
        raise ValueError(f"Unknown semester: {name}")


class Grade(Enum):
    """Letter grades with their grade points."""
    S = (4.0, "Superior")
    A = (4.0, "Excellent")
    B = (3.0, "Good")
    C = (2.0, "Average")
    D = (1.0, "Poor")
    F = (0.0, "Fail")
    I = (0.0, "Incomplete")  # noqa: E741

    def __init__(self, points: float, description: str):
        self.points = points
        self.description = description

    def __str__(self) -> str:
        return self.name
