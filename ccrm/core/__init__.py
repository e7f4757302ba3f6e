"""
Core module containing the fundamental object model and base classes.
"""

from .entities import *
from .interfaces import *
from .exceptions import *
from .enums import *
from .value_objects import *

__all__ = [
    # Entities
    "AbstractEntity",
    "Person",
    "Student",
    "Instructor",
    "Course",
    "CourseBuilder",
    "Enrollment",
    "new_student",
    
    # Value objects
    "CourseCode",
    
    # Interfaces
    "Repository",
    "Searchable",
    
    # Enums
    "EntityStatus",
    "Semester",
    "Grade",
    
    # Exceptions
    "CCRMException",
    "ValidationError",
    "EnrollmentError",
    "DuplicateEnrollmentError",
    "PolicyViolationError",
    "CreditLimitExceededError",
    "ResourceNotFoundError",
    "PersistenceError",
    "ConfigurationError",
]
