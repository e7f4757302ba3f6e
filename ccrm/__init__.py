"""
CCRM: Campus Course & Records Manager

An in-memory academic records manager for students, courses and enrollments,
enforcing credit caps and duplicate-enrollment rules and deriving GPA,
transcripts and credit distribution reports.
"""

__version__ = "1.0.0"
__author__ = "CCRM Development Team"
__description__ = "Campus Course & Records Manager"
