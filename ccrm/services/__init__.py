"""
Services module containing the enrollment engine and reporting.
"""

from .enrollment_service import EnrollmentService, MAX_CREDITS
from .transcript_service import TranscriptService, compute_gpa

__all__ = [
    "EnrollmentService",
    "MAX_CREDITS",
    "TranscriptService",
    "compute_gpa",
]
