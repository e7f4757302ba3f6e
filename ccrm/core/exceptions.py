"""
Custom exceptions for the CCRM platform.
"""

from typing import Optional, Any, Dict


class CCRMException(Exception):
    """Base exception for all CCRM-related errors."""
    
    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(CCRMException):
    """Raised when data validation fails."""
    pass


class EnrollmentError(CCRMException):
    """Raised when enrollment operations fail."""
    pass


class DuplicateEnrollmentError(EnrollmentError):
    """Raised when a student is already enrolled in a course.

    This is an expected condition: callers enrolling students are required to
    handle it (skip, report, ...).
    """
    pass


class PolicyViolationError(CCRMException):
    """Raised when a policy is violated."""
    pass


class CreditLimitExceededError(PolicyViolationError):
    """Raised when an enrollment would push a student over the credit cap."""
    pass


class ResourceNotFoundError(CCRMException):
    """Raised when a requested resource is not found."""
    pass


class PersistenceError(CCRMException):
    """Raised when persistence operations fail."""
    pass


class ConfigurationError(CCRMException):
    """Raised when configuration is invalid."""
    pass
