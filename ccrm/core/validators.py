"""
Field validators shared by entity construction and the front-ends.
"""

MIN_CREDITS = 1
MAX_COURSE_CREDITS = 6


def validate_email(email) -> bool:
    """Check that an email looks plausible."""
    return email is not None and "@" in email and len(email) > 5


def validate_credits(credits) -> bool:
    """Check that a course credit count is within 1-6."""
    return isinstance(credits, int) and not isinstance(credits, bool) and MIN_CREDITS <= credits <= MAX_COURSE_CREDITS
