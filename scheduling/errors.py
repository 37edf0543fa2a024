# scheduling/errors.py
"""Exceptions raised by the scheduling core."""

from typing import List

from models.interview import Interview


class SchedulerError(Exception):
    """Base exception for all scheduling errors."""


class InterviewValidationError(SchedulerError):
    """Raised when a proposed interview is malformed (blank field, bad type, end <= start)."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "invalid interview")


class ConflictError(SchedulerError):
    """Raised when the interviewer is already booked during the proposed interval."""

    def __init__(self, proposed: Interview, colliding: Interview):
        self.proposed = proposed
        self.colliding = colliding
        super().__init__(
            f"{proposed.interviewer} already has interview {colliding.id} "
            f"from {colliding.start.isoformat()} to {colliding.end.isoformat()}"
        )


class PersistenceReadError(SchedulerError):
    """Raised when persisted interview data cannot be decoded."""
