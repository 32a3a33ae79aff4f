"""Core type definitions for the job application form.

This module defines the fundamental types used throughout the form core:
- Position: Applicant position, drives which optional fields become required
- InputKind: Kind of input control a raw value came from
- SubmissionState: States of the submission state machine
- ErrorCategory: Categories of form-validity errors
- EventType: Audit event types for the event stream

It also holds the fixed field names and the default skill set.
"""

from enum import Enum
from typing import Tuple


FULL_NAME = "fullName"
EMAIL = "email"
PHONE_NUMBER = "phoneNumber"
POSITION = "position"
RELEVANT_EXPERIENCE = "relevantExperience"
PORTFOLIO_URL = "portfolioURL"
MANAGEMENT_EXPERIENCE = "managementExperience"
ADDITIONAL_SKILLS = "additionalSkills"
PREFERRED_INTERVIEW_TIME = "preferredInterviewTime"

FIELD_NAMES: Tuple[str, ...] = (
    FULL_NAME,
    EMAIL,
    PHONE_NUMBER,
    POSITION,
    RELEVANT_EXPERIENCE,
    PORTFOLIO_URL,
    MANAGEMENT_EXPERIENCE,
    ADDITIONAL_SKILLS,
    PREFERRED_INTERVIEW_TIME,
)

DEFAULT_SKILLS: Tuple[str, ...] = ("JavaScript", "CSS", "Python")


class Position(str, Enum):
    """Position the applicant is applying for.

    Values are the strings stored in the form, so ``Position.DESIGNER == "Designer"``.
    """
    UNSET = ""
    DEVELOPER = "Developer"
    DESIGNER = "Designer"
    MANAGER = "Manager"

    @classmethod
    def parse(cls, value: object) -> "Position":
        """Map a stored value to a Position, treating anything unknown as UNSET."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNSET


class InputKind(str, Enum):
    """Input controls a raw value can come from.

    Only CHECKBOX coerces its input (to bool); everything else is stored as given.
    """
    TEXT = "text"
    EMAIL = "email"
    NUMBER = "number"
    SELECT = "select"
    DATETIME_LOCAL = "datetime-local"
    CHECKBOX = "checkbox"


class SubmissionState(str, Enum):
    """Submission state machine states.

    The machine is cyclic: there is no terminal state.
    """
    IDLE = "idle"
    ATTEMPT_RECORDED = "attempt_recorded"


class ErrorCategory(str, Enum):
    """Categories of form-validity errors.

    All of them are recoverable by editing the form and submitting again.
    """
    MISSING_REQUIRED_FIELD = "missing_required_field"
    INVALID_FORMAT = "invalid_format"
    CONDITIONAL_REQUIREMENT = "conditional_requirement"
    COLLECTION_CONSTRAINT = "collection_constraint"


class EventType(str, Enum):
    """Audit event types for the event stream."""
    FIELD_UPDATED = "field.updated"
    SUBMISSION_ATTEMPTED = "submission.attempted"
    VALIDATION_PASSED = "validation.passed"
    VALIDATION_FAILED = "validation.failed"
    SUBMISSION_SUCCEEDED = "submission.succeeded"


__all__ = [
    "FIELD_NAMES",
    "DEFAULT_SKILLS",
    "FULL_NAME",
    "EMAIL",
    "PHONE_NUMBER",
    "POSITION",
    "RELEVANT_EXPERIENCE",
    "PORTFOLIO_URL",
    "MANAGEMENT_EXPERIENCE",
    "ADDITIONAL_SKILLS",
    "PREFERRED_INTERVIEW_TIME",
    "Position",
    "InputKind",
    "SubmissionState",
    "ErrorCategory",
    "EventType",
]
