"""Error types for the job application form core.

Two kinds of error live here:

- FieldError is *data*: a single form-validity problem (missing field, bad
  format, ...) produced by the validation engine. Invalid input is ordinary
  flow and is never raised.
- FormContractError and its subclasses are *exceptions*: the caller broke the
  core's contract (wrote to a path that does not exist, handed over a
  malformed snapshot, forced an illegal state transition).
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from jobform.types import ErrorCategory, SubmissionState


@dataclass(frozen=True)
class FieldError:
    """Per-field validation error details.

    Attributes:
        path: Field name the error belongs to (e.g., "email", "additionalSkills")
        category: Which kind of validity problem this is
        message: Human-readable message shown next to the field

    Examples:
        >>> err = FieldError(
        ...     path="email",
        ...     category=ErrorCategory.INVALID_FORMAT,
        ...     message="Email address is invalid",
        ... )
        >>> err.path
        'email'
    """
    path: str
    category: ErrorCategory
    message: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "path": self.path,
            "category": self.category.value if isinstance(self.category, ErrorCategory) else self.category,
            "message": self.message,
        }


class FormContractError(ValueError):
    """Base class for caller contract violations."""


class UnknownFieldPathError(FormContractError):
    """Raised when a field path does not name a field of the form.

    Attributes:
        path: The offending field path
    """

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        super().__init__(message or f"Unknown field path: '{path}'")


class InvalidFieldValueError(FormContractError):
    """Raised when a value cannot be stored at a field path.

    Attributes:
        path: The field path written to
        value: The rejected value
    """

    def __init__(self, path: str, value: Any, message: str):
        self.path = path
        self.value = value
        super().__init__(message)


class InvalidSnapshotError(FormContractError):
    """Raised when a form values snapshot does not have the expected shape.

    Attributes:
        problems: One human-readable line per shape violation
    """

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__("Invalid form snapshot: " + "; ".join(self.problems))


class InvalidStateTransitionError(FormContractError):
    """Raised when attempting an invalid submission state transition.

    Attributes:
        current_state: The current state before the attempted transition
        target_state: The target state that was attempted
    """

    def __init__(self, current_state: SubmissionState, target_state: SubmissionState, message: str):
        self.current_state = current_state
        self.target_state = target_state
        super().__init__(message)


__all__ = [
    "FieldError",
    "FormContractError",
    "UnknownFieldPathError",
    "InvalidFieldValueError",
    "InvalidSnapshotError",
    "InvalidStateTransitionError",
]
