"""Rule-table validation engine for the job application form.

This module provides a ValidationEngine that derives the error map of a form
values snapshot from a declarative rule table. Each Rule is keyed by the
field it reports on and guarded by an applicability predicate, so the
position-dependent fields are simply rules that do not apply to every
position.

Every applicable rule runs on every call (no short-circuiting) and rules
never look at each other's results, so the error map does not depend on the
order of the rule table.
"""

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from jobform.errors import FieldError
from jobform.types import (
    ADDITIONAL_SKILLS,
    EMAIL,
    FULL_NAME,
    MANAGEMENT_EXPERIENCE,
    PHONE_NUMBER,
    PORTFOLIO_URL,
    POSITION,
    PREFERRED_INTERVIEW_TIME,
    RELEVANT_EXPERIENCE,
    ErrorCategory,
    Position,
)

logger = logging.getLogger(__name__)

ErrorMap = Dict[str, str]

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
PHONE_PATTERN = re.compile(r"[0-9]{10}")
URL_PATTERN = re.compile(r"https?://.*\..*", re.IGNORECASE)

MESSAGES: Dict[str, str] = {
    "full_name_required": "Full Name is required",
    "email_required": "Email is required",
    "email_invalid": "Email address is invalid",
    "phone_required": "Phone Number is required",
    "phone_invalid": "Please enter 10 digits number.",
    "relevant_experience": "Relevant Experience is required and must be greater than 0",
    "portfolio_url": "Portfolio URL is required and must be a valid URL",
    "management_experience": "Management Experience is required",
    "skills": "At least one skill must be selected",
    "interview_time": "Preferred Interview Time is required",
}


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value is False


def _is_blank(value: Any) -> bool:
    return _is_empty(value) or (isinstance(value, str) and not value.strip())


def _as_number(value: Any) -> Optional[float]:
    """Read a numeric string (or number) as a float, None if it is not one."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _always(values: Mapping[str, Any]) -> bool:
    return True


def position_in(*positions: Position) -> Callable[[Mapping[str, Any]], bool]:
    """Build an applicability predicate that holds for the given positions."""
    allowed = frozenset(positions)

    def applies(values: Mapping[str, Any]) -> bool:
        return Position.parse(values.get(POSITION)) in allowed

    return applies


Check = Callable[[Mapping[str, Any]], Optional[Tuple[ErrorCategory, str]]]


@dataclass(frozen=True)
class Rule:
    """A single validation rule.

    Attributes:
        field: Field the rule reports errors under
        check: Returns ``(category, message)`` for an invalid snapshot, None otherwise
        applies: Predicate deciding whether the rule runs for a snapshot at all
    """
    field: str
    check: Check
    applies: Callable[[Mapping[str, Any]], bool] = _always

    def evaluate(self, values: Mapping[str, Any]) -> Optional[FieldError]:
        if not self.applies(values):
            return None
        outcome = self.check(values)
        if outcome is None:
            return None
        category, message = outcome
        return FieldError(path=self.field, category=category, message=message)


def _check_full_name(values):
    if _is_blank(values.get(FULL_NAME)):
        return ErrorCategory.MISSING_REQUIRED_FIELD, MESSAGES["full_name_required"]
    return None


def _check_email(values):
    email = values.get(EMAIL)
    if _is_empty(email):
        return ErrorCategory.MISSING_REQUIRED_FIELD, MESSAGES["email_required"]
    if not EMAIL_PATTERN.search(str(email)):
        return ErrorCategory.INVALID_FORMAT, MESSAGES["email_invalid"]
    return None


def _check_phone_number(values):
    phone = values.get(PHONE_NUMBER)
    if _is_empty(phone):
        return ErrorCategory.MISSING_REQUIRED_FIELD, MESSAGES["phone_required"]
    if not PHONE_PATTERN.fullmatch(str(phone)):
        return ErrorCategory.INVALID_FORMAT, MESSAGES["phone_invalid"]
    return None


def _check_relevant_experience(values):
    years = _as_number(values.get(RELEVANT_EXPERIENCE))
    if years is None or years <= 0:
        return ErrorCategory.CONDITIONAL_REQUIREMENT, MESSAGES["relevant_experience"]
    return None


def _check_portfolio_url(values):
    url = values.get(PORTFOLIO_URL)
    if _is_empty(url):
        return ErrorCategory.CONDITIONAL_REQUIREMENT, MESSAGES["portfolio_url"]
    if not URL_PATTERN.match(str(url)):
        return ErrorCategory.INVALID_FORMAT, MESSAGES["portfolio_url"]
    return None


def _check_management_experience(values):
    if _is_empty(values.get(MANAGEMENT_EXPERIENCE)):
        return ErrorCategory.CONDITIONAL_REQUIREMENT, MESSAGES["management_experience"]
    return None


def _check_additional_skills(values):
    skills = values.get(ADDITIONAL_SKILLS)
    if not isinstance(skills, Mapping) or not any(skills.values()):
        return ErrorCategory.COLLECTION_CONSTRAINT, MESSAGES["skills"]
    return None


def _check_preferred_interview_time(values):
    if _is_empty(values.get(PREFERRED_INTERVIEW_TIME)):
        return ErrorCategory.MISSING_REQUIRED_FIELD, MESSAGES["interview_time"]
    return None


DEFAULT_RULES: Tuple[Rule, ...] = (
    Rule(FULL_NAME, _check_full_name),
    Rule(EMAIL, _check_email),
    Rule(PHONE_NUMBER, _check_phone_number),
    Rule(
        RELEVANT_EXPERIENCE,
        _check_relevant_experience,
        applies=position_in(Position.DEVELOPER, Position.DESIGNER),
    ),
    Rule(PORTFOLIO_URL, _check_portfolio_url, applies=position_in(Position.DESIGNER)),
    Rule(MANAGEMENT_EXPERIENCE, _check_management_experience, applies=position_in(Position.MANAGER)),
    Rule(ADDITIONAL_SKILLS, _check_additional_skills),
    Rule(PREFERRED_INTERVIEW_TIME, _check_preferred_interview_time),
)


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating a form values snapshot.

    Attributes:
        errors: The error map, field name -> message (empty if valid)
        field_errors: The same errors with their categories

    Examples:
        >>> result = ValidationEngine().validate({"fullName": ""})
        >>> result.is_valid
        False
        >>> result.errors["fullName"]
        'Full Name is required'
    """
    errors: ErrorMap
    field_errors: List[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "isValid": self.is_valid,
            "errors": dict(self.errors),
            "fieldErrors": [e.to_dict() for e in self.field_errors],
        }


class ValidationEngine:
    """Validation engine driven by a rule table.

    The engine holds no state besides its rules; ``validate`` is a pure
    function of the snapshot it is given.

    Attributes:
        rules: The rule table, at most one rule per field

    Examples:
        >>> engine = ValidationEngine()
        >>> result = engine.validate({
        ...     "fullName": "Ada Lovelace",
        ...     "email": "ada@example.com",
        ...     "phoneNumber": "0123456789",
        ...     "position": "Manager",
        ...     "managementExperience": "5 years",
        ...     "additionalSkills": {"JavaScript": False, "CSS": False, "Python": True},
        ...     "preferredInterviewTime": "2024-01-01T10:00",
        ... })
        >>> result.is_valid
        True
    """

    def __init__(self, rules: Iterable[Rule] = DEFAULT_RULES) -> None:
        """Initialize the engine with a rule table.

        Raises:
            ValueError: If two rules report on the same field
        """
        self.rules: Tuple[Rule, ...] = tuple(rules)
        seen = set()
        for rule in self.rules:
            if rule.field in seen:
                raise ValueError(f"Rule table has more than one rule for field '{rule.field}'")
            seen.add(rule.field)

    def validate(self, values: Mapping[str, Any]) -> ValidationResult:
        """Run every applicable rule against ``values``."""
        field_errors = [
            error for error in (rule.evaluate(values) for rule in self.rules) if error is not None
        ]
        errors = {error.path: error.message for error in field_errors}
        logger.debug("Validated form snapshot: %d error(s) %s", len(errors), sorted(errors))
        return ValidationResult(errors=errors, field_errors=field_errors)


_default_engine = ValidationEngine()


def validate(values: Mapping[str, Any]) -> ErrorMap:
    """Return the error map of ``values`` under the default rule table.

    Examples:
        >>> validate({"phoneNumber": "12345"})["phoneNumber"]
        'Please enter 10 digits number.'
    """
    return _default_engine.validate(values).errors


__all__ = [
    "ErrorMap",
    "MESSAGES",
    "Rule",
    "DEFAULT_RULES",
    "position_in",
    "ValidationResult",
    "ValidationEngine",
    "validate",
]
