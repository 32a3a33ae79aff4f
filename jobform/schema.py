"""Snapshot shape checking for the job application form.

The shape of a form values snapshot is described as a JSON Schema (Draft 7)
and checked with the jsonschema library. This is a contract check on what the
caller hands to the core, not form validation: a snapshot can have a perfect
shape and still be full of empty fields.
"""

import logging
from typing import Any, Dict, Sequence

import jsonschema
from jsonschema import Draft7Validator

from jobform.errors import InvalidSnapshotError
from jobform.types import (
    ADDITIONAL_SKILLS,
    DEFAULT_SKILLS,
    FIELD_NAMES,
    POSITION,
    RELEVANT_EXPERIENCE,
    Position,
)

logger = logging.getLogger(__name__)


def build_snapshot_schema(skills: Sequence[str] = DEFAULT_SKILLS) -> Dict[str, Any]:
    """Build the JSON Schema describing a complete form snapshot.

    Args:
        skills: The fixed skill names of the ``additionalSkills`` group

    Returns:
        A Draft 7 JSON Schema

    Examples:
        >>> schema = build_snapshot_schema(["Go"])
        >>> schema["properties"]["additionalSkills"]["required"]
        ['Go']
    """
    properties: Dict[str, Any] = {name: {"type": "string"} for name in FIELD_NAMES}
    properties[POSITION] = {"type": "string", "enum": [p.value for p in Position]}
    # <input type="number"> hands over strings, callers building snapshots by hand use numbers
    properties[RELEVANT_EXPERIENCE] = {"type": ["string", "number"]}
    properties[ADDITIONAL_SKILLS] = {
        "type": "object",
        "properties": {skill: {"type": "boolean"} for skill in skills},
        "required": list(skills),
        "additionalProperties": False,
    }
    return {
        "type": "object",
        "properties": properties,
        "required": list(FIELD_NAMES),
        "additionalProperties": False,
    }


def initial_values(skills: Sequence[str] = DEFAULT_SKILLS) -> Dict[str, Any]:
    """Return the blank snapshot a new form session starts from.

    Examples:
        >>> values = initial_values()
        >>> values["position"]
        ''
        >>> values["additionalSkills"]
        {'JavaScript': False, 'CSS': False, 'Python': False}
    """
    values: Dict[str, Any] = {name: "" for name in FIELD_NAMES}
    values[ADDITIONAL_SKILLS] = {skill: False for skill in skills}
    return values


def check_snapshot(values: Any, skills: Sequence[str] = DEFAULT_SKILLS) -> None:
    """Check that a snapshot has the full form shape.

    Args:
        values: The snapshot to check
        skills: The fixed skill names of the ``additionalSkills`` group

    Raises:
        InvalidSnapshotError: Listing every shape violation found
    """
    validator = Draft7Validator(build_snapshot_schema(skills))
    problems = [_describe(error) for error in sorted(validator.iter_errors(values), key=str)]
    if problems:
        logger.warning("Rejected form snapshot with %d problem(s)", len(problems))
        raise InvalidSnapshotError(problems)


def _describe(error: jsonschema.ValidationError) -> str:
    """Turn a jsonschema error into a one-line description."""
    path = ".".join(str(p) for p in error.path)

    if error.validator == "required":
        missing = error.message.split("'")[1] if "'" in error.message else "field"
        full_path = f"{path}.{missing}" if path else missing
        return f"'{full_path}' is missing"

    if error.validator == "additionalProperties":
        where = f"'{path}'" if path else "snapshot"
        return f"{where} has unexpected entries: {error.message}"

    if error.validator == "type":
        where = f"'{path}'" if path else "snapshot"
        return f"{where} must be of type {error.validator_value}, got {type(error.instance).__name__}"

    if error.validator == "enum":
        return f"'{path}' must be one of {error.validator_value}, got {error.instance!r}"

    return f"'{path}' is invalid: {error.message}"


__all__ = [
    "build_snapshot_schema",
    "initial_values",
    "check_snapshot",
]
