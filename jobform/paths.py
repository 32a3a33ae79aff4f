"""Field path resolution for form value snapshots.

A field path is either a bare field name (``"email"``) or a two-segment dotted
path into the skills group (``"additionalSkills.CSS"``). Writes never mutate
the snapshot they are given: they return a new snapshot, and a write into the
skills group also replaces the group mapping itself so the old and new
snapshots never share a mutable skills dict.
"""

from typing import Any, Dict, Iterable, Optional, Tuple

from jobform.errors import InvalidFieldValueError, UnknownFieldPathError
from jobform.types import ADDITIONAL_SKILLS, DEFAULT_SKILLS, FIELD_NAMES

FormValues = Dict[str, Any]


class FieldPathResolver:
    """Reads and writes values at a field path.

    Attributes:
        skills: The fixed skill names of the ``additionalSkills`` group

    Examples:
        >>> from jobform.schema import initial_values
        >>> resolver = FieldPathResolver()
        >>> before = initial_values()
        >>> after = resolver.set(before, "additionalSkills.CSS", True)
        >>> resolver.get(after, "additionalSkills.CSS")
        True
        >>> resolver.get(before, "additionalSkills.CSS")
        False
    """

    def __init__(self, skills: Iterable[str] = DEFAULT_SKILLS):
        self.skills: Tuple[str, ...] = tuple(skills)

    def split(self, path: str) -> Tuple[str, Optional[str]]:
        """Split and check a field path.

        Returns:
            ``(field, skill)``, where ``skill`` is None for a bare field name

        Raises:
            UnknownFieldPathError: If the path does not name a form field or skill
        """
        if not isinstance(path, str):
            raise UnknownFieldPathError(str(path), f"Field path must be a string, got {type(path).__name__}")

        segments = path.split(".")
        if len(segments) == 1:
            if path not in FIELD_NAMES:
                raise UnknownFieldPathError(path)
            return path, None

        if len(segments) == 2 and segments[0] == ADDITIONAL_SKILLS:
            skill = segments[1]
            if skill not in self.skills:
                raise UnknownFieldPathError(
                    path,
                    f"Unknown skill '{skill}' in field path '{path}'. "
                    f"Known skills are: {', '.join(self.skills)}",
                )
            return ADDITIONAL_SKILLS, skill

        raise UnknownFieldPathError(path)

    def get(self, values: FormValues, path: str) -> Any:
        """Read the value at ``path``.

        A bare ``additionalSkills`` read returns a copy of the skills mapping.
        """
        field_name, skill = self.split(path)
        if skill is None:
            value = values.get(field_name)
            return dict(value) if isinstance(value, dict) else value
        return (values.get(ADDITIONAL_SKILLS) or {}).get(skill, False)

    def set(self, values: FormValues, path: str, value: Any) -> FormValues:
        """Return a new snapshot with ``value`` written at ``path``.

        Raises:
            UnknownFieldPathError: For unknown paths, and for bare writes to the
                skills group (address a skill as ``additionalSkills.<name>``)
            InvalidFieldValueError: For a skill value that is not a bool
        """
        field_name, skill = self.split(path)
        updated = dict(values)

        if skill is None:
            if field_name == ADDITIONAL_SKILLS:
                raise UnknownFieldPathError(
                    path,
                    f"'{ADDITIONAL_SKILLS}' is a group; write a single skill as "
                    f"'{ADDITIONAL_SKILLS}.<name>'",
                )
            updated[field_name] = value
            return updated

        if not isinstance(value, bool):
            raise InvalidFieldValueError(
                path,
                value,
                f"Skill '{path}' takes a bool, got {type(value).__name__} {value!r}",
            )
        skills = dict(values.get(ADDITIONAL_SKILLS) or {})
        skills[skill] = value
        updated[ADDITIONAL_SKILLS] = skills
        return updated


__all__ = [
    "FormValues",
    "FieldPathResolver",
]
