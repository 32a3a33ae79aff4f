"""Form state container for the job application form.

FormState owns the current form values snapshot and the current error map.
Values change only through ``update``, which coerces the raw input according
to the kind of control it came from and hands the write to a
FieldPathResolver. FormState never validates; errors are replaced wholesale
by whoever ran validation (normally the SubmissionController).

Usage:
    >>> from jobform.form_state import FormState
    >>> form = FormState()
    >>> values = form.update("additionalSkills.Python", "on", "checkbox")
    >>> values["additionalSkills"]["Python"]
    True
    >>> form.update("relevantExperience", "3", "number")["relevantExperience"]
    '3'
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from jobform.events import EventEmitter, FormEvent
from jobform.paths import FieldPathResolver, FormValues
from jobform.schema import check_snapshot, initial_values as blank_values
from jobform.types import ADDITIONAL_SKILLS, DEFAULT_SKILLS, EventType, InputKind

logger = logging.getLogger(__name__)


class FormState:
    """Holds the values and errors of one form session.

    Attributes:
        values: Current values snapshot (replaced, never mutated, on update)
        errors: Current error map, as of the last submit attempt
        resolver: FieldPathResolver used for reads and writes
    """

    def __init__(
        self,
        initial_values: Optional[Mapping[str, Any]] = None,
        skills: Iterable[str] = DEFAULT_SKILLS,
        emitter: Optional[EventEmitter] = None,
    ):
        """Initialize the form state.

        Args:
            initial_values: Full starting snapshot; the blank form if omitted
            skills: The fixed skill names of the ``additionalSkills`` group
            emitter: Optional emitter notified of every field update

        Raises:
            InvalidSnapshotError: If ``initial_values`` does not have the form's shape
        """
        skills = tuple(skills)
        if initial_values is None:
            values = blank_values(skills)
        else:
            check_snapshot(initial_values, skills)
            values = dict(initial_values)
            values[ADDITIONAL_SKILLS] = dict(initial_values[ADDITIONAL_SKILLS])

        self.resolver = FieldPathResolver(skills)
        self.values: FormValues = values
        self.errors: Dict[str, str] = {}
        self._emitter = emitter

    def get(self, path: str) -> Any:
        """Read the current value at ``path``."""
        return self.resolver.get(self.values, path)

    def update(
        self,
        path: str,
        raw_input: Any,
        input_kind: Union[InputKind, str] = InputKind.TEXT,
    ) -> FormValues:
        """Write one field from a UI input event.

        Checkbox input is coerced to bool; every other kind is stored exactly
        as given (numeric-looking strings stay strings).

        Args:
            path: Field path, bare name or ``additionalSkills.<skill>``
            raw_input: The raw value from the input control
            input_kind: Kind of control the value came from

        Returns:
            The new values snapshot, which is also the new ``values``

        Raises:
            UnknownFieldPathError: If ``path`` does not name a field or skill
            InvalidFieldValueError: If a skill is written from a non-checkbox
                input with a value that is not a bool
            ValueError: If ``input_kind`` is not a known InputKind
        """
        kind = InputKind(input_kind)
        value = bool(raw_input) if kind is InputKind.CHECKBOX else raw_input

        self.values = self.resolver.set(self.values, path, value)
        logger.debug("Updated field %s (%s)", path, kind.value)

        if self._emitter is not None:
            self._emitter.emit(
                FormEvent.create(
                    EventType.FIELD_UPDATED,
                    payload={"path": path, "inputKind": kind.value, "value": value},
                )
            )
        return self.values

    def replace_errors(self, errors: Mapping[str, str]) -> None:
        """Replace the whole error map. Errors are never merged."""
        self.errors = dict(errors)


__all__ = [
    "FormState",
]
