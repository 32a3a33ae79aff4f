"""Submission state machine for the job application form.

This module implements the controller that runs a submit attempt: validate the
submitted snapshot, publish the resulting error map, and fire the success
callback when the attempt came out clean.

States:
- idle: nothing pending
- attempt_recorded: an attempt was validated; errors are visible to the UI

The machine has no terminal state. A clean attempt passes through
attempt_recorded and returns to idle once the success callback has run; a
failed attempt stays in attempt_recorded until the next attempt. The callback
is tied to the outcome of one ``attempt()`` call: editing values afterwards
never fires it again.

Usage:
    >>> from jobform.state_machine import SubmissionController
    >>> submitted = []
    >>> controller = SubmissionController(on_submit_success=submitted.append)
    >>> result = controller.attempt({"fullName": ""})
    >>> controller.state
    <SubmissionState.ATTEMPT_RECORDED: 'attempt_recorded'>
    >>> submitted
    []
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, Dict, List, Mapping, Optional, Set
import logging

from jobform.errors import InvalidStateTransitionError
from jobform.events import EventEmitter, FormEvent
from jobform.form_state import FormState
from jobform.paths import FormValues
from jobform.types import ADDITIONAL_SKILLS, EventType, SubmissionState
from jobform.validation import ValidationEngine

logger = logging.getLogger(__name__)

DEFAULT_MAX_EVENTS = 1000


# Maps each state to the set of states it can transition to
VALID_TRANSITIONS: Dict[SubmissionState, Set[SubmissionState]] = {
    SubmissionState.IDLE: {
        SubmissionState.ATTEMPT_RECORDED,
    },
    SubmissionState.ATTEMPT_RECORDED: {
        SubmissionState.IDLE,
        SubmissionState.ATTEMPT_RECORDED,
    },
}


SubmitCallback = Callable[[FormValues], Any]


@dataclass(frozen=True)
class AttemptResult:
    """Outcome of one submit attempt.

    Attributes:
        values: The snapshot that was submitted
        errors: Error map produced by validating ``values``
        state: Controller state once the attempt was fully handled
        callback_fired: Whether the success callback ran for this attempt
    """
    values: FormValues
    errors: Dict[str, str] = field(default_factory=dict)
    state: SubmissionState = SubmissionState.IDLE
    callback_fired: bool = False

    @property
    def clean(self) -> bool:
        """True if the attempt produced no errors."""
        return not self.errors


class SubmissionController:
    """Runs submit attempts and gates the success callback.

    Attributes:
        state: Current state of the submission state machine
        errors: Error map of the most recent attempt
        last_attempt_clean: Whether the most recent attempt was clean (None before any)

    Examples:
        >>> controller = SubmissionController(on_submit_success=print)
        >>> controller.state
        <SubmissionState.IDLE: 'idle'>
        >>> controller.can_transition_to(SubmissionState.ATTEMPT_RECORDED)
        True
        >>> controller.can_transition_to(SubmissionState.IDLE)
        False
    """

    def __init__(
        self,
        on_submit_success: SubmitCallback,
        form: Optional[FormState] = None,
        engine: Optional[ValidationEngine] = None,
        emitter: Optional[EventEmitter] = None,
        max_events: Optional[int] = DEFAULT_MAX_EVENTS,
    ):
        """Initialize the controller.

        Args:
            on_submit_success: Called with the submitted values, once per clean attempt
            form: Optional FormState whose errors each attempt replaces, and whose
                values are submitted when ``attempt`` is called without values
            engine: Validation engine; the default rule table if omitted
            emitter: Optional emitter that receives every event recorded
            max_events: Most recent events kept for ``get_events``; None keeps all
        """
        self._on_submit_success = on_submit_success
        self.form = form
        self.engine = engine or ValidationEngine()
        self._emitter = emitter
        self.state = SubmissionState.IDLE
        self.errors: Dict[str, str] = {}
        self.last_attempt_clean: Optional[bool] = None
        self._events: Deque[FormEvent] = deque(maxlen=max_events)

    def can_transition_to(self, target_state: SubmissionState) -> bool:
        """Check if transition to target state is valid."""
        return target_state in VALID_TRANSITIONS.get(self.state, set())

    def attempt(self, values: Optional[Mapping[str, Any]] = None) -> AttemptResult:
        """Run one submit attempt.

        Validates ``values`` (or the bound form's current values), replaces the
        stored error map, and on a clean result invokes the success callback
        exactly once before returning to idle. Invalid input is not an error
        here: it just produces a non-empty error map.

        Args:
            values: Snapshot to submit; defaults to the bound form's values

        Returns:
            AttemptResult describing the attempt

        Raises:
            ValueError: If no values are given and no form is bound
        """
        if values is None:
            if self.form is None:
                raise ValueError("attempt() needs values when no form is bound")
            values = self.form.values
        snapshot = _copy_snapshot(values)

        result = self.engine.validate(snapshot)
        self.errors = dict(result.errors)
        if self.form is not None:
            self.form.replace_errors(self.errors)

        self._transition_to(SubmissionState.ATTEMPT_RECORDED)
        self.last_attempt_clean = result.is_valid
        self._record(EventType.SUBMISSION_ATTEMPTED)

        if not result.is_valid:
            logger.debug("Submit attempt rejected: %s", sorted(self.errors))
            self._record(
                EventType.VALIDATION_FAILED,
                {"errors": dict(self.errors), "fieldErrors": [e.to_dict() for e in result.field_errors]},
            )
            return AttemptResult(values=snapshot, errors=dict(self.errors), state=self.state)

        self._record(EventType.VALIDATION_PASSED)
        try:
            self._on_submit_success(_copy_snapshot(snapshot))
        finally:
            self._transition_to(SubmissionState.IDLE)
        logger.info("Form submitted successfully")
        self._record(EventType.SUBMISSION_SUCCEEDED, {"values": _copy_snapshot(snapshot)})
        return AttemptResult(values=snapshot, state=self.state, callback_fired=True)

    def get_events(self) -> List[FormEvent]:
        """Get the recorded events (at most ``max_events``), in chronological order."""
        return list(self._events)

    def clear_events(self) -> None:
        """Drop all recorded events. State and errors are kept."""
        self._events.clear()

    def _transition_to(self, target_state: SubmissionState) -> None:
        if not self.can_transition_to(target_state):
            raise InvalidStateTransitionError(
                current_state=self.state,
                target_state=target_state,
                message=(
                    f"Invalid state transition: cannot transition from "
                    f"'{self.state.value}' to '{target_state.value}'"
                ),
            )
        self.state = target_state

    def _record(self, event_type: EventType, payload: Optional[Dict[str, Any]] = None) -> None:
        event = FormEvent.create(event_type, self.state, payload)
        self._events.append(event)
        if self._emitter is not None:
            self._emitter.emit(event)


def _copy_snapshot(values: Mapping[str, Any]) -> FormValues:
    snapshot = dict(values)
    if isinstance(snapshot.get(ADDITIONAL_SKILLS), Mapping):
        snapshot[ADDITIONAL_SKILLS] = dict(snapshot[ADDITIONAL_SKILLS])
    return snapshot


__all__ = [
    "SubmissionController",
    "AttemptResult",
    "VALID_TRANSITIONS",
    "DEFAULT_MAX_EVENTS",
]
