"""Event system for the job application form.

This module provides the event data structures and event emitter used to
report what happens in a form session: field updates, submit attempts,
validation outcomes and successful submissions. The rendering layer
subscribes to these to refresh per-field messages; the controller keeps
them as an append-only audit trail.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional
import logging
import uuid

from .types import EventType, SubmissionState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormEvent:
    """A single event in a form session.

    Attributes:
        event_id: Unique event identifier (e.g., "evt_3f2a...")
        type: Event type from EventType enum
        ts: UTC timestamp when the event occurred
        state: Submission state after this event (None for events outside the
            submission state machine, such as field updates)
        payload: Optional event-specific data (field path, error map, ...)

    Examples:
        >>> event = FormEvent.create(
        ...     EventType.VALIDATION_FAILED,
        ...     SubmissionState.ATTEMPT_RECORDED,
        ...     payload={"errors": {"fullName": "Full Name is required"}},
        ... )
        >>> event.type
        <EventType.VALIDATION_FAILED: 'validation.failed'>
    """
    event_id: str
    type: EventType
    ts: datetime
    state: Optional[SubmissionState] = None
    payload: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        """Normalize string enum values."""
        if isinstance(self.state, str) and not isinstance(self.state, SubmissionState):
            object.__setattr__(self, "state", SubmissionState(self.state))
        if isinstance(self.type, str) and not isinstance(self.type, EventType):
            object.__setattr__(self, "type", EventType(self.type))

    @classmethod
    def create(
        cls,
        event_type: EventType,
        state: Optional[SubmissionState] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> "FormEvent":
        """Create an event stamped with a fresh id and the current UTC time."""
        return cls(
            event_id=f"evt_{uuid.uuid4().hex[:16]}",
            type=event_type,
            ts=datetime.now(timezone.utc),
            state=state,
            payload=payload,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization.

        Timestamp is formatted as ISO 8601 string.
        """
        result: Dict[str, Any] = {
            "eventId": self.event_id,
            "type": self.type.value,
            "ts": self.ts.isoformat(),
        }
        if self.state is not None:
            result["state"] = self.state.value
        if self.payload is not None:
            result["payload"] = self.payload
        return result


EventListener = Callable[[FormEvent], None]


class EventEmitter:
    """Event emitter for managing event listeners and dispatching events.

    Listeners are called synchronously in registration order, type-specific
    listeners first, then wildcard listeners. A listener that raises is
    logged and skipped; the remaining listeners still run.

    Examples:
        >>> emitter = EventEmitter()
        >>> seen = []
        >>> emitter.on(EventType.FIELD_UPDATED, seen.append)
        >>> emitter.emit(FormEvent.create(EventType.FIELD_UPDATED))
        >>> len(seen)
        1
    """

    def __init__(self):
        self._listeners: Dict[EventType, List[EventListener]] = {}
        self._any_listeners: List[EventListener] = []

    def on(self, event_type: EventType, listener: EventListener) -> None:
        """Subscribe to a specific event type."""
        self._listeners.setdefault(event_type, []).append(listener)

    def on_any(self, listener: EventListener) -> None:
        """Subscribe to all event types."""
        self._any_listeners.append(listener)

    def off(self, event_type: EventType, listener: EventListener) -> None:
        """Unsubscribe from a specific event type. Unknown listeners are ignored."""
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def off_any(self, listener: EventListener) -> None:
        """Unsubscribe from the wildcard subscription. Unknown listeners are ignored."""
        if listener in self._any_listeners:
            self._any_listeners.remove(listener)

    def emit(self, event: FormEvent) -> None:
        """Dispatch an event to all registered listeners."""
        for listener in self._listeners.get(event.type, []) + self._any_listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("Listener %r failed on event %s", listener, event.type.value)

    def clear(self) -> None:
        """Remove all event listeners."""
        self._listeners.clear()
        self._any_listeners.clear()

    def listener_count(self, event_type: Optional[EventType] = None) -> int:
        """Count registered listeners, for one type or (with None) all of them."""
        if event_type is not None:
            return len(self._listeners.get(event_type, []))
        return len(self._any_listeners) + sum(len(ls) for ls in self._listeners.values())


__all__ = [
    "FormEvent",
    "EventListener",
    "EventEmitter",
]
