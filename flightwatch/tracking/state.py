"""
Published tracking state.

StatusSink is a single-slot, last-write-wins holder. Readers only ever
see the newest TrackingState; nothing is queued.
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from flightwatch.models.flight_status import FlightStatus

logger = logging.getLogger(__name__)


class StateKind(str, Enum):
    INITIAL = 'initial'
    LOADING = 'loading'
    SUCCESS = 'success'
    ERROR = 'error'


@dataclass(frozen=True)
class TrackingState:
    """One published value: initial, loading, success or error."""
    kind: StateKind
    flight_id: Optional[str] = None
    status: Optional[FlightStatus] = None
    simulated: bool = False
    message: Optional[str] = None

    @classmethod
    def initial(cls) -> 'TrackingState':
        return cls(StateKind.INITIAL)

    @classmethod
    def loading(cls, flight_id: str) -> 'TrackingState':
        return cls(StateKind.LOADING, flight_id=flight_id)

    @classmethod
    def success(cls, flight_id: str, status: FlightStatus, simulated: bool = False) -> 'TrackingState':
        return cls(StateKind.SUCCESS, flight_id=flight_id, status=status, simulated=simulated)

    @classmethod
    def error(cls, flight_id: str, message: str) -> 'TrackingState':
        return cls(StateKind.ERROR, flight_id=flight_id, message=message)

    def to_dict(self) -> dict:
        return {
            'state': self.kind.value,
            'flight_id': self.flight_id,
            'flight': self.status.to_dict() if self.status else None,
            'simulated': self.simulated,
            'message': self.message,
        }


class StatusSink:
    """Thread-safe latest-value holder with optional listeners."""

    def __init__(self):
        self._state = TrackingState.initial()
        self._version = 0
        self._lock = threading.Lock()
        self._listeners: List[Callable[[TrackingState], None]] = []

    def publish(self, state: TrackingState) -> None:
        with self._lock:
            self._state = state
            self._version += 1
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(state)
            except Exception as e:
                logger.error(f'Status listener error: {e}')

    @property
    def current(self) -> TrackingState:
        with self._lock:
            return self._state

    @property
    def version(self) -> int:
        """Number of publishes so far."""
        with self._lock:
            return self._version

    def add_listener(self, listener: Callable[[TrackingState], None]) -> None:
        with self._lock:
            self._listeners.append(listener)
