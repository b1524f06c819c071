"""
Tracking loop - periodic lookup of one flight.

State machine per tracker:
    Idle --start_tracking--> Running --stop_tracking/close--> Idle

Starting while Running stops the current session first, so at most one
worker thread publishes at any time. Each cycle performs a single lookup
and publishes the result; an unexpected error publishes an error state
and retries after a short backoff. Only cancellation ends the loop.

Publishing is guarded by a session identity check under the tracker
lock. Once stop_tracking has detached a session, that session can never
publish again, even if its worker is still blocked inside a fetch.
"""

import logging
import threading
from typing import Callable, List, Optional

from flightwatch.config import config
from flightwatch.tracking.repository import FlightLookup, FlightRepository
from flightwatch.tracking.state import StatusSink, TrackingState

logger = logging.getLogger(__name__)


class TrackingSession:
    """One start_tracking call: its flight id, worker and cancel token."""

    def __init__(self, flight_id: str):
        self.flight_id = flight_id
        self.cancelled = threading.Event()
        self.thread: Optional[threading.Thread] = None
        self.cycle_count = 0
        self.error_count = 0

    def cancel(self) -> None:
        self.cancelled.set()

    def join(self, timeout: Optional[float]) -> bool:
        """Wait for the worker to exit. Returns False if it is still running."""
        if self.thread is None or self.thread is threading.current_thread():
            return True
        self.thread.join(timeout=timeout)
        return not self.thread.is_alive()


class FlightTracker:
    """
    Owns the active tracking session and publishes into a StatusSink.

    Can be shared between threads; start/stop are safe to call from
    request handlers.
    """

    def __init__(
        self,
        repository: FlightRepository,
        sink: Optional[StatusSink] = None,
        poll_interval: Optional[float] = None,
        error_backoff: Optional[float] = None,
        stop_timeout: Optional[float] = None,
    ):
        self.repository = repository
        self.sink = sink or StatusSink()
        self.poll_interval = poll_interval if poll_interval is not None else config.tracking.poll_interval
        self.error_backoff = error_backoff if error_backoff is not None else config.tracking.error_backoff
        self.stop_timeout = stop_timeout if stop_timeout is not None else config.tracking.stop_timeout

        self._session: Optional[TrackingSession] = None
        self._lock = threading.RLock()

        # Callbacks for external integration
        self._on_update_callbacks: List[Callable[[str, FlightLookup], None]] = []

    def add_update_callback(self, callback: Callable[[str, FlightLookup], None]) -> None:
        """
        Register callback to be invoked after each successful cycle.

        Callback receives the requested flight id and the lookup result.
        Registering the same callback twice has no effect.
        """
        if callback not in self._on_update_callbacks:
            self._on_update_callbacks.append(callback)

    @property
    def flight_id(self) -> Optional[str]:
        with self._lock:
            return self._session.flight_id if self._session else None

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._session is not None

    def start_tracking(self, flight_id: str) -> None:
        """Stop any current session, then start tracking flight_id."""
        flight_id = flight_id.strip()
        if not flight_id:
            raise ValueError('flight_id must not be blank')

        session = TrackingSession(flight_id)
        session.thread = threading.Thread(
            target=self._run,
            args=(session,),
            name=f'tracker-{flight_id}',
            daemon=True,
        )

        with self._lock:
            previous = self._detach()
            self._session = session
            self.sink.publish(TrackingState.loading(flight_id))
            session.thread.start()

        self._join(previous)
        logger.info(f'Tracking started for {flight_id} (interval={self.poll_interval}s)')

    def stop_tracking(self) -> None:
        """Cancel the active session and wait for its worker to exit."""
        with self._lock:
            previous = self._detach()

        if previous is not None:
            self._join(previous)
            logger.info(f'Tracking stopped for {previous.flight_id}')

    def close(self) -> None:
        """Owner teardown."""
        self.stop_tracking()

    def _detach(self) -> Optional[TrackingSession]:
        """Cancel and clear the active session. Caller holds the lock."""
        previous = self._session
        self._session = None
        if previous is not None:
            previous.cancel()
        return previous

    def _join(self, session: Optional[TrackingSession]) -> None:
        if session is None:
            return
        if not session.join(self.stop_timeout):
            # Still blocked in a fetch; it can no longer publish
            logger.warning(f'Tracking worker for {session.flight_id} did not exit within {self.stop_timeout}s')

    def _is_current(self, session: TrackingSession) -> bool:
        """Caller holds the lock."""
        return self._session is session and not session.cancelled.is_set()

    def _publish(self, session: TrackingSession, state: TrackingState) -> bool:
        with self._lock:
            if not self._is_current(session):
                return False
            self.sink.publish(state)
            return True

    def _notify(self, session: TrackingSession, lookup: FlightLookup) -> None:
        """
        Run update callbacks for a published lookup.

        The session is re-checked before each callback, so none starts
        once stop_tracking has detached the session.
        """
        for callback in list(self._on_update_callbacks):
            with self._lock:
                if not self._is_current(session):
                    logger.debug(f'Skipping update callbacks for stopped session {session.flight_id}')
                    return
            try:
                callback(session.flight_id, lookup)
            except Exception as e:
                logger.error(f'Update callback error: {e}')

    def run_cycle(self, session: TrackingSession) -> float:
        """
        Execute one lookup-and-publish cycle.

        Returns the delay before the next cycle.
        """
        session.cycle_count += 1
        try:
            lookup = self.repository.get_flight_info(session.flight_id)
        except Exception as e:
            session.error_count += 1
            logger.exception(f'Tracking cycle for {session.flight_id} failed')
            self._publish(session, TrackingState.error(
                session.flight_id,
                f'Tracking error: {e}. Will retry...',
            ))
            return self.error_backoff

        published = self._publish(session, TrackingState.success(
            session.flight_id,
            lookup.status,
            simulated=lookup.simulated,
        ))

        if published:
            self._notify(session, lookup)

        return self.poll_interval

    def _run(self, session: TrackingSession) -> None:
        logger.debug(f'Tracking worker started for {session.flight_id}')

        while not session.cancelled.is_set():
            delay = self.run_cycle(session)
            session.cancelled.wait(delay)

        logger.debug(f'Tracking worker exited for {session.flight_id}')

    @property
    def stats(self) -> dict:
        """Get tracking statistics."""
        with self._lock:
            session = self._session
            return {
                'flight_id': session.flight_id if session else None,
                'running': session is not None,
                'cycle_count': session.cycle_count if session else 0,
                'error_count': session.error_count if session else 0,
                'poll_interval': self.poll_interval,
            }
