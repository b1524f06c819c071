"""
Track history - append-only record of live tracking cycles.

Registered as a FlightTracker update callback. Simulated lookups are
skipped so the history only ever contains feed data.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy import delete, desc, select
from sqlalchemy.orm import sessionmaker

from flightwatch.config import config
from flightwatch.models.base import SessionLocal, get_session
from flightwatch.models.track_point import TrackPoint
from flightwatch.tracking.repository import FlightLookup

logger = logging.getLogger(__name__)


class TrackHistory:
    """Stores and queries TrackPoints for tracked flights."""

    def __init__(
        self,
        session_factory: Optional[sessionmaker] = None,
        retention_hours: Optional[int] = None,
    ):
        self.session_factory = session_factory or SessionLocal
        self.retention_hours = retention_hours if retention_hours is not None else config.retention.hours
        self._record_count = 0

    def record(self, flight_id: str, lookup: FlightLookup) -> bool:
        """Append one point. Returns False when the lookup was simulated."""
        if lookup.simulated:
            return False

        status = lookup.status
        point = TrackPoint(
            flight_id=flight_id,
            callsign=status.flight_number,
            timestamp=status.last_updated,
            latitude=status.latitude,
            longitude=status.longitude,
            altitude_ft=status.altitude_ft,
            speed_kmh=status.speed_kmh,
            status=status.status.value,
            progress=status.progress,
        )

        with get_session(self.session_factory) as session:
            session.add(point)

        self._record_count += 1

        # Cleanup periodically, not every cycle
        if self._record_count % 60 == 0:
            self.cleanup()

        return True

    def recent(self, flight_id: str, limit: int = 100) -> List[TrackPoint]:
        """Newest points first; limit is clamped to at least one row."""
        stmt = (
            select(TrackPoint)
            .where(TrackPoint.flight_id == flight_id)
            .order_by(desc(TrackPoint.timestamp), desc(TrackPoint.id))
            .limit(max(1, limit))
        )
        with self.session_factory() as session:
            return list(session.scalars(stmt))

    def cleanup(self, now: Optional[datetime] = None) -> int:
        """
        Remove points older than the retention window.

        Returns count of rows deleted.
        """
        now = now or datetime.now(timezone.utc)
        cutoff = now - timedelta(hours=self.retention_hours)

        with get_session(self.session_factory) as session:
            result = session.execute(
                delete(TrackPoint).where(TrackPoint.recorded_at < cutoff)
            )
            deleted = result.rowcount

        if deleted:
            logger.info(f'Cleanup: removed {deleted} old track points')
        return deleted
