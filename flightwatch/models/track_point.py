"""
TrackPoint model - time-series history of a tracked flight.

Every live tracking cycle appends one row, enabling flight path
reconstruction for the currently tracked flight. Simulated results are
never stored.

Schema optimized for:
- Append-only inserts (one per cycle)
- Time-range queries per requested flight id
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import String, Float, Integer, BigInteger, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column

from flightwatch.models.base import Base


class TrackPoint(Base):
    """
    One published live status of a tracked flight.

    flight_id is the identifier the user asked for; callsign is what the
    feed actually reported for the matched aircraft.
    """

    __tablename__ = 'track_points'

    # Using Integer for SQLite compatibility (autoincrement only works with INTEGER)
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment='Surrogate key'
    )

    flight_id: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        index=True,
        comment='Requested flight identifier'
    )

    callsign: Mapped[Optional[str]] = mapped_column(
        String(16),
        nullable=True,
        comment='Callsign reported by the feed'
    )

    timestamp: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        comment='Position time in Unix milliseconds'
    )

    latitude: Mapped[float] = mapped_column(Float, comment='Latitude in decimal degrees')
    longitude: Mapped[float] = mapped_column(Float, comment='Longitude in decimal degrees')
    altitude_ft: Mapped[int] = mapped_column(Integer, comment='Barometric altitude in feet')
    speed_kmh: Mapped[int] = mapped_column(Integer, comment='Ground speed in km/h')

    status: Mapped[str] = mapped_column(
        String(16),
        comment='Flight status label'
    )

    progress: Mapped[float] = mapped_column(
        Float,
        comment='Estimated route progress 0..1'
    )

    recorded_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        index=True,  # Index for retention cleanup
        comment='Insert timestamp'
    )

    __table_args__ = (
        Index('ix_track_points_flight_time', 'flight_id', 'timestamp'),
    )

    def __repr__(self) -> str:
        return f'<TrackPoint {self.flight_id} @ {self.timestamp} {self.status}>'

    def to_dict(self) -> dict:
        return {
            'flight_id': self.flight_id,
            'callsign': self.callsign,
            'timestamp': self.timestamp,
            'position': {
                'latitude': self.latitude,
                'longitude': self.longitude,
            },
            'altitude_ft': self.altitude_ft,
            'speed_kmh': self.speed_kmh,
            'status': self.status,
            'progress': self.progress,
            'recorded_at': self.recorded_at.isoformat() if self.recorded_at else None,
        }
