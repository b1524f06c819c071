"""
Data models for FlightWatch.

- FlightStatus / EnrichmentFacts: in-memory values produced by a lookup
- TrackPoint: SQLAlchemy table holding the history of the tracked flight
"""

from flightwatch.models.base import Base, engine, SessionLocal, init_db, get_session
from flightwatch.models.flight_status import AircraftClass, EnrichmentFacts, FlightStatus, FlightStatusLabel
from flightwatch.models.track_point import TrackPoint

__all__ = [
    'Base',
    'engine',
    'SessionLocal',
    'init_db',
    'get_session',
    'AircraftClass',
    'EnrichmentFacts',
    'FlightStatus',
    'FlightStatusLabel',
    'TrackPoint',
]
