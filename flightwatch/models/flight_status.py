"""
Flight status values - the display-ready result of a lookup.

FlightStatus is what the tracking loop publishes and the API serializes.
EnrichmentFacts holds the route and timing data the feed never reports,
derived once per aircraft/callsign pair and then frozen.

All epochs are Unix milliseconds.
"""

from dataclasses import asdict, dataclass
from enum import Enum


class FlightStatusLabel(str, Enum):
    """
    Coarse flight status derived from a single state record.

    Evaluated in declaration order by the normalizer:
    - PARKED: on ground, under 5 knots
    - TAXIING: on ground, 5 knots or more
    - TAKING_OFF: airborne below 1000 m
    - CLIMBING: vertical rate above +1 m/s
    - DESCENDING: vertical rate below -1 m/s
    - IN_AIR: any other airborne state
    - UNKNOWN: unreachable with a well-formed record
    """
    PARKED = 'Parked'
    TAXIING = 'Taxiing'
    TAKING_OFF = 'Taking Off'
    CLIMBING = 'Climbing'
    DESCENDING = 'Descending'
    IN_AIR = 'In Air'
    UNKNOWN = 'Unknown'


class AircraftClass(str, Enum):
    """Aircraft class guessed from cruise altitude."""
    LONG_HAUL = 'Long-haul Jet (Boeing 777 / Airbus A330)'
    MID_SIZE = 'Mid-size Jet (Boeing 737 / Airbus A320)'
    REGIONAL = 'Regional Aircraft'


@dataclass(frozen=True)
class EnrichmentFacts:
    """Route facts fixed at the first sighting of an aircraft/callsign pair."""
    departure_airport: str
    arrival_airport: str
    departure_time: int
    arrival_time: int
    first_seen_at: int


@dataclass(frozen=True)
class FlightStatus:
    """Display-ready state of one flight."""
    flight_number: str
    departure_airport: str
    arrival_airport: str
    scheduled_departure: int
    estimated_arrival: int
    status: FlightStatusLabel
    aircraft: str
    latitude: float
    longitude: float
    altitude_ft: int
    speed_kmh: int
    progress: float
    time_remaining: str
    last_updated: int

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        data = asdict(self)
        data['status'] = self.status.value
        return data
