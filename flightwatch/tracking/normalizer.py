"""
State normalization - raw feed record to display-ready FlightStatus.

Steps:
1. Read fields through StateRecord (typed, defaulted)
2. Classify status from ground flag, speed, altitude and vertical rate
3. Convert units (m/s -> km/h, m -> ft)
4. Fetch or create enrichment facts for the aircraft/callsign pair
5. Derive progress, remaining time and an aircraft class guess
"""

import logging
import time
from typing import Optional

from flightwatch.feed.state_record import RawStateRecord, StateRecord
from flightwatch.models.flight_status import AircraftClass, FlightStatus, FlightStatusLabel
from flightwatch.tracking.enrichment import EnrichmentCache, MINUTE_MS, cache_key

logger = logging.getLogger(__name__)

MPS_TO_KMH = 3.6
MPS_TO_KNOTS = 1.94384
METERS_TO_FEET = 3.28084

PARKED_MAX_SPEED_KTS = 5.0
TAKEOFF_MAX_ALTITUDE_M = 1000.0
LEVEL_VERTICAL_RATE_MPS = 1.0

LONG_HAUL_MIN_ALTITUDE_FT = 35000
MID_SIZE_MIN_ALTITUDE_FT = 30000


def now_ms() -> int:
    """Current Unix time in milliseconds."""
    return int(time.time() * 1000)


def classify_status(
    on_ground: bool,
    velocity_mps: float,
    altitude_m: float,
    vertical_rate_mps: float,
) -> FlightStatusLabel:
    """First matching rule wins, checked in FlightStatusLabel order."""
    speed_kts = velocity_mps * MPS_TO_KNOTS

    if on_ground:
        if speed_kts < PARKED_MAX_SPEED_KTS:
            return FlightStatusLabel.PARKED
        return FlightStatusLabel.TAXIING

    if altitude_m < TAKEOFF_MAX_ALTITUDE_M:
        return FlightStatusLabel.TAKING_OFF
    if vertical_rate_mps > LEVEL_VERTICAL_RATE_MPS:
        return FlightStatusLabel.CLIMBING
    if vertical_rate_mps < -LEVEL_VERTICAL_RATE_MPS:
        return FlightStatusLabel.DESCENDING
    return FlightStatusLabel.IN_AIR


def classify_aircraft(altitude_ft: int) -> AircraftClass:
    """Guess the aircraft class from altitude in feet."""
    if altitude_ft > LONG_HAUL_MIN_ALTITUDE_FT:
        return AircraftClass.LONG_HAUL
    if altitude_ft > MID_SIZE_MIN_ALTITUDE_FT:
        return AircraftClass.MID_SIZE
    return AircraftClass.REGIONAL


def compute_progress(departure_time: int, arrival_time: int, now: int) -> float:
    """
    Fraction of the scheduled flight elapsed, clamped to [0, 1].

    A zero or negative duration counts as no progress.
    """
    duration = arrival_time - departure_time
    if duration <= 0:
        return 0.0
    return min(1.0, max(0.0, (now - departure_time) / duration))


def format_remaining(arrival_time: int, now: int) -> str:
    """Remaining time as '{h}h {m}m', never negative."""
    remaining_minutes = max(0, (arrival_time - now) // MINUTE_MS)
    hours, minutes = divmod(remaining_minutes, 60)
    return f'{hours}h {minutes}m'


def normalize(
    record: RawStateRecord,
    requested_id: str,
    cache: EnrichmentCache,
    now: Optional[int] = None,
) -> FlightStatus:
    """Build a FlightStatus from one raw record plus cached route facts."""
    if now is None:
        now = now_ms()

    state = StateRecord(record)
    callsign = state.callsign or requested_id
    altitude_m = state.baro_altitude
    velocity = state.velocity

    status = classify_status(state.on_ground, velocity, altitude_m, state.vertical_rate)
    altitude_ft = int(altitude_m * METERS_TO_FEET)

    facts = cache.get_or_create(
        cache_key(state.icao24, callsign),
        on_ground=state.on_ground,
        country=state.origin_country,
        callsign=callsign,
        now=now,
    )

    time_position = state.time_position
    last_updated = time_position * 1000 if time_position is not None else now

    return FlightStatus(
        flight_number=callsign,
        departure_airport=facts.departure_airport,
        arrival_airport=facts.arrival_airport,
        scheduled_departure=facts.departure_time,
        estimated_arrival=facts.arrival_time,
        status=status,
        aircraft=classify_aircraft(altitude_ft).value,
        latitude=state.latitude,
        longitude=state.longitude,
        altitude_ft=altitude_ft,
        speed_kmh=int(velocity * MPS_TO_KMH),
        progress=compute_progress(facts.departure_time, facts.arrival_time, now),
        time_remaining=format_remaining(facts.arrival_time, now),
        last_updated=last_updated,
    )
