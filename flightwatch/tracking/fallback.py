"""
Fallback synthesis for flights the feed cannot provide.

Produces a plausible JFK -> LAX status, one hour into a two and a half
hour flight, with position, altitude and speed jittered around fixed
values so consecutive cycles appear to move. Never fails.

Results are fictitious; callers must surface them as simulated.
"""

import random
from typing import Optional

from flightwatch.models.flight_status import FlightStatus, FlightStatusLabel
from flightwatch.tracking.enrichment import HOUR_MS, MINUTE_MS
from flightwatch.tracking.normalizer import compute_progress, format_remaining, now_ms

SIMULATED_DEPARTURE = 'JFK'
SIMULATED_ARRIVAL = 'LAX'
SIMULATED_AIRCRAFT = 'Boeing 737-800'

BASE_LATITUDE = 40.712776
BASE_LONGITUDE = -74.005974
BASE_ALTITUDE_FT = 32000
BASE_SPEED_KMH = 550

POSITION_JITTER_DEG = 0.05
ALTITUDE_JITTER_FT = 500
SPEED_JITTER_KMH = 10


def synthesize(
    requested_id: str,
    now: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> FlightStatus:
    """Build a simulated in-air status for requested_id."""
    if now is None:
        now = now_ms()
    rng = rng or random.Random()

    departure_time = now - HOUR_MS
    arrival_time = now + 90 * MINUTE_MS

    return FlightStatus(
        flight_number=requested_id,
        departure_airport=SIMULATED_DEPARTURE,
        arrival_airport=SIMULATED_ARRIVAL,
        scheduled_departure=departure_time,
        estimated_arrival=arrival_time,
        status=FlightStatusLabel.IN_AIR,
        aircraft=SIMULATED_AIRCRAFT,
        latitude=BASE_LATITUDE + rng.uniform(-POSITION_JITTER_DEG, POSITION_JITTER_DEG),
        longitude=BASE_LONGITUDE + rng.uniform(-POSITION_JITTER_DEG, POSITION_JITTER_DEG),
        altitude_ft=BASE_ALTITUDE_FT + int(rng.uniform(-ALTITUDE_JITTER_FT, ALTITUDE_JITTER_FT)),
        speed_kmh=BASE_SPEED_KMH + int(rng.uniform(-SPEED_JITTER_KMH, SPEED_JITTER_KMH)),
        progress=compute_progress(departure_time, arrival_time, now),
        time_remaining=format_remaining(arrival_time, now),
        last_updated=now,
    )
