import random

import pytest

from flightwatch.models.flight_status import FlightStatusLabel
from flightwatch.tracking.fallback import synthesize

from conftest import NOW

MINUTE = 60 * 1000


def test_fixed_route_and_schedule():
    status = synthesize('ZZ999', now=NOW, rng=random.Random(1))

    assert status.flight_number == 'ZZ999'
    assert status.departure_airport == 'JFK'
    assert status.arrival_airport == 'LAX'
    assert status.status is FlightStatusLabel.IN_AIR
    assert status.aircraft == 'Boeing 737-800'
    assert status.scheduled_departure == NOW - 60 * MINUTE
    assert status.estimated_arrival == NOW + 90 * MINUTE
    assert status.progress == pytest.approx(0.4)
    assert status.time_remaining == '1h 30m'
    assert status.last_updated == NOW


def test_jitter_stays_within_bounds():
    rng = random.Random(42)
    for _ in range(200):
        status = synthesize('ZZ999', now=NOW, rng=rng)
        assert abs(status.latitude - 40.712776) <= 0.05
        assert abs(status.longitude - -74.005974) <= 0.05
        assert 31500 <= status.altitude_ft <= 32500
        assert 540 <= status.speed_kmh <= 560
        assert 0.0 <= status.progress <= 1.0


def test_same_seed_same_result():
    assert synthesize('ZZ999', now=NOW, rng=random.Random(3)) == synthesize('ZZ999', now=NOW, rng=random.Random(3))


def test_defaults_without_clock_or_rng():
    status = synthesize('ZZ999')

    assert 0.0 <= status.progress <= 1.0
    assert status.time_remaining == '1h 30m'
