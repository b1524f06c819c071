import threading
import time

import pytest

from flightwatch.feed.opensky_client import FeedError, FeedSnapshot

NOW = 1_700_000_000_000


def make_record(
    icao24='abc123',
    callsign='BA123 ',
    country='United Kingdom',
    time_position=1700000000,
    longitude=-0.5,
    latitude=51.5,
    altitude=10000.0,
    on_ground=False,
    velocity=250.0,
    track=90.0,
    vertical_rate=0.0,
):
    return [
        icao24,
        callsign,
        country,
        time_position,
        time_position,
        longitude,
        latitude,
        altitude,
        on_ground,
        velocity,
        track,
        vertical_rate,
        None,
        altitude,
        '1234',
        False,
        0,
    ]


class FakeFeed:
    """In-memory stand-in for OpenSkyClient."""

    def __init__(self, states=None, aircraft_states=None, error=None, aircraft_error=None):
        self.states = states or []
        self.aircraft_states = aircraft_states
        self.error = error
        self.aircraft_error = aircraft_error
        self.fetch_all_calls = []
        self.aircraft_calls = []

    def fetch_all(self, bbox=None, time=None):
        self.fetch_all_calls.append(bbox)
        if self.error:
            raise self.error
        return FeedSnapshot(time=NOW // 1000, states=list(self.states))

    def fetch_by_aircraft(self, icao24, time=None):
        self.aircraft_calls.append(icao24)
        if self.aircraft_error:
            raise self.aircraft_error
        if self.aircraft_states is None:
            return FeedSnapshot(time=NOW // 1000, states=[])
        return FeedSnapshot(time=NOW // 1000, states=list(self.aircraft_states))


def wait_for(predicate, timeout=3.0, interval=0.01):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


@pytest.fixture
def feed_error():
    return FeedError('connection refused')


@pytest.fixture
def fake_feed():
    return FakeFeed(states=[make_record()])


@pytest.fixture(autouse=True)
def no_leaked_tracker_threads():
    yield
    for thread in threading.enumerate():
        if thread.name.startswith('tracker-'):
            thread.join(timeout=2)
