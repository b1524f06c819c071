import random

import pytest

from flightwatch.feed.opensky_client import FeedError
from flightwatch.models.flight_status import FlightStatusLabel
from flightwatch.tracking.enrichment import EnrichmentCache
from flightwatch.tracking.fallback import synthesize
from flightwatch.tracking.repository import FlightRepository, LookupSource

from conftest import NOW, FakeFeed, make_record


def build_repository(feed, refine=False, seed=7, cache=None):
    return FlightRepository(
        client=feed,
        cache=cache,
        clock=lambda: NOW,
        rng=random.Random(seed),
        refine_by_aircraft=refine,
    )


def test_live_match():
    feed = FakeFeed(states=[make_record(callsign='LH456'), make_record(callsign='BA123 ', country='UK')])
    repository = build_repository(feed)

    lookup = repository.get_flight_info('BA123')

    assert lookup.source is LookupSource.LIVE
    assert not lookup.simulated
    assert lookup.status.flight_number == 'BA123'
    assert lookup.status.status is FlightStatusLabel.IN_AIR
    assert lookup.status.altitude_ft == 32808
    assert feed.aircraft_calls == []


def test_no_match_returns_simulated_status():
    repository = build_repository(FakeFeed(states=[make_record(callsign='BA123')]))

    lookup = repository.get_flight_info('ZZ999')

    assert lookup.source is LookupSource.NO_MATCH
    assert lookup.simulated
    assert lookup.status == synthesize('ZZ999', now=NOW, rng=random.Random(7))
    assert lookup.status.departure_airport == 'JFK'
    assert lookup.status.arrival_airport == 'LAX'
    assert lookup.status.status is FlightStatusLabel.IN_AIR


def test_feed_failure_returns_simulated_status(feed_error):
    repository = build_repository(FakeFeed(error=feed_error))

    lookup = repository.get_flight_info('BA123')

    assert lookup.source is LookupSource.FETCH_FAILED
    assert lookup.simulated
    assert lookup.reason == 'connection refused'
    assert lookup.status.arrival_airport == 'LAX'


def test_refine_prefers_aircraft_record():
    matched = make_record(callsign='BA123', altitude=10000.0)
    fresher = make_record(callsign='BA123', altitude=11000.0, vertical_rate=-4.0)
    feed = FakeFeed(states=[matched], aircraft_states=[fresher])
    repository = build_repository(feed, refine=True)

    lookup = repository.get_flight_info('BA123')

    assert feed.aircraft_calls == ['abc123']
    assert lookup.status.status is FlightStatusLabel.DESCENDING
    assert lookup.status.altitude_ft == int(11000.0 * 3.28084)


def test_refine_keeps_match_when_aircraft_query_empty():
    feed = FakeFeed(states=[make_record(callsign='BA123')], aircraft_states=[])
    repository = build_repository(feed, refine=True)

    lookup = repository.get_flight_info('BA123')

    assert lookup.source is LookupSource.LIVE
    assert lookup.status.altitude_ft == 32808


def test_refine_keeps_match_when_aircraft_query_fails(feed_error):
    feed = FakeFeed(states=[make_record(callsign='BA123')], aircraft_error=feed_error)
    repository = build_repository(feed, refine=True)

    lookup = repository.get_flight_info('BA123')

    assert lookup.source is LookupSource.LIVE
    assert lookup.status.altitude_ft == 32808


def test_unexpected_errors_propagate():
    repository = build_repository(FakeFeed(error=RuntimeError('bug')))

    with pytest.raises(RuntimeError):
        repository.get_flight_info('BA123')


def test_cache_shared_across_lookups():
    cache = EnrichmentCache()
    feed = FakeFeed(states=[make_record(callsign='BA123')])
    repository = build_repository(feed, cache=cache)

    first = repository.get_flight_info('BA123')
    second = repository.get_flight_info('BA123')

    assert len(cache) == 1
    assert first.status.scheduled_departure == second.status.scheduled_departure


def test_region_query_normalizes_named_flights():
    feed = FakeFeed(states=[
        make_record(icao24='aaa111', callsign='BA123 '),
        make_record(icao24='bbb222', callsign='   '),
        make_record(icao24='ccc333', callsign=None),
        make_record(icao24='ddd444', callsign='LH456', on_ground=True, velocity=0.0),
    ])
    repository = build_repository(feed)

    flights = repository.get_flights_in_region(50.0, -1.0, 52.0, 1.0)

    assert [f.flight_number for f in flights] == ['BA123', 'LH456']
    assert flights[1].status is FlightStatusLabel.PARKED

    bbox = feed.fetch_all_calls[0]
    assert bbox.to_params() == {'lamin': 50.0, 'lamax': 52.0, 'lomin': -1.0, 'lomax': 1.0}


def test_region_query_empty_on_failure(feed_error):
    repository = build_repository(FakeFeed(error=feed_error))

    assert repository.get_flights_in_region(50.0, -1.0, 52.0, 1.0) == []


def test_lookup_to_dict():
    repository = build_repository(FakeFeed())

    data = repository.get_flight_info('ZZ999').to_dict()

    assert data['source'] == 'no_match'
    assert data['simulated'] is True
    assert data['flight']['flight_number'] == 'ZZ999'
