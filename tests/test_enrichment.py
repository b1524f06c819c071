import threading

from flightwatch.tracking.enrichment import (
    EnrichmentCache,
    airport_for_country,
    cache_key,
    destination_for_callsign,
)

from conftest import NOW

MINUTE = 60 * 1000
HOUR = 60 * MINUTE


def test_airport_for_known_country():
    assert airport_for_country('United States') == 'JFK'
    assert airport_for_country('Turkey') == 'IST'


def test_airport_for_unknown_country_uses_prefix():
    assert airport_for_country('Switzerland') == 'SWI'
    assert airport_for_country('UK') == 'UK'
    assert airport_for_country('Unknown') == 'UNK'


def test_destination_is_stable_for_callsign():
    # 'B'+'A'+'1'+'2'+'3' = 281 -> index 1
    assert destination_for_callsign('BA123') == 'JFK'
    assert destination_for_callsign('BA123') == destination_for_callsign('BA123')


def test_airborne_first_sighting_departed_thirty_minutes_ago():
    cache = EnrichmentCache()

    facts = cache.get_or_create('abc123-BA123', False, 'France', 'BA123', NOW)

    assert facts.departure_airport == 'CDG'
    assert facts.departure_time == NOW - 30 * MINUTE
    assert facts.arrival_time == facts.departure_time + 3 * HOUR
    assert facts.first_seen_at == NOW


def test_on_ground_first_sighting_departs_now():
    cache = EnrichmentCache()

    facts = cache.get_or_create('abc123-BA123', True, 'France', 'BA123', NOW)

    assert facts.departure_time == NOW
    assert facts.arrival_time == NOW + 3 * HOUR


def test_second_call_returns_identical_facts():
    cache = EnrichmentCache()
    first = cache.get_or_create('abc123-BA123', False, 'France', 'BA123', NOW)

    second = cache.get_or_create('abc123-BA123', True, 'Japan', 'XX999', NOW + 2 * HOUR)

    assert second == first
    assert second is first
    assert len(cache) == 1


def test_keys_are_independent():
    cache = EnrichmentCache()

    a = cache.get_or_create(cache_key('abc123', 'BA123'), False, 'France', 'BA123', NOW)
    b = cache.get_or_create(cache_key('def456', 'BA123'), True, 'Japan', 'BA123', NOW)

    assert a.departure_airport == 'CDG'
    assert b.departure_airport == 'HND'
    assert len(cache) == 2
    assert 'def456-BA123' in cache


def test_concurrent_first_sightings_create_one_entry():
    cache = EnrichmentCache()
    results = []

    def worker(i):
        results.append(cache.get_or_create('abc123-BA123', i % 2 == 0, 'France', 'BA123', NOW + i))

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(cache) == 1
    assert all(r is results[0] for r in results)
