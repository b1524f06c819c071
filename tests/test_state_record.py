from flightwatch.feed.state_record import StateRecord

from conftest import make_record


def test_reads_fields_by_index():
    state = StateRecord(make_record())

    assert state.icao24 == 'abc123'
    assert state.callsign == 'BA123'
    assert state.origin_country == 'United Kingdom'
    assert state.time_position == 1700000000
    assert state.longitude == -0.5
    assert state.latitude == 51.5
    assert state.baro_altitude == 10000.0
    assert state.on_ground is False
    assert state.velocity == 250.0
    assert state.vertical_rate == 0.0


def test_defaults_for_nulls():
    state = StateRecord([None] * 17)

    assert state.icao24 == ''
    assert state.callsign == ''
    assert state.origin_country == 'Unknown'
    assert state.time_position is None
    assert state.latitude == 0.0
    assert state.baro_altitude == 0.0
    assert state.on_ground is False
    assert state.velocity == 0.0


def test_defaults_for_mistyped_values():
    record = make_record(icao24=123, altitude='high', on_ground='yes', velocity=True)
    state = StateRecord(record)

    assert state.icao24 == ''
    assert state.baro_altitude == 0.0
    assert state.on_ground is False
    assert state.velocity == 0.0


def test_integer_numbers_are_accepted():
    state = StateRecord(make_record(altitude=9000, velocity=200))

    assert state.baro_altitude == 9000.0
    assert state.velocity == 200.0


def test_short_array_uses_defaults():
    state = StateRecord(['abc123', 'BA123'])

    assert state.callsign == 'BA123'
    assert state.vertical_rate == 0.0
    assert state.on_ground is False
