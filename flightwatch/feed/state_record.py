"""
Typed access to raw OpenSky state arrays.

OpenSky state vector format (array indices):
0: icao24          - ICAO24 hex address
1: callsign        - Callsign (8 chars max)
2: origin_country  - Country of registration
3: time_position   - Unix timestamp of last position update
4: last_contact    - Unix timestamp of last message
5: longitude       - WGS84 longitude
6: latitude        - WGS84 latitude
7: baro_altitude   - Barometric altitude (meters)
8: on_ground       - Boolean
9: velocity        - Ground speed (m/s)
10: true_track     - Track angle (degrees, 0=north)
11: vertical_rate  - Vertical rate (m/s)
12: sensors        - Sensor IDs (array)
13: geo_altitude   - Geometric altitude (meters)
14: squawk         - Transponder code
15: spi            - Special position indicator
16: position_source - 0=ADS-B, 1=ASTERIX, 2=MLAT, 3=FLARM

The feed is loosely typed: any field may be null, missing from a short
array, or carry an unexpected type. Records are kept as the raw sequence
and read through StateRecord, which coerces each field and falls back to
a fixed default (0 for numbers, '' for strings, False for flags).
"""

from typing import Any, Optional, Sequence

RawStateRecord = Sequence[Any]

ICAO24 = 0
CALLSIGN = 1
ORIGIN_COUNTRY = 2
TIME_POSITION = 3
LONGITUDE = 5
LATITUDE = 6
BARO_ALTITUDE = 7
ON_GROUND = 8
VELOCITY = 9
TRUE_TRACK = 10
VERTICAL_RATE = 11


def _field(record: Optional[RawStateRecord], index: int) -> Any:
    if record is None or index >= len(record):
        return None
    return record[index]


def as_string(record: Optional[RawStateRecord], index: int, default: str = '') -> str:
    value = _field(record, index)
    return value if isinstance(value, str) else default


def as_number(record: Optional[RawStateRecord], index: int, default: float = 0.0) -> float:
    value = _field(record, index)
    # bool is an int subclass but never a valid numeric reading
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value)


def as_flag(record: Optional[RawStateRecord], index: int, default: bool = False) -> bool:
    value = _field(record, index)
    return value if isinstance(value, bool) else default


def raw_callsign(record: Optional[RawStateRecord]) -> str:
    """Trimmed callsign of a raw record, '' when absent."""
    return as_string(record, CALLSIGN).strip()


class StateRecord:
    """
    Read-only view over one raw state array.

    Never raises for malformed input; every property returns its
    documented default instead.
    """

    __slots__ = ('raw',)

    def __init__(self, raw: Optional[RawStateRecord]):
        self.raw = raw

    @property
    def icao24(self) -> str:
        return as_string(self.raw, ICAO24)

    @property
    def callsign(self) -> str:
        return raw_callsign(self.raw)

    @property
    def origin_country(self) -> str:
        return as_string(self.raw, ORIGIN_COUNTRY) or 'Unknown'

    @property
    def time_position(self) -> Optional[int]:
        """Position timestamp in seconds, None when not reported."""
        value = _field(self.raw, TIME_POSITION)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return int(value)

    @property
    def longitude(self) -> float:
        return as_number(self.raw, LONGITUDE)

    @property
    def latitude(self) -> float:
        return as_number(self.raw, LATITUDE)

    @property
    def baro_altitude(self) -> float:
        return as_number(self.raw, BARO_ALTITUDE)

    @property
    def on_ground(self) -> bool:
        return as_flag(self.raw, ON_GROUND)

    @property
    def velocity(self) -> float:
        return as_number(self.raw, VELOCITY)

    @property
    def true_track(self) -> float:
        return as_number(self.raw, TRUE_TRACK)

    @property
    def vertical_rate(self) -> float:
        return as_number(self.raw, VERTICAL_RATE)

    def __repr__(self) -> str:
        return f'<StateRecord {self.icao24 or "?"} {self.callsign or "?"}>'
