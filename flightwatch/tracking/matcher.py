"""
Callsign matching against a feed snapshot.

A record matches when its trimmed callsign contains the requested id
(case-insensitive), or when both are equal once every whitespace
character is removed and case is folded. The first match in feed order
wins; there is no ranking among multiple candidates.
"""

import re
from typing import Iterable, Optional

from flightwatch.feed.state_record import RawStateRecord, raw_callsign

_WHITESPACE = re.compile(r'\s+')


def normalize_flight_number(value: str) -> str:
    """Strip all whitespace and uppercase, e.g. ' ba 123 ' -> 'BA123'."""
    return _WHITESPACE.sub('', value).upper()


def callsign_matches(callsign: str, requested_id: str) -> bool:
    """Check one trimmed callsign against a requested flight id."""
    if not requested_id or not requested_id.strip():
        return False
    if requested_id.lower() in callsign.lower():
        return True
    return normalize_flight_number(callsign) == normalize_flight_number(requested_id)


def find_match(
    requested_id: str,
    records: Optional[Iterable[RawStateRecord]],
) -> Optional[RawStateRecord]:
    """Return the first record whose callsign matches, or None."""
    if not records:
        return None

    for record in records:
        if callsign_matches(raw_callsign(record), requested_id):
            return record

    return None
