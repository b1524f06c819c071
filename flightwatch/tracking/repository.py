"""
Flight repository - turns feed snapshots into flight statuses.

Lookup flow for a requested flight id:
1. Fetch the full feed snapshot
2. Find the first record whose callsign matches
3. Optionally re-query that aircraft by ICAO24 for a fresher record
4. Normalize with cached route facts
5. Fall back to a simulated status on no match or feed failure

Feed failures never escape this layer. The outcome is reported through
FlightLookup.source so callers can tell live data from simulated data.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Protocol

from flightwatch.config import config
from flightwatch.feed.opensky_client import BoundingBox, FeedError, FeedSnapshot, OpenSkyClient
from flightwatch.feed.state_record import RawStateRecord, StateRecord, raw_callsign
from flightwatch.models.flight_status import FlightStatus
from flightwatch.tracking.enrichment import EnrichmentCache
from flightwatch.tracking.fallback import synthesize
from flightwatch.tracking.matcher import find_match
from flightwatch.tracking.normalizer import normalize, now_ms

logger = logging.getLogger(__name__)


class FeedClient(Protocol):
    """What the repository needs from a feed. OpenSkyClient satisfies it."""

    def fetch_all(self, bbox: Optional[BoundingBox] = None, time: Optional[int] = None) -> FeedSnapshot:
        ...

    def fetch_by_aircraft(self, icao24: str, time: Optional[int] = None) -> FeedSnapshot:
        ...


class LookupSource(str, Enum):
    """Where a lookup result came from."""
    LIVE = 'live'
    NO_MATCH = 'no_match'
    FETCH_FAILED = 'fetch_failed'


@dataclass(frozen=True)
class FlightLookup:
    """Outcome of a single flight lookup."""
    status: FlightStatus
    source: LookupSource
    reason: Optional[str] = None

    @property
    def simulated(self) -> bool:
        return self.source is not LookupSource.LIVE

    def to_dict(self) -> dict:
        return {
            'flight': self.status.to_dict(),
            'source': self.source.value,
            'simulated': self.simulated,
            'reason': self.reason,
        }


class FlightRepository:
    """
    Owns the feed client and the enrichment cache.

    One repository is shared by the tracker and the API so route facts
    stay consistent between tracked and one-shot lookups.
    """

    def __init__(
        self,
        client: Optional[FeedClient] = None,
        cache: Optional[EnrichmentCache] = None,
        clock: Callable[[], int] = now_ms,
        rng: Optional[random.Random] = None,
        refine_by_aircraft: Optional[bool] = None,
    ):
        self.client = client or OpenSkyClient.from_config()
        self.cache = cache if cache is not None else EnrichmentCache()
        self.clock = clock
        self.rng = rng or random.Random()
        if refine_by_aircraft is None:
            refine_by_aircraft = config.tracking.refine_by_aircraft
        self.refine_by_aircraft = refine_by_aircraft

    def get_flight_info(self, flight_id: str) -> FlightLookup:
        """
        Look up one flight by callsign.

        Always returns a status; never raises for feed problems.
        """
        try:
            snapshot = self.client.fetch_all()
        except FeedError as e:
            logger.warning(f'Feed unavailable for {flight_id}, using simulated data: {e}')
            return self._simulated(flight_id, LookupSource.FETCH_FAILED, str(e))

        record = find_match(flight_id, snapshot.states)
        if record is None:
            logger.info(f'No feed record matches {flight_id}, using simulated data')
            return self._simulated(flight_id, LookupSource.NO_MATCH)

        if self.refine_by_aircraft:
            record = self._refine(record)

        status = normalize(record, flight_id, self.cache, now=self.clock())
        logger.debug(f'Matched {flight_id} to {status.flight_number}: {status.status.value}')
        return FlightLookup(status=status, source=LookupSource.LIVE)

    def _refine(self, record: RawStateRecord) -> RawStateRecord:
        """Prefer the aircraft-specific record; keep the match if that query fails."""
        icao24 = StateRecord(record).icao24
        if not icao24:
            return record

        try:
            snapshot = self.client.fetch_by_aircraft(icao24)
        except FeedError as e:
            logger.debug(f'Aircraft query for {icao24} failed, keeping matched record: {e}')
            return record

        if snapshot.states:
            return snapshot.states[0]
        return record

    def _simulated(
        self,
        flight_id: str,
        source: LookupSource,
        reason: Optional[str] = None,
    ) -> FlightLookup:
        status = synthesize(flight_id, now=self.clock(), rng=self.rng)
        return FlightLookup(status=status, source=source, reason=reason)

    def get_flights_in_region(
        self,
        min_lat: float,
        min_lon: float,
        max_lat: float,
        max_lon: float,
    ) -> List[FlightStatus]:
        """
        Fetch and normalize every named flight inside a bounding box.

        Best effort: returns an empty list when the feed fails.
        """
        bbox = BoundingBox(lat_min=min_lat, lat_max=max_lat, lon_min=min_lon, lon_max=max_lon)
        try:
            snapshot = self.client.fetch_all(bbox=bbox)
        except FeedError as e:
            logger.warning(f'Region query failed: {e}')
            return []

        now = self.clock()
        flights = []
        for record in snapshot.states:
            callsign = raw_callsign(record)
            if callsign:
                flights.append(normalize(record, callsign, self.cache, now=now))

        logger.debug(f'Region query returned {len(flights)} flights')
        return flights
