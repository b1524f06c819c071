"""
OpenSky Network API client.

Handles communication with the OpenSky REST API, including:
- Authentication (optional but recommended for higher rate limits)
- Bounding box queries for geographic filtering
- Single-aircraft queries by ICAO24 address
- Rate limiting compliance

No retries happen here. Every transport, HTTP or decode problem is
raised as FeedError so callers can treat them uniformly.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests
from requests.auth import HTTPBasicAuth

from flightwatch.config import config
from flightwatch.feed.state_record import RawStateRecord

logger = logging.getLogger(__name__)


class FeedError(Exception):
    """Raised when the feed cannot be reached or returns an unusable body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class BoundingBox:
    """
    Geographic bounding box for API queries.

    OpenSky expects: lamin, lomin, lamax, lomax
    (latitude min, longitude min, latitude max, longitude max)
    """
    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float

    def to_params(self) -> dict:
        """Convert to OpenSky API query parameters."""
        return {
            'lamin': self.lat_min,
            'lamax': self.lat_max,
            'lomin': self.lon_min,
            'lomax': self.lon_max,
        }


@dataclass
class FeedSnapshot:
    """One response from /states/all: server time plus raw state arrays."""
    time: int
    states: List[RawStateRecord] = field(default_factory=list)


class OpenSkyClient:
    """
    Client for OpenSky Network API.

    Handles:
    - GET requests to /states/all endpoint
    - Optional authentication for higher rate limits
    - Bounding box and ICAO24 filtering
    - Rate limiting (internal tracking)
    """

    def __init__(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        base_url: str = 'https://opensky-network.org/api',
        timeout: float = 30,
        min_interval: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.auth = None
        if username and password:
            self.auth = HTTPBasicAuth(username, password)
            logger.info('OpenSky client initialized with authentication')
        else:
            logger.warning('OpenSky client running without authentication (lower rate limits)')

        self.session = session or requests.Session()
        self.last_request_time: float = 0
        if min_interval is None:
            min_interval = 5.0 if self.auth else 10.0
        self._min_interval = min_interval

    @classmethod
    def from_config(cls) -> 'OpenSkyClient':
        """Create client from application configuration."""
        return cls(
            username=config.opensky.username,
            password=config.opensky.password,
            base_url=config.opensky.base_url,
            timeout=config.opensky.timeout_seconds,
            min_interval=config.opensky.rate_limit_seconds,
        )

    def _wait_for_rate_limit(self) -> None:
        """
        Enforce minimum interval between requests.

        OpenSky rate limits:
        - Anonymous: ~10 seconds between requests
        - Authenticated: ~5 seconds between requests
        """
        elapsed = time.time() - self.last_request_time
        if elapsed < self._min_interval:
            sleep_time = self._min_interval - elapsed
            logger.debug(f'Rate limiting: sleeping {sleep_time:.1f}s')
            time.sleep(sleep_time)

    def fetch_all(
        self,
        bbox: Optional[BoundingBox] = None,
        time: Optional[int] = None,
    ) -> FeedSnapshot:
        """
        Fetch current state vectors, optionally limited to a bounding box.

        Args:
            bbox: Optional bounding box to filter by geography
            time: Optional epoch seconds for a historical snapshot

        Raises:
            FeedError on network, HTTP or decode errors
        """
        params: Dict[str, Any] = {}
        if bbox:
            params.update(bbox.to_params())
        if time is not None:
            params['time'] = time
        return self._get_states(params)

    def fetch_by_aircraft(self, icao24: str, time: Optional[int] = None) -> FeedSnapshot:
        """Fetch the state vector of a single aircraft by ICAO24 address."""
        params: Dict[str, Any] = {'icao24': icao24.strip().lower()}
        if time is not None:
            params['time'] = time
        return self._get_states(params)

    def _get_states(self, params: Dict[str, Any]) -> FeedSnapshot:
        self._wait_for_rate_limit()

        url = f'{self.base_url}/states/all'
        logger.debug(f'Fetching states: {url} params={params}')

        try:
            response = self.session.get(
                url,
                params=params,
                auth=self.auth,
                timeout=self.timeout,
            )
            self.last_request_time = time.time()

            response.raise_for_status()
            data = response.json()

        except requests.exceptions.Timeout as e:
            logger.error('OpenSky API timeout')
            raise FeedError(f'OpenSky request timed out: {e}') from e
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            if status_code == 429:
                logger.warning('OpenSky rate limit exceeded')
            else:
                logger.error(f'OpenSky API error: {status_code}')
            raise FeedError(f'OpenSky returned HTTP {status_code}', status_code) from e
        except requests.exceptions.RequestException as e:
            logger.error(f'OpenSky request failed: {e}')
            raise FeedError(f'OpenSky request failed: {e}') from e
        except ValueError as e:
            logger.error(f'OpenSky response is not valid JSON: {e}')
            raise FeedError(f'Undecodable OpenSky response: {e}') from e

        return self._parse_snapshot(data)

    @staticmethod
    def _parse_snapshot(data: Any) -> FeedSnapshot:
        if not isinstance(data, dict):
            raise FeedError(f'Unexpected OpenSky payload type: {type(data).__name__}')

        api_time = data.get('time')
        if isinstance(api_time, bool) or not isinstance(api_time, (int, float)):
            api_time = time.time()

        states_raw = data.get('states') or []
        if not isinstance(states_raw, list):
            raise FeedError('OpenSky "states" field is not a list')

        states = [s for s in states_raw if isinstance(s, list)]
        logger.info(f'Received {len(states)} state vectors from OpenSky')

        return FeedSnapshot(time=int(api_time), states=states)
