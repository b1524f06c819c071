"""
Flight data API endpoints.

Provides endpoints for:
- GET /api/flights/<flight_id> - One-shot lookup of a flight by callsign
- GET /api/flights/region - All named flights inside a bounding box

Neither endpoint touches the tracking loop.
"""

import logging
import time
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify, request

logger = logging.getLogger(__name__)

flights_bp = Blueprint('flights', __name__, url_prefix='/api/flights')

REGION_PARAMS = ('lamin', 'lomin', 'lamax', 'lomax')


@flights_bp.route('/region', methods=['GET'])
def get_flights_in_region():
    """
    List flights inside a bounding box.

    Query parameters (all required):
    - lamin, lomin, lamax, lomax: float degrees

    Returns an empty list when the feed is unavailable.
    """
    start_time = time.perf_counter()

    try:
        lamin, lomin, lamax, lomax = (float(request.args[name]) for name in REGION_PARAMS)
    except KeyError as e:
        return jsonify({'error': f'Missing query parameter {e.args[0]}'}), 400
    except ValueError:
        return jsonify({'error': 'Bounding box parameters must be numbers'}), 400

    if lamin > lamax or lomin > lomax:
        return jsonify({'error': 'Bounding box minimums must not exceed maximums'}), 400

    repository = current_app.config['FLIGHT_REPOSITORY']
    flights = repository.get_flights_in_region(lamin, lomin, lamax, lomax)

    query_time_ms = (time.perf_counter() - start_time) * 1000

    return jsonify({
        'flights': [f.to_dict() for f in flights],
        'count': len(flights),
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'query_time_ms': round(query_time_ms, 2),
    })


@flights_bp.route('/<flight_id>', methods=['GET'])
def get_flight(flight_id: str):
    """
    Look up a single flight by callsign.

    Always returns a flight; "simulated" is true when the feed had no
    match or was unavailable.
    """
    start_time = time.perf_counter()

    repository = current_app.config['FLIGHT_REPOSITORY']
    lookup = repository.get_flight_info(flight_id.strip())

    query_time_ms = (time.perf_counter() - start_time) * 1000

    return jsonify({
        **lookup.to_dict(),
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'query_time_ms': round(query_time_ms, 2),
    })
