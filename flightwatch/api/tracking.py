"""
Tracking API endpoints.

Provides endpoints for:
- POST /api/tracking - Start tracking a flight (replaces any current one)
- DELETE /api/tracking - Stop tracking
- GET /api/tracking - Latest published state and tracker stats
- GET /api/tracking/history - Recorded live positions of a tracked flight
"""

import logging
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify, request

logger = logging.getLogger(__name__)

tracking_bp = Blueprint('tracking', __name__, url_prefix='/api/tracking')


def _tracker():
    return current_app.config['FLIGHT_TRACKER']


@tracking_bp.route('', methods=['POST'])
def start_tracking():
    """
    Start tracking a flight.

    Body: {"flight": "BA123"}
    """
    payload = request.get_json(silent=True) or {}
    flight_id = payload.get('flight')

    if not isinstance(flight_id, str) or not flight_id.strip():
        return jsonify({'error': 'Field "flight" is required'}), 400

    flight_id = flight_id.strip()
    _tracker().start_tracking(flight_id)

    return jsonify({'tracking': flight_id}), 202


@tracking_bp.route('', methods=['DELETE'])
def stop_tracking():
    """Stop the active tracking session, if any."""
    tracker = _tracker()
    flight_id = tracker.flight_id
    tracker.stop_tracking()

    return jsonify({'stopped': flight_id})


@tracking_bp.route('', methods=['GET'])
def get_tracking_state():
    """
    Latest published state.

    Simulated results carry "simulated": true and must be shown as such.
    """
    tracker = _tracker()

    return jsonify({
        **tracker.sink.current.to_dict(),
        'tracker': tracker.stats,
        'timestamp': datetime.now(timezone.utc).isoformat(),
    })


@tracking_bp.route('/history', methods=['GET'])
def get_tracking_history():
    """
    Recorded live track points, newest first.

    Query parameters:
    - flight: flight id (default: the currently tracked flight)
    - limit: int, max points (default 100, clamped to 1..1000)
    """
    history = current_app.config.get('TRACK_HISTORY')
    flight_id = request.args.get('flight') or _tracker().flight_id

    if not flight_id:
        return jsonify({'error': 'No flight specified and none is being tracked'}), 404

    try:
        limit = max(1, min(int(request.args.get('limit', 100)), 1000))
    except ValueError:
        return jsonify({'error': 'limit must be an integer'}), 400

    points = history.recent(flight_id, limit=limit) if history else []

    return jsonify({
        'flight_id': flight_id,
        'points': [p.to_dict() for p in points],
        'count': len(points),
    })
