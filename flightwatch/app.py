"""
FlightWatch Flask Application.

Main entry point for the web application. Initializes:
- Database schema
- Flight repository and tracking loop
- Track history recording
- API routes

Usage:
    python -m flightwatch.app

Or with gunicorn:
    gunicorn 'flightwatch.app:create_app()'
"""

import atexit
import logging
import os
from typing import Optional

from flask import Flask
from flask_cors import CORS

from flightwatch.config import config
from flightwatch.models import init_db
from flightwatch.api import flights_bp, tracking_bp
from flightwatch.history import TrackHistory
from flightwatch.tracking import FlightRepository, FlightTracker

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def create_app(
    repository: Optional[FlightRepository] = None,
    tracker: Optional[FlightTracker] = None,
    history: Optional[TrackHistory] = None,
    init_database: bool = True,
) -> Flask:
    """
    Application factory for Flask.

    Args:
        repository: Flight repository (built from config if None)
        tracker: Tracking loop owner (built around repository if None)
        history: Track history store (default database if None)
        init_database: Whether to create tables on the default engine.
                       Set to False for testing.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Configuration
    app.config['SECRET_KEY'] = config.secret_key

    # Enable CORS for API endpoints
    CORS(app, resources={r'/api/*': {'origins': '*'}})

    if init_database:
        logger.info('Initializing database...')
        init_db()

    repository = repository or FlightRepository()
    tracker = tracker or FlightTracker(repository)
    history = history or TrackHistory()

    # Record every live cycle of the tracked flight
    tracker.add_update_callback(history.record)

    app.config['FLIGHT_REPOSITORY'] = repository
    app.config['FLIGHT_TRACKER'] = tracker
    app.config['TRACK_HISTORY'] = history

    # Register API blueprints
    app.register_blueprint(tracking_bp)
    app.register_blueprint(flights_bp)

    @app.route('/health')
    def health():
        """Simple health check endpoint."""
        return {'status': 'ok'}

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(404)
    def not_found(e):
        return {'error': 'Not found'}, 404

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f'Server error: {e}')
        return {'error': 'Internal server error'}, 500

    return app


def run_development_server():
    """Run the development server."""
    app = create_app()
    tracker = app.config['FLIGHT_TRACKER']
    atexit.register(tracker.close)

    # Get port from environment or default
    port = int(os.environ.get('PORT', 5000))

    logger.info(f'Starting FlightWatch on http://localhost:{port}')

    initial_flight = os.environ.get('TRACK_FLIGHT')
    if initial_flight:
        tracker.start_tracking(initial_flight)

    try:
        app.run(
            host='0.0.0.0',
            port=port,
            debug=config.debug,
            use_reloader=False,  # Disable reloader to prevent duplicate tracking threads
        )
    finally:
        tracker.close()


if __name__ == '__main__':
    run_development_server()
