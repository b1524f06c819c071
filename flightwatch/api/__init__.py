"""
REST API blueprints.

- tracking: start/stop the tracking loop and read the published state
- flights: one-shot flight lookups and region queries
"""

from flightwatch.api.flights import flights_bp
from flightwatch.api.tracking import tracking_bp

__all__ = ['flights_bp', 'tracking_bp']
