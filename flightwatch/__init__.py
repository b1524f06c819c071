"""
FlightWatch Backend Package.

Single-flight tracker built on the OpenSky Network feed, Flask and SQLAlchemy.

Modules:
    feed/        OpenSky REST client and raw state record access
    tracking/    Matching, enrichment, normalization, fallback and the tracking loop
    models/      SQLAlchemy ORM models (TrackPoint)
    api/         REST endpoints for tracking control and flight lookups
    history.py   Track history recording and retention
    config.py    Centralized configuration from environment variables
"""

__version__ = '1.0.0'
