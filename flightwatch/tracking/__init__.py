"""
Flight tracking core.

Matches a requested flight against the feed, enriches and normalizes
the record, falls back to simulated data, and runs the periodic loop.
"""

from flightwatch.tracking.enrichment import EnrichmentCache
from flightwatch.tracking.repository import FlightLookup, FlightRepository, LookupSource
from flightwatch.tracking.state import StateKind, StatusSink, TrackingState
from flightwatch.tracking.tracker import FlightTracker

__all__ = [
    'EnrichmentCache',
    'FlightLookup',
    'FlightRepository',
    'LookupSource',
    'StateKind',
    'StatusSink',
    'TrackingState',
    'FlightTracker',
]
