"""
OpenSky feed access.

Fetches raw state vector snapshots and exposes typed, defaulted
access to individual records.
"""

from flightwatch.feed.opensky_client import BoundingBox, FeedError, FeedSnapshot, OpenSkyClient
from flightwatch.feed.state_record import RawStateRecord, StateRecord

__all__ = ['BoundingBox', 'FeedError', 'FeedSnapshot', 'OpenSkyClient', 'RawStateRecord', 'StateRecord']
