"""Database models."""

from cadence.models.queue import Queue
from cadence.models.track import Track

__all__ = ["Track", "Queue"]
