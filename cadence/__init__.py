"""Cadence: per-user playback queue backend."""

__version__ = "0.1.0"
