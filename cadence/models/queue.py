"""Queue model for the per-user playback queue."""

from cadence.core.database import Base
from datetime import datetime
from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String

REPEAT_MODES = ("off", "all", "one")


class Queue(Base):
    """One playback queue per user: an ordered list of track ids plus a cursor."""

    __tablename__ = "queues"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), nullable=False, unique=True, index=True)

    # Ordered track ids; the same id may appear more than once
    queue_order = Column(JSON, nullable=False, default=list)

    # Cursor into queue_order, may be out of range until clamped
    current_position = Column(Integer, nullable=False, default=0)
    current_track_id = Column(Integer, ForeignKey("tracks.id", ondelete="SET NULL"))

    # Playback flags
    is_playing = Column(Boolean, nullable=False, default=False)
    shuffle = Column(Boolean, nullable=False, default=False)
    repeat = Column(String, nullable=False, default="off")  # off, all, one

    version = Column(Integer, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __mapper_args__ = {"version_id_col": version}

    @property
    def order(self) -> list[int]:
        """Track ids in queue order as a fresh list."""
        return [int(track_id) for track_id in (self.queue_order or [])]

    def to_dict(self) -> dict:
        """Convert queue record to dictionary."""
        return {
            "user_id": self.user_id,
            "queue_order": self.order,
            "current_position": self.current_position,
            "current_track_id": self.current_track_id,
            "is_playing": bool(self.is_playing),
            "shuffle": bool(self.shuffle),
            "repeat": self.repeat,
            "version": self.version,
        }
