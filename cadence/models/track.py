"""Track model for the song catalog."""

from cadence.core.database import Base
from datetime import datetime
from sqlalchemy import Boolean, Column, DateTime, Integer, String


class Track(Base):
    """Catalog entry with playable metadata."""

    __tablename__ = "tracks"

    id = Column(Integer, primary_key=True, index=True)

    # Metadata
    title = Column(String, nullable=False)
    artist = Column(String, nullable=False, index=True)
    album = Column(String, index=True)
    duration = Column(Integer)  # in seconds

    # Media locators
    cover_url = Column(String, nullable=False, default="")
    audio_url = Column(String, nullable=False, default="")
    youtube_id = Column(String)
    is_example = Column(Boolean, default=False, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self) -> dict:
        """Convert track to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "artist": self.artist,
            "album": self.album,
            "duration": self.duration,
            "cover_url": self.cover_url or "",
            "audio_url": self.audio_url or "",
            "youtube_id": self.youtube_id,
            "is_example": bool(self.is_example),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
