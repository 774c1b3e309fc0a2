"""Sample catalog shared by the test modules."""

# Ids are fixed so tests can name them
CATALOG_TRACK_IDS = [1, 2, 3, 5, 7, 9, 10, 20, 30, 40]
MISSING_TRACK_ID = 999


def make_track(track_id: int, **overrides) -> dict:
    """Catalog row as a dict, in the shape TrackResponse accepts."""
    track = {
        "id": track_id,
        "title": f"Song {track_id}",
        "artist": f"Artist {track_id % 3}",
        "album": f"Album {track_id % 2}",
        "duration": 180 + track_id,
        "cover_url": f"https://cdn.example.com/covers/{track_id}.jpg",
        "audio_url": f"https://cdn.example.com/audio/{track_id}.mp3",
    }
    track.update(overrides)
    return track
