from __future__ import annotations

from .models import Catalog, LibraryMetrics


def summarize(songs: Catalog) -> LibraryMetrics:
    total_tracks = len(songs)
    total_files = len({song_id.path for song_id in songs})
    unique_albums = len({(s.artist, s.album) for s in songs.values()})
    tracks_with_cover = sum(1 for s in songs.values() if s.cover)
    total_duration = sum(s.duration_seconds or 0.0 for s in songs.values())

    return LibraryMetrics(
        total_tracks=total_tracks,
        total_files=total_files,
        unique_albums=unique_albums,
        tracks_with_cover=tracks_with_cover,
        total_duration_seconds=round(total_duration, 2),
    )


def human_duration(seconds: float) -> str:
    minutes, secs = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours}:{minutes:02d}:{secs:02d}"
