from __future__ import annotations

import csv
from pathlib import Path

from .models import Catalog


TRACK_COLUMNS = [
    "id",
    "file_path",
    "index",
    "title",
    "album",
    "artist",
    "track_number",
    "year",
    "genre",
    "cover",
    "format_ext",
    "start_seconds",
    "duration_seconds",
    "bitrate_kbps",
    "sample_rate_hz",
]


def export_tracks_csv(path: Path, songs: Catalog) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8", errors="surrogateescape") as f:
        writer = csv.DictWriter(f, fieldnames=TRACK_COLUMNS)
        writer.writeheader()
        for song_id in sorted(songs):
            s = songs[song_id]
            writer.writerow(
                {
                    "id": song_id.encode(),
                    "file_path": song_id.path,
                    "index": song_id.index,
                    "title": s.title,
                    "album": s.album,
                    "artist": s.artist,
                    "track_number": s.track_number,
                    "year": s.year,
                    "genre": s.genre,
                    "cover": s.cover or "",
                    "format_ext": s.format_ext,
                    "start_seconds": s.start_seconds,
                    "duration_seconds": s.duration_seconds,
                    "bitrate_kbps": s.bitrate_kbps,
                    "sample_rate_hz": s.sample_rate_hz,
                }
            )
