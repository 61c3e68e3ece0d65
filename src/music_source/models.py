from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Mapping, Optional

from .ids import SongID


@dataclass(frozen=True)
class SongInfo:
    title: str
    album: str
    cover: Optional[str] = None
    artist: str = ""
    track_number: str = ""
    year: str = ""
    genre: str = ""
    duration_seconds: Optional[float] = None
    start_seconds: float = 0.0
    bitrate_kbps: Optional[int] = None
    sample_rate_hz: Optional[int] = None
    format_ext: str = ""
    size_bytes: int = 0


Catalog = Mapping[SongID, SongInfo]


class CacheState(Enum):
    NOT_SCANNED = "not_scanned"
    SCANNED = "scanned"
    INVALIDATED = "invalidated"


class TrackStream:
    """Readable stream over the audio file that holds one track.

    The caller owns the handle and must close it. ``read`` always returns the
    bytes of the whole container, since a chapter of a compressed file has no
    byte range of its own. When ``windowed`` is true the file holds several
    tracks and consumers must seek playback to ``start_seconds`` and stop
    after ``duration_seconds``.
    """

    def __init__(
        self,
        stream: BinaryIO,
        size_bytes: int,
        path: str,
        start_seconds: float = 0.0,
        duration_seconds: Optional[float] = None,
        windowed: bool = False,
    ) -> None:
        self.stream = stream
        self.size_bytes = size_bytes
        self.path = path
        self.start_seconds = start_seconds
        self.duration_seconds = duration_seconds
        self.windowed = windowed

    def read(self, size: int = -1) -> bytes:
        return self.stream.read(size)

    def close(self) -> None:
        self.stream.close()

    @property
    def closed(self) -> bool:
        return self.stream.closed

    def __enter__(self) -> "TrackStream":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@dataclass
class LibraryMetrics:
    total_tracks: int
    total_files: int
    unique_albums: int
    tracks_with_cover: int
    total_duration_seconds: float
