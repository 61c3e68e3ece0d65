from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Optional, Protocol

import mutagen
from mutagen import MutagenError

from .errors import DecodeError, SongNotFoundError
from .ids import SongID
from .models import SongInfo, TrackStream

logger = logging.getLogger(__name__)

Opener = Callable[[], tuple[BinaryIO, int]]

AUDIO_EXTENSIONS = {
    ".mp3",
    ".flac",
    ".wav",
    ".m4a",
    ".m4b",
    ".aac",
    ".ogg",
    ".opus",
    ".wma",
    ".aiff",
}


def file_opener(path: str | Path) -> Opener:
    """Return a callable that opens ``path`` only when invoked."""

    def _open() -> tuple[BinaryIO, int]:
        logger.debug("open file %s", path)
        f = open(path, "rb")
        try:
            size = Path(path).stat().st_size
        except OSError:
            f.close()
            raise
        return f, size

    return _open


class Decoder(Protocol):
    extensions: frozenset[str]

    def decode(self, path: str, opener: Opener) -> list[SongInfo]:
        ...

    def open_track(self, path: str, index: int, opener: Opener) -> TrackStream:
        ...


def _first(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        if not value:
            return ""
        return str(value[0]).strip()
    return str(value).strip()


def _tag_value(tags: object, *keys: str) -> str:
    if tags is None:
        return ""

    for key in keys:
        value = None
        try:
            value = tags.get(key)
        except (KeyError, ValueError):
            value = None
        if value:
            return _first(value)

    return ""


def _chapters(audio: object, length: Optional[float]) -> list[tuple[float, Optional[float], str]]:
    """Return (start, duration, title) for each chapter mark in ``audio``."""
    chapters = getattr(audio, "chapters", None)
    if not chapters:
        return []

    marks = [(float(getattr(c, "start", 0.0)), _first(getattr(c, "title", ""))) for c in chapters]
    marks.sort(key=lambda m: m[0])

    result: list[tuple[float, Optional[float], str]] = []
    for i, (start, title) in enumerate(marks):
        if i + 1 < len(marks):
            end: Optional[float] = marks[i + 1][0]
        else:
            end = length
        duration = max(0.0, end - start) if end is not None else None
        result.append((start, duration, title))
    return result


class MutagenDecoder:
    """Reads tags and stream info through mutagen.

    A file yields one track, or one track per chapter mark when the
    container carries two or more chapters.
    """

    extensions = frozenset(AUDIO_EXTENSIONS)

    def _load(self, path: str, opener: Opener) -> tuple[object, int]:
        stream, size = opener()
        with stream:
            try:
                audio = mutagen.File(stream, easy=True)
            except MutagenError as exc:
                raise DecodeError(f"Cannot read tags from '{path}': {exc}") from exc
        return audio, size

    def decode(self, path: str, opener: Opener) -> list[SongInfo]:
        audio, size = self._load(path, opener)
        if audio is None:
            return []

        info = getattr(audio, "info", None)
        length = getattr(info, "length", None)
        duration_seconds = float(length) if isinstance(length, (int, float)) else None
        sample_rate_hz = getattr(info, "sample_rate", None)
        bitrate = getattr(info, "bitrate", None)

        tags = getattr(audio, "tags", None)
        base = SongInfo(
            title=_tag_value(tags, "title", "TITLE", "TIT2", "©nam"),
            album=_tag_value(tags, "album", "ALBUM", "TALB", "©alb"),
            artist=_tag_value(tags, "artist", "albumartist", "ARTIST", "TPE1", "©ART"),
            track_number=_tag_value(tags, "tracknumber", "TRACKNUMBER", "TRCK", "trkn"),
            year=_tag_value(tags, "date", "year", "DATE", "TDRC", "©day"),
            genre=_tag_value(tags, "genre", "GENRE", "TCON", "©gen"),
            duration_seconds=duration_seconds,
            bitrate_kbps=int(bitrate / 1000) if isinstance(bitrate, (int, float)) else None,
            sample_rate_hz=int(sample_rate_hz) if isinstance(sample_rate_hz, (int, float)) else None,
            format_ext=Path(path).suffix.lower().lstrip("."),
            size_bytes=size,
        )

        chapters = _chapters(audio, duration_seconds)
        if len(chapters) < 2:
            return [base]

        songs = []
        for start, duration, title in chapters:
            songs.append(replace(base, title=title, start_seconds=start, duration_seconds=duration))
        return songs

    def open_track(self, path: str, index: int, opener: Opener) -> TrackStream:
        songs = self.decode(path, opener)
        if not 0 <= index < len(songs):
            raise SongNotFoundError(SongID(path, str(index)))
        song = songs[index]
        stream, size = opener()
        return TrackStream(
            stream,
            size,
            path,
            start_seconds=song.start_seconds,
            duration_seconds=song.duration_seconds,
            windowed=len(songs) > 1,
        )


class DecoderSet:
    """Chooses a decoder for a file by its extension."""

    def __init__(self, decoders: Iterable[Decoder] = ()) -> None:
        self._by_ext: dict[str, Decoder] = {}
        for decoder in decoders:
            self.add(decoder)

    def add(self, decoder: Decoder) -> None:
        for ext in decoder.extensions:
            self._by_ext[ext.lower()] = decoder

    def decoder_for(self, path: str | Path) -> Optional[Decoder]:
        path = Path(path)
        # macOS AppleDouble sidecar files (._*) are metadata blobs, not audio.
        if path.name.startswith("._"):
            return None
        return self._by_ext.get(path.suffix.lower())


def default_decoders() -> DecoderSet:
    return DecoderSet([MutagenDecoder()])
