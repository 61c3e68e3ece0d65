"""Pytest fixtures: fake decoders and music trees built under tmp_path."""

from __future__ import annotations

import wave
from pathlib import Path

import pytest

from music_source.errors import DecodeError, SongNotFoundError
from music_source.ids import SongID
from music_source.metadata import DecoderSet
from music_source.models import SongInfo, TrackStream
from music_source.scanner import DirectoryScanner


class FakeDecoder:
    """Decodes ``.fake`` files whose text lists one title per line.

    A line ``-`` stands for a track with no title. A file whose first line
    is ``!error`` fails to decode; an empty file yields no tracks.
    """

    extensions = frozenset({".fake"})

    def __init__(self) -> None:
        self.opened: list[str] = []

    def decode(self, path, opener):
        stream, size = opener()
        with stream:
            self.opened.append(path)
            lines = stream.read().decode("utf-8").splitlines()
        if lines and lines[0] == "!error":
            raise DecodeError(f"broken file {path}")
        return [SongInfo(title="" if line == "-" else line, album="", size_bytes=size) for line in lines]

    def open_track(self, path, index, opener):
        songs = self.decode(path, opener)
        if not 0 <= index < len(songs):
            raise SongNotFoundError(SongID(path, str(index)))
        stream, size = opener()
        return TrackStream(stream, size, path)


class CountingScanner(DirectoryScanner):
    def __init__(self, decoders=None) -> None:
        super().__init__(decoders)
        self.scans = 0

    def scan(self, root):
        self.scans += 1
        return super().scan(root)


@pytest.fixture
def fake_decoder():
    return FakeDecoder()


@pytest.fixture
def decoders(fake_decoder):
    return DecoderSet([fake_decoder])


@pytest.fixture
def counting_scanner(decoders):
    return CountingScanner(decoders)


@pytest.fixture
def music_tree(tmp_path):
    """Create a small library.

    Layout:
        Album A/cover.jpg
        Album A/one.fake        (titled track)
        Album A/two.fake        (two untitled tracks)
        Album B/three.fake      (one untitled track, no cover)
        Album B/notes.txt
        broken.fake             (decode error)
        empty.fake              (no tracks)
    """
    album_a = tmp_path / "Album A"
    album_a.mkdir()
    (album_a / "cover.jpg").write_bytes(b"\xff\xd8")
    (album_a / "one.fake").write_text("First Song\n", encoding="utf-8")
    (album_a / "two.fake").write_text("-\n-\n", encoding="utf-8")

    album_b = tmp_path / "Album B"
    album_b.mkdir()
    (album_b / "three.fake").write_text("-\n", encoding="utf-8")
    (album_b / "notes.txt").write_text("not audio", encoding="utf-8")

    (tmp_path / "broken.fake").write_text("!error\n", encoding="utf-8")
    (tmp_path / "empty.fake").write_bytes(b"")
    return tmp_path


@pytest.fixture
def write_wav():
    def _write(path: Path, seconds: float = 0.5, rate: int = 8000) -> Path:
        with wave.open(str(path), "wb") as w:
            w.setnchannels(1)
            w.setsampwidth(2)
            w.setframerate(rate)
            w.writeframes(b"\x00\x00" * int(seconds * rate))
        return path

    return _write
