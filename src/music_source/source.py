"""Directory-backed music source with a lazily refreshed catalog.

The catalog starts out NOT_SCANNED. ``list`` scans on first use and then
serves the cached catalog until ``invalidate`` or ``refresh`` is called. A
scan that finds nothing still counts as a scan, so an empty directory is not
rescanned on every query.

Scans are serialized per source. The catalog itself is a read-only mapping
that is swapped by reference, so readers always see either the previous or
the new catalog in full.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from types import MappingProxyType
from typing import Optional, Sequence, Union

from .errors import ConfigError, InvalidSongIDError, SongNotFoundError, UnsupportedFormatError
from .ids import SongID
from .metadata import file_opener
from .models import CacheState, Catalog, SongInfo, TrackStream
from .scanner import DirectoryScanner

logger = logging.getLogger(__name__)

SongRef = Union[SongID, str]


def _as_song_id(song_id: SongRef) -> SongID:
    if isinstance(song_id, SongID):
        return song_id
    try:
        return SongID.decode(song_id)
    except InvalidSongIDError:
        # Text that no scan could have issued names no song.
        raise SongNotFoundError(song_id) from None


class DirectorySource:
    def __init__(self, path: str | Path, scanner: Optional[DirectoryScanner] = None) -> None:
        self.path = os.path.abspath(path)
        self.scanner = scanner if scanner is not None else DirectoryScanner()
        self._songs: Catalog = MappingProxyType({})
        self._state = CacheState.NOT_SCANNED
        self._state_lock = threading.Lock()
        self._scan_lock = threading.Lock()

    @classmethod
    def from_params(cls, params: Sequence[str], scanner: Optional[DirectoryScanner] = None) -> "DirectorySource":
        """Build a source from its configuration parameters: ``[directory]``.

        The directory is opened once to check that it is usable.
        """
        if len(params) != 1:
            raise ConfigError(
                f"Expected one parameter, got {len(params)}",
                "Pass the music directory as the only parameter",
            )
        path = os.path.abspath(params[0])
        try:
            with os.scandir(path):
                pass
        except OSError as exc:
            raise ConfigError(f"Cannot open directory '{path}': {exc.strerror or exc}") from exc
        return cls(path, scanner=scanner)

    def key(self) -> str:
        return self.path

    @property
    def state(self) -> CacheState:
        with self._state_lock:
            return self._state

    def _snapshot(self) -> tuple[CacheState, Catalog]:
        with self._state_lock:
            return self._state, self._songs

    def _rescan(self) -> Catalog:
        songs = self.scanner.scan(self.path)
        with self._state_lock:
            self._songs = songs
            self._state = CacheState.SCANNED
        return songs

    def refresh(self) -> Catalog:
        with self._scan_lock:
            return self._rescan()

    def list(self) -> Catalog:
        state, songs = self._snapshot()
        if state is CacheState.SCANNED:
            logger.debug("catalog cache hit for %s", self.path)
            return songs
        with self._scan_lock:
            # Another caller may have finished a scan while we waited.
            state, songs = self._snapshot()
            if state is CacheState.SCANNED:
                return songs
            return self._rescan()

    def invalidate(self) -> None:
        with self._state_lock:
            if self._state is CacheState.SCANNED:
                self._state = CacheState.INVALIDATED

    def info(self, song_id: SongRef) -> SongInfo:
        song_id = _as_song_id(song_id)
        song = self._snapshot()[1].get(song_id)
        if song is None:
            song = self.list().get(song_id)
        if song is None:
            raise SongNotFoundError(song_id)
        return song

    def get_track(self, song_id: SongRef) -> TrackStream:
        """Open one track for streaming. The caller must close the result."""
        song_id = _as_song_id(song_id)
        decoder = self.scanner.decoders.decoder_for(song_id.path)
        if decoder is None:
            raise UnsupportedFormatError(song_id.path)
        try:
            position = song_id.position
        except InvalidSongIDError:
            raise SongNotFoundError(song_id) from None
        if not os.path.isfile(song_id.path):
            raise SongNotFoundError(song_id)
        return decoder.open_track(song_id.path, position, file_opener(song_id.path))

    def __repr__(self) -> str:
        return f"DirectorySource({self.path!r}, state={self.state.value})"
