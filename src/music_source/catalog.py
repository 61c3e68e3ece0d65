from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Mapping

from .errors import DecodeError
from .ids import SongID
from .metadata import DecoderSet, file_opener
from .models import SongInfo
from .walk import iter_files

logger = logging.getLogger(__name__)


def _complete(song: SongInfo, path: Path, index: int, total: int, cover: str | None) -> SongInfo:
    title = song.title
    if not title:
        title = path.name
        if total != 1:
            title += f":{index}"
    return replace(
        song,
        title=title,
        album=song.album or path.parent.name,
        cover=cover if cover is not None else song.cover,
    )


def build_catalog(
    root: str | Path,
    covers: Mapping[str, str],
    decoders: DecoderSet,
) -> dict[SongID, SongInfo]:
    """Decode every audio file under ``root`` into catalog entries.

    Files without a decoder, files that fail to open or decode, and files
    that decode to no tracks are left out. Only a traversal failure is
    raised, as ``ScanError``.
    """
    songs: dict[SongID, SongInfo] = {}

    for path in iter_files(root):
        decoder = decoders.decoder_for(path)
        if decoder is None:
            continue

        try:
            decoded = decoder.decode(str(path), file_opener(path))
        except (DecodeError, OSError) as exc:
            logger.debug("file skipped: %s: %s", path, exc)
            continue
        if not decoded:
            logger.debug("file skipped: %s: no tracks", path)
            continue

        cover = covers.get(str(path.parent))
        for i, song in enumerate(decoded):
            songs[SongID(str(path), str(i))] = _complete(song, path, i, len(decoded), cover)

    return songs
