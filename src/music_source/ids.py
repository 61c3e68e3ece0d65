"""Composite song identifiers.

A song is named by the file it lives in plus a sub-index selecting one track
inside that file. The flat text form percent-encodes both parts with no safe
characters and joins them with a single ``#``. Since ``#`` is always escaped
inside the parts, the separator is unambiguous and decoding is an exact
inverse of encoding, including for paths that are not valid UTF-8.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import quote_from_bytes, unquote_to_bytes

from .errors import InvalidSongIDError

SEPARATOR = "#"


def _escape(value: str) -> str:
    return quote_from_bytes(os.fsencode(value), safe="")


def _unescape(value: str) -> str:
    return os.fsdecode(unquote_to_bytes(value))


def encode_id(path: str, index: str) -> str:
    return _escape(path) + SEPARATOR + _escape(index)


def decode_id(text: str) -> tuple[str, str]:
    if text.count(SEPARATOR) != 1:
        raise InvalidSongIDError(f"Malformed song id: {text!r}")
    path, index = text.split(SEPARATOR)
    if not path:
        raise InvalidSongIDError(f"Song id has no path: {text!r}")
    return _unescape(path), _unescape(index)


@dataclass(frozen=True, order=True)
class SongID:
    path: str
    index: str

    def encode(self) -> str:
        return encode_id(self.path, self.index)

    @classmethod
    def decode(cls, text: str) -> "SongID":
        path, index = decode_id(text)
        return cls(path=path, index=index)

    @property
    def position(self) -> int:
        """The sub-index as a number. Only the canonical decimal form is accepted."""
        try:
            position = int(self.index)
        except ValueError:
            raise InvalidSongIDError(f"Sub-index is not a number: {self.index!r}") from None
        if position < 0 or str(position) != self.index:
            raise InvalidSongIDError(f"Sub-index is not canonical: {self.index!r}")
        return position

    def __str__(self) -> str:
        return self.encode()
