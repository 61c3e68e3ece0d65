"""Exceptions raised by the directory music source."""

from __future__ import annotations


class MusicSourceError(Exception):
    """Base exception for all music source errors."""

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(message)

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message}\nSuggestion: {self.suggestion}"
        return self.message


class ConfigError(MusicSourceError):
    """Source configuration is malformed or points at an unusable directory."""

    pass


class ScanError(MusicSourceError):
    """Walking the directory tree failed; no catalog was produced."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(
            f"Cannot scan '{path}': {reason}",
            "Check that the directory exists and is readable",
        )


class SongNotFoundError(MusicSourceError, KeyError):
    """No song with the given id exists in this source."""

    def __init__(self, song_id: object) -> None:
        self.song_id = song_id
        super().__init__(f"Could not find song {song_id}")


class InvalidSongIDError(MusicSourceError, ValueError):
    """Composite song id text cannot be decoded."""

    pass


class DecodeError(MusicSourceError):
    """Audio file could not be decoded."""

    pass


class UnsupportedFormatError(DecodeError):
    """No decoder handles this kind of file."""

    def __init__(self, path: str) -> None:
        super().__init__(f"No decoder for '{path}'")
