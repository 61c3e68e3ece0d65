"""SourceRegistry: explicit table of source types the application can build.

Nothing registers itself on import. The application calls
``register_builtin_sources`` once at startup and then creates sources by
type name from their configuration parameters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from .errors import ConfigError
from .source import DirectorySource

SourceFactory = Callable[[Sequence[str]], DirectorySource]


@dataclass(frozen=True)
class SourceType:
    name: str
    params: tuple[str, ...]
    factory: SourceFactory


class SourceRegistry:
    def __init__(self) -> None:
        self._types: dict[str, SourceType] = {}

    def register(self, name: str, params: Sequence[str], factory: SourceFactory) -> None:
        if name in self._types:
            raise ConfigError(f"Source type '{name}' is already registered")
        self._types[name] = SourceType(name=name, params=tuple(params), factory=factory)

    def names(self) -> list[str]:
        return sorted(self._types)

    def get(self, name: str) -> SourceType:
        try:
            return self._types[name]
        except KeyError:
            raise ConfigError(
                f"Unknown source type '{name}'",
                f"Available types: {', '.join(self.names()) or 'none'}",
            ) from None

    def create(self, name: str, params: Sequence[str]) -> DirectorySource:
        source_type = self.get(name)
        if len(params) != len(source_type.params):
            raise ConfigError(
                f"Source type '{name}' expects parameters {list(source_type.params)}, got {len(params)}",
            )
        return source_type.factory(params)


def register_builtin_sources(registry: SourceRegistry) -> SourceRegistry:
    registry.register("file", ["directory"], DirectorySource.from_params)
    return registry
