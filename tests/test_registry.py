"""Tests for the explicit source registry."""

import pytest

from music_source.errors import ConfigError
from music_source.registry import SourceRegistry, register_builtin_sources
from music_source.source import DirectorySource


@pytest.fixture
def registry():
    return register_builtin_sources(SourceRegistry())


def test_builtin_file_source_registered(registry):
    assert registry.names() == ["file"]
    assert registry.get("file").params == ("directory",)


def test_create_file_source(registry, tmp_path):
    source = registry.create("file", [str(tmp_path)])
    assert isinstance(source, DirectorySource)
    assert source.key() == str(tmp_path)


def test_unknown_type(registry):
    with pytest.raises(ConfigError) as excinfo:
        registry.create("http", ["x"])
    assert "file" in str(excinfo.value)


def test_wrong_parameter_count(registry, tmp_path):
    with pytest.raises(ConfigError):
        registry.create("file", [str(tmp_path), "extra"])


def test_unopenable_directory_never_creates_source(registry, tmp_path):
    with pytest.raises(ConfigError):
        registry.create("file", [str(tmp_path / "missing")])


def test_double_registration_rejected(registry):
    with pytest.raises(ConfigError):
        register_builtin_sources(registry)


def test_registry_starts_empty():
    assert SourceRegistry().names() == []
