from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Optional

from .catalog import build_catalog
from .covers import find_covers
from .errors import ScanError
from .metadata import DecoderSet, default_decoders
from .models import Catalog

logger = logging.getLogger(__name__)


class DirectoryScanner:
    """Runs a full two-pass scan: cover discovery, then track cataloging."""

    def __init__(self, decoders: Optional[DecoderSet] = None) -> None:
        self.decoders = decoders if decoders is not None else default_decoders()

    def scan(self, root: str | Path) -> Catalog:
        logger.info("scanning %s", root)
        try:
            covers = find_covers(root)
            songs = build_catalog(root, covers, self.decoders)
        except ScanError as exc:
            logger.warning("scan of %s failed: %s", root, exc.message)
            raise
        logger.info("scanned %s: %d tracks, %d covers", root, len(songs), len(covers))
        return MappingProxyType(songs)
