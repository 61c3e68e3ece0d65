from __future__ import annotations

import base64
import binascii
import logging
import os
import re
from pathlib import Path

from .walk import iter_files

logger = logging.getLogger(__name__)

COVER_NAME = re.compile(r"^(cover|folder)\.(jpg|jpeg|png)$", re.IGNORECASE)
COVER_PREFIX = "/cover/"


def is_cover(path: str | Path) -> bool:
    return COVER_NAME.search(Path(path).name) is not None


def cover_token(path: str | Path) -> str:
    encoded = base64.urlsafe_b64encode(os.fsencode(str(path)))
    return COVER_PREFIX + encoded.decode("ascii")


def cover_path(token: str) -> str | None:
    """Map a token from ``cover_token`` back to the image path.

    Returns None for anything that is not a well-formed cover token.
    """
    if not token.startswith(COVER_PREFIX):
        return None
    try:
        raw = base64.b64decode(token[len(COVER_PREFIX):].encode("ascii"), altchars=b"-_", validate=True)
    except (binascii.Error, UnicodeEncodeError):
        return None
    return os.fsdecode(raw)


def find_covers(root: str | Path) -> dict[str, str]:
    """Map each directory under ``root`` to the token of its cover image.

    When a directory holds several cover images, the lexicographically last
    one wins.
    """
    covers: dict[str, str] = {}
    for path in iter_files(root):
        if not is_cover(path):
            continue
        covers[str(path.parent)] = cover_token(path)
        logger.debug("cover %s", path)
    return covers
