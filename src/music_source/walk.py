from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from .errors import ScanError


def iter_files(root: str | Path) -> Iterator[Path]:
    """Yield every regular file under ``root`` in lexicographic order.

    Directories are visited top-down with their children sorted by name.
    Any error listing a directory, the root included, raises ``ScanError``.
    """

    def _on_walk_error(err: OSError) -> None:
        target = getattr(err, "filename", None) or str(root)
        raise ScanError(str(target), err.strerror or str(err)) from err

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_walk_error):
        dirnames.sort()
        base = Path(dirpath)
        for name in sorted(filenames):
            path = base / name
            try:
                regular = path.is_file()
            except OSError as exc:
                # Listed but not searchable, e.g. a directory without execute permission.
                raise ScanError(str(path), exc.strerror or str(exc)) from exc
            # Skip sockets, fifos and dangling links.
            if regular:
                yield path
