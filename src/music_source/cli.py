from __future__ import annotations

import argparse
import logging
from dataclasses import asdict
from pathlib import Path

from .errors import MusicSourceError
from .exporters import export_tracks_csv
from .metrics import human_duration, summarize
from .registry import SourceRegistry, register_builtin_sources


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="music-source",
        description="Catalog the songs in a music directory.",
    )
    parser.add_argument("root", type=Path, help="Top-level music directory to scan")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("./output"),
        help="Directory for generated CSV output",
    )
    parser.add_argument(
        "--export",
        choices=["none", "csv"],
        default="none",
        help="Export format for catalog data",
    )
    parser.add_argument(
        "--info",
        metavar="ID",
        default=None,
        help="Print the metadata of one song id instead of a summary",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log per-file scan details",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    registry = register_builtin_sources(SourceRegistry())
    try:
        source = registry.create("file", [str(args.root.expanduser())])
    except MusicSourceError as exc:
        raise SystemExit(str(exc))

    if args.info is not None:
        try:
            song = source.info(args.info)
        except MusicSourceError as exc:
            raise SystemExit(str(exc))
        for field, value in asdict(song).items():
            print(f"{field}: {value if value is not None else ''}")
        return

    print(f"[start] scanning: {source.key()}")
    try:
        songs = source.list()
    except MusicSourceError as exc:
        raise SystemExit(str(exc))

    metrics = summarize(songs)
    print(f"[done] tracks found: {metrics.total_tracks}")
    print(f"[done] audio files: {metrics.total_files}")
    print(f"[done] unique albums: {metrics.unique_albums}")
    print(f"[done] tracks with cover: {metrics.tracks_with_cover}")
    print(f"[done] total duration: {human_duration(metrics.total_duration_seconds)}")

    if args.export == "csv":
        output_dir: Path = args.output_dir.expanduser().resolve()
        tracks_csv = output_dir / "tracks_catalog.csv"
        export_tracks_csv(tracks_csv, songs)
        print(f"[write] CSV catalog: {tracks_csv}")


if __name__ == "__main__":
    main()
