"""CLI entrypoint for ad_platforms."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from ad_platforms.logging_config import setup_logging
from ad_platforms.store import AdPlatformStore


def main(argv: list[str] | None = None) -> int:
    setup_logging()

    parser = argparse.ArgumentParser(prog="ad-platforms")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("serve")

    search_parser = sub.add_parser("search", help="Load a listing and search locations")
    search_parser.add_argument("file", type=Path)
    search_parser.add_argument("location", nargs="+")

    stats_parser = sub.add_parser("stats", help="Load a listing and print statistics")
    stats_parser.add_argument("file", type=Path)

    args = parser.parse_args(argv)

    if args.command == "serve":
        _serve()
        return 0
    if args.command == "search":
        return _search(args.file, args.location)
    if args.command == "stats":
        return _stats(args.file)
    return 2


def _serve() -> None:
    import uvicorn

    from ad_platforms.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "ad_platforms.api:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=(settings.env == "development"),
        log_level=settings.log_level.lower(),
    )


def _load(store: AdPlatformStore, path: Path) -> bool:
    try:
        stream = path.open("rb")
    except OSError as e:
        print(f"Cannot open {path}: {e}", file=sys.stderr)
        return False

    with stream:
        result = store.load(stream)
    if not result.success:
        print(result.message, file=sys.stderr)
        return False
    for error in result.errors:
        print(f"warning: {error}", file=sys.stderr)
    return True


def _search(path: Path, locations: list[str]) -> int:
    store = AdPlatformStore()
    if not _load(store, path):
        return 1
    for location in locations:
        result = store.search(location)
        print(json.dumps(result.model_dump(by_alias=True), ensure_ascii=False))
    return 0


def _stats(path: Path) -> int:
    store = AdPlatformStore()
    if not _load(store, path):
        return 1
    stats = store.statistics()
    print(json.dumps({
        "platformsCount": stats.platforms_count,
        "locationsCount": stats.locations_count,
    }, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
