"""
In-memory ad platform store.

Strategy:
  1. load(): read and parse the whole upload outside any lock, then take the
     write lock only to swap in the new platform table + location index and
     clear the search cache
  2. search(): normalize, check the cache, on miss take the read lock and
     collect platforms at the location and at every ancestor location
  3. statistics(): counts over the current table under the read lock

Readers always see one complete dataset: the table and index are replaced
together inside the write lock.
"""

from __future__ import annotations

import io
import logging
from typing import IO, Union

from ad_platforms.cache import SearchCache
from ad_platforms.index import LocationIndex
from ad_platforms.locations import normalize_location
from ad_platforms.locking import ReadWriteLock
from ad_platforms.models import AdPlatform, LoadResult, PlatformStatistics, SearchResult
from ad_platforms.parser import parse_platforms, split_lines

logger = logging.getLogger(__name__)

Stream = Union[IO[bytes], IO[str]]


class AdPlatformStore:
    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._platforms: dict[str, AdPlatform] = {}
        self._index = LocationIndex()
        self._cache = SearchCache()

    # ── Load ──────────────────────────────────────────────────────────

    def load(self, stream: Stream) -> LoadResult:
        """
        Replace the whole dataset with the platforms parsed from ``stream``.

        Malformed lines are reported in ``errors`` and do not fail the load.
        Undecodable bytes become U+FFFD. If the stream cannot be read the
        current dataset stays active and ``success`` is False.
        """
        try:
            text = _read_text(stream)
        except OSError as e:
            logger.error("Failed to read ad platform upload: %s", e)
            return LoadResult(success=False, message=f"Failed to load ad platforms: {e}")

        outcome = parse_platforms(split_lines(text))
        index = LocationIndex.build(outcome.platforms.values())

        with self._lock.write_locked():
            self._platforms = outcome.platforms
            self._index = index
            self._cache.clear()

        count = len(outcome.platforms)
        logger.info("Loaded %d ad platforms (%d locations, %d line errors)",
                    count, len(index), len(outcome.errors))
        return LoadResult(
            success=True,
            message=f"Successfully loaded {count} ad platforms",
            processed_platforms=count,
            errors=outcome.errors,
        )

    def load_text(self, text: str) -> LoadResult:
        return self.load(io.StringIO(text))

    # ── Search ────────────────────────────────────────────────────────

    def search(self, location: str | None) -> SearchResult:
        """
        Platforms serving ``location`` or any ancestor of it, sorted by name.
        Blank input returns an empty result and echoes the input unchanged.
        """
        if location is None or not location.strip():
            return SearchResult(location=location or "", ad_platforms=[])

        location = normalize_location(location)

        cached = self._cache.get(location)
        if cached is not None:
            return SearchResult(location=location, ad_platforms=cached)

        with self._lock.read_locked():
            platforms = sorted(self._index.matching(location))
            self._cache.add(location, platforms)

        logger.debug("Cache miss for %s: %d platforms", location, len(platforms))
        return SearchResult(location=location, ad_platforms=platforms)

    # ── Statistics ────────────────────────────────────────────────────

    def statistics(self) -> PlatformStatistics:
        with self._lock.read_locked():
            distinct: set[str] = set()
            for platform in self._platforms.values():
                distinct.update(platform.locations)
            return PlatformStatistics(
                platforms_count=len(self._platforms),
                locations_count=len(distinct),
            )


def _read_text(stream: Stream) -> str:
    data = stream.read()
    if isinstance(data, bytes):
        return data.decode("utf-8-sig", errors="replace")
    return data.removeprefix("\ufeff")
