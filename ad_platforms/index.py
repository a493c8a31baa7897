"""
Location index: normalized location -> names of the platforms listed there.
"""

from __future__ import annotations

from typing import Iterable

from ad_platforms.locations import ancestors
from ad_platforms.models import AdPlatform


class LocationIndex:
    """
    Immutable once built. A new index is built for every dataset load and
    swapped in whole, never patched.
    """

    def __init__(self, entries: dict[str, frozenset[str]] | None = None):
        self._entries: dict[str, frozenset[str]] = entries or {}

    @classmethod
    def build(cls, platforms: Iterable[AdPlatform]) -> "LocationIndex":
        grouped: dict[str, set[str]] = {}
        for platform in platforms:
            for location in platform.locations:
                grouped.setdefault(location, set()).add(platform.name)
        return cls({loc: frozenset(names) for loc, names in grouped.items()})

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, location: str) -> bool:
        return location in self._entries

    def platforms_at(self, location: str) -> frozenset[str]:
        """Platforms listed for exactly this location."""
        return self._entries.get(location, frozenset())

    def matching(self, location: str) -> set[str]:
        """
        Platforms listed for ``location`` or any of its strict ancestors.
        ``location`` must already be normalized.
        """
        matched = set(self.platforms_at(location))
        for ancestor in ancestors(location):
            matched |= self.platforms_at(ancestor)
        return matched
