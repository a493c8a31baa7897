"""
Tests for the location index and the search cache.
"""

from __future__ import annotations

from ad_platforms.cache import SearchCache
from ad_platforms.index import LocationIndex
from ad_platforms.models import AdPlatform


def _platforms() -> list[AdPlatform]:
    return [
        AdPlatform("Yandex", frozenset({"/ru"})),
        AdPlatform("Revda", frozenset({"/ru/svrd/revda", "/ru/svrd/pervik"})),
        AdPlatform("Cool", frozenset({"/ru/svrd"})),
        AdPlatform("Also Revda", frozenset({"/ru/svrd/revda"})),
    ]


class TestLocationIndex:
    def test_build_groups_names(self):
        index = LocationIndex.build(_platforms())
        assert len(index) == 4
        assert index.platforms_at("/ru/svrd/revda") == frozenset({"Revda", "Also Revda"})
        assert index.platforms_at("/ru") == frozenset({"Yandex"})
        assert "/ru/msk" not in index

    def test_every_platform_location_is_indexed(self):
        platforms = _platforms()
        index = LocationIndex.build(platforms)
        for platform in platforms:
            for location in platform.locations:
                assert platform.name in index.platforms_at(location)

    def test_matching_includes_ancestors(self):
        index = LocationIndex.build(_platforms())
        assert index.matching("/ru/svrd/revda") == {"Yandex", "Cool", "Revda", "Also Revda"}
        assert index.matching("/ru/svrd/ekb") == {"Yandex", "Cool"}

    def test_matching_respects_segment_boundary(self):
        index = LocationIndex.build(_platforms())
        assert index.matching("/ru/svrdlovsk") == {"Yandex"}

    def test_matching_does_not_include_descendants(self):
        index = LocationIndex.build(_platforms())
        assert index.matching("/ru") == {"Yandex"}

    def test_empty_index(self):
        index = LocationIndex()
        assert len(index) == 0
        assert index.matching("/ru/msk") == set()


class TestSearchCache:
    def test_miss_then_hit(self):
        cache = SearchCache()
        assert cache.get("/ru") is None
        assert cache.add("/ru", ["A", "B"]) is True
        assert cache.get("/ru") == ["A", "B"]
        assert len(cache) == 1

    def test_first_writer_wins(self):
        cache = SearchCache()
        cache.add("/ru", ["A"])
        assert cache.add("/ru", ["B"]) is False
        assert cache.get("/ru") == ["A"]

    def test_returns_copies(self):
        cache = SearchCache()
        source = ["A"]
        cache.add("/ru", source)
        source.append("mutated")
        hit = cache.get("/ru")
        hit.append("also mutated")
        assert cache.get("/ru") == ["A"]

    def test_clear(self):
        cache = SearchCache()
        cache.add("/ru", ["A"])
        cache.clear()
        assert cache.get("/ru") is None
        assert len(cache) == 0
