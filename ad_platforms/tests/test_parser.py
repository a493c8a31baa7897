"""
Tests for the ad platform listing parser.
"""

from __future__ import annotations

import pytest

from ad_platforms.parser import PlatformFormatError, parse_line, parse_platforms, split_lines


class TestParseLine:
    def test_basic(self):
        platform = parse_line("Ревдинский рабочий:/ru/svrd/revda,/ru/svrd/pervik")
        assert platform.name == "Ревдинский рабочий"
        assert platform.locations == frozenset({"/ru/svrd/revda", "/ru/svrd/pervik"})

    def test_whitespace_and_normalization(self):
        platform = parse_line("  Name  :  //ru//msk/ , /ru/spb ,, ")
        assert platform.name == "Name"
        assert platform.locations == frozenset({"/ru/msk", "/ru/spb"})

    def test_duplicate_locations_collapse(self):
        platform = parse_line("A:/ru,/ru/,//ru")
        assert platform.locations == frozenset({"/ru"})

    def test_splits_on_first_colon(self):
        platform = parse_line("A:/ru:x")
        assert platform.name == "A"
        assert platform.locations == frozenset({"/ru:x"})

    def test_missing_separator(self):
        with pytest.raises(PlatformFormatError, match="missing ':' separator"):
            parse_line("InvalidLine")

    def test_empty_name(self):
        with pytest.raises(PlatformFormatError, match="Platform name is empty"):
            parse_line("   :/ru")

    def test_no_locations(self):
        with pytest.raises(PlatformFormatError, match="No valid locations found for platform 'C'"):
            parse_line("C:")
        with pytest.raises(PlatformFormatError):
            parse_line("C: , ,")


class TestParsePlatforms:
    def test_malformed_lines_reported(self):
        outcome = parse_platforms(["A:/x", "InvalidLine", "B:/y", "C:"])
        assert set(outcome.platforms) == {"A", "B"}
        assert outcome.errors == [
            "Line 2: Invalid format: missing ':' separator",
            "Line 4: No valid locations found for platform 'C'",
        ]

    def test_blank_lines_counted_not_reported(self):
        outcome = parse_platforms(["", "A:/x", "   ", "bad"])
        assert list(outcome.platforms) == ["A"]
        assert outcome.errors == ["Line 4: Invalid format: missing ':' separator"]

    def test_last_duplicate_wins(self):
        outcome = parse_platforms(["A:/x,/y", "A:/z"])
        assert outcome.platforms["A"].locations == frozenset({"/z"})
        assert outcome.errors == []

    def test_empty_input(self):
        outcome = parse_platforms([])
        assert outcome.platforms == {}
        assert outcome.errors == []


class TestSplitLines:
    def test_mixed_line_breaks(self):
        assert split_lines("a\nb\r\nc\rd") == ["a", "b", "c", "d"]

    def test_trailing_newline(self):
        assert split_lines("a\nb\n") == ["a", "b"]

    def test_blank_lines_kept(self):
        assert split_lines("a\n\nb") == ["a", "", "b"]

    def test_empty(self):
        assert split_lines("") == []
