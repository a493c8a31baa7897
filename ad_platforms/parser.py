"""
Parser for the line-oriented ad platform listing.

Each line has the form ``<name>:<loc1>,<loc2>,...``. Malformed lines are
reported and skipped; they never abort the parse.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable

from ad_platforms.locations import normalize_location
from ad_platforms.models import AdPlatform

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class PlatformFormatError(ValueError):
    """Raised for a single line that cannot be turned into an AdPlatform."""


@dataclass
class ParseOutcome:
    platforms: dict[str, AdPlatform] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)


def split_lines(text: str) -> list[str]:
    """Split on \\n, \\r\\n or \\r. A trailing line break does not add a line."""
    if not text:
        return []
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def parse_line(line: str) -> AdPlatform:
    name, sep, raw_locations = line.partition(":")
    if not sep:
        raise PlatformFormatError("Invalid format: missing ':' separator")

    name = name.strip()
    if not name:
        raise PlatformFormatError("Platform name is empty")

    locations = frozenset(
        loc for loc in (normalize_location(piece) for piece in raw_locations.strip().split(","))
        if loc
    )
    if not locations:
        raise PlatformFormatError(f"No valid locations found for platform '{name}'")

    return AdPlatform(name=name, locations=locations)


def parse_platforms(lines: Iterable[str]) -> ParseOutcome:
    """
    Parse every line into a name -> AdPlatform mapping.

    Line numbers in error messages are 1-based and include blank lines.
    A platform name seen again later in the same input replaces the earlier
    entry (locations are not merged).
    """
    outcome = ParseOutcome()

    for line_number, line in enumerate(lines, 1):
        if not line.strip():
            continue
        try:
            platform = parse_line(line)
        except PlatformFormatError as e:
            message = f"Line {line_number}: {e}"
            logger.warning("Skipping malformed line: %s", message)
            outcome.errors.append(message)
            continue

        if platform.name in outcome.platforms:
            logger.debug("Line %d overrides earlier platform '%s'", line_number, platform.name)
        outcome.platforms[platform.name] = platform

    return outcome
