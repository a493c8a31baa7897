"""
Location identifier normalization.

Locations are opaque slash-delimited paths such as ``/ru/svrd/revda``.
Both the uploaded data and incoming queries go through ``normalize_location``
so that prefix comparisons are made between canonical forms.
"""

from __future__ import annotations

from typing import Iterator

SEPARATOR = "/"


def normalize_location(location: str | None) -> str:
    """
    Canonicalize a location string.
    Rules:
      1. Strip surrounding whitespace (blank input -> "")
      2. Collapse repeated slashes ("//ru//msk" -> "/ru/msk")
      3. Drop a trailing slash unless the whole value is "/"
    """
    if location is None or not location.strip():
        return ""

    normalized = location.strip()
    while SEPARATOR * 2 in normalized:
        normalized = normalized.replace(SEPARATOR * 2, SEPARATOR)

    if len(normalized) > 1 and normalized.endswith(SEPARATOR):
        normalized = normalized[:-1]

    return normalized


def ancestors(location: str) -> Iterator[str]:
    """
    Yield the strict ancestors of a normalized location, shortest first.

    An ancestor is a prefix that ends right before a "/" of the location,
    so "/ru/svrd/revda" yields "/ru" and "/ru/svrd" but never "/ru/s".
    """
    pos = location.find(SEPARATOR, 1)
    while pos != -1:
        yield location[:pos]
        pos = location.find(SEPARATOR, pos + 1)

