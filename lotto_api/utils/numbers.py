"""Parsing helpers for comma-grouped amounts scraped from HTML."""

from __future__ import annotations

import re

_GROUPED_DIGITS = re.compile(r"[\d,]+", re.ASCII)


def parse_grouped_int(text: str | None, default: int = 0) -> int:
    """Parse ``"1,234,567"`` into ``1234567``.

    Any digit grouping is accepted. Returns ``default`` when no digits are present.
    """

    if not text:
        return default
    digits = text.replace(",", "").strip()
    if not (digits.isascii() and digits.isdigit()):
        return default
    return int(digits)


def first_grouped_int(text: str | None, default: int = 0) -> int:
    """Return the first run of digits/commas in ``text`` as an int."""

    if not text:
        return default
    for m in _GROUPED_DIGITS.finditer(text):
        # A lone comma is a run of [\d,] too; skip it.
        value = parse_grouped_int(m.group(0), default=-1)
        if value >= 0:
            return value
    return default
