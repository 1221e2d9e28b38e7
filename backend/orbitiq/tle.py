"""Two-line element helpers: structural checks and designator extraction.

Line 1 columns 10-17 (1-indexed) hold the international designator as
YYNNNPPP: two-digit launch year, launch number, piece letters.
"""

from __future__ import annotations

import re

# Element sets began in 1957, so two-digit years from 57 up are 19xx.
YEAR_PIVOT = 57


def _lines(text: str) -> list[str]:
    return [ln.strip() for ln in text.splitlines() if ln.strip()]


def extract_tle(text: str | None) -> tuple[str, str] | None:
    """Return the first (line1, line2) pair in text, or None if malformed.

    A pair is a line starting with "1 " immediately followed by a line
    starting with "2 ". Name lines (3-line format) are ignored.
    """
    if not text or not isinstance(text, str):
        return None
    lines = _lines(text)
    if len(lines) < 2:
        return None
    for i, line in enumerate(lines[:-1]):
        if line.startswith("1 "):
            nxt = lines[i + 1]
            return (line, nxt) if nxt.startswith("2 ") else None
    return None


def find_in_bulk(text: str, norad_id: int) -> tuple[str, str] | None:
    """Scan a bulk group file for the element set of one catalog number.

    The catalog number must be the whole first token after "1 " (optionally
    carrying the classification letter), so 44713 never matches 447130.
    """
    pattern = re.compile(rf"^1\s+0*{int(norad_id)}[A-Z]?\s")
    lines = [ln.strip() for ln in text.splitlines()]
    for i in range(len(lines) - 1):
        if pattern.match(lines[i]) and lines[i + 1].startswith("2 "):
            return lines[i], lines[i + 1]
    return None


def expand_year(yy: int) -> int:
    return 1900 + yy if yy >= YEAR_PIVOT else 2000 + yy


def parse_designator(line1: str) -> str | None:
    """Convert the line-1 designator field to 'YYYY-NNNP[P]'."""
    if len(line1) < 17:
        return None
    raw = line1[9:17].strip()
    if len(raw) < 5:
        return None
    yy, launch, piece = raw[:2], raw[2:5], raw[5:]
    if not (yy.isdigit() and launch.isdigit()):
        return None
    return f"{expand_year(int(yy))}-{launch}{piece}"
