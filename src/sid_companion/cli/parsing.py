# src/sid_companion/cli/parsing.py

from __future__ import annotations

import re
from datetime import datetime

from ..errors import InvalidIndex, ParseError

# (shape, strptime format). The shape regex keeps strptime from accepting
# loose input such as "2025-12-02 800"; the first matching entry wins.
DATE_TIME_FORMATS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\d{4}-\d{2}-\d{2} \d{4}"), "%Y-%m-%d %H%M"),
    (re.compile(r"\d{1,2}/\d{1,2}/\d{4} \d{4}"), "%d/%m/%Y %H%M"),
    (re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}"), "%Y-%m-%dT%H:%M"),
    (re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}"), "%Y-%m-%dT%H:%M:%S"),
)

# Date only -> midnight.
DATE_FORMATS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\d{4}-\d{2}-\d{2}"), "%Y-%m-%d"),
    (re.compile(r"\d{1,2}/\d{1,2}/\d{4}"), "%d/%m/%Y"),
)

DATE_EXAMPLES = "2025-12-02 1800, 2025-12-02, 2/12/2025 1800, or 2/12/2025"

_INDEX_RE = re.compile(r"[+-]?\d+")


def _try_formats(
    text: str, formats: tuple[tuple[re.Pattern[str], str], ...]
) -> datetime | None:
    for shape, fmt in formats:
        if not shape.fullmatch(text):
            continue
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            # Right shape, impossible value (e.g. month 13); try the next one.
            continue
    return None


def parse_when(text: str) -> datetime:
    """
    Parse user date/time text.

    Accepted, in order: "yyyy-MM-dd HHmm", "d/M/yyyy HHmm", ISO
    "yyyy-MM-ddTHH:mm", then date-only "yyyy-MM-dd" and "d/M/yyyy" at midnight.
    """
    text = text.strip()
    when = _try_formats(text, DATE_TIME_FORMATS) or _try_formats(text, DATE_FORMATS)
    if when is None:
        raise ParseError(text, f"Could not parse date/time: {text}\nTry: {DATE_EXAMPLES}")
    return when


def parse_index(text: str, error_message: str) -> int:
    """Parse a 1-based task number; non-numeric or non-positive input is rejected."""
    raw = text.strip()
    if not _INDEX_RE.fullmatch(raw):
        raise InvalidIndex(error_message)
    value = int(raw)
    if value <= 0:
        raise InvalidIndex(error_message)
    return value


def split_marker(text: str, marker: str) -> tuple[str, str] | None:
    """
    Split `text` once at the first `marker` ("/by", "/from", "/to").

    The marker is case-insensitive, may be preceded by whitespace and must be
    followed by at least one whitespace character. Returns (before, after),
    both stripped, or None when the marker does not occur.
    """
    pattern = re.compile(rf"\s*{re.escape(marker)}\s+", re.IGNORECASE)
    parts = pattern.split(text, maxsplit=1)
    if len(parts) < 2:
        return None
    return parts[0].strip(), parts[1].strip()
