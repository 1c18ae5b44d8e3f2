# tests/test_parsing.py

from __future__ import annotations

from datetime import datetime

import pytest

from sid_companion.cli.parsing import parse_index, parse_when, split_marker
from sid_companion.errors import InvalidIndex, ParseError


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("2025-12-02 1800", datetime(2025, 12, 2, 18, 0)),
        ("2/12/2025 1800", datetime(2025, 12, 2, 18, 0)),
        ("2025-12-02T18:00", datetime(2025, 12, 2, 18, 0)),
        ("2025-12-02", datetime(2025, 12, 2)),
        ("2/12/2025", datetime(2025, 12, 2)),
        ("1/1/2025 0000", datetime(2025, 1, 1)),
        ("31/12/2025 2359", datetime(2025, 12, 31, 23, 59)),
        ("  2025-12-02  ", datetime(2025, 12, 2)),
    ],
)
def test_parse_when_accepted_formats(text: str, expected: datetime) -> None:
    assert parse_when(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "tomorrow",
        "2025-13-01",
        "32/1/2025",
        "2025-12-02 800",
        "2025/12/02",
        "2025-1-2",
        "2025-1-02 1800",
        "2025-12-2",
        "",
    ],
)
def test_parse_when_rejects_with_examples(text: str) -> None:
    with pytest.raises(ParseError) as exc:
        parse_when(text)
    assert "Could not parse date/time" in exc.value.message
    assert "2025-12-02 1800" in exc.value.message


def test_parse_index() -> None:
    assert parse_index(" 3 ", "bad") == 3
    for raw in ("abc", "0", "-2", "1.5", ""):
        with pytest.raises(InvalidIndex) as exc:
            parse_index(raw, "bad number")
        assert exc.value.message == "bad number"


def test_split_marker_is_single_and_case_insensitive() -> None:
    assert split_marker("return book /by 2025-12-02", "/by") == ("return book", "2025-12-02")
    assert split_marker("return book /BY 2025-12-02", "/by") == ("return book", "2025-12-02")
    assert split_marker("a /to b /to c", "/to") == ("a", "b /to c")
    assert split_marker("no marker here", "/by") is None
    # the marker must be followed by whitespace
    assert split_marker("return book /by", "/by") is None
    assert split_marker("/by 2025-12-02", "/by") == ("", "2025-12-02")
