from __future__ import annotations

from datetime import UTC, datetime

import pytest

from jobboard.errors import ValidationError
from jobboard.tools.tabular import excel_date, read_rows
from jobboard.utils import coerce_list, extract_json, normalize_search_text, parse_timestamp
from jobboard.utils.text import EPOCH, now_iso, prefixed_id


def test_normalize_search_text_drops_punctuation_and_case() -> None:
    assert normalize_search_text("Node.js") == "nodejs"
    assert normalize_search_text("  Senior C++ Dev ") == "senior c dev"
    assert normalize_search_text(None) == ""


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, []),
        ("", []),
        ("React, Node , ,AWS", ["React", "Node", "AWS"]),
        (["2024", " 2025 ", ""], ["2024", "2025"]),
        (2024, ["2024"]),
    ],
)
def test_coerce_list(value, expected) -> None:
    assert coerce_list(value) == expected


def test_parse_timestamp_accepts_z_suffix_and_falls_back_to_epoch() -> None:
    assert parse_timestamp("2024-05-01T10:00:00.000Z") == datetime(2024, 5, 1, 10, tzinfo=UTC)
    assert parse_timestamp("2024-05-01T10:00:00") == datetime(2024, 5, 1, 10, tzinfo=UTC)
    assert parse_timestamp(None) == EPOCH
    assert parse_timestamp("yesterday") == EPOCH


def test_now_iso_is_parseable_utc() -> None:
    stamp = now_iso()
    assert stamp.endswith("Z")
    assert parse_timestamp(stamp) > EPOCH


def test_prefixed_id_shape() -> None:
    prefix, millis, suffix = prefixed_id("intern").split("_")
    assert prefix == "intern"
    assert millis.isdigit()
    assert len(suffix) == 9


def test_extract_json_strips_code_fences() -> None:
    text = 'Here you go:\n```json\n{"compatibilityScore": 72, "strengths": ["Python"]}\n```'
    assert extract_json(text) == {"compatibilityScore": 72, "strengths": ["Python"]}


def test_extract_json_finds_embedded_object_and_rejects_garbage() -> None:
    assert extract_json('Result: {"a": {"b": "}"}} trailing') == {"a": {"b": "}"}}
    assert extract_json("no json here") is None


def test_read_rows_from_csv_blanks_become_none() -> None:
    content = b"role, companyName ,batch\nEngineer,Acme,2024\nAnalyst,,\n"
    rows = read_rows("jobs.csv", content)
    assert rows == [
        {"role": "Engineer", "companyName": "Acme", "batch": "2024"},
        {"role": "Analyst", "companyName": None, "batch": None},
    ]


def test_read_rows_rejects_other_extensions() -> None:
    with pytest.raises(ValidationError):
        read_rows("jobs.txt", b"role\nEngineer\n")


def test_excel_date_converts_serial_numbers() -> None:
    assert excel_date(45292) == "2024-01-01"
    assert excel_date("2024-03-05") == "2024-03-05"
