from __future__ import annotations

import pytest

from lockerdesk.core.parsers.registration import normalize_registration, parse_leading_int


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2,01911E+13", "20191100000000"),
        ("2.01911E+13", "20191100000000"),
        ("2.019E13", "20190000000000"),
        ("1,23456789E+3", "1234"),
        (" 20231011110055 ", "20231011110055"),
        ("", ""),
        ("ABC-E+X", "ABC-E+X"),
        ("Eduardo", "Eduardo"),
    ],
)
def test_normalize_registration(raw: str, expected: str) -> None:
    assert normalize_registration(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("12", 12), ("  7 ", 7), ("15A", 15), ("-3", -3), ("A12", None), ("", None), ("Bloco", None), ("\u0661\u0662", None)],
)
def test_parse_leading_int(raw: str, expected: int | None) -> None:
    assert parse_leading_int(raw) == expected
