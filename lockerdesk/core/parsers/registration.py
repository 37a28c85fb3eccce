from __future__ import annotations

import re

_SCI_DIGITS = re.compile(r"\d+E\d+", re.ASCII)
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)", re.ASCII)


def parse_leading_int(raw: str) -> int | None:
    """
    Read an optional sign and the leading digits of ``raw``; trailing garbage is
    ignored ("12A" -> 12). Returns None when there are no leading digits.
    """
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    return int(match.group(1))


def normalize_registration(raw: str) -> str:
    """
    Undo spreadsheet scientific notation on registration numbers.

    "2,01911E+13" -> "20191100000000". Values that are not in scientific
    notation, or cannot be expanded, come back trimmed but otherwise unchanged.
    """
    if not raw:
        return ""
    reg = raw.strip()
    upper = reg.upper()
    if "E+" not in upper and not ("E" in upper and _SCI_DIGITS.search(reg)):
        return reg

    normalized = reg.replace(",", ".", 1).upper()
    pieces = normalized.split("E")
    base, exp = pieces[0], pieces[1]

    exponent = parse_leading_int(exp.replace("+", "", 1))
    if exponent is None:
        return reg

    parts = base.split(".")
    integer_part = parts[0]
    fractional_part = parts[1] if len(parts) > 1 else ""

    if exponent >= len(fractional_part):
        return integer_part + fractional_part.ljust(exponent, "0")
    return integer_part + fractional_part[:max(exponent, 0)]
