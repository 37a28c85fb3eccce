from __future__ import annotations

from typing import Sequence


class CsvParseError(Exception):
    """Raise when an uploaded file cannot be read as CSV text at all."""


DEFAULT_ENCODINGS: tuple[str, ...] = ("utf-8-sig", "latin-1")


def decode_csv_bytes(content: bytes, encodings: Sequence[str] = DEFAULT_ENCODINGS) -> str:
    """
    Decode an uploaded CSV, trying each encoding in order.

    Latin-1 maps every byte, so binary garbage is caught by looking for NUL
    bytes rather than by a decode failure.
    """
    if b"\x00" in content:
        raise CsvParseError("Failed to parse file: binary content is not CSV text")

    for encoding in encodings:
        try:
            return content.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            continue
    raise CsvParseError(f"Failed to parse file: not decodable as any of {', '.join(encodings)}")
