from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Mapping, Sequence


@dataclass(frozen=True, slots=True)
class ColumnLayout:
    """
    Positional column mapping for one CSV file variant.

    Column indices are 0-based. A column past the end of a row reads as "".
    """
    name: str
    columns: Mapping[str, int]
    delimiter: str = ";"
    header_rows: int = 1
    min_columns: int = 0

    def index(self, column: str) -> int:
        try:
            return self.columns[column]
        except KeyError:
            raise KeyError(f"Layout {self.name!r} has no column {column!r}") from None

    def get(self, parts: Sequence[str], column: str) -> str:
        idx = self.index(column)
        if idx >= len(parts):
            return ""
        return parts[idx].strip()

    def split(self, line: str) -> list[str]:
        return line.split(self.delimiter)

    def with_overrides(self, overrides: Mapping[str, object]) -> ColumnLayout:
        """Return a copy with some settings and/or column indices replaced."""
        columns = dict(self.columns)
        columns.update({str(k): int(v) for k, v in (overrides.get("columns") or {}).items()})

        changes: dict[str, object] = {"columns": columns}
        for key in ("delimiter", "header_rows", "min_columns"):
            if key in overrides:
                changes[key] = overrides[key]
        return replace(self, **changes)


LOCKER_LAYOUT = ColumnLayout(
    name="lockers",
    columns={
        "number": 0,
        "location": 1,
        "registration": 2,
        "student_name": 3,
        "student_class": 4,
        "observation": 5,
        "loan_date": 6,
        "return_date": 7,
    },
)

ROSTER_LAYOUT = ColumnLayout(
    name="roster",
    columns={
        "name": 1,
        "registration": 2,
        "course": 3,
        "situation": 6,
        "email": 7,
    },
    min_columns=4,
)

DEFAULT_LAYOUTS: dict[str, ColumnLayout] = {
    LOCKER_LAYOUT.name: LOCKER_LAYOUT,
    ROSTER_LAYOUT.name: ROSTER_LAYOUT,
}
