from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class SkippedRow:
    line: int
    reason: str


@dataclass(slots=True)
class ImportReport:
    """
    Diagnostics collected while importing in best-effort mode.

    Filling a report never changes what the importer returns.
    """
    rows_read: int = 0
    loans_read: int = 0
    skipped: list[SkippedRow] = field(default_factory=list)

    def skip(self, line: int, reason: str) -> None:
        self.skipped.append(SkippedRow(line=line, reason=reason))

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)
