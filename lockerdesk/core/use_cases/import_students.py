from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from lockerdesk.core.entities.student import Student
from lockerdesk.core.parsers.layouts import ROSTER_LAYOUT, ColumnLayout
from lockerdesk.core.parsers.report import ImportReport
from lockerdesk.core.parsers.roster_csv import parse_student_csv
from lockerdesk.core.repositories.student_repository import StudentRepository


@dataclass(frozen=True, slots=True)
class StudentImportResult:
    imported: int
    report: ImportReport


class ImportStudentsUseCase:
    def __init__(self, *, student_repo: StudentRepository, layout: ColumnLayout = ROSTER_LAYOUT) -> None:
        self._student_repo = student_repo
        self._layout = layout

    def execute(self, text: str) -> StudentImportResult:
        report = ImportReport()
        students = parse_student_csv(text, layout=self._layout, report=report)

        # Last row wins when a registration repeats in the same file.
        unique: dict[str, Student] = {s.registration: s for s in students}
        imported = self._student_repo.upsert_many(list(unique.values()))

        logger.info("Roster import: {} students, {} rows skipped", imported, report.skipped_count)
        return StudentImportResult(imported=imported, report=report)
