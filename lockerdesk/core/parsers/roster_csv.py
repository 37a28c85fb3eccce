from __future__ import annotations

from loguru import logger

from lockerdesk.core.entities.student import Student
from lockerdesk.core.parsers.layouts import ROSTER_LAYOUT, ColumnLayout
from lockerdesk.core.parsers.locker_csv import LINE_BREAK
from lockerdesk.core.parsers.report import ImportReport

DEFAULT_COURSE_CODE = "IFRN"

# Checked in order; a later match overrides an earlier one.
COURSE_CODES: tuple[tuple[str, str], ...] = (
    ("administração", "ADM"),
    ("informática", "INFO"),
    ("química", "QUIM"),
    ("análise", "TADS"),
)

# Checked in order; every match is appended.
COURSE_SUFFIXES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("subsequente",), " SUB"),
    (("integrada", "integrado"), " INT"),
)


def classify_course(full_course: str) -> str:
    """
    Shorten a long course name to a class code.

    "13500 - Técnico de Nível Médio em Administração, na Forma Subsequente"
    -> "ADM SUB"
    """
    text = full_course.lower()

    code = DEFAULT_COURSE_CODE
    for keyword, course_code in COURSE_CODES:
        if keyword in text:
            code = course_code

    for keywords, suffix in COURSE_SUFFIXES:
        if any(k in text for k in keywords):
            code += suffix
    return code


def parse_student_csv(
    text: str,
    *,
    layout: ColumnLayout = ROSTER_LAYOUT,
    report: ImportReport | None = None,
) -> list[Student]:
    if report is None:
        report = ImportReport()

    rows = [(n, line.strip()) for n, line in enumerate(LINE_BREAK.split(text), start=1) if line.strip()]

    students: list[Student] = []
    for line_no, line in rows[layout.header_rows:]:
        report.rows_read += 1
        parts = layout.split(line)
        if len(parts) < layout.min_columns:
            report.skip(line_no, f"expected at least {layout.min_columns} columns, got {len(parts)}")
            continue

        registration = layout.get(parts, "registration")
        name = layout.get(parts, "name")
        if not (registration and name):
            report.skip(line_no, "missing registration or name")
            continue

        students.append(
            Student(
                registration=registration,
                name=name,
                course=classify_course(layout.get(parts, "course")),
                situation=layout.get(parts, "situation"),
                email=layout.get(parts, "email"),
            )
        )

    if report.skipped:
        logger.debug("Roster import skipped {} of {} rows", report.skipped_count, report.rows_read)
    return students
