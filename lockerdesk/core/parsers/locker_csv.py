from __future__ import annotations

import re
from typing import Callable

from loguru import logger

from lockerdesk.core.entities.loan import IdFactory, LoanData, new_loan_id
from lockerdesk.core.entities.locker import Locker, LockerStatus
from lockerdesk.core.parsers.layouts import LOCKER_LAYOUT, ColumnLayout
from lockerdesk.core.parsers.registration import normalize_registration, parse_leading_int
from lockerdesk.core.parsers.report import ImportReport

LINE_BREAK = re.compile(r"\r?\n")

MAIN_BLOCK = "Bloco Principal"
ANNEX_BLOCK = "Bloco Anexo"
MAIN_BLOCK_MAX_NUMBER = 200


def default_fallback_location(number: int) -> str:
    return MAIN_BLOCK if number <= MAIN_BLOCK_MAX_NUMBER else ANNEX_BLOCK


def parse_locker_csv(
    text: str,
    *,
    layout: ColumnLayout = LOCKER_LAYOUT,
    id_factory: IdFactory = new_loan_id,
    fallback_location: Callable[[int], str] = default_fallback_location,
    report: ImportReport | None = None,
) -> list[Locker]:
    """
    Build the locker roster from a loan-history export.

    Rows are read in order. A row without a usable locker number continues the
    previous locker; a row that cannot be tied to any locker is skipped. The
    first open loan of each locker becomes its current loan, every other loan
    row goes to its history.

    Returns lockers sorted by number. Skipped rows are recorded on ``report``
    when one is given; they never make the import fail.
    """
    if report is None:
        report = ImportReport()

    rows = [(n, line) for n, line in enumerate(LINE_BREAK.split(text), start=1) if line.strip()]

    lockers: dict[int, Locker] = {}
    last_number: int | None = None

    for line_no, line in rows[layout.header_rows:]:
        report.rows_read += 1
        parts = layout.split(line)

        raw_number = layout.get(parts, "number")
        location = layout.get(parts, "location")

        # Some exports shift the number into the location column on rows
        # where the number cell is blank.
        if raw_number == "" and parse_leading_int(location) is not None:
            raw_number = location
            location = ""

        number = parse_leading_int(raw_number)
        if number is None:
            if last_number is None:
                report.skip(line_no, f"no locker number in {raw_number!r} and no previous locker")
                logger.debug("Skipping line {}: no locker number and no previous locker", line_no)
                continue
            number = last_number
        else:
            last_number = number

        locker = lockers.get(number)
        if locker is None:
            locker = Locker(
                number=number,
                status=LockerStatus.AVAILABLE,
                location=location or fallback_location(number),
            )
            lockers[number] = locker

        registration = normalize_registration(layout.get(parts, "registration"))
        student_name = layout.get(parts, "student_name")
        if not (student_name or registration):
            continue

        loan = LoanData(
            id=id_factory(),
            locker_number=number,
            physical_location=location or locker.location,
            registration_number=registration,
            student_name=student_name,
            student_class=layout.get(parts, "student_class"),
            loan_date=layout.get(parts, "loan_date"),
            return_date=layout.get(parts, "return_date"),
            observation=layout.get(parts, "observation"),
        )
        locker.record_loan(loan)
        report.loans_read += 1

    return [lockers[number] for number in sorted(lockers)]
