from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from loguru import logger

from lockerdesk.core.entities.loan import IdFactory, new_loan_id
from lockerdesk.core.entities.locker import Locker, LockerStatus
from lockerdesk.core.parsers.layouts import LOCKER_LAYOUT, ColumnLayout
from lockerdesk.core.parsers.locker_csv import default_fallback_location, parse_locker_csv
from lockerdesk.core.parsers.report import ImportReport
from lockerdesk.core.repositories.locker_repository import LockerRepository


@dataclass(frozen=True, slots=True)
class LockerImportResult:
    lockers: list[Locker]
    report: ImportReport
    persisted: int = 0

    @property
    def occupied(self) -> int:
        return sum(1 for locker in self.lockers if locker.status is LockerStatus.OCCUPIED)


class ImportLockersUseCase:
    """
    Parse a loan-history export and bulk upsert the resulting lockers.

    ``preview`` parses only, so the caller can confirm before ``execute`` writes.
    Re-importing replaces each locker found in the file; lockers absent from the
    file are left untouched.
    """

    def __init__(
        self,
        *,
        locker_repo: LockerRepository,
        layout: ColumnLayout = LOCKER_LAYOUT,
        id_factory: IdFactory = new_loan_id,
        fallback_location: Callable[[int], str] = default_fallback_location,
    ) -> None:
        self._locker_repo = locker_repo
        self._layout = layout
        self._id_factory = id_factory
        self._fallback_location = fallback_location

    def preview(self, text: str) -> LockerImportResult:
        report = ImportReport()
        lockers = parse_locker_csv(
            text,
            layout=self._layout,
            id_factory=self._id_factory,
            fallback_location=self._fallback_location,
            report=report,
        )
        if report.skipped:
            logger.info("Locker import skipped {} of {} rows", report.skipped_count, report.rows_read)
        return LockerImportResult(lockers=lockers, report=report)

    def execute(self, text: str) -> LockerImportResult:
        parsed = self.preview(text)
        persisted = self._locker_repo.upsert_many(parsed.lockers)
        logger.info("Imported {} lockers ({} loans read)", persisted, parsed.report.loans_read)
        return LockerImportResult(lockers=parsed.lockers, report=parsed.report, persisted=persisted)
