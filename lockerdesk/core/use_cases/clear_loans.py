from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from lockerdesk.core.repositories.locker_repository import LockerRepository


@dataclass(frozen=True, slots=True)
class ClearLoansResult:
    lockers: int
    loans_removed: int


class ClearLoansUseCase:
    """
    Wipe every current loan and loan history, e.g. at the end of a school year.
    Lockers under maintenance stay under maintenance.
    """

    def __init__(self, *, locker_repo: LockerRepository) -> None:
        self._locker_repo = locker_repo

    def execute(self) -> ClearLoansResult:
        lockers = self._locker_repo.list()
        removed = 0
        for locker in lockers:
            removed += len(locker.loan_history) + (1 if locker.current_loan is not None else 0)
            locker.clear_loans()

        self._locker_repo.upsert_many(lockers)
        logger.warning("Cleared {} loans from {} lockers", removed, len(lockers))
        return ClearLoansResult(lockers=len(lockers), loans_removed=removed)
