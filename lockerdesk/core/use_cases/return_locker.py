from __future__ import annotations

from datetime import date

from loguru import logger

from lockerdesk.core.entities.loan import format_loan_date
from lockerdesk.core.entities.locker import Locker
from lockerdesk.core.repositories.locker_repository import LockerRepository
from lockerdesk.core.use_cases.errors import DomainRuleViolation
from lockerdesk.core.use_cases.locker_queries import require_locker


class ReturnLockerUseCase:
    """
    Close the current loan of a locker: the loan moves to the front of the
    history with today's return date and the locker becomes available.
    """

    def __init__(self, *, locker_repo: LockerRepository, history_limit: int = 50) -> None:
        self._locker_repo = locker_repo
        self._history_limit = history_limit

    def execute(self, *, number: int, today: date | None = None) -> Locker:
        locker = require_locker(self._locker_repo, number)
        try:
            finished = locker.return_loan(
                return_date=format_loan_date(today or date.today()),
                history_limit=self._history_limit,
            )
        except ValueError as e:
            raise DomainRuleViolation(str(e)) from e

        self._locker_repo.upsert(locker)
        logger.info("Locker #{} returned by {}", number, finished.student_name)
        return locker
