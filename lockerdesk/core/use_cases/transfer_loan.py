from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date

from loguru import logger

from lockerdesk.core.entities.loan import IdFactory, format_loan_date, new_loan_id
from lockerdesk.core.entities.locker import Locker, LockerStatus
from lockerdesk.core.repositories.locker_repository import LockerRepository
from lockerdesk.core.use_cases.errors import DomainRuleViolation, ValidationError
from lockerdesk.core.use_cases.locker_queries import require_locker


@dataclass(frozen=True, slots=True)
class TransferResult:
    source: Locker
    target: Locker


class TransferLoanUseCase:
    """
    Move a student's current loan to another available locker.

    The old loan is closed today and kept in the source history; a new loan
    with a fresh id is opened on the target. Both lockers are written together.
    """

    def __init__(
        self,
        *,
        locker_repo: LockerRepository,
        id_factory: IdFactory = new_loan_id,
        history_limit: int = 50,
    ) -> None:
        self._locker_repo = locker_repo
        self._id_factory = id_factory
        self._history_limit = history_limit

    def execute(self, *, number: int, target_number: int, today: date | None = None) -> TransferResult:
        if number == target_number:
            raise ValidationError("Target locker must be different from the current one")

        source = require_locker(self._locker_repo, number)
        target = require_locker(self._locker_repo, target_number)

        if target.status is not LockerStatus.AVAILABLE:
            raise DomainRuleViolation(f"Target locker #{target_number} is not available")
        if source.current_loan is None:
            raise DomainRuleViolation(f"Locker #{number} has no active loan")

        today_str = format_loan_date(today or date.today())
        current = source.current_loan
        observation = current.observation or ""

        new_loan = replace(
            current,
            id=self._id_factory(),
            locker_number=target_number,
            physical_location=target.location,
            loan_date=today_str,
            observation=f"{observation} (Troca do #{number})".strip(),
        )
        current.observation = f"{observation} (Troca para #{target_number})".strip()

        try:
            source.return_loan(return_date=today_str, history_limit=self._history_limit)
            target.lend(new_loan)
        except ValueError as e:
            raise DomainRuleViolation(str(e)) from e

        self._locker_repo.upsert_many([source, target])
        logger.info("Loan of {} moved from locker #{} to #{}", new_loan.student_name, number, target_number)
        return TransferResult(source=source, target=target)
