from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from loguru import logger

from lockerdesk.core.entities.loan import IdFactory, LoanData, format_loan_date, new_loan_id
from lockerdesk.core.entities.locker import Locker
from lockerdesk.core.repositories.locker_repository import LockerRepository
from lockerdesk.core.use_cases.errors import DomainRuleViolation, ValidationError
from lockerdesk.core.use_cases.locker_queries import require_locker


@dataclass(frozen=True, slots=True)
class LoanRequest:
    registration_number: str
    student_name: str
    student_class: str = ""
    loan_date: str | None = None
    observation: str = ""


class LendLockerUseCase:
    def __init__(self, *, locker_repo: LockerRepository, id_factory: IdFactory = new_loan_id) -> None:
        self._locker_repo = locker_repo
        self._id_factory = id_factory

    def execute(self, *, number: int, request: LoanRequest, today: date | None = None) -> Locker:
        if not (request.student_name.strip() or request.registration_number.strip()):
            raise ValidationError("A loan needs a student name or registration number")

        locker = require_locker(self._locker_repo, number)
        loan = LoanData(
            id=self._id_factory(),
            locker_number=number,
            physical_location=locker.location,
            registration_number=request.registration_number.strip(),
            student_name=request.student_name.strip(),
            student_class=request.student_class.strip(),
            loan_date=request.loan_date or format_loan_date(today or date.today()),
            return_date=None,
            observation=request.observation,
        )

        try:
            locker.lend(loan)
        except ValueError as e:
            raise DomainRuleViolation(str(e)) from e

        self._locker_repo.upsert(locker)
        logger.info("Locker #{} lent to {} ({})", number, loan.student_name, loan.registration_number)
        return locker


class UpdateObservationUseCase:
    def __init__(self, *, locker_repo: LockerRepository) -> None:
        self._locker_repo = locker_repo

    def execute(self, *, number: int, observation: str) -> Locker:
        locker = require_locker(self._locker_repo, number)
        try:
            locker.update_observation(observation)
        except ValueError as e:
            raise DomainRuleViolation(str(e)) from e

        self._locker_repo.upsert(locker)
        return locker
