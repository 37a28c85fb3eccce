from __future__ import annotations

from datetime import date

from loguru import logger

from lockerdesk.core.entities.locker import Locker
from lockerdesk.core.entities.maintenance import MaintenanceData
from lockerdesk.core.repositories.locker_repository import LockerRepository
from lockerdesk.core.use_cases.errors import DomainRuleViolation, ValidationError
from lockerdesk.core.use_cases.locker_queries import require_locker

DEFAULT_ACTOR = "Sistema"


class StartMaintenanceUseCase:
    def __init__(self, *, locker_repo: LockerRepository, history_limit: int = 50) -> None:
        self._locker_repo = locker_repo
        self._history_limit = history_limit

    def execute(
        self,
        *,
        number: int,
        problem: str,
        registered_by: str | None = None,
        today: date | None = None,
    ) -> Locker:
        if not problem.strip():
            raise ValidationError("Describe the maintenance problem")

        locker = require_locker(self._locker_repo, number)
        record = MaintenanceData(
            problem=problem.strip(),
            registered_at=(today or date.today()).isoformat(),
            registered_by=registered_by or DEFAULT_ACTOR,
        )
        try:
            locker.start_maintenance(record, history_limit=self._history_limit)
        except ValueError as e:
            raise DomainRuleViolation(str(e)) from e

        self._locker_repo.upsert(locker)
        logger.info("Locker #{} under maintenance: {}", number, record.problem)
        return locker


class ResolveMaintenanceUseCase:
    def __init__(self, *, locker_repo: LockerRepository, history_limit: int = 50) -> None:
        self._locker_repo = locker_repo
        self._history_limit = history_limit

    def execute(self, *, number: int, resolved_by: str | None = None, today: date | None = None) -> Locker:
        locker = require_locker(self._locker_repo, number)
        try:
            locker.resolve_maintenance(
                resolved_at=(today or date.today()).isoformat(),
                resolved_by=resolved_by or DEFAULT_ACTOR,
                history_limit=self._history_limit,
            )
        except ValueError as e:
            raise DomainRuleViolation(str(e)) from e

        self._locker_repo.upsert(locker)
        logger.info("Locker #{} maintenance resolved", number)
        return locker
