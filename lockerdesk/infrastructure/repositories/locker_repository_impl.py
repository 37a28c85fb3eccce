from __future__ import annotations

from dataclasses import asdict
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from lockerdesk.core.entities.loan import LoanData
from lockerdesk.core.entities.locker import Locker, LockerStatus
from lockerdesk.core.entities.maintenance import MaintenanceData
from lockerdesk.core.repositories.locker_repository import LockerRepository
from lockerdesk.infrastructure.models.models import LockerModel


class LockerRepositoryImpl(LockerRepository):
    """
    SQLAlchemy implementation for Locker.

    Loans and maintenance entries are stored as JSON documents on the locker row.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, number: int) -> Locker | None:
        row = self._db.get(LockerModel, number)
        if row is None:
            return None
        return self._row_to_locker(row)

    def list(self, *, status: LockerStatus | None = None) -> list[Locker]:
        stmt = select(LockerModel).order_by(LockerModel.number)
        if status is not None:
            stmt = stmt.where(LockerModel.status == status)
        return [self._row_to_locker(row) for row in self._db.scalars(stmt)]

    def upsert(self, locker: Locker) -> None:
        self._write(locker)
        self._db.commit()

    def upsert_many(self, lockers: Sequence[Locker]) -> int:
        try:
            for locker in lockers:
                self._write(locker)
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
        return len(lockers)

    def _write(self, locker: Locker) -> None:
        row = self._db.get(LockerModel, locker.number)
        if row is None:
            row = LockerModel(number=locker.number)

        row.status = locker.status
        row.location = locker.location
        row.current_loan = _to_record(locker.current_loan)
        row.loan_history = [asdict(loan) for loan in locker.loan_history]
        row.maintenance_record = _to_record(locker.maintenance_record)
        row.maintenance_history = [asdict(m) for m in locker.maintenance_history]

        self._db.add(row)

    @staticmethod
    def _row_to_locker(row: LockerModel) -> Locker:
        return Locker(
            number=row.number,
            status=LockerStatus(row.status) if not isinstance(row.status, LockerStatus) else row.status,
            location=row.location,
            current_loan=LoanData(**row.current_loan) if row.current_loan else None,
            loan_history=[LoanData(**loan) for loan in row.loan_history or []],
            maintenance_record=MaintenanceData(**row.maintenance_record) if row.maintenance_record else None,
            maintenance_history=[MaintenanceData(**m) for m in row.maintenance_history or []],
        )


def _to_record(value: LoanData | MaintenanceData | None) -> dict[str, Any] | None:
    return asdict(value) if value is not None else None
