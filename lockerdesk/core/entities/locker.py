from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from lockerdesk.core.entities.loan import LoanData
from lockerdesk.core.entities.maintenance import MaintenanceData


class LockerStatus(str, Enum):
    AVAILABLE = "Disponível"
    OCCUPIED = "Ocupado"
    MAINTENANCE = "Manutenção"


@dataclass(slots=True)
class Locker:
    number: int
    status: LockerStatus = LockerStatus.AVAILABLE
    location: str = ""
    current_loan: LoanData | None = None
    loan_history: list[LoanData] = field(default_factory=list)
    maintenance_record: MaintenanceData | None = None
    maintenance_history: list[MaintenanceData] = field(default_factory=list)

    def record_loan(self, loan: LoanData) -> bool:
        """
        Place an imported loan row: the first open loan becomes the current one,
        everything else is history. Returns True when the loan became current.
        """
        if loan.is_open and self.current_loan is None:
            self.current_loan = loan
            self.status = LockerStatus.OCCUPIED
            return True
        self.loan_history.append(loan)
        return False

    def lend(self, loan: LoanData) -> None:
        if self.status is not LockerStatus.AVAILABLE:
            raise ValueError(f"Locker #{self.number} is not available ({self.status.value})")
        self.current_loan = loan
        self.status = LockerStatus.OCCUPIED

    def return_loan(self, *, return_date: str, history_limit: int) -> LoanData:
        if self.current_loan is None:
            raise ValueError(f"Locker #{self.number} has no active loan")
        finished = self.current_loan
        finished.return_date = return_date
        self.loan_history = [finished, *self.loan_history][:history_limit]
        self.current_loan = None
        self.status = LockerStatus.AVAILABLE
        return finished

    def update_observation(self, observation: str) -> None:
        if self.current_loan is None:
            raise ValueError(f"Locker #{self.number} has no active loan")
        self.current_loan.observation = observation

    def start_maintenance(self, record: MaintenanceData, *, history_limit: int) -> None:
        if self.current_loan is not None:
            raise ValueError(f"Locker #{self.number} has an active loan; return the key first")
        if self.maintenance_record is not None:
            raise ValueError(f"Locker #{self.number} is already under maintenance")
        self.maintenance_record = record
        self.maintenance_history = [record, *self.maintenance_history][:history_limit]
        self.status = LockerStatus.MAINTENANCE

    def resolve_maintenance(self, *, resolved_at: str, resolved_by: str | None, history_limit: int) -> MaintenanceData:
        record = self.maintenance_record
        if record is None:
            raise ValueError(f"Locker #{self.number} has no open maintenance record")

        # The open record is already in history; swap that one entry for the resolved copy.
        remaining = list(self.maintenance_history)
        if record in remaining:
            remaining.remove(record)
        record.resolve(resolved_at=resolved_at, resolved_by=resolved_by)
        self.maintenance_history = [record, *remaining][:history_limit]
        self.maintenance_record = None
        self.status = LockerStatus.AVAILABLE
        return record

    def clear_loans(self) -> None:
        self.current_loan = None
        self.loan_history = []
        if self.status is LockerStatus.OCCUPIED:
            self.status = LockerStatus.AVAILABLE
