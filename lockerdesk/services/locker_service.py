from __future__ import annotations

from datetime import date

from sqlalchemy.orm import Session

from lockerdesk.core.entities.locker import LockerStatus
from lockerdesk.core.parsers.decoding import decode_csv_bytes
from lockerdesk.core.use_cases.clear_loans import ClearLoansUseCase
from lockerdesk.core.use_cases.generate_lockers import GenerateLockersUseCase
from lockerdesk.core.use_cases.import_lockers import ImportLockersUseCase, LockerImportResult
from lockerdesk.core.use_cases.lend_locker import LendLockerUseCase, LoanRequest, UpdateObservationUseCase
from lockerdesk.core.use_cases.loan_history_report import ExportLoanHistoryUseCase, LoanHistoryReportUseCase
from lockerdesk.core.use_cases.locker_queries import GetLockerUseCase, ListLockersUseCase, LockerStatsUseCase
from lockerdesk.core.use_cases.maintenance import ResolveMaintenanceUseCase, StartMaintenanceUseCase
from lockerdesk.core.use_cases.return_locker import ReturnLockerUseCase
from lockerdesk.core.use_cases.transfer_loan import TransferLoanUseCase
from lockerdesk.infrastructure.config import settings
from lockerdesk.infrastructure.layouts import get_layouts
from lockerdesk.infrastructure.repositories.locker_repository_impl import LockerRepositoryImpl
from lockerdesk.schemas.models import (
    BatchGenerate,
    ClearLoansResult,
    HistoryEntry,
    LoanCreate,
    Locker,
    LockerImportPreview,
    LockerImportSummary,
    LockerStats,
    MaintenanceCreate,
    MaintenanceResolve,
    SkippedRow,
    TransferResult,
)


def _fallback_location(number: int) -> str:
    if number <= settings.main_block_max_number:
        return settings.main_block_name
    return settings.annex_block_name


def _import_use_case(db: Session) -> ImportLockersUseCase:
    return ImportLockersUseCase(
        locker_repo=LockerRepositoryImpl(db),
        layout=get_layouts()["lockers"],
        fallback_location=_fallback_location,
    )


def _import_summary(result: LockerImportResult) -> dict:
    return {
        "lockers": len(result.lockers),
        "occupied": result.occupied,
        "rows_read": result.report.rows_read,
        "loans_read": result.report.loans_read,
        "persisted": result.persisted,
        "skipped": [SkippedRow.model_validate(s) for s in result.report.skipped],
    }


def list_lockers_service(status: LockerStatus | None, db: Session) -> list[Locker]:
    use_case = ListLockersUseCase(locker_repo=LockerRepositoryImpl(db))
    return [Locker.model_validate(locker) for locker in use_case.execute(status=status)]


def get_locker_service(number: int, db: Session) -> Locker:
    use_case = GetLockerUseCase(locker_repo=LockerRepositoryImpl(db))
    return Locker.model_validate(use_case.execute(number=number))


def locker_stats_service(db: Session) -> LockerStats:
    dto = LockerStatsUseCase(locker_repo=LockerRepositoryImpl(db)).execute()
    return LockerStats(
        total=dto.total,
        available=dto.available,
        occupied=dto.occupied,
        maintenance=dto.maintenance,
    )


def preview_locker_import_service(content: bytes, db: Session) -> LockerImportPreview:
    """
    Parse an uploaded export without writing anything, so it can be confirmed.
    """
    text = decode_csv_bytes(content, settings.csv_encodings)
    result = _import_use_case(db).preview(text)
    return LockerImportPreview(
        **_import_summary(result),
        items=[Locker.model_validate(locker) for locker in result.lockers],
    )


def import_lockers_service(content: bytes, db: Session) -> LockerImportSummary:
    text = decode_csv_bytes(content, settings.csv_encodings)
    result = _import_use_case(db).execute(text)
    return LockerImportSummary(**_import_summary(result))


def lend_locker_service(number: int, body: LoanCreate, db: Session) -> Locker:
    use_case = LendLockerUseCase(locker_repo=LockerRepositoryImpl(db))
    request = LoanRequest(
        registration_number=body.registration_number,
        student_name=body.student_name,
        student_class=body.student_class,
        loan_date=body.loan_date,
        observation=body.observation,
    )
    return Locker.model_validate(use_case.execute(number=number, request=request))


def return_locker_service(number: int, db: Session) -> Locker:
    use_case = ReturnLockerUseCase(locker_repo=LockerRepositoryImpl(db), history_limit=settings.history_limit)
    return Locker.model_validate(use_case.execute(number=number))


def update_observation_service(number: int, observation: str, db: Session) -> Locker:
    use_case = UpdateObservationUseCase(locker_repo=LockerRepositoryImpl(db))
    return Locker.model_validate(use_case.execute(number=number, observation=observation))


def transfer_loan_service(number: int, target_number: int, db: Session) -> TransferResult:
    use_case = TransferLoanUseCase(locker_repo=LockerRepositoryImpl(db), history_limit=settings.history_limit)
    result = use_case.execute(number=number, target_number=target_number)
    return TransferResult(
        source=Locker.model_validate(result.source),
        target=Locker.model_validate(result.target),
    )


def start_maintenance_service(number: int, body: MaintenanceCreate, db: Session) -> Locker:
    use_case = StartMaintenanceUseCase(locker_repo=LockerRepositoryImpl(db), history_limit=settings.history_limit)
    locker = use_case.execute(number=number, problem=body.problem, registered_by=body.registered_by)
    return Locker.model_validate(locker)


def resolve_maintenance_service(number: int, body: MaintenanceResolve, db: Session) -> Locker:
    use_case = ResolveMaintenanceUseCase(locker_repo=LockerRepositoryImpl(db), history_limit=settings.history_limit)
    return Locker.model_validate(use_case.execute(number=number, resolved_by=body.resolved_by))


def generate_lockers_service(body: BatchGenerate, db: Session) -> list[Locker]:
    use_case = GenerateLockersUseCase(locker_repo=LockerRepositoryImpl(db))
    lockers = use_case.execute(block=body.block, group=body.group, start=body.start, end=body.end)
    return [Locker.model_validate(locker) for locker in lockers]


def clear_loans_service(db: Session) -> ClearLoansResult:
    result = ClearLoansUseCase(locker_repo=LockerRepositoryImpl(db)).execute()
    return ClearLoansResult(lockers=result.lockers, loans_removed=result.loans_removed)


def loan_history_service(on_date: date | None, student: str | None, db: Session) -> list[HistoryEntry]:
    use_case = LoanHistoryReportUseCase(locker_repo=LockerRepositoryImpl(db))
    return [
        HistoryEntry(
            locker_number=e.locker_number,
            registration=e.registration,
            student_name=e.student_name,
            student_class=e.student_class,
            action_type=e.action_type.value,
            action_date=e.action_date,
        )
        for e in use_case.execute(on_date=on_date, student=student)
    ]


def export_loan_history_service(db: Session) -> str:
    return ExportLoanHistoryUseCase(locker_repo=LockerRepositoryImpl(db)).execute()
