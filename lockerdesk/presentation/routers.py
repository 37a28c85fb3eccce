from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from typing import Iterator, List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile
from sqlalchemy.orm import Session

from lockerdesk.core.entities.locker import LockerStatus
from lockerdesk.core.entities.person import PersonType
from lockerdesk.core.parsers.decoding import CsvParseError
from lockerdesk.core.use_cases.errors import DomainRuleViolation, NotFoundError, ValidationError
from lockerdesk.infrastructure.database import SessionLocal
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
    ObservationUpdate,
    PeopleImportResult,
    Person,
    PersonIn,
    StudentImportResult,
    StudentLoans,
    TransferRequest,
    TransferResult,
)
from lockerdesk.services.locker_service import (
    clear_loans_service,
    export_loan_history_service,
    generate_lockers_service,
    get_locker_service,
    import_lockers_service,
    lend_locker_service,
    list_lockers_service,
    loan_history_service,
    locker_stats_service,
    preview_locker_import_service,
    resolve_maintenance_service,
    return_locker_service,
    start_maintenance_service,
    transfer_loan_service,
    update_observation_service,
)
from lockerdesk.services.people_service import (
    delete_person_service,
    import_people_service,
    import_students_service,
    list_people_service,
    save_person_service,
    search_students_service,
)

router = APIRouter()


def get_db() -> Session:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def _domain_errors() -> Iterator[None]:
    """
    Map domain exceptions to HTTP errors:
      - 400 if the uploaded file cannot be parsed
      - 404 if the target does not exist
      - 409 on domain rule violation
      - 422 on validation error
    """
    try:
        yield
    except CsvParseError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DomainRuleViolation as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


# -----------------------------
# Lockers
# -----------------------------
@router.get("/lockers", response_model=List[Locker])
def get_lockers(status: Optional[LockerStatus] = None, db: Session = Depends(get_db)) -> List[Locker]:
    """
    List lockers ordered by number
    """
    return list_lockers_service(status, db)


@router.get("/lockers/stats", response_model=LockerStats)
def get_lockers_stats(db: Session = Depends(get_db)) -> LockerStats:
    return locker_stats_service(db)


@router.post("/lockers/import/preview", response_model=LockerImportPreview)
def post_lockers_import_preview(file: UploadFile = File(...), db: Session = Depends(get_db)) -> LockerImportPreview:
    """
    Parse a loan-history CSV and return the lockers it would write, without saving
    """
    with _domain_errors():
        return preview_locker_import_service(file.file.read(), db)


@router.post("/lockers/import", response_model=LockerImportSummary)
def post_lockers_import(file: UploadFile = File(...), db: Session = Depends(get_db)) -> LockerImportSummary:
    """
    Import a loan-history CSV and upsert every locker found in it
    """
    with _domain_errors():
        return import_lockers_service(file.file.read(), db)


@router.post("/lockers/batch", response_model=List[Locker])
def post_lockers_batch(body: BatchGenerate, db: Session = Depends(get_db)) -> List[Locker]:
    with _domain_errors():
        return generate_lockers_service(body, db)


@router.delete("/lockers/loans", response_model=ClearLoansResult)
def delete_lockers_loans(db: Session = Depends(get_db)) -> ClearLoansResult:
    """
    Remove every current loan and loan history
    """
    return clear_loans_service(db)


@router.get("/lockers/{number}", response_model=Locker)
def get_lockers_number(number: int, db: Session = Depends(get_db)) -> Locker:
    with _domain_errors():
        return get_locker_service(number, db)


@router.post("/lockers/{number}/loan", response_model=Locker)
def post_lockers_number_loan(number: int, body: LoanCreate, db: Session = Depends(get_db)) -> Locker:
    with _domain_errors():
        return lend_locker_service(number, body, db)


@router.post("/lockers/{number}/return", response_model=Locker)
def post_lockers_number_return(number: int, db: Session = Depends(get_db)) -> Locker:
    with _domain_errors():
        return return_locker_service(number, db)


@router.patch("/lockers/{number}/observation", response_model=Locker)
def patch_lockers_number_observation(number: int, body: ObservationUpdate, db: Session = Depends(get_db)) -> Locker:
    with _domain_errors():
        return update_observation_service(number, body.observation, db)


@router.post("/lockers/{number}/transfer", response_model=TransferResult)
def post_lockers_number_transfer(number: int, body: TransferRequest, db: Session = Depends(get_db)) -> TransferResult:
    with _domain_errors():
        return transfer_loan_service(number, body.target_number, db)


@router.post("/lockers/{number}/maintenance", response_model=Locker)
def post_lockers_number_maintenance(number: int, body: MaintenanceCreate, db: Session = Depends(get_db)) -> Locker:
    with _domain_errors():
        return start_maintenance_service(number, body, db)


@router.post("/lockers/{number}/maintenance/resolve", response_model=Locker)
def post_lockers_number_maintenance_resolve(
    number: int,
    body: Optional[MaintenanceResolve] = None,
    db: Session = Depends(get_db),
) -> Locker:
    with _domain_errors():
        return resolve_maintenance_service(number, body or MaintenanceResolve(), db)


# -----------------------------
# Reports
# -----------------------------
@router.get("/reports/loans", response_model=List[HistoryEntry])
def get_reports_loans(
    on_date: Optional[date] = Query(None, alias="date"),
    student: Optional[str] = None,
    db: Session = Depends(get_db),
) -> List[HistoryEntry]:
    """
    Loan and return events, newest first
    """
    return loan_history_service(on_date, student, db)


@router.get("/reports/loans.csv")
def get_reports_loans_csv(db: Session = Depends(get_db)) -> Response:
    content = export_loan_history_service(db)
    filename = f"historico_armarios_{datetime.now().strftime('%Y-%m-%d')}.csv"
    return Response(
        content=content.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


# -----------------------------
# People and students
# -----------------------------
@router.get("/people", response_model=List[Person])
def get_people(
    type: Optional[PersonType] = None,
    q: Optional[str] = None,
    db: Session = Depends(get_db),
) -> List[Person]:
    return list_people_service(type, q, db)


@router.post("/people", response_model=Person, status_code=201)
def post_people(body: PersonIn, db: Session = Depends(get_db)) -> Person:
    with _domain_errors():
        return save_person_service(body, None, db)


@router.put("/people/{person_id}", response_model=Person)
def put_people_person_id(person_id: str, body: PersonIn, db: Session = Depends(get_db)) -> Person:
    with _domain_errors():
        return save_person_service(body, person_id, db)


@router.delete("/people/{person_id}", status_code=204)
def delete_people_person_id(person_id: str, db: Session = Depends(get_db)) -> Response:
    with _domain_errors():
        delete_person_service(person_id, db)
    return Response(status_code=204)


@router.post("/people/import", response_model=PeopleImportResult)
def post_people_import(files: List[UploadFile] = File(...), db: Session = Depends(get_db)) -> PeopleImportResult:
    """
    Import people from several CSV files; a bad file does not stop the others
    """
    uploads = [(f.filename or "", f.file.read()) for f in files]
    return import_people_service(uploads, db)


@router.post("/students/import", response_model=StudentImportResult)
def post_students_import(file: UploadFile = File(...), db: Session = Depends(get_db)) -> StudentImportResult:
    with _domain_errors():
        return import_students_service(file.file.read(), db)


@router.get("/students/search", response_model=List[StudentLoans])
def get_students_search(q: str, db: Session = Depends(get_db)) -> List[StudentLoans]:
    return search_students_service(q, db)
