from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from lockerdesk.core.entities.locker import LockerStatus
from lockerdesk.core.entities.person import PersonType


class Loan(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    locker_number: int
    physical_location: str
    registration_number: str
    student_name: str
    student_class: str
    loan_date: str
    return_date: Optional[str] = None
    observation: str = ""


class Maintenance(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    problem: str
    registered_at: str
    registered_by: Optional[str] = None
    solution: Optional[str] = None
    resolved_at: Optional[str] = None
    resolved_by: Optional[str] = None


class Locker(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    number: int
    status: LockerStatus
    location: str
    current_loan: Optional[Loan] = None
    loan_history: List[Loan] = []
    maintenance_record: Optional[Maintenance] = None
    maintenance_history: List[Maintenance] = []


class LockerStats(BaseModel):
    total: int
    available: int
    occupied: int
    maintenance: int


class SkippedRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    line: int
    reason: str


class LockerImportSummary(BaseModel):
    lockers: int
    occupied: int
    rows_read: int
    loans_read: int
    persisted: int
    skipped: List[SkippedRow]


class LockerImportPreview(LockerImportSummary):
    items: List[Locker]


class LoanCreate(BaseModel):
    registration_number: str = ""
    student_name: str = ""
    student_class: str = ""
    loan_date: Optional[str] = None
    observation: str = ""


class ObservationUpdate(BaseModel):
    observation: str


class TransferRequest(BaseModel):
    target_number: int


class TransferResult(BaseModel):
    source: Locker
    target: Locker


class MaintenanceCreate(BaseModel):
    problem: str
    registered_by: Optional[str] = None


class MaintenanceResolve(BaseModel):
    resolved_by: Optional[str] = None


class BatchGenerate(BaseModel):
    block: str
    group: str
    start: int = Field(ge=1)
    end: int = Field(ge=1)


class ClearLoansResult(BaseModel):
    lockers: int
    loans_removed: int


class HistoryEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    locker_number: int
    registration: str
    student_name: str
    student_class: str
    action_type: str
    action_date: str


class PersonIn(BaseModel):
    matricula: str
    name: str
    type: PersonType = PersonType.STUDENT


class Person(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    matricula: str
    name: str
    type: PersonType


class PeopleFileOutcome(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    filename: str
    person_type: Optional[PersonType] = None
    rows: int = 0
    skipped: int = 0
    error: Optional[str] = None


class PeopleImportResult(BaseModel):
    imported: int
    duplicates: int
    files: List[PeopleFileOutcome]


class Student(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    registration: str
    name: str
    course: str
    situation: str = ""
    email: str = ""


class StudentImportResult(BaseModel):
    imported: int
    rows_read: int
    skipped: List[SkippedRow]


class StudentLoans(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    student: Student
    active_loans: List[Loan]
    past_loans: List[Loan]
