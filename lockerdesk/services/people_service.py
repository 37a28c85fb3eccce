from __future__ import annotations

from typing import Sequence

from sqlalchemy.orm import Session

from lockerdesk.core.entities.person import PersonType
from lockerdesk.core.parsers.decoding import decode_csv_bytes
from lockerdesk.core.use_cases.import_people import ImportPeopleUseCase, UploadedFile
from lockerdesk.core.use_cases.import_students import ImportStudentsUseCase
from lockerdesk.core.use_cases.people import DeletePersonUseCase, ListPeopleUseCase, SavePersonUseCase
from lockerdesk.core.use_cases.search_students import SearchStudentsUseCase
from lockerdesk.infrastructure.config import settings
from lockerdesk.infrastructure.layouts import get_layouts
from lockerdesk.infrastructure.repositories.locker_repository_impl import LockerRepositoryImpl
from lockerdesk.infrastructure.repositories.person_repository_impl import PersonRepositoryImpl
from lockerdesk.infrastructure.repositories.student_repository_impl import StudentRepositoryImpl
from lockerdesk.schemas.models import (
    PeopleFileOutcome,
    PeopleImportResult,
    Person,
    PersonIn,
    SkippedRow,
    StudentImportResult,
    StudentLoans,
)


def list_people_service(person_type: PersonType | None, query: str | None, db: Session) -> list[Person]:
    use_case = ListPeopleUseCase(person_repo=PersonRepositoryImpl(db))
    return [Person.model_validate(p) for p in use_case.execute(person_type=person_type, query=query)]


def save_person_service(body: PersonIn, person_id: str | None, db: Session) -> Person:
    use_case = SavePersonUseCase(person_repo=PersonRepositoryImpl(db))
    person = use_case.execute(
        matricula=body.matricula,
        name=body.name,
        person_type=body.type,
        person_id=person_id,
    )
    return Person.model_validate(person)


def delete_person_service(person_id: str, db: Session) -> None:
    DeletePersonUseCase(person_repo=PersonRepositoryImpl(db)).execute(person_id=person_id)


def import_people_service(files: Sequence[tuple[str, bytes]], db: Session) -> PeopleImportResult:
    use_case = ImportPeopleUseCase(person_repo=PersonRepositoryImpl(db), encodings=settings.csv_encodings)
    result = use_case.execute([UploadedFile(filename=name, content=content) for name, content in files])
    return PeopleImportResult(
        imported=result.imported,
        duplicates=result.duplicates,
        files=[PeopleFileOutcome.model_validate(f) for f in result.files],
    )


def import_students_service(content: bytes, db: Session) -> StudentImportResult:
    text = decode_csv_bytes(content, settings.csv_encodings)
    use_case = ImportStudentsUseCase(student_repo=StudentRepositoryImpl(db), layout=get_layouts()["roster"])
    result = use_case.execute(text)
    return StudentImportResult(
        imported=result.imported,
        rows_read=result.report.rows_read,
        skipped=[SkippedRow.model_validate(s) for s in result.report.skipped],
    )


def search_students_service(term: str, db: Session) -> list[StudentLoans]:
    use_case = SearchStudentsUseCase(
        student_repo=StudentRepositoryImpl(db),
        person_repo=PersonRepositoryImpl(db),
        locker_repo=LockerRepositoryImpl(db),
    )
    return [StudentLoans.model_validate(r) for r in use_case.execute(term=term)]
