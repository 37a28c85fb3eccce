from __future__ import annotations

from dataclasses import dataclass, field

from lockerdesk.core.entities.loan import LoanData
from lockerdesk.core.entities.locker import Locker
from lockerdesk.core.entities.person import PersonType
from lockerdesk.core.entities.student import Student
from lockerdesk.core.parsers.people_csv import normalize_text
from lockerdesk.core.repositories.locker_repository import LockerRepository
from lockerdesk.core.repositories.person_repository import PersonRepository
from lockerdesk.core.repositories.student_repository import StudentRepository

MAX_RESULTS = 50
PEOPLE_SITUATION = "Matriculado"


@dataclass(frozen=True, slots=True)
class StudentLoansDTO:
    student: Student
    active_loans: list[LoanData] = field(default_factory=list)
    past_loans: list[LoanData] = field(default_factory=list)


def parse_search_groups(term: str) -> list[list[str]]:
    """
    "ana silva, 2024" -> [["ana", "silva"], ["2024"]]

    Commas separate alternatives; the words of one alternative must all match.
    """
    groups = [normalize_text(segment).split() for segment in term.split(",")]
    return [group for group in groups if group]


def matches(student: Student, groups: list[list[str]]) -> bool:
    haystack = normalize_text(f"{student.registration} {student.name} {student.course}")
    return any(all(word in haystack for word in group) for group in groups)


def loans_of(registration: str, lockers: list[Locker]) -> tuple[list[LoanData], list[LoanData]]:
    active: list[LoanData] = []
    past: list[LoanData] = []
    for locker in lockers:
        if locker.current_loan is not None and locker.current_loan.registration_number == registration:
            active.append(locker.current_loan)
        past.extend(loan for loan in locker.loan_history if loan.registration_number == registration)
    return active, past


class SearchStudentsUseCase:
    """
    Free-text student search with each student's key custody.

    Candidates are the imported roster plus student-type people who are not on it.
    """

    def __init__(
        self,
        *,
        student_repo: StudentRepository,
        person_repo: PersonRepository,
        locker_repo: LockerRepository,
    ) -> None:
        self._student_repo = student_repo
        self._person_repo = person_repo
        self._locker_repo = locker_repo

    def _candidates(self) -> list[Student]:
        students = self._student_repo.list()
        known = {s.registration for s in students}
        for person in self._person_repo.list(person_type=PersonType.STUDENT):
            if person.matricula not in known:
                students.append(
                    Student(
                        registration=person.matricula,
                        name=person.name,
                        course="",
                        situation=PEOPLE_SITUATION,
                    )
                )
                known.add(person.matricula)
        return students

    def execute(self, *, term: str) -> list[StudentLoansDTO]:
        groups = parse_search_groups(term)
        if not groups:
            return []

        found = [s for s in self._candidates() if matches(s, groups)][:MAX_RESULTS]
        if not found:
            return []

        lockers = self._locker_repo.list()
        results: list[StudentLoansDTO] = []
        for student in found:
            active, past = loans_of(student.registration, lockers)
            results.append(StudentLoansDTO(student=student, active_loans=active, past_loans=past))
        return results
