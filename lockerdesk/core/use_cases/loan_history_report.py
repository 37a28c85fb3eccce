from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, Sequence

from lockerdesk.core.entities.loan import LoanData, format_loan_date, parse_loan_date
from lockerdesk.core.entities.locker import Locker
from lockerdesk.core.repositories.locker_repository import LockerRepository

EXPORT_HEADERS = ("Número do Armário", "Matrícula", "Nome do Aluno", "Turma", "Tipo de Ação", "Data")


class ActionType(str, Enum):
    LOAN = "Empréstimo"
    RETURN = "Devolução"


@dataclass(frozen=True, slots=True)
class HistoryEntryDTO:
    locker_number: int
    registration: str
    student_name: str
    student_class: str
    action_type: ActionType
    action_date: str


def _entry(locker: Locker, loan: LoanData, action: ActionType, when: str) -> HistoryEntryDTO:
    return HistoryEntryDTO(
        locker_number=locker.number,
        registration=loan.registration_number,
        student_name=loan.student_name,
        student_class=loan.student_class,
        action_type=action,
        action_date=when,
    )


def history_entries(lockers: Iterable[Locker]) -> list[HistoryEntryDTO]:
    """
    One loan entry per loan, plus one return entry per closed loan in history.
    """
    entries: list[HistoryEntryDTO] = []
    for locker in lockers:
        if locker.current_loan is not None:
            entries.append(_entry(locker, locker.current_loan, ActionType.LOAN, locker.current_loan.loan_date))

        for loan in locker.loan_history:
            entries.append(_entry(locker, loan, ActionType.LOAN, loan.loan_date))
            if not loan.is_open:
                entries.append(_entry(locker, loan, ActionType.RETURN, loan.return_date))
    return entries


def sort_newest_first(entries: Sequence[HistoryEntryDTO]) -> list[HistoryEntryDTO]:
    # Entries with dates we cannot read go last, in their original order.
    def key(entry: HistoryEntryDTO) -> tuple[int, int]:
        parsed = parse_loan_date(entry.action_date)
        if parsed is None:
            return (1, 0)
        return (0, -parsed.toordinal())

    return sorted(entries, key=key)


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def render_history_csv(entries: Sequence[HistoryEntryDTO]) -> str:
    """
    Semicolon-separated export with a BOM so spreadsheet tools pick up UTF-8.
    """
    lines = [";".join(EXPORT_HEADERS)]
    for e in entries:
        lines.append(
            ";".join(
                [
                    str(e.locker_number),
                    e.registration,
                    _quote(e.student_name),
                    _quote(e.student_class),
                    e.action_type.value,
                    e.action_date,
                ]
            )
        )
    return "\ufeff" + "\n".join(lines)


class LoanHistoryReportUseCase:
    def __init__(self, *, locker_repo: LockerRepository) -> None:
        self._locker_repo = locker_repo

    def execute(self, *, on_date: date | None = None, student: str | None = None) -> list[HistoryEntryDTO]:
        entries = history_entries(self._locker_repo.list())

        if on_date is not None:
            wanted = format_loan_date(on_date)
            entries = [e for e in entries if e.action_date == wanted]

        if student:
            query = student.lower()
            entries = [
                e for e in entries
                if query in e.student_name.lower() or query in e.registration.lower()
            ]

        return sort_newest_first(entries)


class ExportLoanHistoryUseCase:
    def __init__(self, *, locker_repo: LockerRepository) -> None:
        self._locker_repo = locker_repo

    def execute(self) -> str:
        entries = sort_newest_first(history_entries(self._locker_repo.list()))
        return render_history_csv(entries)
