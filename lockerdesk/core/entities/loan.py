from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable

OPEN_RETURN_MARKER = "aberto"

IdFactory = Callable[[], str]


def new_loan_id() -> str:
    return uuid.uuid4().hex[:9].upper()


def is_open_return_date(return_date: str | None) -> bool:
    """
    A loan is still open when its return date is empty or marked "aberto".
    """
    if return_date is None or not return_date.strip():
        return True
    return OPEN_RETURN_MARKER in return_date.lower()


@dataclass(slots=True)
class LoanData:
    id: str
    locker_number: int
    physical_location: str
    registration_number: str
    student_name: str
    student_class: str
    loan_date: str
    return_date: str | None = None
    observation: str = ""

    @property
    def is_open(self) -> bool:
        return is_open_return_date(self.return_date)


LOAN_DATE_FORMAT = "%d/%m/%Y"


def format_loan_date(value: date) -> str:
    return value.strftime(LOAN_DATE_FORMAT)


def parse_loan_date(value: str | None) -> date | None:
    """Parse a DD/MM/YYYY date; anything else gives None."""
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), LOAN_DATE_FORMAT).date()
    except ValueError:
        return None
