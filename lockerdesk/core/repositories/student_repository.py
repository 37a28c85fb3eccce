from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from lockerdesk.core.entities.student import Student


class StudentRepository(ABC):
    """
    Repository interface for the roster of enrolled students.
    """

    @abstractmethod
    def list(self) -> list[Student]:
        raise NotImplementedError

    @abstractmethod
    def upsert_many(self, students: Sequence[Student]) -> int:
        """Insert or update students keyed by registration. Returns rows written."""
        raise NotImplementedError
