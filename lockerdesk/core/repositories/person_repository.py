from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from lockerdesk.core.entities.person import Person, PersonType


class PersonRepository(ABC):
    @abstractmethod
    def get(self, person_id: str) -> Person | None:
        raise NotImplementedError

    @abstractmethod
    def get_by_matricula(self, matricula: str) -> Person | None:
        raise NotImplementedError

    @abstractmethod
    def list(self, *, person_type: PersonType | None = None) -> list[Person]:
        raise NotImplementedError

    @abstractmethod
    def upsert(self, person: Person) -> None:
        raise NotImplementedError

    @abstractmethod
    def add_many(self, people: Sequence[Person]) -> int:
        """Insert new people in one unit. Returns rows written."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, person_id: str) -> bool:
        """Returns False when nothing was deleted."""
        raise NotImplementedError
