from __future__ import annotations

from typing import Callable

from loguru import logger

from lockerdesk.core.entities.person import Person, PersonType, new_person_id
from lockerdesk.core.repositories.person_repository import PersonRepository
from lockerdesk.core.use_cases.errors import NotFoundError, ValidationError


class ListPeopleUseCase:
    def __init__(self, *, person_repo: PersonRepository) -> None:
        self._person_repo = person_repo

    def execute(self, *, person_type: PersonType | None = None, query: str | None = None) -> list[Person]:
        people = self._person_repo.list(person_type=person_type)
        if not query:
            return people

        needle = query.lower()
        return [p for p in people if needle in p.name.lower() or query in p.matricula]


class SavePersonUseCase:
    """
    Create a person (no id) or update an existing one (id given).
    Matriculas are unique across people.
    """

    def __init__(self, *, person_repo: PersonRepository, id_factory: Callable[[], str] = new_person_id) -> None:
        self._person_repo = person_repo
        self._id_factory = id_factory

    def execute(
        self,
        *,
        matricula: str,
        name: str,
        person_type: PersonType,
        person_id: str | None = None,
    ) -> Person:
        matricula = matricula.strip()
        name = name.strip()
        if not matricula or not name:
            raise ValidationError("Name and matricula are required")

        if person_id is not None and self._person_repo.get(person_id) is None:
            raise NotFoundError("Person not found")

        duplicate = self._person_repo.get_by_matricula(matricula)
        if duplicate is not None and duplicate.id != person_id:
            raise ValidationError(f"Matricula {matricula!r} is already registered for {duplicate.name!r}")

        person = Person(id=person_id or self._id_factory(), matricula=matricula, name=name, type=person_type)
        self._person_repo.upsert(person)
        logger.info("Saved person {} ({})", person.name, person.matricula)
        return person


class DeletePersonUseCase:
    def __init__(self, *, person_repo: PersonRepository) -> None:
        self._person_repo = person_repo

    def execute(self, *, person_id: str) -> None:
        if not self._person_repo.delete(person_id):
            raise NotFoundError("Person not found")
