from __future__ import annotations

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from lockerdesk.core.entities.person import Person, PersonType
from lockerdesk.core.repositories.person_repository import PersonRepository
from lockerdesk.infrastructure.models.models import PersonModel


class PersonRepositoryImpl(PersonRepository):
    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, person_id: str) -> Person | None:
        row = self._db.get(PersonModel, person_id)
        return self._to_entity(row) if row is not None else None

    def get_by_matricula(self, matricula: str) -> Person | None:
        row = self._db.scalars(select(PersonModel).where(PersonModel.matricula == matricula)).first()
        return self._to_entity(row) if row is not None else None

    def list(self, *, person_type: PersonType | None = None) -> list[Person]:
        stmt = select(PersonModel).order_by(PersonModel.name)
        if person_type is not None:
            stmt = stmt.where(PersonModel.type == person_type)
        return [self._to_entity(row) for row in self._db.scalars(stmt)]

    def upsert(self, person: Person) -> None:
        row = self._db.get(PersonModel, person.id)
        if row is None:
            row = PersonModel(id=person.id)

        row.matricula = person.matricula
        row.name = person.name
        row.type = person.type

        self._db.add(row)
        self._db.commit()

    def add_many(self, people: Sequence[Person]) -> int:
        try:
            self._db.add_all(
                PersonModel(id=p.id, matricula=p.matricula, name=p.name, type=p.type) for p in people
            )
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
        return len(people)

    def delete(self, person_id: str) -> bool:
        row = self._db.get(PersonModel, person_id)
        if row is None:
            return False
        self._db.delete(row)
        self._db.commit()
        return True

    @staticmethod
    def _to_entity(row: PersonModel) -> Person:
        return Person(
            id=row.id,
            matricula=row.matricula,
            name=row.name,
            type=PersonType(row.type) if not isinstance(row.type, PersonType) else row.type,
        )
