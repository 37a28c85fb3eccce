from __future__ import annotations

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from lockerdesk.core.entities.student import Student
from lockerdesk.core.repositories.student_repository import StudentRepository
from lockerdesk.infrastructure.models.models import StudentModel


class StudentRepositoryImpl(StudentRepository):
    """SQLAlchemy implementation for the student roster."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def list(self) -> list[Student]:
        rows = self._db.scalars(select(StudentModel).order_by(StudentModel.name))
        return [
            Student(
                registration=row.registration,
                name=row.name,
                course=row.course,
                situation=row.situation,
                email=row.email,
            )
            for row in rows
        ]

    def upsert_many(self, students: Sequence[Student]) -> int:
        try:
            for student in students:
                row = self._db.get(StudentModel, student.registration)
                if row is None:
                    row = StudentModel(registration=student.registration)

                row.name = student.name
                row.course = student.course
                row.situation = student.situation
                row.email = student.email
                self._db.add(row)
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
        return len(students)
