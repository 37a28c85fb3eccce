from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from lockerdesk.core.entities.locker import LockerStatus
from lockerdesk.core.entities.person import PersonType
from lockerdesk.infrastructure.database import Base


class LockerModel(Base):
    __tablename__ = "lockers"

    number: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    status: Mapped[LockerStatus] = mapped_column(Enum(LockerStatus), nullable=False, default=LockerStatus.AVAILABLE)
    location: Mapped[str] = mapped_column(String, nullable=False, default="")
    current_loan: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    loan_history: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    maintenance_record: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    maintenance_history: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)


class PersonModel(Base):
    __tablename__ = "people"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    matricula: Mapped[str] = mapped_column(String, nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    type: Mapped[PersonType] = mapped_column(Enum(PersonType), nullable=False, default=PersonType.STUDENT)


class StudentModel(Base):
    __tablename__ = "students"

    registration: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    course: Mapped[str] = mapped_column(String, nullable=False, default="")
    situation: Mapped[str] = mapped_column(String, nullable=False, default="")
    email: Mapped[str] = mapped_column(String, nullable=False, default="")
