from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum


class PersonType(str, Enum):
    STUDENT = "Aluno"
    SERVER = "Servidor"
    EXTERNAL = "Externo"


@dataclass(slots=True)
class Person:
    id: str
    matricula: str
    name: str
    type: PersonType = PersonType.STUDENT


def new_person_id() -> str:
    return uuid.uuid4().hex[:9]
