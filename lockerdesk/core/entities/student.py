from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Student:
    registration: str
    name: str
    course: str
    situation: str = ""
    email: str = ""
