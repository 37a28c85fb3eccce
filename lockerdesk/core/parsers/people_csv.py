from __future__ import annotations

import csv
import io
import unicodedata
from dataclasses import dataclass
from typing import Callable, Sequence

from lockerdesk.core.entities.person import Person, PersonType, new_person_id
from lockerdesk.core.parsers.decoding import CsvParseError
from lockerdesk.core.parsers.report import ImportReport

HEADER_SEARCH_ROWS = 10

# Normalised header cell -> logical column
COLUMN_ALIASES: dict[str, str] = {
    "nome": "name",
    "nome completo": "name",
    "nome do aluno": "name",
    "nome do servidor": "name",
    "matricula": "matricula",
    "matricula siape": "matricula",
    "siape": "matricula",
    "tipo": "type",
    "vinculo": "type",
}

REQUIRED_COLUMNS: dict[str, str] = {
    "name": "nome",
    "matricula": "matrícula",
}

STAFF_MARKERS = frozenset({"siape", "matricula siape", "cargo", "lotacao", "setor"})

TYPE_ALIASES: dict[str, PersonType] = {
    "aluno": PersonType.STUDENT,
    "aluna": PersonType.STUDENT,
    "estudante": PersonType.STUDENT,
    "servidor": PersonType.SERVER,
    "servidora": PersonType.SERVER,
    "professor": PersonType.SERVER,
    "professora": PersonType.SERVER,
    "externo": PersonType.EXTERNAL,
    "externa": PersonType.EXTERNAL,
    "visitante": PersonType.EXTERNAL,
}


class HeaderNotFoundError(Exception):
    """Raise when a people file has no row naming the required columns."""

    def __init__(self, filename: str, missing: Sequence[str]) -> None:
        self.filename = filename
        self.missing = list(missing)
        label = filename or "file"
        super().__init__(f"Header not found in {label}: missing required columns: {', '.join(self.missing)}")


@dataclass(frozen=True, slots=True)
class PeopleSheet:
    person_type: PersonType
    people: list[Person]


def normalize_text(value: str) -> str:
    """Lower-case, accent-free, whitespace-collapsed form used for matching."""
    decomposed = unicodedata.normalize("NFD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return " ".join(stripped.lower().split())


DELIMITERS = (";", ",")


def detect_delimiter(text: str) -> str:
    """
    Guess the delimiter from the first line that carries one, so title rows
    above the header do not decide it.
    """
    for line in text.splitlines():
        if ";" in line or "," in line:
            return ";" if line.count(";") >= line.count(",") else ","
    return ";"


def read_rows(text: str, delimiter: str | None = None) -> list[list[str]]:
    """
    Quote-aware CSV reading: double-quoted fields, "" as an escaped quote,
    delimiters and newlines allowed inside quotes.
    """
    if delimiter is None:
        delimiter = detect_delimiter(text)
    try:
        reader = csv.reader(io.StringIO(text), delimiter=delimiter, quotechar='"', doublequote=True)
        return [row for row in reader]
    except csv.Error as e:
        raise CsvParseError(f"Failed to parse file: {e}") from e


def _map_header(row: Sequence[str]) -> dict[str, int]:
    mapping: dict[str, int] = {}
    for idx, cell in enumerate(row):
        column = COLUMN_ALIASES.get(normalize_text(cell))
        if column is not None and column not in mapping:
            mapping[column] = idx
    return mapping


def find_header(rows: Sequence[Sequence[str]], *, filename: str = "") -> tuple[int, dict[str, int]]:
    """
    Locate the header among the first rows. Returns (row index, column map).
    """
    best: dict[str, int] = {}
    for idx, row in enumerate(rows[:HEADER_SEARCH_ROWS]):
        mapping = _map_header(row)
        if all(col in mapping for col in REQUIRED_COLUMNS):
            return idx, mapping
        if len(mapping) > len(best):
            best = mapping

    missing = [label for col, label in REQUIRED_COLUMNS.items() if col not in best]
    raise HeaderNotFoundError(filename, missing)


def detect_person_type(header: Sequence[str]) -> PersonType:
    cells = {normalize_text(cell) for cell in header}
    if cells & STAFF_MARKERS:
        return PersonType.SERVER
    return PersonType.STUDENT


def _cell(row: Sequence[str], idx: int | None) -> str:
    if idx is None or idx >= len(row):
        return ""
    return row[idx].strip()


def _read_with_header(text: str, filename: str) -> tuple[list[list[str]], int, dict[str, int]]:
    # Retry with the other delimiter when the guessed one yields no header.
    guessed = detect_delimiter(text)
    first_error: HeaderNotFoundError | None = None
    for delimiter in (guessed, *(d for d in DELIMITERS if d != guessed)):
        rows = read_rows(text, delimiter)
        try:
            header_idx, columns = find_header(rows, filename=filename)
        except HeaderNotFoundError as e:
            first_error = first_error or e
            continue
        return rows, header_idx, columns
    raise first_error


def parse_people_csv(
    text: str,
    *,
    filename: str = "",
    id_factory: Callable[[], str] = new_person_id,
    report: ImportReport | None = None,
) -> PeopleSheet:
    if report is None:
        report = ImportReport()

    rows, header_idx, columns = _read_with_header(text, filename)
    default_type = detect_person_type(rows[header_idx])

    people: list[Person] = []
    for offset, row in enumerate(rows[header_idx + 1:], start=header_idx + 2):
        if not any(cell.strip() for cell in row):
            continue
        report.rows_read += 1

        name = _cell(row, columns.get("name"))
        matricula = _cell(row, columns.get("matricula"))
        if not (name and matricula):
            report.skip(offset, "missing name or matricula")
            continue

        raw_type = normalize_text(_cell(row, columns.get("type")))
        person_type = TYPE_ALIASES.get(raw_type, default_type)

        people.append(Person(id=id_factory(), matricula=matricula, name=name, type=person_type))

    return PeopleSheet(person_type=default_type, people=people)


def merge_people(people: Sequence[Person]) -> list[Person]:
    """
    Collapse records sharing a matricula. The first record is kept and any of
    its empty fields are filled from later duplicates.
    """
    merged: dict[str, Person] = {}
    for person in people:
        existing = merged.get(person.matricula)
        if existing is None:
            merged[person.matricula] = Person(
                id=person.id,
                matricula=person.matricula,
                name=person.name,
                type=person.type,
            )
            continue
        if not existing.name:
            existing.name = person.name
    return list(merged.values())
