from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence

from loguru import logger

from lockerdesk.core.entities.person import Person, PersonType, new_person_id
from lockerdesk.core.parsers.decoding import DEFAULT_ENCODINGS, CsvParseError, decode_csv_bytes
from lockerdesk.core.parsers.people_csv import HeaderNotFoundError, merge_people, parse_people_csv
from lockerdesk.core.parsers.report import ImportReport
from lockerdesk.core.repositories.person_repository import PersonRepository


@dataclass(frozen=True, slots=True)
class UploadedFile:
    filename: str
    content: bytes


@dataclass(frozen=True, slots=True)
class FileOutcome:
    filename: str
    person_type: PersonType | None = None
    rows: int = 0
    skipped: int = 0
    error: str | None = None


@dataclass(frozen=True, slots=True)
class PeopleImportResult:
    imported: int
    duplicates: int
    files: list[FileOutcome] = field(default_factory=list)


class ImportPeopleUseCase:
    """
    Import people from one or more CSV files.

    A file that cannot be read, or has no recognisable header, is reported and
    skipped; the other files of the batch are still imported. Rows sharing a
    matricula are merged, and matriculas already registered are left alone.
    """

    def __init__(
        self,
        *,
        person_repo: PersonRepository,
        encodings: Sequence[str] = DEFAULT_ENCODINGS,
        id_factory: Callable[[], str] = new_person_id,
    ) -> None:
        self._person_repo = person_repo
        self._encodings = encodings
        self._id_factory = id_factory

    def execute(self, files: Sequence[UploadedFile]) -> PeopleImportResult:
        outcomes: list[FileOutcome] = []
        collected: list[Person] = []

        for upload in files:
            report = ImportReport()
            try:
                text = decode_csv_bytes(upload.content, self._encodings)
                sheet = parse_people_csv(
                    text,
                    filename=upload.filename,
                    id_factory=self._id_factory,
                    report=report,
                )
            except (HeaderNotFoundError, CsvParseError) as e:
                logger.warning("People import: {}", e)
                outcomes.append(FileOutcome(filename=upload.filename, error=str(e)))
                continue

            collected.extend(sheet.people)
            outcomes.append(
                FileOutcome(
                    filename=upload.filename,
                    person_type=sheet.person_type,
                    rows=report.rows_read,
                    skipped=report.skipped_count,
                )
            )

        merged = merge_people(collected)
        new_people = [p for p in merged if self._person_repo.get_by_matricula(p.matricula) is None]
        duplicates = len(collected) - len(new_people)

        imported = self._person_repo.add_many(new_people) if new_people else 0
        logger.info("People import: {} new, {} duplicates, {} files", imported, duplicates, len(files))
        return PeopleImportResult(imported=imported, duplicates=duplicates, files=outcomes)
