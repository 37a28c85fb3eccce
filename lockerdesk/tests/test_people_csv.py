from __future__ import annotations

import pytest

from lockerdesk.core.entities.person import Person, PersonType
from lockerdesk.core.parsers.people_csv import (
    HeaderNotFoundError,
    find_header,
    merge_people,
    parse_people_csv,
    read_rows,
)


def test_read_rows_honours_quotes_escapes_and_embedded_newlines() -> None:
    text = 'Nome;Matrícula;Obs\n"Silva; Ana";123;"diz ""oi""\nsegunda linha"\n'

    rows = read_rows(text)

    assert rows == [
        ["Nome", "Matrícula", "Obs"],
        ["Silva; Ana", "123", 'diz "oi"\nsegunda linha'],
    ]


def test_read_rows_detects_comma_delimiter() -> None:
    assert read_rows("Nome,Matricula\nAna,1\n") == [["Nome", "Matricula"], ["Ana", "1"]]


def test_header_is_found_below_title_rows() -> None:
    rows = [["Relatório de alunos"], [""], ["NOME", "MATRICULA", "CURSO"], ["Ana", "1", "x"]]

    idx, columns = find_header(rows)

    assert idx == 2
    assert columns == {"name": 0, "matricula": 1}


def test_comma_file_with_title_line_is_read() -> None:
    text = "Relatório de alunos 2024\nNome,Matrícula\nAna,2024001\n"

    people = parse_people_csv(text).people

    assert [(p.name, p.matricula) for p in people] == [("Ana", "2024001")]


def test_semicolon_file_with_comma_in_title_line_is_read() -> None:
    text = "Relatório, turma 2024\nNome;Matrícula\nSilva, Ana;2024001\n"

    people = parse_people_csv(text).people

    assert [(p.name, p.matricula) for p in people] == [("Silva, Ana", "2024001")]


def test_missing_header_names_the_missing_columns() -> None:
    rows = [["Nome", "Curso"], ["Ana", "Info"]]

    with pytest.raises(HeaderNotFoundError) as exc:
        find_header(rows, filename="turma.csv")

    assert exc.value.missing == ["matrícula"]
    assert "turma.csv" in str(exc.value)
    assert "matrícula" in str(exc.value)


def test_student_file_defaults_to_student_type(ids) -> None:
    text = "Nome;Matrícula;Curso\nAna Silva;2024001;INFO\nBeto;2024002;ADM\n"

    sheet = parse_people_csv(text, id_factory=ids)

    assert sheet.person_type is PersonType.STUDENT
    assert [(p.id, p.name, p.matricula, p.type) for p in sheet.people] == [
        ("L1", "Ana Silva", "2024001", PersonType.STUDENT),
        ("L2", "Beto", "2024002", PersonType.STUDENT),
    ]


def test_staff_file_is_detected_from_header() -> None:
    text = "Nome;Siape;Cargo\nCarlos Lima;1552233;Professor\n"

    sheet = parse_people_csv(text)

    assert sheet.person_type is PersonType.SERVER
    assert sheet.people[0].matricula == "1552233"
    assert sheet.people[0].type is PersonType.SERVER


def test_type_column_overrides_file_type() -> None:
    text = "Nome;Matrícula;Vínculo\nAna;1;Aluno\nVisitante X;2;Externo\nSem tipo;3;\n"

    people = parse_people_csv(text).people

    assert [p.type for p in people] == [PersonType.STUDENT, PersonType.EXTERNAL, PersonType.STUDENT]


def test_rows_without_name_or_matricula_are_skipped() -> None:
    text = "Nome;Matrícula\n;1\nAna;\n;;\nBeto;2\n"

    people = parse_people_csv(text).people

    assert [p.name for p in people] == ["Beto"]


def test_merge_people_keeps_first_record_per_matricula() -> None:
    people = [
        Person(id="a", matricula="1", name="Ana", type=PersonType.STUDENT),
        Person(id="b", matricula="2", name="Beto", type=PersonType.STUDENT),
        Person(id="c", matricula="1", name="Ana Silva", type=PersonType.SERVER),
    ]

    merged = merge_people(people)

    assert [(p.id, p.matricula, p.name, p.type) for p in merged] == [
        ("a", "1", "Ana", PersonType.STUDENT),
        ("b", "2", "Beto", PersonType.STUDENT),
    ]
