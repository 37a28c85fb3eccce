from __future__ import annotations

import pytest

from lockerdesk.core.parsers.report import ImportReport
from lockerdesk.core.parsers.roster_csv import classify_course, parse_student_csv

HEADER = "#;Nome;Matrícula;Curso;Turno;Ano;Situação;E-mail"


@pytest.mark.parametrize(
    ("course", "code"),
    [
        ("13500 - Técnico de Nível Médio em Administração, na Forma Subsequente", "ADM SUB"),
        ("Técnico de Nível Médio em Informática, na Forma Integrado", "INFO INT"),
        ("TÉCNICO EM QUÍMICA - INTEGRADA", "QUIM INT"),
        ("Tecnologia em Análise e Desenvolvimento de Sistemas", "TADS"),
        ("Licenciatura em Física", "IFRN"),
        ("", "IFRN"),
        # Later keywords win over earlier ones
        ("Informática aplicada à Administração", "INFO"),
        ("Química com Análise Instrumental, Subsequente", "TADS SUB"),
    ],
)
def test_classify_course(course: str, code: str) -> None:
    assert classify_course(course) == code


def test_parse_student_csv_reads_roster_columns() -> None:
    text = "\n".join(
        [
            HEADER,
            "1;Ana Silva;20241011110001;Técnico em Informática Integrado;M;2024;Matriculado;ana@escola.br",
            "2;Beto Souza;20231011110002;Administração Subsequente;N;2023;Trancado",
        ]
    )

    students = parse_student_csv(text)

    assert [s.registration for s in students] == ["20241011110001", "20231011110002"]
    ana, beto = students
    assert ana.name == "Ana Silva"
    assert ana.course == "INFO INT"
    assert ana.situation == "Matriculado"
    assert ana.email == "ana@escola.br"
    assert beto.course == "ADM SUB"
    assert beto.email == ""


def test_parse_student_csv_skips_short_and_incomplete_rows() -> None:
    report = ImportReport()
    text = "\r\n".join(
        [
            HEADER,
            "1;Sem Colunas;123",
            "2;;20240001;Química",
            "3;Sem Matricula;;Química",
            "4;Valida;20240002;Química",
        ]
    )

    students = parse_student_csv(text, report=report)

    assert [s.name for s in students] == ["Valida"]
    assert students[0].course == "QUIM"
    assert report.skipped_count == 3
