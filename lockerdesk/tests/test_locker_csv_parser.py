from __future__ import annotations

from lockerdesk.core.entities.locker import LockerStatus
from lockerdesk.core.parsers.layouts import LOCKER_LAYOUT
from lockerdesk.core.parsers.locker_csv import parse_locker_csv
from lockerdesk.core.parsers.report import ImportReport

HEADER = "Armário;Localização;Matrícula;Nome;Turma;Observação;Empréstimo;Devolução"


def _csv(*rows: str, newline: str = "\n") -> str:
    return newline.join([HEADER, *rows])


def _structure(lockers):
    """Everything except generated loan ids."""
    def loan(l):
        return None if l is None else (
            l.locker_number, l.physical_location, l.registration_number, l.student_name,
            l.student_class, l.loan_date, l.return_date, l.observation,
        )

    return [
        (lk.number, lk.status, lk.location, loan(lk.current_loan), [loan(h) for h in lk.loan_history])
        for lk in lockers
    ]


def test_open_loan_becomes_current_and_returned_one_goes_to_history(ids) -> None:
    text = _csv(
        "12;Bloco A;2024001;Ana Silva;INFOM;;01/02/2024;",
        "12;;2023099;Beto Souza;INFOM;;01/01/2023;01/02/2024",
    )

    lockers = parse_locker_csv(text, id_factory=ids)

    assert len(lockers) == 1
    locker = lockers[0]
    assert locker.number == 12
    assert locker.status is LockerStatus.OCCUPIED
    assert locker.location == "Bloco A"
    assert locker.current_loan is not None
    assert locker.current_loan.student_name == "Ana Silva"
    assert locker.current_loan.id == "L1"
    assert [h.student_name for h in locker.loan_history] == ["Beto Souza"]
    assert locker.loan_history[0].return_date == "01/02/2024"
    # Rows without their own location inherit the locker's
    assert locker.loan_history[0].physical_location == "Bloco A"


def test_number_in_location_column_is_shifted_and_location_cleared() -> None:
    lockers = parse_locker_csv(_csv(";55;;;;;;"))

    assert [lk.number for lk in lockers] == [55]
    # Cleared location falls back to the block derived from the number
    assert lockers[0].location == "Bloco Principal"
    assert lockers[0].status is LockerStatus.AVAILABLE


def test_row_without_number_and_without_previous_locker_is_dropped() -> None:
    report = ImportReport()

    lockers = parse_locker_csv(_csv("xx;Bloco A;2024001;Ana;INFO;;01/02/2024;"), report=report)

    assert lockers == []
    assert report.skipped_count == 1
    assert report.skipped[0].line == 2


def test_unparsable_number_carries_previous_locker_forward() -> None:
    text = _csv(
        "7;Corredor B;2022001;Caio;ADM;;01/03/2022;10/12/2022",
        ";;2023002;Duda;ADM;;01/03/2023;",
        "-;;2021003;Eva;ADM;;01/03/2021;15/12/2021",
    )

    lockers = parse_locker_csv(text)

    assert [lk.number for lk in lockers] == [7]
    locker = lockers[0]
    assert locker.current_loan.student_name == "Duda"
    assert [h.student_name for h in locker.loan_history] == ["Caio", "Eva"]


def test_only_first_open_loan_is_current() -> None:
    text = _csv(
        "3;Bloco A;1;Primeiro;X;;01/01/2024;",
        "3;Bloco A;2;Segundo;X;;02/01/2024;Em aberto",
        "3;Bloco A;3;Terceiro;X;;03/01/2024;   ",
    )

    locker = parse_locker_csv(text)[0]

    assert locker.current_loan.student_name == "Primeiro"
    assert [h.student_name for h in locker.loan_history] == ["Segundo", "Terceiro"]
    assert locker.status is LockerStatus.OCCUPIED


def test_aberto_marker_is_case_insensitive() -> None:
    locker = parse_locker_csv(_csv("4;Bloco A;99;Fabi;X;;01/01/2024;ABERTO"))[0]

    assert locker.current_loan is not None
    assert locker.current_loan.return_date == "ABERTO"


def test_locker_without_loans_is_available_and_empty() -> None:
    locker = parse_locker_csv(_csv("9;Bloco C;;;;;;"))[0]

    assert locker.status is LockerStatus.AVAILABLE
    assert locker.current_loan is None
    assert locker.loan_history == []
    assert locker.maintenance_history == []


def test_registration_only_row_still_builds_a_loan() -> None:
    locker = parse_locker_csv(_csv("10;Bloco A;20241234;;;;01/01/2024;"))[0]

    assert locker.current_loan is not None
    assert locker.current_loan.registration_number == "20241234"
    assert locker.current_loan.student_name == ""


def test_output_sorted_and_unique_with_fallback_locations() -> None:
    text = _csv(
        "300;;1;A;X;;01/01/2024;02/01/2024",
        "2;;2;B;X;;01/01/2024;",
        "300;;3;C;X;;01/01/2024;",
        "200;;;;;;;",
    )

    lockers = parse_locker_csv(text)

    assert [lk.number for lk in lockers] == [2, 200, 300]
    assert lockers[1].location == "Bloco Principal"
    assert lockers[2].location == "Bloco Anexo"


def test_missing_trailing_fields_default_to_empty() -> None:
    locker = parse_locker_csv(_csv("5;Bloco A;123;Gil"))[0]

    loan = locker.current_loan
    assert loan.student_class == ""
    assert loan.observation == ""
    assert loan.loan_date == ""
    assert loan.return_date == ""


def test_crlf_and_blank_lines_are_handled() -> None:
    text = _csv("1;Bloco A;1;Ana;X;;01/01/2024;", "", "2;Bloco A;;;;;;", newline="\r\n")

    assert [lk.number for lk in parse_locker_csv(text)] == [1, 2]


def test_leading_digits_are_enough_for_a_number() -> None:
    assert [lk.number for lk in parse_locker_csv(_csv("15A;Bloco A;;;;;;"))] == [15]


def test_scientific_notation_registration_is_expanded() -> None:
    locker = parse_locker_csv(_csv("8;Bloco A;2,01911E+13;Hugo;X;;01/01/2024;"))[0]

    assert locker.current_loan.registration_number == "20191100000000"


def test_header_only_input_gives_no_lockers() -> None:
    assert parse_locker_csv(HEADER) == []
    assert parse_locker_csv("") == []


def test_import_is_idempotent_apart_from_ids() -> None:
    text = _csv(
        "12;Bloco A;2024001;Ana Silva;INFOM;;01/02/2024;",
        "12;;2023099;Beto Souza;INFOM;;01/01/2023;01/02/2024",
        "13;Bloco A;;;;;;",
        ";;2022;Caio;ADM;;01/01/2022;aberto",
    )

    assert _structure(parse_locker_csv(text)) == _structure(parse_locker_csv(text))


def test_custom_layout_reorders_columns(ids) -> None:
    layout = LOCKER_LAYOUT.with_overrides({"columns": {"student_name": 2, "registration": 3}})

    locker = parse_locker_csv(_csv("6;Bloco A;Iris;777;X;;01/01/2024;"), layout=layout, id_factory=ids)[0]

    assert locker.current_loan.student_name == "Iris"
    assert locker.current_loan.registration_number == "777"


def test_report_counts_rows_and_loans() -> None:
    report = ImportReport()
    parse_locker_csv(
        _csv("abc;;;;;;;", "1;Bloco A;1;Ana;X;;01/01/2024;", "2;Bloco A;;;;;;"),
        report=report,
    )

    assert report.rows_read == 3
    assert report.loans_read == 1
    assert report.skipped_count == 1
