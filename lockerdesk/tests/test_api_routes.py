from __future__ import annotations

from typing import Any

import pytest
from fastapi import FastAPI
from starlette.testclient import TestClient

import lockerdesk.presentation.routers as routers
from lockerdesk.schemas.models import Locker, LockerStats, PeopleImportResult


class _DummyDB:
    """A minimal stand-in for a SQLAlchemy Session (never called in router tests)."""


@pytest.fixture()
def app() -> FastAPI:
    """
    A tiny FastAPI app with ONLY the router under test, without a real database.
    """
    test_app = FastAPI()
    test_app.include_router(routers.router)

    def _override_get_db():
        yield _DummyDB()

    test_app.dependency_overrides[routers.get_db] = _override_get_db
    return test_app


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


def _locker(**overrides: Any) -> Locker:
    base = {"number": 7, "status": "Disponível", "location": "Bloco A"}
    base.update(overrides)
    return Locker(**base)


def test_get_lockers_passes_status_filter(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    seen = {}

    def _fake_list_lockers_service(status, db):
        seen["status"] = status
        return [_locker()]

    monkeypatch.setattr(routers, "list_lockers_service", _fake_list_lockers_service)

    r = client.get("/lockers", params={"status": "Ocupado"})
    assert r.status_code == 200
    assert r.json()[0]["number"] == 7
    assert seen["status"] == routers.LockerStatus.OCCUPIED


def test_stats_route_is_not_shadowed_by_number(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        routers,
        "locker_stats_service",
        lambda db: LockerStats(total=3, available=1, occupied=1, maintenance=1),
    )

    r = client.get("/lockers/stats")
    assert r.status_code == 200
    assert r.json() == {"total": 3, "available": 1, "occupied": 1, "maintenance": 1}


@pytest.mark.parametrize(
    ("error", "status"),
    [
        (routers.NotFoundError("Locker #9 not found"), 404),
        (routers.DomainRuleViolation("Locker #9 has no active loan"), 409),
        (routers.ValidationError("bad request"), 422),
    ],
)
def test_domain_errors_map_to_http(
    client: TestClient,
    monkeypatch: pytest.MonkeyPatch,
    error: Exception,
    status: int,
) -> None:
    def _fake_return_locker_service(number, db):
        raise error

    monkeypatch.setattr(routers, "return_locker_service", _fake_return_locker_service)

    r = client.post("/lockers/9/return")
    assert r.status_code == status
    assert r.json()["detail"] == str(error)


def test_unreadable_upload_returns_400(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def _fake_import_lockers_service(content, db):
        raise routers.CsvParseError("Failed to parse file: binary content is not CSV text")

    monkeypatch.setattr(routers, "import_lockers_service", _fake_import_lockers_service)

    r = client.post("/lockers/import", files={"file": ("armarios.csv", b"\x00\x01", "text/csv")})
    assert r.status_code == 400


def test_lend_body_is_forwarded(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def _fake_lend_locker_service(number, body, db):
        assert number == 7
        assert body.student_name == "Ana"
        return _locker(status="Ocupado")

    monkeypatch.setattr(routers, "lend_locker_service", _fake_lend_locker_service)

    r = client.post("/lockers/7/loan", json={"registration_number": "2024001", "student_name": "Ana"})
    assert r.status_code == 200
    assert r.json()["status"] == "Ocupado"


def test_batch_rejects_non_positive_numbers(client: TestClient) -> None:
    r = client.post("/lockers/batch", json={"block": "A", "group": "G", "start": 0, "end": 3})
    assert r.status_code == 422


def test_people_import_sends_every_file(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    seen = {}

    def _fake_import_people_service(files, db):
        seen["names"] = [name for name, _ in files]
        return PeopleImportResult(imported=1, duplicates=0, files=[])

    monkeypatch.setattr(routers, "import_people_service", _fake_import_people_service)

    r = client.post(
        "/people/import",
        files=[
            ("files", ("a.csv", b"Nome;Matricula\nAna;1\n", "text/csv")),
            ("files", ("b.csv", b"x", "text/csv")),
        ],
    )
    assert r.status_code == 200
    assert r.json()["imported"] == 1
    assert seen["names"] == ["a.csv", "b.csv"]


def test_delete_person_returns_204(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(routers, "delete_person_service", lambda person_id, db: None)

    r = client.delete("/people/abc")
    assert r.status_code == 204


def test_export_csv_is_an_attachment(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(routers, "export_loan_history_service", lambda db: "\ufeffa;b\n1;2")

    r = client.get("/reports/loans.csv")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert "attachment; filename=historico_armarios_" in r.headers["content-disposition"]
    assert r.content.startswith("\ufeff".encode("utf-8"))
