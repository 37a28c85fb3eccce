from __future__ import annotations

from fastapi import FastAPI
from starlette.testclient import TestClient

import lockerdesk.presentation.routers as routers

EXPORT = (
    "Nº;Local;Matrícula;Nome;Turma;Obs;Empréstimo;Devolução\n"
    "12;Bloco A;2,01911E+13;Ana;INFO;;01/02/2024;\n"
    ";;2022002;Bia;ADM;;01/02/2023;30/11/2023\n"
    "250;;;;;;;\n"
)


def _client(db) -> TestClient:
    app = FastAPI()
    app.include_router(routers.router)

    def _override_get_db():
        yield db

    app.dependency_overrides[routers.get_db] = _override_get_db
    return TestClient(app)


def test_preview_then_import_then_query(db) -> None:
    client = _client(db)
    upload = {"file": ("armarios.csv", EXPORT.encode("latin-1"), "text/csv")}

    preview = client.post("/lockers/import/preview", files=upload)
    assert preview.status_code == 200
    body = preview.json()
    assert (body["lockers"], body["occupied"], body["persisted"]) == (2, 1, 0)
    assert client.get("/lockers").json() == []

    imported = client.post("/lockers/import", files=upload)
    assert imported.status_code == 200
    assert imported.json()["persisted"] == 2

    twelve = client.get("/lockers/12").json()
    assert twelve["status"] == "Ocupado"
    assert twelve["current_loan"]["registration_number"] == "20191100000000"
    assert [loan["student_name"] for loan in twelve["loan_history"]] == ["Bia"]

    annex = client.get("/lockers/250").json()
    assert annex["location"] == "Bloco Anexo"
    assert annex["status"] == "Disponível"

    assert client.get("/lockers/stats").json()["occupied"] == 1

    returned = client.post("/lockers/12/return")
    assert returned.status_code == 200
    assert returned.json()["status"] == "Disponível"

    again = client.post("/lockers/12/return")
    assert again.status_code == 409

    assert client.get("/lockers/999").status_code == 404
