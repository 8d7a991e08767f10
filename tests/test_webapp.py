import io

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from verbalcalc import config
from verbalcalc.webapp import app as webapp
from verbalcalc.workbook import create_sample_workbook


@pytest.fixture
def client():
    webapp.sessions.clear()
    with TestClient(webapp.app) as test_client:
        yield test_client
    webapp.sessions.clear()


def create_session(client, system="international"):
    response = client.post("/api/sessions", json={"system": system})
    assert response.status_code == 200
    return response.json()["session_id"]


class TestConversionRoutes:

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "ok"

    def test_words(self, client):
        response = client.get("/api/words", params={"value": "123456", "system": "indian"})
        assert response.status_code == 200
        assert response.json() == {
            "value": "123456",
            "system": "indian",
            "words": "one lakh twenty three thousand four hundred fifty six",
            "formatted": "1,23,456",
        }

    def test_words_not_a_number(self, client):
        response = client.get("/api/words", params={"value": "abc"})
        assert response.json()["words"] == ""
        assert response.json()["formatted"] == "abc"

    def test_expression(self, client):
        response = client.get("/api/expression", params={"expression": "1234+7", "system": "international"})
        body = response.json()
        assert body["words"] == "one thousand two hundred thirty four added by seven"
        assert body["display"] == "1,234+7"

    def test_format(self, client):
        response = client.get("/api/format", params={"value": "1234567", "system": "indian"})
        assert response.json()["formatted"] == "12,34,567"

    def test_unknown_system(self, client):
        response = client.get("/api/words", params={"value": "1", "system": "roman"})
        assert response.status_code == 422

    def test_evaluate(self, client):
        response = client.post("/api/evaluate", json={"expression": "12+7", "system": "international"})
        assert response.status_code == 200
        body = response.json()
        assert body["result"] == "19"
        assert body["display"] == "12+7 = 19"
        assert body["text"] == "twelve added by seven is nineteen"

    def test_evaluate_error(self, client):
        response = client.post("/api/evaluate", json={"expression": "1/0"})
        body = response.json()
        assert body["result"] == "Error"
        assert body["text"] == "Error"

    def test_evaluate_incomplete_expression(self, client):
        response = client.post("/api/evaluate", json={"expression": "5+", "system": "international"})
        body = response.json()
        assert body["result"] is None
        assert body["display"] == "5+"
        assert body["text"] == "five added by"

    def test_evaluate_matches_calculator_session(self, client):
        session_id = create_session(client, "indian")
        keyed = client.post(f"/api/sessions/{session_id}/keys", json={"keys": list("100000×5%") + ["Enter"]}).json()
        evaluated = client.post("/api/evaluate", json={"expression": "100000×5%", "system": "indian"}).json()
        assert evaluated == {key: keyed[key] for key in evaluated}

    def test_words_with_thousands_of_digits(self, client):
        response = client.get("/api/words", params={"value": "1" * 5000, "system": "indian"})
        assert response.status_code == 200
        assert response.json()["words"].startswith("eleven crore ")


class TestSessionRoutes:

    def test_keys(self, client):
        session_id = create_session(client)
        response = client.post(f"/api/sessions/{session_id}/keys", json={"keys": ["1", "2", "+", "7", "Enter"]})
        body = response.json()
        assert body["result"] == "19"
        assert body["text"] == "twelve added by seven is nineteen"
        assert body["unhandled"] == []

        assert client.get(f"/api/sessions/{session_id}").json()["result"] == "19"

    def test_unhandled_keys(self, client):
        session_id = create_session(client)
        response = client.post(f"/api/sessions/{session_id}/keys", json={"keys": ["5", "Shift", "x"]})
        body = response.json()
        assert body["expression"] == "5"
        assert body["unhandled"] == ["Shift", "x"]

    def test_input_and_system(self, client):
        session_id = create_session(client)
        client.post(f"/api/sessions/{session_id}/input", json={"value": "100,000"})
        response = client.post(f"/api/sessions/{session_id}/system", json={"system": "indian"})
        body = response.json()
        assert body["system"] == "indian"
        assert body["display"] == "1,00,000"
        assert body["text"] == "one lakh"

    def test_session_without_body(self, client):
        response = client.post("/api/sessions")
        assert response.status_code == 200
        assert response.json()["expression"] == "0"

    def test_delete(self, client):
        session_id = create_session(client)
        assert client.delete(f"/api/sessions/{session_id}").status_code == 200
        assert client.get(f"/api/sessions/{session_id}").status_code == 404

    def test_unknown_session(self, client):
        assert client.get("/api/sessions/missing").status_code == 404
        assert client.post("/api/sessions/missing/keys", json={"keys": ["1"]}).status_code == 404

    def test_oldest_session_dropped(self, client, monkeypatch):
        monkeypatch.setattr(config, "MAX_SESSIONS", 2)
        first = create_session(client)
        create_session(client)
        create_session(client)
        assert len(webapp.sessions) == 2
        assert client.get(f"/api/sessions/{first}").status_code == 404


class TestWorkbookRoute:

    def test_upload(self, client, tmp_path):
        path = create_sample_workbook(tmp_path / "amounts.xlsx")
        with open(path, "rb") as f:
            response = client.post(
                "/api/workbook",
                params={"system": "indian"},
                files={"file": ("amounts.xlsx", f, webapp.XLSX_MEDIA_TYPE)},
            )

        assert response.status_code == 200
        assert response.headers["x-rows-spelled"] == "4"

        wb = load_workbook(io.BytesIO(response.content))
        ws = wb.active
        assert ws.cell(row=2, column=4).value == "one lakh twenty five thousand"
        wb.close()

    def test_not_excel(self, client):
        response = client.post("/api/workbook", files={"file": ("notes.txt", b"hello", "text/plain")})
        assert response.status_code == 400

    def test_broken_excel(self, client):
        response = client.post(
            "/api/workbook",
            files={"file": ("broken.xlsx", b"not a zip file", webapp.XLSX_MEDIA_TYPE)},
        )
        assert response.status_code == 400
        assert response.json()["detail"].startswith("Cannot read workbook")
