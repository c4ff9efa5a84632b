# dart_export/tests/test_api.py
import pytest
from fastapi.testclient import TestClient
from dart_export.apps.api.main import app
from dart_export.apps.api.routers.exports import get_controller
from dart_export.services.export_service import ExportController
from dart_export.tests.helpers import item, make_response


@pytest.fixture
def client_for(settings):
    def _make(*responses):
        queue = list(responses)
        controller = ExportController(settings, fetch=lambda req, s: queue.pop(0))
        app.dependency_overrides[get_controller] = lambda: controller
        return TestClient(app), controller

    yield _make
    app.dependency_overrides.clear()


def test_health():
    assert TestClient(app).get("/health").json() == {"status": "ok"}


def test_options_lists_fifteen_years():
    body = TestClient(app).get("/export/options").json()
    assert body["years"][0] == "2024"
    assert body["years"][-1] == "2010"
    assert len(body["years"]) == 15
    assert body["default_start_year"] == "2022"
    assert body["company_id"] == "00244455"


def test_export_returns_csv_attachment(client_for):
    client, _ = client_for(make_response({"data": [item("2022", "자산총계", thstrm_amount="10")]}))
    r = client.post("/export", json={"start_year": "2022", "end_year": "2022"})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert "ktng_financials_CFS_CIS_2022_2022.csv" in r.headers["content-disposition"]
    assert r.content.startswith(b"\xef\xbb\xbf")
    assert r.content.decode("utf-8").split("\n")[1] == '2022,"연결재무상태표","자산총계","",10,0'


def test_export_error_surfaces_message_and_state(client_for):
    client, _ = client_for(make_response({"data": {"error": "X"}}))
    r = client.post("/export", json={"start_year": "2020", "end_year": "2022"})
    assert r.status_code == 502
    assert r.json()["detail"] == "DART API 오류: X"
    assert client.get("/export/state").json() == {"status": "error", "message": "DART API 오류: X"}


def test_export_rejects_year_outside_options(client_for):
    client, _ = client_for()
    r = client.post("/export", json={"start_year": "2009", "end_year": "2022"})
    assert r.status_code == 422


def test_export_refused_while_loading(client_for):
    client, controller = client_for()
    controller._state = controller.state.loading()
    r = client.post("/export", json={"start_year": "2022", "end_year": "2022"})
    assert r.status_code == 409
    assert client.get("/export/state").json()["status"] == "loading"
