"""HTTP tests for /api/tenders — envelope shape, CORS, pre-flight and failures."""

from datetime import datetime, timezone

import pytest

from tests.fake_supabase import make_tenders

CORS = {
    "access-control-allow-origin": "*",
    "access-control-allow-headers": "authorization, x-client-info, apikey, content-type",
}


def _assert_cors(response):
    for header, value in CORS.items():
        assert response.headers[header] == value


# --- Pre-flight ---------------------------------------------------------------

def test_options_short_circuits_with_cors_headers(api, fake_client):
    response = api.options("/api/tenders?page=abc")
    assert response.status_code == 200
    assert response.text == "ok"
    _assert_cors(response)
    assert fake_client.queries == []
    assert fake_client.rpc_calls == []


# --- Success ------------------------------------------------------------------

def test_success_envelope(api, fake_client):
    fake_client.tables["tenders"] = make_tenders(25)

    response = api.get("/api/tenders", params={"page": 2, "limit": 10})

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    _assert_cors(response)
    body = response.json()
    assert body["success"] is True
    assert body["pagination"] == {"page": 2, "limit": 10, "total": 25, "totalPages": 3}
    assert [t["title"] for t in body["tenders"]] == [f"Tender {i}" for i in range(10, 20)]
    assert body["stats"]["total_tenders"] == 120
    assert body["lastUpdated"].endswith("Z")
    assert "error" not in body


def test_defaults_to_first_page_of_1000(api, fake_client):
    fake_client.tables["tenders"] = make_tenders(3)
    body = api.get("/api/tenders").json()
    assert body["pagination"] == {"page": 1, "limit": 1000, "total": 3, "totalPages": 1}
    assert ("range", 0, 999) in fake_client.queries[-1].calls


@pytest.mark.parametrize("method", ["post", "put", "patch", "delete"])
def test_any_method_is_treated_as_fetch(api, fake_client, method):
    fake_client.tables["tenders"] = make_tenders(2)
    response = getattr(api, method)("/api/tenders?limit=1")
    assert response.status_code == 200
    assert response.json()["pagination"]["totalPages"] == 2


def test_head_is_answered_like_get(api, fake_client):
    fake_client.tables["tenders"] = make_tenders(2)
    response = api.head("/api/tenders?limit=1")
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["content-type"].startswith("application/json")
    assert ("range", 0, 0) in fake_client.queries[-1].calls


def test_edge_function_alias(api):
    response = api.get("/api/get-tenders")
    assert response.status_code == 200
    assert response.json()["success"] is True


def test_open_only_returns_only_future_tenders(api, fake_client):
    fake_client.tables["tenders"] = [
        {"id": "past", "close_date": "2000-01-01T00:00:00+00:00"},
        {"id": "future", "close_date": "2099-01-01T00:00:00+00:00"},
        {"id": "undated", "close_date": None},
    ]

    body = api.get("/api/tenders", params={"openOnly": "true"}).json()

    assert [t["id"] for t in body["tenders"]] == ["future"]
    assert body["pagination"]["total"] == 1
    now = datetime.now(timezone.utc)
    for tender in body["tenders"]:
        assert datetime.fromisoformat(tender["close_date"]) > now


def test_open_only_other_values_do_not_filter(api, fake_client):
    fake_client.tables["tenders"] = [
        {"id": "past", "close_date": "2000-01-01T00:00:00+00:00"},
        {"id": "undated", "close_date": None},
    ]
    body = api.get("/api/tenders", params={"openOnly": "yes"}).json()
    assert [t["id"] for t in body["tenders"]] == ["past", "undated"]


# --- Failures -----------------------------------------------------------------

def test_database_failure_returns_500_envelope(api, fake_client):
    fake_client.fail("tenders", RuntimeError("relation \"tenders\" does not exist"))

    response = api.get("/api/tenders", params={"page": 3, "limit": 5})

    assert response.status_code == 500
    _assert_cors(response)
    body = response.json()
    assert body == {
        "success": False,
        "error": "Database query failed: relation \"tenders\" does not exist",
        "tenders": [],
        "pagination": {"page": 1, "limit": 1000, "total": 0, "totalPages": 0},
        "stats": {"total_tenders": 0, "open_tenders": 0, "closing_soon": 0, "last_updated": None},
    }


@pytest.mark.parametrize("query", ["page=abc", "limit=0", "page=-1"])
def test_invalid_parameters_return_500_envelope(api, fake_client, query):
    response = api.get(f"/api/tenders?{query}")
    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"].startswith("Parámetros de consulta no válidos")
    assert fake_client.queries == []


def test_missing_credentials_return_500_envelope():
    from fastapi.testclient import TestClient

    from backend.config import Settings
    from backend.main import create_app

    app = create_app(settings=Settings())
    response = TestClient(app).get("/api/tenders")

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert "Faltan las credenciales de Supabase" in body["error"]


# --- Health -------------------------------------------------------------------

def test_health_check(api):
    assert api.get("/").json() == {"status": "ok"}
