"""End-to-end candidate flow against the app's own repository."""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_candidate_repository
from api.router import limiter
from main import app

pytestmark = pytest.mark.api

client = TestClient(app)

JOHN = {
    "name": "John Doe",
    "email": "john@example.com",
    "companies": ["Acme", "Globex"],
    "titles": ["Java Developer", "Senior Software Engineer"],
    "periods": ["2020-2021", "2021-2022"],
    "education": ["BS Computer Science"],
}

JANE = {
    "name": "Jane Roe",
    "email": "jane@example.com",
    "companies": ["Globex", "Acme"],
    "periods": ["2021-2022", "2020-2021"],
}


@pytest.fixture(autouse=True)
def _fresh_repository():
    get_candidate_repository().clear()
    limiter.enabled = False
    yield
    limiter.enabled = True
    get_candidate_repository().clear()


def _create(body) -> int:
    response = client.post("/candidates", json=body)
    assert response.status_code == 201
    return response.json()["id"]


def test_create_and_get_candidate():
    candidate_id = _create(JOHN)
    response = client.get(f"/candidates/{candidate_id}")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "John Doe"
    assert [r["company"] for r in data["profile"]["records"]] == ["Acme", "Globex"]
    assert data["suspicious_flag"]["is_suspicious"] is False


def test_list_candidates():
    _create(JOHN)
    _create(JANE)
    names = [c["name"] for c in client.get("/candidates").json()]
    assert names == ["John Doe", "Jane Roe"]


def test_unknown_candidate():
    assert client.get("/candidates/42").status_code == 404


def test_review_sees_pool():
    john = _create(JOHN)
    jane = _create(JANE)
    response = client.post(f"/candidates/{john}/review", json=JOHN)
    assert response.status_code == 200
    matches = response.json()["similarity"]["identical_chronology_matches"]
    assert [m["candidate_id"] for m in matches] == [jane]


def test_check_similar_employment_flags_stored_candidate():
    john = _create(JOHN)
    _create(JANE)
    response = client.post("/candidates/check-similar-employment", json={
        "candidate_id": john,
        "companies": JOHN["companies"],
        "periods": JOHN["periods"],
    })
    assert response.json()["has_identical_chronology"] is True
    flag = client.get(f"/candidates/{john}").json()["suspicious_flag"]
    assert flag["severity"] == "HIGH"


def test_flag_survives_matching_validation():
    john = _create(JOHN)
    _create(JANE)
    client.post("/candidates/check-similar-employment", json={
        "candidate_id": john,
        "companies": JOHN["companies"],
        "periods": JOHN["periods"],
    })
    response = client.post(f"/candidates/{john}/validate", json=dict(JOHN, choice="matching"))
    assert response.status_code == 200
    assert response.json()["candidate"]["suspicious_flag"]["severity"] == "HIGH"

    cleared = client.post(f"/candidates/{john}/flag/clear", json={"reason": "Employer confirmed"})
    assert cleared.status_code == 200
    assert cleared.json()["suspicious_flag"]["is_suspicious"] is False


def test_mark_unreal():
    john = _create(JOHN)
    response = client.post(
        f"/candidates/{john}/validate",
        json=dict(JOHN, choice="unreal", reason="Employer has no record of candidate"),
    )
    assert response.status_code == 200
    stored = client.get(f"/candidates/{john}").json()
    assert stored["is_unreal"] is True
    assert stored["suspicious_flag"]["severity"] == "CRITICAL"
