from tests.conftest import auth_headers
from walkguard.core.config import settings


def _report(client, headers, **overrides):
    payload = {
        "type": "verbal",
        "location": {"lat": 40.7, "lng": -74.0},
        "description": "Shouting near the station",
    }
    payload.update(overrides)
    return client.post("/api/v1/reports/", json=payload, headers=headers)


def test_create_report_defaults(client, walker_headers):
    response = _report(client, walker_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["type"] == "verbal"
    assert body["location"] == {"lat": 40.7, "lng": -74.0, "address": None}
    assert body["description"] == "Shouting near the station"
    assert body["isAnonymous"] is True
    assert body["status"] == "pending"
    assert body["createdAt"] == body["date"]


def test_create_report_with_address_and_identity(client, walker_headers):
    response = _report(
        client,
        walker_headers,
        type="stalking",
        location={"lat": 1.5, "lng": 2.5, "address": "5th Ave"},
        isAnonymous=False,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["location"]["address"] == "5th Ave"
    assert body["isAnonymous"] is False


def test_create_report_validates_type_and_location(client, walker_headers):
    assert _report(client, walker_headers, type="theft").status_code == 422
    assert _report(client, walker_headers, location={"lat": 95, "lng": 0}).status_code == 422
    assert _report(client, walker_headers, location={"lat": 0, "lng": -181}).status_code == 422


def test_create_report_requires_authentication(client):
    response = client.post(
        "/api/v1/reports/",
        json={"type": "physical", "location": {"lat": 0, "lng": 0}},
    )
    assert response.status_code == 401


def test_my_reports_newest_first_and_owner_only(client, walker_headers, make_user):
    first = _report(client, walker_headers, type="verbal").json()["id"]
    second = _report(client, walker_headers, type="assault").json()["id"]

    other_headers = auth_headers(make_user(email="other@x.com"))
    _report(client, other_headers, type="physical")

    response = client.get("/api/v1/reports/my-reports", headers=walker_headers)

    assert response.status_code == 200
    reports = response.json()["reports"]
    assert [r["id"] for r in reports] == [second, first]
    assert [r["type"] for r in reports] == ["assault", "verbal"]


def test_my_reports_is_capped(client, walker_headers, monkeypatch):
    monkeypatch.setattr(settings, "REPORT_HISTORY_LIMIT", 2)
    for _ in range(3):
        _report(client, walker_headers)

    response = client.get("/api/v1/reports/my-reports", headers=walker_headers)

    assert len(response.json()["reports"]) == 2
