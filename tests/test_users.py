from tests.conftest import auth_headers


def test_read_profile(client, walker, walker_headers):
    response = client.get("/api/v1/users/me", headers=walker_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == walker.id
    assert body["email"] == "walker@x.com"
    assert body["provider"] == "email"
    assert body["trustScore"] == 0


def test_update_name(client, walker_headers):
    response = client.patch("/api/v1/users/me", json={"name": "  Wen "}, headers=walker_headers)

    assert response.status_code == 200
    assert response.json()["name"] == "Wen"


def test_token_for_deleted_user_is_rejected(client, db, make_user):
    user = make_user(email="gone@x.com")
    headers = auth_headers(user)
    db.delete(user)
    db.commit()

    assert client.get("/api/v1/users/me", headers=headers).status_code == 401


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["database"] == "connected"
