from walkguard import crud
from walkguard.models.notification import NotificationType
from walkguard.schemas.notification import NotificationCreate
from tests.conftest import auth_headers


def _seed(db, user, count, **overrides):
    items = [
        NotificationCreate(
            recipient_user_id=user.id,
            notification_type=NotificationType.SYSTEM,
            title=f"Notice {i}",
            message="Hello",
            **overrides,
        )
        for i in range(count)
    ]
    return crud.notification.create_batch(db, items=items)


def test_list_newest_first_with_unread_count(client, db, walker, walker_headers):
    created = _seed(db, walker, 3)

    response = client.get("/api/v1/notifications/", headers=walker_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["unreadCount"] == 3
    assert [n["id"] for n in body["notifications"]] == [n.id for n in reversed(created)]


def test_unread_only_and_limit(client, db, walker, walker_headers):
    read_one, *_ = _seed(db, walker, 3)
    client.patch(f"/api/v1/notifications/{read_one.id}/read", headers=walker_headers)

    body = client.get("/api/v1/notifications/?unreadOnly=true", headers=walker_headers).json()
    assert read_one.id not in [n["id"] for n in body["notifications"]]
    assert body["unreadCount"] == 2

    body = client.get("/api/v1/notifications/?limit=1", headers=walker_headers).json()
    assert len(body["notifications"]) == 1
    assert body["unreadCount"] == 2

    body = client.get("/api/v1/notifications/?limit=0", headers=walker_headers).json()
    assert len(body["notifications"]) == 1


def test_mark_read_keeps_first_read_at(client, db, walker, walker_headers):
    [notification] = _seed(db, walker, 1)

    response = client.patch(f"/api/v1/notifications/{notification.id}/read", headers=walker_headers)
    assert response.status_code == 200
    assert response.json() == {"id": notification.id, "isRead": True}

    first_read_at = client.get("/api/v1/notifications/", headers=walker_headers).json()["notifications"][0]["readAt"]
    client.patch(f"/api/v1/notifications/{notification.id}/read", headers=walker_headers)
    second_read_at = client.get("/api/v1/notifications/", headers=walker_headers).json()["notifications"][0]["readAt"]

    assert first_read_at is not None
    assert first_read_at == second_read_at


def test_mark_read_other_users_notification_is_not_found(client, db, walker, make_user):
    [notification] = _seed(db, walker, 1)
    stranger = make_user(email="stranger@x.com")

    response = client.patch(f"/api/v1/notifications/{notification.id}/read", headers=auth_headers(stranger))

    assert response.status_code == 404
    assert response.json()["detail"] == "Notification not found"


def test_mark_all_read_is_idempotent(client, db, walker, walker_headers, make_user):
    _seed(db, walker, 2)
    other = make_user(email="other@x.com")
    _seed(db, other, 1)

    first = client.patch("/api/v1/notifications/read-all", headers=walker_headers)
    assert first.status_code == 200
    assert first.json()["updated"] == 2

    second = client.patch("/api/v1/notifications/read-all", headers=walker_headers)
    assert second.status_code == 200
    assert second.json()["updated"] == 0

    assert client.get("/api/v1/notifications/", headers=walker_headers).json()["unreadCount"] == 0
    assert client.get("/api/v1/notifications/", headers=auth_headers(other)).json()["unreadCount"] == 1
