from sqlalchemy.exc import SQLAlchemyError

from tests.conftest import add_contact, auth_headers, start_walk
from walkguard import crud
from walkguard.models.user import AuthProvider
from walkguard.models.walk_session import WalkSession
from walkguard.schemas.location import Location
from walkguard.services.panic import resolve_alert_location, walker_display_name


def _notifications(client, user):
    response = client.get("/api/v1/notifications/", headers=auth_headers(user))
    assert response.status_code == 200
    return response.json()


def _panic_events(client, headers):
    return client.get("/api/v1/walks/history", headers=headers).json()["walks"][0]["panicEvents"]


def test_panic_notifies_guardian_with_start_location(client, walker_headers, make_user):
    guardian = make_user(email="g@x.com")
    contact_id = add_contact(client, walker_headers, email="G@x.com")
    session_id = start_walk(client, walker_headers, lat=10.0, lng=20.0, mode="guardian", guardian_ids=[contact_id])

    response = client.post(f"/api/v1/walks/{session_id}/panic", headers=walker_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["panicTriggered"] is True
    assert body["notificationsSent"] == 1
    assert body["deliveryFailed"] is False

    inbox = _notifications(client, guardian)
    assert inbox["unreadCount"] == 1
    [notification] = inbox["notifications"]
    assert notification["type"] == "panic"
    assert notification["isRead"] is False
    assert notification["title"] == "Panic Alert"
    assert notification["message"] == "Wendy has triggered a panic button during their walk."
    assert notification["walkId"] == session_id
    assert notification["metadata"] == {
        "location": {"lat": 10.0, "lng": 20.0},
        "userName": "Wendy",
        "walkSessionId": str(session_id),
    }


def test_panic_prefers_reported_then_current_location(client, walker_headers, make_user):
    guardian = make_user(email="g@x.com")
    contact_id = add_contact(client, walker_headers, email="g@x.com")
    session_id = start_walk(client, walker_headers, lat=10.0, lng=20.0, guardian_ids=[contact_id])

    client.post(f"/api/v1/walks/{session_id}/location", json={"lat": 11.0, "lng": 21.0}, headers=walker_headers)
    client.post(f"/api/v1/walks/{session_id}/panic", headers=walker_headers)
    client.post(
        f"/api/v1/walks/{session_id}/panic",
        json={"location": {"lat": 12.0, "lng": 22.0}},
        headers=walker_headers,
    )

    locations = [n["metadata"]["location"] for n in _notifications(client, guardian)["notifications"]]
    assert {"lat": 11.0, "lng": 21.0} in locations
    assert {"lat": 12.0, "lng": 22.0} in locations
    assert _panic_events(client, walker_headers) == 2


def test_panic_without_recipients_is_still_recorded(client, walker_headers):
    emergency_id = add_contact(client, walker_headers, name="Mum", phone="+1001", type="emergency")
    session_id = start_walk(client, walker_headers, contact_ids=[emergency_id])

    response = client.post(f"/api/v1/walks/{session_id}/panic", headers=walker_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["notificationsSent"] == 0
    assert body["emergencyContacts"] == 1
    assert body["deliveryFailed"] is False
    assert _panic_events(client, walker_headers) == 1


def test_guardian_reached_through_two_contacts_is_notified_once(client, walker_headers, make_user):
    guardian = make_user(email="g@x.com", phone="+15550009")
    by_email = add_contact(client, walker_headers, name="G mail", phone="+1999", email="g@x.com")
    by_phone = add_contact(client, walker_headers, name="G phone", phone=" +15550009 ")
    session_id = start_walk(client, walker_headers, guardian_ids=[by_email, by_phone])

    response = client.post(f"/api/v1/walks/{session_id}/panic", headers=walker_headers)

    assert response.json()["notificationsSent"] == 1
    assert _notifications(client, guardian)["unreadCount"] == 1


def test_failed_notification_write_keeps_panic_event(client, walker_headers, make_user, monkeypatch):
    guardian = make_user(email="g@x.com")
    contact_id = add_contact(client, walker_headers, email="g@x.com")
    session_id = start_walk(client, walker_headers, guardian_ids=[contact_id])

    def broken_create_batch(db, *, items):
        raise SQLAlchemyError("database unavailable")

    monkeypatch.setattr(crud.notification, "create_batch", broken_create_batch)

    response = client.post(f"/api/v1/walks/{session_id}/panic", headers=walker_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["deliveryFailed"] is True
    assert body["notificationsSent"] == 0
    assert _panic_events(client, walker_headers) == 1
    assert _notifications(client, guardian)["unreadCount"] == 0


def test_alert_location_falls_back_to_configured_point():
    session = WalkSession(start_lat=None, start_lng=None)

    assert resolve_alert_location(None, session) == {"lat": 0.0, "lng": 0.0}
    assert resolve_alert_location(Location(lat=1, lng=2), session) == {"lat": 1.0, "lng": 2.0}


def test_walker_display_name_fallbacks(make_user):
    assert walker_display_name(make_user(email="named@x.com", name="Ana")) == "Ana"
    assert walker_display_name(make_user(email="anon@x.com")) == "anon@x.com"
    assert walker_display_name(make_user(phone="+1555", provider=AuthProvider.PHONE)) == "Someone"


def test_failed_contact_lookup_keeps_panic_event(client, walker_headers, make_user, monkeypatch):
    make_user(email="g@x.com")
    contact_id = add_contact(client, walker_headers, email="g@x.com")
    session_id = start_walk(client, walker_headers, guardian_ids=[contact_id])

    def broken_get_many_owned(db, *, contact_ids, owner_id):
        raise SQLAlchemyError("connection reset")

    monkeypatch.setattr(crud.contact, "get_many_owned", broken_get_many_owned)

    response = client.post(f"/api/v1/walks/{session_id}/panic", headers=walker_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["deliveryFailed"] is True
    assert body["notificationsSent"] == 0
    assert body["emergencyContacts"] == 0
    assert _panic_events(client, walker_headers) == 1
