from types import SimpleNamespace

import pytest

from walkguard.services.identity import (
    IdentityKey,
    contact_matches,
    find_guardian_contacts,
    identity_keys_for,
    normalize_email,
    normalize_phone,
    resolve_user_ids,
)
from walkguard.models.contact import Contact, ContactRole
from walkguard.models.user import AuthProvider


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  G@X.com ", "g@x.com"),
        ("walker@example.org", "walker@example.org"),
        ("   ", None),
        (None, None),
    ],
)
def test_normalize_email(raw, expected):
    assert normalize_email(raw) == expected


def test_normalize_phone_only_trims():
    assert normalize_phone(" +1 555 0100 ") == "+1 555 0100"
    assert normalize_phone("") is None
    assert normalize_phone(None) is None


def test_key_with_both_fields_matches_on_either():
    key = IdentityKey.of("g@x.com", "+15550001")

    assert key.matches(IdentityKey.of("G@X.COM", None))
    assert key.matches(IdentityKey.of(None, " +15550001"))
    assert not key.matches(IdentityKey.of("other@x.com", "+15559999"))


def test_empty_key_matches_nothing():
    empty = IdentityKey.of(None, "  ")

    assert empty.is_empty
    assert not empty.matches(IdentityKey.of(None, None))


def test_identity_keys_for_skips_people_without_phone_or_email():
    people = [
        SimpleNamespace(email="a@x.com", phone=None),
        SimpleNamespace(email=None, phone=None),
        SimpleNamespace(email=None, phone="+1555"),
    ]

    keys = identity_keys_for(people)

    assert keys == [IdentityKey(email="a@x.com"), IdentityKey(phone="+1555")]


def test_contact_matches_user_without_identity_is_false():
    contact = SimpleNamespace(email=None, phone="+1555")
    user = SimpleNamespace(email=None, phone=None)

    assert not contact_matches(contact, user)


def test_resolve_user_ids_forward(db, make_user):
    by_email = make_user(email="g@x.com")
    by_phone = make_user(phone="+15550002", provider=AuthProvider.PHONE)
    make_user(email="unrelated@x.com")

    keys = [IdentityKey.of("G@x.com ", None), IdentityKey.of(None, "+15550002")]

    assert resolve_user_ids(db, keys) == {by_email.id, by_phone.id}
    assert resolve_user_ids(db, []) == set()


def test_find_guardian_contacts_reverse(db, make_user):
    owner = make_user(email="owner@x.com")
    guardian = make_user(email="g@x.com", phone="+15550003")
    db.add_all([
        Contact(owner_user_id=owner.id, name="G", phone="+15550003", role=ContactRole.GUARDIAN),
        Contact(owner_user_id=owner.id, name="G2", phone="+1999", email="g@x.com", role=ContactRole.GUARDIAN),
        Contact(owner_user_id=owner.id, name="E", phone="+15550003", role=ContactRole.EMERGENCY),
    ])
    db.commit()

    contacts = find_guardian_contacts(db, guardian)

    assert sorted(c.name for c in contacts) == ["G", "G2"]
