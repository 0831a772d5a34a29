"""
Identity resolution between contacts and registered accounts.

Contacts point at people by phone/email rather than by account id, since the
person may not have registered yet. The link is recomputed on every call and
never stored.

Matching rule: email is compared lowercased and trimmed, phone is compared
trimmed only. A key with both fields matches on either.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set
from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from walkguard.models.contact import Contact, ContactRole
from walkguard.models.user import User


def normalize_email(email: Optional[str]) -> Optional[str]:
    if email is None:
        return None
    email = email.strip().lower()
    return email or None


def normalize_phone(phone: Optional[str]) -> Optional[str]:
    if phone is None:
        return None
    phone = phone.strip()
    return phone or None


@dataclass(frozen=True)
class IdentityKey:
    email: Optional[str] = None
    phone: Optional[str] = None

    @classmethod
    def of(cls, email: Optional[str], phone: Optional[str]) -> "IdentityKey":
        return cls(email=normalize_email(email), phone=normalize_phone(phone))

    @property
    def is_empty(self) -> bool:
        return self.email is None and self.phone is None

    def matches(self, other: "IdentityKey") -> bool:
        if self.email is not None and self.email == other.email:
            return True
        return self.phone is not None and self.phone == other.phone


def identity_keys_for(people: Iterable) -> List[IdentityKey]:
    """Build non-empty identity keys for contacts or users"""
    keys = []
    for person in people:
        key = IdentityKey.of(person.email, person.phone)
        if not key.is_empty:
            keys.append(key)
    return keys


def _email_phone_sets(keys: Iterable[IdentityKey]):
    emails = {k.email for k in keys if k.email is not None}
    phones = {k.phone for k in keys if k.phone is not None}
    return emails, phones


def _identity_filter(email_column, phone_column, emails: Set[str], phones: Set[str]):
    conditions = []
    if emails:
        conditions.append(func.lower(func.trim(email_column)).in_(sorted(emails)))
    if phones:
        conditions.append(func.trim(phone_column).in_(sorted(phones)))
    return or_(*conditions)


def resolve_user_ids(db: Session, keys: Iterable[IdentityKey]) -> Set[int]:
    """Forward direction: identity keys -> ids of the registered accounts they match"""
    emails, phones = _email_phone_sets(list(keys))
    if not emails and not phones:
        return set()

    rows = db.query(User.id).filter(_identity_filter(User.email, User.phone, emails, phones)).all()
    return {row[0] for row in rows}


def find_guardian_contacts(db: Session, user: User) -> List[Contact]:
    """Reverse direction: guardian contacts, across all owners, that point at this user"""
    key = IdentityKey.of(user.email, user.phone)
    if key.is_empty:
        return []

    emails, phones = _email_phone_sets([key])
    return (
        db.query(Contact)
        .filter(
            Contact.role == ContactRole.GUARDIAN,
            _identity_filter(Contact.email, Contact.phone, emails, phones),
        )
        .all()
    )


def contact_matches(contact: Contact, user: User) -> bool:
    user_key = IdentityKey.of(user.email, user.phone)
    if user_key.is_empty:
        return False
    return IdentityKey.of(contact.email, contact.phone).matches(user_key)
