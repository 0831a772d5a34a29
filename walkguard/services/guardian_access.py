from sqlalchemy.orm import Session
from walkguard.core.exceptions import ForbiddenError
from walkguard.models.contact import Contact, ContactRole
from walkguard.models.user import User
from walkguard.models.walk_session import WalkSession
from walkguard.services.identity import contact_matches


def is_authorized(db: Session, caller: User, session: WalkSession) -> bool:
    """Owner, or a user matching one of the session's guardian contacts.

    Evaluated on every request; guardian lists can change at any time.
    """
    if session.owner_user_id == caller.id:
        return True

    guardian_ids = session.guardian_ids
    if not guardian_ids:
        return False

    guardians = db.query(Contact).filter(
        Contact.id.in_(guardian_ids),
        Contact.owner_user_id == session.owner_user_id,
        Contact.role == ContactRole.GUARDIAN,
    ).all()
    return any(contact_matches(contact, caller) for contact in guardians)


def ensure_can_view(db: Session, caller: User, session: WalkSession) -> None:
    if not is_authorized(db, caller, session):
        raise ForbiddenError("Not authorized to view this walk")
