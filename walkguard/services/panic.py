"""
Panic alert fan-out.

The panic event is committed first and on its own. Resolving guardians and
persisting their notifications is a separate unit of work: if it fails the
caller gets a partial-success result, and the recorded panic stays.
"""
import logging
from typing import Dict, Iterable, List, Optional, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from walkguard import crud
from walkguard.core.clock import NowFn, utcnow
from walkguard.core.config import settings
from walkguard.core.exceptions import NotFoundError
from walkguard.models.contact import Contact, ContactRole
from walkguard.models.notification import NotificationType
from walkguard.models.user import User
from walkguard.models.walk_session import WalkSession
from walkguard.schemas.location import Location
from walkguard.schemas.notification import NotificationCreate
from walkguard.schemas.walk import PanicResult
from walkguard.services.identity import identity_keys_for, resolve_user_ids

logger = logging.getLogger(__name__)

PANIC_TITLE = "Panic Alert"


def resolve_recipients(db: Session, contacts: Iterable[Contact]) -> List[int]:
    """Deduplicated account ids for every guardian contact in `contacts`"""
    guardians = [c for c in contacts if c.role == ContactRole.GUARDIAN]
    return sorted(resolve_user_ids(db, identity_keys_for(guardians)))


def resolve_alert_location(reported: Optional[Location], session: WalkSession) -> Dict[str, float]:
    # Order matters: it decides what guardians see during an emergency
    if reported is not None:
        return {"lat": reported.lat, "lng": reported.lng}
    if session.current_lat is not None and session.current_lng is not None:
        return {"lat": session.current_lat, "lng": session.current_lng}
    if session.start_lat is not None and session.start_lng is not None:
        return {"lat": session.start_lat, "lng": session.start_lng}
    return {"lat": settings.PANIC_FALLBACK_LAT, "lng": settings.PANIC_FALLBACK_LNG}


def walker_display_name(walker: Optional[User]) -> str:
    if walker is not None and walker.display_name:
        return walker.display_name
    return settings.PANIC_DEFAULT_WALKER_NAME


def build_panic_notifications(
    *,
    recipient_ids: Iterable[int],
    session_id: int,
    walker_name: str,
    location: Dict[str, float]
) -> List[NotificationCreate]:
    return [
        NotificationCreate(
            recipient_user_id=recipient_id,
            notification_type=NotificationType.PANIC,
            title=PANIC_TITLE,
            message=f"{walker_name} has triggered a panic button during their walk.",
            walk_session_id=session_id,
            is_read=False,
            extra_data={
                "location": dict(location),
                "userName": walker_name,
                "walkSessionId": str(session_id),
            },
        )
        for recipient_id in recipient_ids
    ]


class PanicAlertDispatcher:

    def __init__(self, now_fn: NowFn = utcnow):
        self.now_fn = now_fn

    def dispatch(
        self,
        db: Session,
        *,
        session_id: int,
        owner: User,
        location: Optional[Location] = None
    ) -> PanicResult:
        triggered_at = self.now_fn()
        recorded = crud.walk_session.append_panic_event_if_active(
            db, session_id=session_id, owner_id=owner.id, occurred_at=triggered_at
        )
        if not recorded:
            raise NotFoundError("Walk session not found")

        logger.warning(f"Panic triggered for walk {session_id} by user {owner.id}")

        sent, emergency_count, failed = self._notify_guardians(
            db, session_id=session_id, owner=owner, location=location
        )

        return PanicResult(
            session_id=session_id,
            notifications_sent=sent,
            emergency_contacts=emergency_count,
            delivery_failed=failed,
            timestamp=triggered_at,
        )

    def _notify_guardians(
        self,
        db: Session,
        *,
        session_id: int,
        owner: User,
        location: Optional[Location]
    ) -> Tuple[int, int, bool]:
        """Returns (notifications sent, emergency contacts, delivery failed)"""
        emergency_count = 0
        try:
            session = crud.walk_session.get(db, session_id=session_id)
            contacts = crud.contact.get_many_owned(
                db,
                contact_ids=session.contact_ids + session.guardian_ids,
                owner_id=owner.id,
            )
            emergency_count = sum(1 for c in contacts if c.role == ContactRole.EMERGENCY)
            if emergency_count == 0:
                logger.info(f"No emergency contacts for walk {session_id}")

            recipient_ids = resolve_recipients(db, contacts)
            if not recipient_ids:
                logger.info(f"Panic for walk {session_id}: no guardian accounts resolved")
                return 0, emergency_count, False

            notifications = build_panic_notifications(
                recipient_ids=recipient_ids,
                session_id=session_id,
                walker_name=walker_display_name(owner),
                location=resolve_alert_location(location, session),
            )
            crud.notification.create_batch(db, items=notifications)
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Panic for walk {session_id}: failed to notify guardians")
            return 0, emergency_count, True

        logger.info(f"Panic for walk {session_id}: created {len(notifications)} notifications")
        return len(notifications), emergency_count, False
