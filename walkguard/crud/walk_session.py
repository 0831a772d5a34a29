"""
Walk session persistence.

Every owner mutation is a single conditional statement keyed by
(id, owner, is_active), so two racing requests can never both succeed on
an ended session. Check-ins and panic events are appended with
INSERT ... SELECT against the same condition, never read-modify-write.
"""
from datetime import datetime
from typing import Iterable, List, Optional
from sqlalchemy import DateTime, desc, insert, literal, select
from sqlalchemy.orm import Session, selectinload
from walkguard.models.walk_session import (
    ContactScope,
    WalkCheckIn,
    WalkMode,
    WalkPanicEvent,
    WalkSession,
    WalkSessionContact,
)
from walkguard.schemas.location import Location


class CRUDWalkSession:
    def __init__(self):
        self.model = WalkSession

    def _active_owned_clause(self, session_id: int, owner_id: int):
        return (
            WalkSession.id == session_id,
            WalkSession.owner_user_id == owner_id,
            WalkSession.is_active.is_(True),
        )

    # ---------------------------
    # Reads
    # ---------------------------
    def get(self, db: Session, *, session_id: int) -> Optional[WalkSession]:
        return db.get(WalkSession, session_id)

    def get_active(self, db: Session, *, session_id: int) -> Optional[WalkSession]:
        return db.query(WalkSession).filter(
            WalkSession.id == session_id,
            WalkSession.is_active.is_(True),
        ).first()

    def get_active_owned(self, db: Session, *, session_id: int, owner_id: int) -> Optional[WalkSession]:
        return db.query(WalkSession).filter(*self._active_owned_clause(session_id, owner_id)).first()

    def get_history(self, db: Session, *, owner_id: int, limit: int = 50) -> List[WalkSession]:
        return (
            db.query(WalkSession)
            .options(selectinload(WalkSession.check_ins), selectinload(WalkSession.panic_events))
            .filter(WalkSession.owner_user_id == owner_id)
            .order_by(desc(WalkSession.start_time), desc(WalkSession.id))
            .limit(limit)
            .all()
        )

    def get_active_for_guardian_contacts(
        self,
        db: Session,
        *,
        contact_ids: Iterable[int]
    ) -> List[WalkSession]:
        contact_ids = set(contact_ids)
        if not contact_ids:
            return []

        session_ids = select(WalkSessionContact.walk_session_id).where(
            WalkSessionContact.contact_id.in_(contact_ids),
            WalkSessionContact.scope == ContactScope.GUARDIAN,
        )
        return (
            db.query(WalkSession)
            .options(
                selectinload(WalkSession.owner),
                selectinload(WalkSession.check_ins),
                selectinload(WalkSession.panic_events),
            )
            .filter(WalkSession.id.in_(session_ids), WalkSession.is_active.is_(True))
            .order_by(desc(WalkSession.start_time), desc(WalkSession.id))
            .all()
        )

    # ---------------------------
    # Writes
    # ---------------------------
    def create_with_contacts(
        self,
        db: Session,
        *,
        owner_id: int,
        mode: WalkMode,
        start_location: Location,
        start_time: datetime,
        contact_ids: List[int],
        guardian_ids: List[int]
    ) -> WalkSession:
        db_obj = WalkSession(
            owner_user_id=owner_id,
            mode=mode,
            start_time=start_time,
            start_lat=start_location.lat,
            start_lng=start_location.lng,
            is_active=True,
        )
        for contact_id in contact_ids:
            db_obj.contact_links.append(WalkSessionContact(contact_id=contact_id, scope=ContactScope.EMERGENCY))
        for contact_id in guardian_ids:
            db_obj.contact_links.append(WalkSessionContact(contact_id=contact_id, scope=ContactScope.GUARDIAN))

        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update_location_if_active(
        self,
        db: Session,
        *,
        session_id: int,
        owner_id: int,
        lat: float,
        lng: float,
        updated_at: datetime
    ) -> bool:
        # end_lat/end_lng track the latest point too, so a session ended
        # without an explicit location keeps its last known position
        matched = db.query(WalkSession).filter(*self._active_owned_clause(session_id, owner_id)).update(
            {
                WalkSession.current_lat: lat,
                WalkSession.current_lng: lng,
                WalkSession.current_updated_at: updated_at,
                WalkSession.end_lat: lat,
                WalkSession.end_lng: lng,
            },
            synchronize_session=False,
        )
        db.commit()
        return matched == 1

    def _append_if_active(self, db: Session, model, *, session_id: int, owner_id: int, occurred_at: datetime) -> bool:
        stmt = insert(model).from_select(
            ["walk_session_id", "occurred_at"],
            select(
                WalkSession.id,
                literal(occurred_at, type_=DateTime(timezone=True)),
            ).where(*self._active_owned_clause(session_id, owner_id)),
        )
        result = db.execute(stmt)
        db.commit()
        return result.rowcount == 1

    def append_check_in_if_active(self, db: Session, *, session_id: int, owner_id: int, occurred_at: datetime) -> bool:
        return self._append_if_active(db, WalkCheckIn, session_id=session_id, owner_id=owner_id, occurred_at=occurred_at)

    def append_panic_event_if_active(self, db: Session, *, session_id: int, owner_id: int, occurred_at: datetime) -> bool:
        return self._append_if_active(db, WalkPanicEvent, session_id=session_id, owner_id=owner_id, occurred_at=occurred_at)

    def end_if_active(
        self,
        db: Session,
        *,
        session_id: int,
        owner_id: int,
        end_time: datetime,
        duration: str,
        end_location: Optional[Location] = None
    ) -> bool:
        values = {
            WalkSession.end_time: end_time,
            WalkSession.duration: duration,
            WalkSession.is_active: False,
        }
        if end_location is not None:
            values[WalkSession.end_lat] = end_location.lat
            values[WalkSession.end_lng] = end_location.lng

        matched = db.query(WalkSession).filter(*self._active_owned_clause(session_id, owner_id)).update(
            values,
            synchronize_session=False,
        )
        db.commit()
        return matched == 1


walk_session = CRUDWalkSession()
