"""
Walk session lifecycle.

Created -> Active on start; location updates, check-ins and panics keep the
session Active; end moves it to Ended, which is terminal. Every transition
after start is gated on (session id, owner, is_active) in a single
conditional write, see `walkguard.crud.walk_session`.
"""
import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from walkguard import crud
from walkguard.core.clock import NowFn, as_utc, utcnow
from walkguard.core.config import settings
from walkguard.core.exceptions import NotFoundError, ValidationError
from walkguard.models.user import User
from walkguard.models.walk_session import WalkMode, WalkSession
from walkguard.schemas.location import Location, TrackedLocation
from walkguard.schemas.walk import (
    CheckInRecorded,
    GuardianWalk,
    LiveLocation,
    LocationUpdated,
    WalkEnded,
    WalkStarted,
    WalkSummary,
)
from walkguard.services.guardian_access import ensure_can_view
from walkguard.services.identity import find_guardian_contacts

logger = logging.getLogger(__name__)

SESSION_NOT_FOUND = "Walk session not found"


def format_duration(start: datetime, end: datetime) -> str:
    """MM:SS with unbounded minutes, e.g. 125s -> "02:05", 2h -> "120:00" """
    total_seconds = max(0, int((as_utc(end) - as_utc(start)).total_seconds()))
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"


def _dedupe(ids: List[int]) -> List[int]:
    return list(dict.fromkeys(ids))


def _owner_name(session: WalkSession) -> str:
    owner = session.owner
    if owner is None:
        return "Unknown"
    return owner.display_name or "Unknown"


def _last_check_in(session: WalkSession) -> Optional[datetime]:
    if not session.check_ins:
        return None
    return as_utc(session.check_ins[-1].occurred_at)


def _current_or_start(session: WalkSession) -> TrackedLocation:
    current = session.current_location
    if current is not None:
        return TrackedLocation(lat=current["lat"], lng=current["lng"], updated_at=as_utc(current["updatedAt"]))
    return TrackedLocation(lat=session.start_lat, lng=session.start_lng)


class WalkSessionService:

    def __init__(self, now_fn: NowFn = utcnow):
        self.now_fn = now_fn

    def start(
        self,
        db: Session,
        *,
        owner: User,
        mode: WalkMode,
        location: Location,
        contact_ids: Optional[List[int]] = None,
        guardian_ids: Optional[List[int]] = None
    ) -> WalkStarted:
        contact_ids = _dedupe(contact_ids or [])
        guardian_ids = _dedupe(guardian_ids or [])

        requested = set(contact_ids) | set(guardian_ids)
        owned = crud.contact.get_owned_ids(db, contact_ids=requested, owner_id=owner.id)
        unknown = sorted(requested - owned)
        if unknown:
            raise ValidationError(f"Unknown contact ids: {', '.join(str(i) for i in unknown)}")

        started_at = self.now_fn()
        session = crud.walk_session.create_with_contacts(
            db,
            owner_id=owner.id,
            mode=mode,
            start_location=location,
            start_time=started_at,
            contact_ids=contact_ids,
            guardian_ids=guardian_ids,
        )
        logger.info(
            f"Walk {session.id} started by user {owner.id} "
            f"({mode.value}, {len(contact_ids)} contacts, {len(guardian_ids)} guardians)"
        )

        return WalkStarted(
            session_id=session.id,
            mode=session.mode,
            location=Location(lat=session.start_lat, lng=session.start_lng),
            started_at=started_at,
        )

    def update_location(self, db: Session, *, session_id: int, owner: User, lat: float, lng: float) -> LocationUpdated:
        updated_at = self.now_fn()
        matched = crud.walk_session.update_location_if_active(
            db, session_id=session_id, owner_id=owner.id, lat=lat, lng=lng, updated_at=updated_at
        )
        if not matched:
            raise NotFoundError(SESSION_NOT_FOUND)

        return LocationUpdated(session_id=session_id, location=Location(lat=lat, lng=lng), updated_at=updated_at)

    def check_in(self, db: Session, *, session_id: int, owner: User) -> CheckInRecorded:
        check_in_at = self.now_fn()
        recorded = crud.walk_session.append_check_in_if_active(
            db, session_id=session_id, owner_id=owner.id, occurred_at=check_in_at
        )
        if not recorded:
            raise NotFoundError(SESSION_NOT_FOUND)

        return CheckInRecorded(session_id=session_id, check_in_at=check_in_at)

    def end(self, db: Session, *, session_id: int, owner: User, location: Optional[Location] = None) -> WalkEnded:
        session = crud.walk_session.get_active_owned(db, session_id=session_id, owner_id=owner.id)
        if not session:
            raise NotFoundError(SESSION_NOT_FOUND)

        ended_at = self.now_fn()
        duration = format_duration(session.start_time, ended_at)

        # A concurrent end may have won between the read and this write
        ended = crud.walk_session.end_if_active(
            db,
            session_id=session_id,
            owner_id=owner.id,
            end_time=ended_at,
            duration=duration,
            end_location=location,
        )
        if not ended:
            raise NotFoundError(SESSION_NOT_FOUND)

        logger.info(f"Walk {session_id} ended by user {owner.id} after {duration}")
        return WalkEnded(session_id=session_id, ended_at=ended_at, duration=duration)

    def history(self, db: Session, *, owner: User) -> List[WalkSummary]:
        sessions = crud.walk_session.get_history(db, owner_id=owner.id, limit=settings.WALK_HISTORY_LIMIT)
        return [
            WalkSummary(
                id=s.id,
                mode=s.mode,
                start_time=as_utc(s.start_time),
                end_time=as_utc(s.end_time) if s.end_time else None,
                duration=s.duration,
                start_location=s.start_location,
                end_location=s.end_location,
                check_ins=len(s.check_ins),
                panic_events=len(s.panic_events),
                is_active=s.is_active,
            )
            for s in sessions
        ]

    def active_for_guardian(self, db: Session, *, guardian: User) -> List[GuardianWalk]:
        # user -> guardian contacts -> sessions; no locking across the steps
        contacts = find_guardian_contacts(db, guardian)
        if not contacts:
            logger.debug(f"User {guardian.id} matches no guardian contacts")
            return []

        sessions = crud.walk_session.get_active_for_guardian_contacts(db, contact_ids=[c.id for c in contacts])
        return [
            GuardianWalk(
                id=s.id,
                user_id=s.owner_user_id,
                user_name=_owner_name(s),
                mode=s.mode,
                start_time=as_utc(s.start_time),
                start_location=s.start_location,
                current_location=_current_or_start(s),
                check_ins=len(s.check_ins),
                panic_events=len(s.panic_events),
                last_check_in=_last_check_in(s),
            )
            for s in sessions
        ]

    def live_location(self, db: Session, *, session_id: int, caller: User) -> LiveLocation:
        session = crud.walk_session.get_active(db, session_id=session_id)
        if not session:
            raise NotFoundError(SESSION_NOT_FOUND)

        ensure_can_view(db, caller, session)

        location = _current_or_start(session)
        return LiveLocation(
            session_id=session.id,
            user_name=_owner_name(session),
            location=Location(lat=location.lat, lng=location.lng),
            start_location=session.start_location,
            start_time=as_utc(session.start_time),
            check_ins=len(session.check_ins),
            panic_events=len(session.panic_events),
            last_check_in=_last_check_in(session),
            last_location_update=location.updated_at or as_utc(session.start_time),
        )
