from typing import Any, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from walkguard import schemas
from walkguard.api import deps
from walkguard.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from walkguard.db.database import get_db
from walkguard.models.user import User
from walkguard.services.panic import PanicAlertDispatcher
from walkguard.services.walk_sessions import WalkSessionService

router = APIRouter()


@router.post("/start", response_model=schemas.WalkStarted, status_code=status.HTTP_201_CREATED)
def start_walk(
    *,
    db: Session = Depends(get_db),
    walk_in: schemas.WalkStartRequest,
    current_user: User = Depends(deps.get_current_user),
    service: WalkSessionService = Depends(deps.get_walk_service)
) -> Any:
    """Start a walk session"""
    try:
        return service.start(
            db,
            owner=current_user,
            mode=walk_in.mode,
            location=walk_in.location,
            contact_ids=walk_in.contact_ids,
            guardian_ids=walk_in.guardian_ids,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.post("/{session_id}/location", response_model=schemas.LocationUpdated)
def update_walk_location(
    *,
    db: Session = Depends(get_db),
    session_id: int,
    location_in: schemas.LocationUpdateRequest,
    current_user: User = Depends(deps.get_current_user),
    service: WalkSessionService = Depends(deps.get_walk_service)
) -> Any:
    """Update the walker's current location"""
    try:
        return service.update_location(
            db, session_id=session_id, owner=current_user, lat=location_in.lat, lng=location_in.lng
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.post("/{session_id}/checkin", response_model=schemas.CheckInRecorded)
def check_in(
    *,
    db: Session = Depends(get_db),
    session_id: int,
    current_user: User = Depends(deps.get_current_user),
    service: WalkSessionService = Depends(deps.get_walk_service)
) -> Any:
    """Record a check-in"""
    try:
        return service.check_in(db, session_id=session_id, owner=current_user)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.post("/{session_id}/panic", response_model=schemas.PanicResult)
def trigger_panic(
    *,
    db: Session = Depends(get_db),
    session_id: int,
    panic_in: Optional[schemas.PanicRequest] = None,
    current_user: User = Depends(deps.get_current_user),
    dispatcher: PanicAlertDispatcher = Depends(deps.get_panic_dispatcher)
) -> Any:
    """Trigger the panic button and alert guardians"""
    try:
        return dispatcher.dispatch(db, session_id=session_id, owner=current_user, location=panic_in.location if panic_in else None)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.post("/{session_id}/end", response_model=schemas.WalkEnded)
def end_walk(
    *,
    db: Session = Depends(get_db),
    session_id: int,
    end_in: Optional[schemas.WalkEndRequest] = None,
    current_user: User = Depends(deps.get_current_user),
    service: WalkSessionService = Depends(deps.get_walk_service)
) -> Any:
    """End a walk session"""
    try:
        return service.end(db, session_id=session_id, owner=current_user, location=end_in.location if end_in else None)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.get("/history", response_model=schemas.WalkHistory)
def get_walk_history(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
    service: WalkSessionService = Depends(deps.get_walk_service)
) -> Any:
    """Get the current user's walks, newest first"""
    return schemas.WalkHistory(walks=service.history(db, owner=current_user))


@router.get("/guardian/active", response_model=schemas.GuardianWalks)
def get_guardian_active_walks(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
    service: WalkSessionService = Depends(deps.get_walk_service)
) -> Any:
    """Get active walks where the current user is a guardian"""
    return schemas.GuardianWalks(walks=service.active_for_guardian(db, guardian=current_user))


@router.get("/{session_id}/location", response_model=schemas.LiveLocation)
def get_walk_location(
    *,
    db: Session = Depends(get_db),
    session_id: int,
    current_user: User = Depends(deps.get_current_user),
    service: WalkSessionService = Depends(deps.get_walk_service)
) -> Any:
    """Get the live location of a walk (owner or guardian)"""
    try:
        return service.live_location(db, session_id=session_id, caller=current_user)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ForbiddenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)
