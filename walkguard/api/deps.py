from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from walkguard import crud
from walkguard.db.database import get_db
from walkguard.core.security import decode_token
from walkguard.models.user import User
from walkguard.services.panic import PanicAlertDispatcher
from walkguard.services.walk_sessions import WalkSessionService

security = HTTPBearer(auto_error=False)


def get_current_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise credentials_exception

    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        raise credentials_exception

    user = crud.user.get(db, int(subject))
    if user is None:
        raise credentials_exception

    return user


def get_walk_service() -> WalkSessionService:
    return WalkSessionService()


def get_panic_dispatcher() -> PanicAlertDispatcher:
    return PanicAlertDispatcher()
