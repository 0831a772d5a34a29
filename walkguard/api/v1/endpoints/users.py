from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from walkguard import crud, schemas
from walkguard.api import deps
from walkguard.db.database import get_db
from walkguard.models.user import User

router = APIRouter()


@router.get("/me", response_model=schemas.User)
def read_current_user(
    current_user: User = Depends(deps.get_current_user)
) -> Any:
    """Get current user profile"""
    return current_user


@router.patch("/me", response_model=schemas.User)
def update_current_user(
    *,
    db: Session = Depends(get_db),
    user_in: schemas.UserUpdate,
    current_user: User = Depends(deps.get_current_user)
) -> Any:
    """Update current user profile (name only)"""
    name = user_in.name.strip() if user_in.name else None
    return crud.user.update(db, db_obj=current_user, obj_in={"name": name})
