from typing import Optional
from sqlalchemy.orm import Session
from walkguard.crud.base import CRUDBase
from walkguard.models.user import User
from walkguard.schemas.user import UserCreate, UserUpdate
from walkguard.services.identity import normalize_email, normalize_phone


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):

    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == normalize_email(email)).first()

    def get_by_phone(self, db: Session, *, phone: str) -> Optional[User]:
        return db.query(User).filter(User.phone == normalize_phone(phone)).first()

    def create(self, db: Session, *, obj_in: UserCreate) -> User:
        db_obj = User(
            phone=normalize_phone(obj_in.phone),
            email=normalize_email(obj_in.email),
            name=obj_in.name.strip() if obj_in.name else None,
            provider=obj_in.provider,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


user = CRUDUser(User)
