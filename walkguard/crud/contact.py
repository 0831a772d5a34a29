from typing import Iterable, List, Optional, Set
from sqlalchemy import desc
from sqlalchemy.orm import Session
from walkguard.crud.base import CRUDBase
from walkguard.models.contact import Contact, ContactRole
from walkguard.models.walk_session import WalkSessionContact
from walkguard.schemas.contact import ContactCreate, ContactUpdate
from walkguard.services.identity import normalize_email, normalize_phone


class CRUDContact(CRUDBase[Contact, ContactCreate, ContactUpdate]):

    def get_by_owner(
        self,
        db: Session,
        *,
        owner_id: int,
        role: Optional[ContactRole] = None
    ) -> List[Contact]:
        query = db.query(Contact).filter(Contact.owner_user_id == owner_id)
        if role is not None:
            query = query.filter(Contact.role == role)
        return query.order_by(desc(Contact.created_at), desc(Contact.id)).all()

    def get_owned(self, db: Session, *, contact_id: int, owner_id: int) -> Optional[Contact]:
        return db.query(Contact).filter(
            Contact.id == contact_id,
            Contact.owner_user_id == owner_id
        ).first()

    def get_many_owned(self, db: Session, *, contact_ids: Iterable[int], owner_id: int) -> List[Contact]:
        contact_ids = set(contact_ids)
        if not contact_ids:
            return []
        return db.query(Contact).filter(
            Contact.id.in_(contact_ids),
            Contact.owner_user_id == owner_id
        ).all()

    def get_owned_ids(self, db: Session, *, contact_ids: Iterable[int], owner_id: int) -> Set[int]:
        return {c.id for c in self.get_many_owned(db, contact_ids=contact_ids, owner_id=owner_id)}

    def _normalized_fields(self, obj_in: ContactCreate) -> dict:
        return {
            "name": obj_in.name.strip(),
            "phone": normalize_phone(obj_in.phone),
            "email": normalize_email(obj_in.email),
            "role": obj_in.type,
        }

    def create_with_owner(self, db: Session, *, obj_in: ContactCreate, owner_id: int) -> Contact:
        db_obj = Contact(owner_user_id=owner_id, **self._normalized_fields(obj_in))
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update_owned(
        self,
        db: Session,
        *,
        contact_id: int,
        owner_id: int,
        obj_in: ContactUpdate
    ) -> Optional[Contact]:
        contact = self.get_owned(db, contact_id=contact_id, owner_id=owner_id)
        if not contact:
            return None
        return self.update(db, db_obj=contact, obj_in=self._normalized_fields(obj_in))

    def remove_owned(self, db: Session, *, contact_id: int, owner_id: int) -> bool:
        contact = self.get_owned(db, contact_id=contact_id, owner_id=owner_id)
        if not contact:
            return False

        # Sessions that referenced this contact stop matching it
        db.query(WalkSessionContact).filter(
            WalkSessionContact.contact_id == contact.id
        ).delete(synchronize_session=False)
        db.delete(contact)
        db.commit()
        return True


contact = CRUDContact(Contact)
