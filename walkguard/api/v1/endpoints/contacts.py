from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from walkguard import crud, schemas
from walkguard.api import deps
from walkguard.db.database import get_db
from walkguard.models.contact import ContactRole
from walkguard.models.user import User

router = APIRouter()


@router.get("/", response_model=Dict[str, List[schemas.Contact]])
def get_contacts(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
    type: Optional[ContactRole] = Query(None, description="Filter by emergency or guardian"),
) -> Any:
    """Get current user's contacts, newest first"""
    contacts = crud.contact.get_by_owner(db, owner_id=current_user.id, role=type)
    return {"contacts": [schemas.Contact.from_model(c) for c in contacts]}


@router.post("/", response_model=Dict[str, schemas.Contact], status_code=status.HTTP_201_CREATED)
def create_contact(
    *,
    db: Session = Depends(get_db),
    contact_in: schemas.ContactCreate,
    current_user: User = Depends(deps.get_current_user)
) -> Any:
    """Add a contact"""
    contact = crud.contact.create_with_owner(db, obj_in=contact_in, owner_id=current_user.id)
    return {"contact": schemas.Contact.from_model(contact)}


@router.put("/{contact_id}", response_model=Dict[str, schemas.Contact])
def update_contact(
    *,
    db: Session = Depends(get_db),
    contact_id: int,
    contact_in: schemas.ContactUpdate,
    current_user: User = Depends(deps.get_current_user)
) -> Any:
    """Replace a contact's fields"""
    contact = crud.contact.update_owned(db, contact_id=contact_id, owner_id=current_user.id, obj_in=contact_in)
    if not contact:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Contact not found"
        )
    return {"contact": schemas.Contact.from_model(contact)}


@router.delete("/{contact_id}")
def delete_contact(
    *,
    db: Session = Depends(get_db),
    contact_id: int,
    current_user: User = Depends(deps.get_current_user)
) -> Any:
    """Delete a contact"""
    if not crud.contact.remove_owned(db, contact_id=contact_id, owner_id=current_user.id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Contact not found"
        )
    return {"message": "Contact deleted", "contactId": contact_id}
