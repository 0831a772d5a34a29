from typing import Optional
from datetime import datetime
from pydantic import EmailStr, Field, field_validator
from walkguard.models.contact import ContactRole
from walkguard.schemas.base import CamelModel


class ContactBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=32)
    email: Optional[EmailStr] = None
    type: ContactRole

    @field_validator("name", "phone")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class ContactCreate(ContactBase):
    pass


class ContactUpdate(ContactBase):
    """Full replacement of a contact's fields"""
    pass


class Contact(CamelModel):
    id: int
    name: str
    phone: str
    email: Optional[str] = None
    type: ContactRole
    created_at: datetime

    @classmethod
    def from_model(cls, contact) -> "Contact":
        return cls(
            id=contact.id,
            name=contact.name,
            phone=contact.phone,
            email=contact.email,
            type=contact.role,
            created_at=contact.created_at,
        )
