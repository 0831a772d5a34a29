from sqlalchemy import Column, Integer, String, ForeignKey, Enum, Index
from sqlalchemy.orm import relationship
from walkguard.models.base import BaseModel
import enum


class ContactRole(enum.Enum):
    EMERGENCY = "emergency"
    GUARDIAN = "guardian"


class Contact(BaseModel):
    __tablename__ = "contacts"
    __table_args__ = (
        Index("idx_contacts_owner_role", "owner_user_id", "role"),
    )

    owner_user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    name = Column(String(255), nullable=False)
    phone = Column(String(32), nullable=False, index=True)
    email = Column(String(255), nullable=True, index=True)  # stored lowercased
    role = Column(
        Enum(ContactRole, name="contactrole", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )

    owner = relationship("User", back_populates="contacts")
