from sqlalchemy import Column, String, Boolean, Enum, Integer
from sqlalchemy.orm import relationship
from walkguard.models.base import BaseModel
import enum


class AuthProvider(enum.Enum):
    PHONE = "phone"
    EMAIL = "email"
    GOOGLE = "google"


class User(BaseModel):
    __tablename__ = "users"

    # Either phone or email is the durable identity key, depending on provider
    phone = Column(String(32), unique=True, index=True, nullable=True)
    email = Column(String(255), unique=True, index=True, nullable=True)
    name = Column(String(255), nullable=True)
    provider = Column(
        Enum(AuthProvider, name="authprovider", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    is_verified = Column(Boolean, default=False, nullable=False)
    trust_score = Column(Integer, default=0, nullable=False)

    contacts = relationship("Contact", back_populates="owner", cascade="all, delete-orphan")
    walk_sessions = relationship("WalkSession", back_populates="owner")

    @property
    def display_name(self):
        return self.name or self.email
