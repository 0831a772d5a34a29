from typing import Optional
from pydantic import EmailStr, Field, model_validator
from walkguard.models.user import AuthProvider
from walkguard.schemas.base import CamelModel


class User(CamelModel):
    id: int
    phone: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    provider: AuthProvider
    trust_score: int = 0
    is_verified: bool = False


class UserUpdate(CamelModel):
    name: Optional[str] = Field(None, max_length=255)


class UserCreate(CamelModel):
    phone: Optional[str] = Field(None, max_length=32)
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, max_length=255)
    provider: AuthProvider

    @model_validator(mode="after")
    def require_identity(self) -> "UserCreate":
        if not self.phone and not self.email:
            raise ValueError("phone or email is required")
        return self
