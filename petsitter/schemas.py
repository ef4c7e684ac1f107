from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .models import UserRole
from .shared.validators import validate_email, validate_phone


class RegisterRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=8)
    name: str = Field(..., min_length=2)
    phone: Optional[str] = None
    role: UserRole

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Email is required")
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone_field(cls, v):
        if v:
            return validate_phone(v)
        return v

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: UserRole) -> UserRole:
        if v == UserRole.ADMIN:
            raise ValueError("Admin accounts cannot be self-registered")
        return v


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class RefreshRequest(BaseModel):
    refreshToken: str


class UpdateMeRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=2)
    phone: Optional[str] = None
    address: Optional[str] = None
    avatar: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("phone")
    @classmethod
    def validate_phone_field(cls, v):
        if v:
            return validate_phone(v)
        return v


class AuthUser(BaseModel):
    id: str
    email: str
    name: str
    role: str
    phone: Optional[str] = None
    address: Optional[str] = None
    avatar: Optional[str] = None
    isEmailVerified: bool = False


class AuthResponse(BaseModel):
    user: AuthUser
    accessToken: str
    refreshToken: str


class UserResponse(BaseModel):
    id: str
    email: str
    name: str
    role: str
    phone: Optional[str]
    address: Optional[str]
    avatar: Optional[str]
    isEmailVerified: bool
    createdAt: Optional[datetime] = None


class UserSummary(BaseModel):
    """Public slice of a user embedded in other resources"""

    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    avatar: Optional[str] = None


def user_response(user) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        phone=user.phone,
        address=user.address,
        avatar=user.avatar,
        isEmailVerified=user.is_email_verified,
        createdAt=user.created_at,
    )


def user_summary(user, *fields: str) -> Optional[UserSummary]:
    """Build a UserSummary exposing only id, name and the requested contact fields"""
    if user is None:
        return None
    data = {"id": user.id, "name": user.name}
    for field in fields:
        data[field] = getattr(user, field)
    return UserSummary(**data)
