"""Sitter profile schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from ...schemas import UserSummary


class SitterProfileCreate(BaseModel):
    """Schema for creating the current user's sitter profile"""

    bio: Optional[str] = Field(None, min_length=10)
    city: str = Field(..., min_length=2)
    address: Optional[str] = None
    hourlyRate: float = Field(..., ge=0)
    services: Optional[list[str]] = None
    photos: Optional[list[str]] = None
    availability: Optional[Any] = None
    maxPets: Optional[int] = Field(None, ge=1)
    experienceYears: Optional[int] = Field(None, ge=0)


class SitterProfileUpdate(BaseModel):
    """Schema for updating a sitter profile; a blank bio clears it"""

    bio: Optional[str] = None
    city: Optional[str] = Field(None, min_length=2)
    address: Optional[str] = None
    hourlyRate: Optional[float] = Field(None, ge=0)
    services: Optional[list[str]] = None
    photos: Optional[list[str]] = None
    availability: Optional[Any] = None
    maxPets: Optional[int] = Field(None, ge=1)
    experienceYears: Optional[int] = Field(None, ge=0)

    @field_validator("bio")
    @classmethod
    def validate_bio(cls, v):
        if v is not None and v.strip() and len(v) < 10:
            raise ValueError("Bio must be at least 10 characters")
        return v


class SitterProfileResponse(BaseModel):
    id: str
    userId: str
    bio: Optional[str]
    city: str
    address: Optional[str]
    hourlyRate: float
    services: list[str] = []
    photos: list[str] = []
    availability: Optional[Any] = None
    maxPets: Optional[int]
    experienceYears: Optional[int]
    isVerified: bool
    responseTime: Optional[int]
    avgRating: float
    totalReviews: int
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    user: Optional[UserSummary] = None
