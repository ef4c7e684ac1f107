"""Pet domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...models import PetType


class PetCreate(BaseModel):
    """Schema for adding a pet"""

    name: str = Field(..., min_length=2)
    type: PetType
    breed: Optional[str] = None
    age: Optional[int] = Field(None, ge=0)
    photo: Optional[str] = None
    notes: Optional[str] = None
    medicalNotes: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class PetUpdate(BaseModel):
    """Schema for updating a pet; only the fields sent are changed"""

    name: Optional[str] = Field(None, min_length=2)
    type: Optional[PetType] = None
    breed: Optional[str] = None
    age: Optional[int] = Field(None, ge=0)
    photo: Optional[str] = None
    notes: Optional[str] = None
    medicalNotes: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class PetResponse(BaseModel):
    id: str
    ownerId: str
    name: str
    type: str
    breed: Optional[str]
    age: Optional[int]
    photo: Optional[str]
    notes: Optional[str]
    medicalNotes: Optional[str]
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


def pet_response(pet) -> PetResponse:
    return PetResponse(
        id=pet.id,
        ownerId=pet.owner_id,
        name=pet.name,
        type=pet.type,
        breed=pet.breed,
        age=pet.age,
        photo=pet.photo,
        notes=pet.notes,
        medicalNotes=pet.medical_notes,
        createdAt=pet.created_at,
        updatedAt=pet.updated_at,
    )
