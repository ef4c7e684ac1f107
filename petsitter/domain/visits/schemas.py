"""Visit domain schemas - Pydantic models for validation"""

from datetime import date as date_type
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...models_visit import VisitStatus
from ...schemas import UserSummary
from ...shared.validators import parse_iso_date, validate_time_hhmm
from ..pets.schemas import PetResponse, pet_response


def _parse_date(v):
    if isinstance(v, date_type):
        return v
    return parse_iso_date(v)


class VisitCreate(BaseModel):
    """Schema for an owner booking a visit with a sitter"""

    sitterProfileId: str = Field(..., min_length=1)
    petIds: list[str] = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    date: date_type
    timeStart: str
    timeEnd: str
    services: Optional[list[str]] = None
    task: Optional[str] = None
    totalPrice: float = Field(..., ge=0)
    notesForSitter: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v):
        return _parse_date(v)

    @field_validator("timeStart", "timeEnd")
    @classmethod
    def validate_time(cls, v: str) -> str:
        return validate_time_hhmm(v)


class VisitUpdateRejected(BaseModel):
    """Schema for editing a rejected visit before resubmitting it"""

    address: Optional[str] = Field(None, min_length=1)
    date: Optional[date_type] = None
    timeStart: Optional[str] = None
    timeEnd: Optional[str] = None
    services: Optional[list[str]] = None
    task: Optional[str] = None
    totalPrice: Optional[float] = Field(None, ge=0)
    notesForSitter: Optional[str] = None
    petIds: Optional[list[str]] = Field(None, min_length=1)

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v):
        if v is None:
            return v
        return _parse_date(v)

    @field_validator("timeStart", "timeEnd")
    @classmethod
    def validate_time(cls, v):
        if v is None:
            return v
        return validate_time_hhmm(v)


class VisitStatusUpdate(BaseModel):
    status: VisitStatus


class RejectVisitRequest(BaseModel):
    rejectionReason: str = Field(..., min_length=3)


class VisitPhotoCreate(BaseModel):
    url: str = Field(..., min_length=1, max_length=1000)
    caption: Optional[str] = Field(None, max_length=500)


class VisitPhotoResponse(BaseModel):
    id: str
    visitId: str
    url: str
    caption: Optional[str]
    uploadedBy: str
    createdAt: Optional[datetime] = None


class VisitSitter(BaseModel):
    """Sitter profile summary embedded in an owner's view of a visit"""

    id: str
    city: str
    hourlyRate: float
    avgRating: float
    user: Optional[UserSummary] = None


class VisitResponse(BaseModel):
    id: str
    ownerId: str
    sitterId: Optional[str]
    sitterUserId: str
    address: str
    date: str
    timeStart: str
    timeEnd: str
    services: list[str] = []
    task: Optional[str]
    totalPrice: float
    notesForSitter: Optional[str]
    status: str
    rejectionReason: Optional[str]
    canceledBy: Optional[str]
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    pets: list[PetResponse] = []
    sitter: Optional[VisitSitter] = None
    owner: Optional[UserSummary] = None


class DeleteVisitResponse(BaseModel):
    success: bool


def photo_response(photo) -> VisitPhotoResponse:
    return VisitPhotoResponse(
        id=photo.id,
        visitId=photo.visit_id,
        url=photo.url,
        caption=photo.caption,
        uploadedBy=photo.uploaded_by,
        createdAt=photo.created_at,
    )


def visit_response(visit, include_sitter: bool = False, owner_fields: Optional[tuple] = None) -> VisitResponse:
    """
    Serialize a visit with its pets.

    Args:
        include_sitter: Embed the sitter profile and the sitter's id, name and phone
        owner_fields: Embed the owner with these contact fields (None leaves the owner out)
    """
    sitter = None
    if include_sitter and visit.sitter is not None:
        sitter = VisitSitter(
            id=visit.sitter.id,
            city=visit.sitter.city,
            hourlyRate=visit.sitter.hourly_rate,
            avgRating=visit.sitter.avg_rating or 0,
            user=UserSummary(
                id=visit.sitter.user.id,
                name=visit.sitter.user.name,
                phone=visit.sitter.user.phone,
            ),
        )

    owner = None
    if owner_fields is not None and visit.owner is not None:
        owner = UserSummary(
            id=visit.owner.id,
            name=visit.owner.name,
            **{field: getattr(visit.owner, field) for field in owner_fields},
        )

    return VisitResponse(
        id=visit.id,
        ownerId=visit.owner_id,
        sitterId=visit.sitter_id,
        sitterUserId=visit.sitter_user_id,
        address=visit.address,
        date=visit.date.isoformat(),
        timeStart=visit.time_start,
        timeEnd=visit.time_end,
        services=visit.services or [],
        task=visit.task,
        totalPrice=visit.total_price,
        notesForSitter=visit.notes_for_sitter,
        status=visit.status,
        rejectionReason=visit.rejection_reason,
        canceledBy=visit.canceled_by,
        createdAt=visit.created_at,
        updatedAt=visit.updated_at,
        pets=[pet_response(pet) for pet in visit.pets],
        sitter=sitter,
        owner=owner,
    )
