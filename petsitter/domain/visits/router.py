"""Visit router - bookings for owners, jobs for sitters"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...shared.validators import parse_iso_day
from ..scheduling.schemas import BusySlot
from .schemas import (
    DeleteVisitResponse,
    RejectVisitRequest,
    VisitCreate,
    VisitPhotoCreate,
    VisitPhotoResponse,
    VisitResponse,
    VisitStatusUpdate,
    VisitUpdateRejected,
    photo_response,
    visit_response,
)
from .service import VisitService

router = APIRouter(prefix="/visits", tags=["Visits"])

# Contact fields of the owner shown to the sitter
SITTER_LIST_OWNER_FIELDS = ("email", "phone")
SITTER_UPDATE_OWNER_FIELDS = ("phone",)


def get_visit_service(db: Session = Depends(get_db)) -> VisitService:
    """Dependency injection for VisitService"""
    return VisitService(db)


@router.post("", response_model=VisitResponse, status_code=201)
async def create_visit(
    data: VisitCreate,
    current_user: User = Depends(get_current_user),
    service: VisitService = Depends(get_visit_service),
):
    """Book a visit with a sitter (starts as PENDING)"""
    visit = service.create_visit(data, current_user)
    return visit_response(visit, include_sitter=True)


@router.get("/my-bookings", response_model=list[VisitResponse])
async def get_my_bookings(
    current_user: User = Depends(get_current_user),
    service: VisitService = Depends(get_visit_service),
):
    return [visit_response(v, include_sitter=True) for v in service.list_bookings(current_user)]


@router.get("/my-jobs", response_model=list[VisitResponse])
async def get_my_jobs(
    current_user: User = Depends(get_current_user),
    service: VisitService = Depends(get_visit_service),
):
    return [
        visit_response(v, owner_fields=SITTER_LIST_OWNER_FIELDS)
        for v in service.list_jobs(current_user)
    ]


@router.get("/busy-slots", response_model=list[BusySlot])
async def get_busy_slots(
    sitterProfileId: Optional[str] = Query(None),
    dateFrom: Optional[str] = Query(None),
    dateTo: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    service: VisitService = Depends(get_visit_service),
):
    """Times a sitter is already booked between two dates (inclusive)"""
    if not sitterProfileId or not dateFrom or not dateTo:
        raise HTTPException(
            status_code=400, detail="sitterProfileId, dateFrom and dateTo are required"
        )

    try:
        date_from = parse_iso_day(dateFrom)
        date_to = parse_iso_day(dateTo)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return service.get_busy_slots(sitterProfileId, date_from, date_to)


@router.get("/{visit_id}", response_model=VisitResponse)
async def get_visit(
    visit_id: str,
    current_user: User = Depends(get_current_user),
    service: VisitService = Depends(get_visit_service),
):
    visit = service.get_participant_visit(visit_id, current_user)
    return visit_response(visit, include_sitter=True, owner_fields=SITTER_LIST_OWNER_FIELDS)


@router.patch("/{visit_id}/status", response_model=VisitResponse)
async def update_visit_status(
    visit_id: str,
    data: VisitStatusUpdate,
    current_user: User = Depends(get_current_user),
    service: VisitService = Depends(get_visit_service),
):
    visit = service.update_status(visit_id, data.status, current_user)
    return visit_response(visit, owner_fields=SITTER_UPDATE_OWNER_FIELDS)


@router.patch("/{visit_id}/reject", response_model=VisitResponse)
async def reject_visit(
    visit_id: str,
    data: RejectVisitRequest,
    current_user: User = Depends(get_current_user),
    service: VisitService = Depends(get_visit_service),
):
    visit = service.reject_visit(visit_id, data.rejectionReason, current_user)
    return visit_response(visit, owner_fields=SITTER_UPDATE_OWNER_FIELDS)


@router.patch("/{visit_id}/cancel", response_model=VisitResponse)
async def cancel_visit(
    visit_id: str,
    current_user: User = Depends(get_current_user),
    service: VisitService = Depends(get_visit_service),
):
    visit = service.cancel_visit(visit_id, current_user)
    return visit_response(visit, include_sitter=True)


@router.patch("/{visit_id}/resubmit", response_model=VisitResponse)
async def resubmit_visit(
    visit_id: str,
    current_user: User = Depends(get_current_user),
    service: VisitService = Depends(get_visit_service),
):
    visit = service.resubmit_visit(visit_id, current_user)
    return visit_response(visit, include_sitter=True)


@router.patch("/{visit_id}", response_model=VisitResponse)
async def update_rejected_visit(
    visit_id: str,
    data: VisitUpdateRejected,
    current_user: User = Depends(get_current_user),
    service: VisitService = Depends(get_visit_service),
):
    """Edit a rejected visit before resubmitting it"""
    visit = service.update_rejected_visit(visit_id, data, current_user)
    return visit_response(visit, include_sitter=True)


@router.delete("/{visit_id}", response_model=DeleteVisitResponse)
async def delete_rejected_visit(
    visit_id: str,
    current_user: User = Depends(get_current_user),
    service: VisitService = Depends(get_visit_service),
):
    return service.delete_rejected_visit(visit_id, current_user)


@router.post("/{visit_id}/photos", response_model=VisitPhotoResponse, status_code=201)
async def add_visit_photo(
    visit_id: str,
    data: VisitPhotoCreate,
    current_user: User = Depends(get_current_user),
    service: VisitService = Depends(get_visit_service),
):
    """Sitter uploads proof of care"""
    return photo_response(service.add_photo(visit_id, data, current_user))


@router.get("/{visit_id}/photos", response_model=list[VisitPhotoResponse])
async def list_visit_photos(
    visit_id: str,
    current_user: User = Depends(get_current_user),
    service: VisitService = Depends(get_visit_service),
):
    return [photo_response(p) for p in service.list_photos(visit_id, current_user)]
