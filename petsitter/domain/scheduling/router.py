"""Scheduling router - free time and visit planning for a sitter"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...shared.validators import parse_iso_day, validate_time_hhmm
from .availability_service import AvailabilityService
from .schemas import FreeSlotsResponse, PlanRequest, PlanResponse

router = APIRouter(prefix="/scheduling", tags=["Scheduling"])


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    """Dependency injection for AvailabilityService"""
    return AvailabilityService(db)


@router.get("/free-slots", response_model=FreeSlotsResponse)
async def get_free_slots(
    sitterProfileId: Optional[str] = Query(None),
    date: Optional[str] = Query(None),
    duration: Optional[int] = Query(None, ge=1, le=1440),
    preferredStart: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    service: AvailabilityService = Depends(get_availability_service),
):
    """
    Free time for a sitter on one day, after the travel buffer around every busy visit.

    With ``duration`` the first start that fits (at or after ``preferredStart``) is returned too.
    """
    if not sitterProfileId or not date:
        raise HTTPException(status_code=400, detail="sitterProfileId and date are required")

    try:
        day = parse_iso_day(date)
        if preferredStart:
            preferredStart = validate_time_hhmm(preferredStart)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return service.get_free_slots(sitterProfileId, day, duration, preferredStart)


@router.post("/plan", response_model=PlanResponse)
async def plan_visits(
    data: PlanRequest,
    current_user: User = Depends(get_current_user),
    service: AvailabilityService = Depends(get_availability_service),
):
    return service.plan(data)
