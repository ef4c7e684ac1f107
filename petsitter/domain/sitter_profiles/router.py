"""Sitter profile router - public search plus the signed-in sitter's own profile"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import SitterProfileCreate, SitterProfileResponse, SitterProfileUpdate
from .service import (
    LIST_USER_FIELDS,
    OWNER_USER_FIELDS,
    PUBLIC_USER_FIELDS,
    SitterProfileService,
    profile_response,
)

router = APIRouter(prefix="/sitter-profiles", tags=["Sitter Profiles"])


def get_sitter_profile_service(db: Session = Depends(get_db)) -> SitterProfileService:
    """Dependency injection for SitterProfileService"""
    return SitterProfileService(db)


@router.post("", response_model=SitterProfileResponse, status_code=201)
async def create_profile(
    data: SitterProfileCreate,
    current_user: User = Depends(get_current_user),
    service: SitterProfileService = Depends(get_sitter_profile_service),
):
    profile = service.create_profile(data, current_user)
    return profile_response(profile, OWNER_USER_FIELDS)


@router.get("", response_model=list[SitterProfileResponse])
async def search_profiles(
    city: Optional[str] = Query(None),
    minRate: Optional[float] = Query(None),
    maxRate: Optional[float] = Query(None),
    minRating: Optional[float] = Query(None),
    service: SitterProfileService = Depends(get_sitter_profile_service),
):
    """Public sitter search, best rated first"""
    profiles = service.search_profiles(city, minRate, maxRate, minRating)
    return [profile_response(p, LIST_USER_FIELDS) for p in profiles]


@router.get("/me", response_model=SitterProfileResponse)
async def get_my_profile(
    current_user: User = Depends(get_current_user),
    service: SitterProfileService = Depends(get_sitter_profile_service),
):
    return profile_response(service.get_my_profile(current_user), PUBLIC_USER_FIELDS)


@router.patch("/me", response_model=SitterProfileResponse)
async def update_my_profile(
    data: SitterProfileUpdate,
    current_user: User = Depends(get_current_user),
    service: SitterProfileService = Depends(get_sitter_profile_service),
):
    profile = service.update_my_profile(data, current_user)
    return profile_response(profile, OWNER_USER_FIELDS)


@router.delete("/me", response_model=SitterProfileResponse)
async def delete_my_profile(
    current_user: User = Depends(get_current_user),
    service: SitterProfileService = Depends(get_sitter_profile_service),
):
    return service.delete_my_profile(current_user)


@router.get("/{profile_id}", response_model=SitterProfileResponse)
async def get_profile(
    profile_id: str,
    service: SitterProfileService = Depends(get_sitter_profile_service),
):
    """Public view of any sitter's profile"""
    return profile_response(service.get_profile(profile_id), PUBLIC_USER_FIELDS)
