"""Sitter profile service - Business logic for sitter profiles"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import SitterProfile, User
from ...schemas import user_summary
from .repository import SitterProfileRepository
from .schemas import SitterProfileCreate, SitterProfileResponse, SitterProfileUpdate

logger = logging.getLogger(__name__)

FIELD_MAP = {
    "bio": "bio",
    "city": "city",
    "address": "address",
    "hourlyRate": "hourly_rate",
    "services": "services",
    "photos": "photos",
    "availability": "availability",
    "maxPets": "max_pets",
    "experienceYears": "experience_years",
}

# Which user contact fields each view exposes
PUBLIC_USER_FIELDS = ("email", "phone", "avatar")
LIST_USER_FIELDS = ("avatar",)
OWNER_USER_FIELDS = ("email",)

REQUIRED_COLUMNS = {"city", "hourly_rate"}


def profile_response(profile: SitterProfile, user_fields: tuple = PUBLIC_USER_FIELDS) -> SitterProfileResponse:
    return SitterProfileResponse(
        id=profile.id,
        userId=profile.user_id,
        bio=profile.bio,
        city=profile.city,
        address=profile.address,
        hourlyRate=profile.hourly_rate,
        services=profile.services or [],
        photos=profile.photos or [],
        availability=profile.availability,
        maxPets=profile.max_pets,
        experienceYears=profile.experience_years,
        isVerified=profile.is_verified,
        responseTime=profile.response_time,
        avgRating=profile.avg_rating or 0,
        totalReviews=profile.total_reviews or 0,
        createdAt=profile.created_at,
        updatedAt=profile.updated_at,
        user=user_summary(profile.user, *user_fields),
    )


class SitterProfileService:
    """Service layer for sitter profile business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SitterProfileRepository()

    def create_profile(self, data: SitterProfileCreate, user: User) -> SitterProfile:
        existing = self.repo.get_by_user_id(self.db, user.id)
        if existing:
            raise HTTPException(status_code=409, detail="You already have a sitter profile")

        profile_data = {
            FIELD_MAP[key]: value for key, value in data.model_dump().items() if value is not None
        }
        profile_data["city"] = data.city.strip()

        profile = self.repo.create(self.db, user.id, **profile_data)
        logger.info(f"🧑‍🍼 Sitter profile {profile.id} created for user {user.id}")
        return profile

    def get_my_profile(self, user: User) -> SitterProfile:
        profile = self.repo.get_by_user_id(self.db, user.id)
        if not profile:
            raise HTTPException(status_code=404, detail="You do not have a sitter profile")
        return profile

    def get_profile(self, profile_id: str) -> SitterProfile:
        profile = self.repo.get_by_id(self.db, profile_id)
        if not profile:
            raise HTTPException(status_code=404, detail="Sitter profile not found")
        return profile

    def search_profiles(
        self,
        city: Optional[str] = None,
        min_rate: Optional[float] = None,
        max_rate: Optional[float] = None,
        min_rating: Optional[float] = None,
    ) -> list[SitterProfile]:
        return self.repo.search(self.db, city, min_rate, max_rate, min_rating)

    def update_my_profile(self, data: SitterProfileUpdate, user: User) -> SitterProfile:
        profile = self.get_my_profile(user)

        updates = {}
        for key, value in data.model_dump(exclude_unset=True).items():
            column = FIELD_MAP[key]
            if column in REQUIRED_COLUMNS and value is None:
                continue
            if key == "bio" and value is not None and not value.strip():
                value = None
            updates[column] = value

        return self.repo.update(self.db, profile, **updates)

    def delete_my_profile(self, user: User) -> SitterProfileResponse:
        profile = self.get_my_profile(user)
        deleted = profile_response(profile, OWNER_USER_FIELDS)
        self.repo.delete(self.db, profile)
        logger.info(f"🗑️ Sitter profile {profile.id} deleted by user {user.id}")
        return deleted
