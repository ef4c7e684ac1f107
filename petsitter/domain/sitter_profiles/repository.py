"""Sitter profile repository - Database operations for sitter profiles"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import SitterProfile


class SitterProfileRepository:
    """Repository for sitter profile database operations"""

    @staticmethod
    def get_by_user_id(db: Session, user_id: str) -> Optional[SitterProfile]:
        return (
            db.query(SitterProfile)
            .options(joinedload(SitterProfile.user))
            .filter(SitterProfile.user_id == user_id)
            .first()
        )

    @staticmethod
    def get_by_id(db: Session, profile_id: str) -> Optional[SitterProfile]:
        return (
            db.query(SitterProfile)
            .options(joinedload(SitterProfile.user))
            .filter(SitterProfile.id == profile_id)
            .first()
        )

    @staticmethod
    def search(
        db: Session,
        city: Optional[str] = None,
        min_rate: Optional[float] = None,
        max_rate: Optional[float] = None,
        min_rating: Optional[float] = None,
    ) -> list[SitterProfile]:
        """Search sitter profiles, best rated first"""
        query = db.query(SitterProfile).options(joinedload(SitterProfile.user))

        if city:
            query = query.filter(SitterProfile.city.ilike(f"%{city.strip()}%"))

        if min_rate is not None:
            query = query.filter(SitterProfile.hourly_rate >= min_rate)

        if max_rate is not None:
            query = query.filter(SitterProfile.hourly_rate <= max_rate)

        if min_rating is not None:
            query = query.filter(SitterProfile.avg_rating >= min_rating)

        return query.order_by(SitterProfile.avg_rating.desc(), SitterProfile.created_at.desc()).all()

    @staticmethod
    def create(db: Session, user_id: str, **profile_data) -> SitterProfile:
        profile = SitterProfile(user_id=user_id, **profile_data)
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def update(db: Session, profile: SitterProfile, **updates) -> SitterProfile:
        for key, value in updates.items():
            if hasattr(profile, key):
                setattr(profile, key, value)

        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def delete(db: Session, profile: SitterProfile) -> None:
        db.delete(profile)
        db.commit()
