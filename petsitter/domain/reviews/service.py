"""Review service - Owners rating completed visits"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import SitterProfile, User
from ...models_visit import Review, VisitStatus
from ...services import notification_service
from ..visits.repository import VisitRepository
from .repository import ReviewRepository
from .schemas import ReviewCreate

logger = logging.getLogger(__name__)


class ReviewService:
    """Service layer for review business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ReviewRepository()
        self.visit_repo = VisitRepository()

    def create_review(self, visit_id: str, data: ReviewCreate, user: User) -> Review:
        visit = self.visit_repo.get_by_id(self.db, visit_id)
        if not visit:
            raise HTTPException(status_code=404, detail="Visit not found")

        if visit.owner_id != user.id:
            raise HTTPException(status_code=403, detail="Only the pet owner can review this visit")

        if visit.status != VisitStatus.COMPLETED.value:
            raise HTTPException(status_code=400, detail="Only completed visits can be reviewed")

        if self.repo.get_by_visit_id(self.db, visit_id):
            raise HTTPException(status_code=409, detail="This visit has already been reviewed")

        comment = (data.comment or "").strip() or None
        review = Review(
            visit_id=visit.id,
            sitter_id=visit.sitter_id,
            author_id=user.id,
            rating=data.rating,
            comment=comment,
        )

        try:
            self.repo.add(self.db, review)
            if visit.sitter is not None:
                self._refresh_sitter_rating(visit.sitter)

            notification_service.notify(
                self.db,
                visit.sitter_user_id,
                notification_service.NEW_REVIEW,
                f"New {data.rating}-star review",
                comment,
                visit.id,
            )
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.error(f"❌ Duplicate review for visit {visit_id} (race condition)")
            raise HTTPException(status_code=409, detail="This visit has already been reviewed") from e

        self.db.refresh(review)
        logger.info(f"⭐ Visit {visit_id} reviewed by {user.id}: {data.rating}/5")
        return review

    def _refresh_sitter_rating(self, profile: SitterProfile) -> None:
        avg_rating, total = self.repo.rating_stats(self.db, profile.id)
        profile.avg_rating = round(avg_rating, 2) if avg_rating is not None else 0
        profile.total_reviews = total

    def get_visit_review(self, visit_id: str, user: User) -> Review:
        visit = self.visit_repo.get_by_id(self.db, visit_id)
        if not visit:
            raise HTTPException(status_code=404, detail="Visit not found")

        if user.id not in (visit.owner_id, visit.sitter_user_id):
            raise HTTPException(status_code=403, detail="You are not allowed to access this visit")

        review = self.repo.get_by_visit_id(self.db, visit_id)
        if not review:
            raise HTTPException(status_code=404, detail="This visit has not been reviewed yet")
        return review

    def list_sitter_reviews(self, profile_id: str) -> list[Review]:
        profile = self.db.query(SitterProfile).filter(SitterProfile.id == profile_id).first()
        if not profile:
            raise HTTPException(status_code=404, detail="Sitter profile not found")
        return self.repo.list_for_sitter(self.db, profile_id)

    def list_my_reviews(self, user: User) -> list[Review]:
        return self.repo.list_by_author(self.db, user.id)
