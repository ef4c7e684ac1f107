"""Review repository - Database operations for reviews"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ...models_visit import Review


class ReviewRepository:
    """Repository for review database operations"""

    @staticmethod
    def get_by_visit_id(db: Session, visit_id: str) -> Optional[Review]:
        return (
            db.query(Review)
            .options(joinedload(Review.author))
            .filter(Review.visit_id == visit_id)
            .first()
        )

    @staticmethod
    def list_for_sitter(db: Session, sitter_profile_id: str) -> list[Review]:
        """Reviews of a sitter, newest first"""
        return (
            db.query(Review)
            .options(joinedload(Review.author))
            .filter(Review.sitter_id == sitter_profile_id)
            .order_by(Review.created_at.desc())
            .all()
        )

    @staticmethod
    def list_by_author(db: Session, author_id: str) -> list[Review]:
        return (
            db.query(Review)
            .options(joinedload(Review.author))
            .filter(Review.author_id == author_id)
            .order_by(Review.created_at.desc())
            .all()
        )

    @staticmethod
    def rating_stats(db: Session, sitter_profile_id: str) -> tuple[Optional[float], int]:
        """Average rating and review count for a sitter"""
        avg_rating, total = (
            db.query(func.avg(Review.rating), func.count(Review.id))
            .filter(Review.sitter_id == sitter_profile_id)
            .one()
        )
        return (float(avg_rating) if avg_rating is not None else None), int(total or 0)

    @staticmethod
    def add(db: Session, review: Review) -> Review:
        db.add(review)
        db.flush()
        return review
