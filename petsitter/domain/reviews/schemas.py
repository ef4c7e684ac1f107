"""Review schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ...schemas import UserSummary, user_summary


class ReviewCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=2000)


class ReviewResponse(BaseModel):
    id: str
    visitId: str
    sitterId: Optional[str]
    authorId: str
    rating: int
    comment: Optional[str]
    createdAt: Optional[datetime] = None
    author: Optional[UserSummary] = None


def review_response(review) -> ReviewResponse:
    return ReviewResponse(
        id=review.id,
        visitId=review.visit_id,
        sitterId=review.sitter_id,
        authorId=review.author_id,
        rating=review.rating,
        comment=review.comment,
        createdAt=review.created_at,
        author=user_summary(review.author, "avatar"),
    )
