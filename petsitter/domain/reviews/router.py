"""Review router - visit reviews and a sitter's public ratings"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import ReviewCreate, ReviewResponse, review_response
from .service import ReviewService

router = APIRouter(tags=["Reviews"])


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    """Dependency injection for ReviewService"""
    return ReviewService(db)


@router.post("/visits/{visit_id}/review", response_model=ReviewResponse, status_code=201)
async def create_review(
    visit_id: str,
    data: ReviewCreate,
    current_user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
):
    """Rate a completed visit (one review per visit)"""
    return review_response(service.create_review(visit_id, data, current_user))


@router.get("/visits/{visit_id}/review", response_model=ReviewResponse)
async def get_visit_review(
    visit_id: str,
    current_user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
):
    return review_response(service.get_visit_review(visit_id, current_user))


@router.get("/sitter-profiles/{profile_id}/reviews", response_model=list[ReviewResponse])
async def list_sitter_reviews(
    profile_id: str,
    service: ReviewService = Depends(get_review_service),
):
    """Public reviews of a sitter, newest first"""
    return [review_response(r) for r in service.list_sitter_reviews(profile_id)]


@router.get("/reviews/mine", response_model=list[ReviewResponse])
async def list_my_reviews(
    current_user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
):
    return [review_response(r) for r in service.list_my_reviews(current_user)]
