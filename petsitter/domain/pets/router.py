"""Pet router - FastAPI endpoints for pet operations"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import PetCreate, PetResponse, PetUpdate, pet_response
from .service import PetService

router = APIRouter(prefix="/pets", tags=["Pets"])


def get_pet_service(db: Session = Depends(get_db)) -> PetService:
    """Dependency injection for PetService"""
    return PetService(db)


@router.post("", response_model=PetResponse, status_code=201)
async def create_pet(
    data: PetCreate,
    current_user: User = Depends(get_current_user),
    service: PetService = Depends(get_pet_service),
):
    """Add a pet to the current user's account"""
    return pet_response(service.create_pet(data, current_user))


@router.get("", response_model=list[PetResponse])
async def get_pets(
    current_user: User = Depends(get_current_user),
    service: PetService = Depends(get_pet_service),
):
    """Get all of the current user's pets, newest first"""
    return [pet_response(p) for p in service.get_pets(current_user)]


@router.get("/{pet_id}", response_model=PetResponse)
async def get_pet(
    pet_id: str,
    current_user: User = Depends(get_current_user),
    service: PetService = Depends(get_pet_service),
):
    return pet_response(service.get_pet(pet_id, current_user))


@router.patch("/{pet_id}", response_model=PetResponse)
async def update_pet(
    pet_id: str,
    data: PetUpdate,
    current_user: User = Depends(get_current_user),
    service: PetService = Depends(get_pet_service),
):
    return pet_response(service.update_pet(pet_id, data, current_user))


@router.delete("/{pet_id}", response_model=PetResponse)
async def delete_pet(
    pet_id: str,
    current_user: User = Depends(get_current_user),
    service: PetService = Depends(get_pet_service),
):
    """Delete a pet; returns the deleted record"""
    return service.delete_pet(pet_id, current_user)
