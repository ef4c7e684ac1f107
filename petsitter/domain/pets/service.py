"""Pet service - Business logic for pet operations"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Pet, User
from .repository import PetRepository
from .schemas import PetCreate, PetResponse, PetUpdate, pet_response

logger = logging.getLogger(__name__)

# API field name -> column name
FIELD_MAP = {
    "name": "name",
    "type": "type",
    "breed": "breed",
    "age": "age",
    "photo": "photo",
    "notes": "notes",
    "medicalNotes": "medical_notes",
}


class PetService:
    """Service layer for pet business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PetRepository()

    def get_pets(self, user: User) -> list[Pet]:
        return self.repo.get_pets(self.db, user.id)

    def get_pet(self, pet_id: str, user: User) -> Pet:
        """Get a pet, enforcing that the caller owns it"""
        pet = self.repo.get_pet_by_id(self.db, pet_id)
        if not pet:
            raise HTTPException(status_code=404, detail="Pet not found")

        if pet.owner_id != user.id:
            logger.warning(f"🚫 User {user.id} tried to access pet {pet_id}")
            raise HTTPException(status_code=403, detail="You are not allowed to access this pet")

        return pet

    def create_pet(self, data: PetCreate, user: User) -> Pet:
        pet_data = {
            "name": data.name.strip(),
            "type": data.type.value,
            "breed": data.breed,
            "age": data.age,
            "photo": data.photo,
            "notes": data.notes,
            "medical_notes": data.medicalNotes,
        }
        pet = self.repo.create_pet(self.db, user.id, **pet_data)
        logger.info(f"🐾 Pet {pet.id} created for user {user.id}")
        return pet

    def update_pet(self, pet_id: str, data: PetUpdate, user: User) -> Pet:
        pet = self.get_pet(pet_id, user)

        updates = {}
        for key, value in data.model_dump(exclude_unset=True).items():
            # name and type are required columns; an explicit null leaves them unchanged
            if key in ("name", "type") and value is None:
                continue
            if key == "type":
                value = value.value if hasattr(value, "value") else value
            updates[FIELD_MAP[key]] = value

        return self.repo.update_pet(self.db, pet, **updates)

    def delete_pet(self, pet_id: str, user: User) -> PetResponse:
        pet = self.get_pet(pet_id, user)
        deleted = pet_response(pet)
        self.repo.delete_pet(self.db, pet)
        logger.info(f"🗑️ Pet {pet_id} deleted by user {user.id}")
        return deleted
