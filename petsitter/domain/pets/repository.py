"""Pet repository - Database operations for pets"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Pet


class PetRepository:
    """Repository for pet database operations"""

    @staticmethod
    def get_pets(db: Session, owner_id: str) -> list[Pet]:
        """Get all pets for an owner, newest first"""
        return db.query(Pet).filter(Pet.owner_id == owner_id).order_by(Pet.created_at.desc()).all()

    @staticmethod
    def get_pet_by_id(db: Session, pet_id: str) -> Optional[Pet]:
        return db.query(Pet).filter(Pet.id == pet_id).first()

    @staticmethod
    def count_owned(db: Session, owner_id: str, pet_ids: list[str]) -> int:
        """Count how many of the given pet IDs belong to the owner"""
        if not pet_ids:
            return 0
        return (
            db.query(Pet)
            .filter(Pet.id.in_(set(pet_ids)), Pet.owner_id == owner_id)
            .count()
        )

    @staticmethod
    def create_pet(db: Session, owner_id: str, **pet_data) -> Pet:
        pet = Pet(owner_id=owner_id, **pet_data)
        db.add(pet)
        db.commit()
        db.refresh(pet)
        return pet

    @staticmethod
    def update_pet(db: Session, pet: Pet, **updates) -> Pet:
        """Update a pet with provided fields"""
        for key, value in updates.items():
            if hasattr(pet, key):
                setattr(pet, key, value)

        db.commit()
        db.refresh(pet)
        return pet

    @staticmethod
    def delete_pet(db: Session, pet: Pet) -> None:
        db.delete(pet)
        db.commit()
