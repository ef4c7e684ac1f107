"""Visit repository - Database operations for visits"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import SitterProfile
from ...models_visit import Visit, VisitPet, VisitPhoto


def _with_relations(query):
    return query.options(
        selectinload(Visit.visit_pets).joinedload(VisitPet.pet),
        joinedload(Visit.sitter).joinedload(SitterProfile.user),
        joinedload(Visit.owner),
    )


class VisitRepository:
    """Repository for visit database operations"""

    @staticmethod
    def get_by_id(db: Session, visit_id: str) -> Optional[Visit]:
        return _with_relations(db.query(Visit)).filter(Visit.id == visit_id).first()

    @staticmethod
    def list_for_owner(db: Session, owner_id: str) -> list[Visit]:
        """Visits booked by an owner, latest date first"""
        return (
            _with_relations(db.query(Visit))
            .filter(Visit.owner_id == owner_id)
            .order_by(Visit.date.desc(), Visit.time_start.desc())
            .all()
        )

    @staticmethod
    def list_for_sitter_user(db: Session, sitter_user_id: str) -> list[Visit]:
        """Jobs assigned to a sitter, latest date first"""
        return (
            _with_relations(db.query(Visit))
            .filter(Visit.sitter_user_id == sitter_user_id)
            .order_by(Visit.date.desc(), Visit.time_start.desc())
            .all()
        )

    @staticmethod
    def add(db: Session, visit: Visit, pet_ids: list[str]) -> Visit:
        """Stage a new visit with its pets and assign its ID"""
        visit.visit_pets = [VisitPet(pet_id=pet_id) for pet_id in pet_ids]
        db.add(visit)
        db.flush()
        return visit

    @staticmethod
    def replace_pets(db: Session, visit: Visit, pet_ids: list[str]) -> None:
        visit.visit_pets.clear()
        db.flush()
        visit.visit_pets.extend(VisitPet(pet_id=pet_id) for pet_id in pet_ids)

    @staticmethod
    def save(db: Session, visit: Visit) -> Visit:
        db.commit()
        db.refresh(visit)
        return visit

    @staticmethod
    def delete(db: Session, visit: Visit) -> None:
        db.delete(visit)
        db.commit()

    @staticmethod
    def add_photo(db: Session, visit: Visit, uploaded_by: str, url: str, caption: Optional[str]) -> VisitPhoto:
        photo = VisitPhoto(visit_id=visit.id, url=url, caption=caption, uploaded_by=uploaded_by)
        db.add(photo)
        db.commit()
        db.refresh(photo)
        return photo
