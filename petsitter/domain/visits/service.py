"""Visit service - Booking workflow between owners and sitters"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import User
from ...models_visit import Visit, VisitPhoto, VisitStatus
from ...services import notification_service
from ...services.transaction_service import record_visit_payment
from ..pets.repository import PetRepository
from ..scheduling import time_calculator as tc
from ..scheduling.availability_service import AvailabilityService
from ..sitter_profiles.repository import SitterProfileRepository
from .repository import VisitRepository
from .schemas import VisitCreate, VisitPhotoCreate, VisitUpdateRejected

logger = logging.getLogger(__name__)

# Moves a sitter may make through the status endpoint
ALLOWED_TRANSITIONS = {
    VisitStatus.PENDING.value: {VisitStatus.ACCEPTED.value},
    VisitStatus.ACCEPTED.value: {VisitStatus.PAID.value, VisitStatus.COMPLETED.value},
    VisitStatus.PAID.value: {VisitStatus.COMPLETED.value},
}

REJECTABLE_STATUSES = {VisitStatus.PENDING.value, VisitStatus.ACCEPTED.value}
TERMINAL_STATUSES = {VisitStatus.COMPLETED.value, VisitStatus.CANCELED.value}
PHOTO_STATUSES = {VisitStatus.ACCEPTED.value, VisitStatus.PAID.value}

# API field name -> column name for rejected visit edits
UPDATE_FIELD_MAP = {
    "address": "address",
    "date": "date",
    "timeStart": "time_start",
    "timeEnd": "time_end",
    "services": "services",
    "task": "task",
    "totalPrice": "total_price",
    "notesForSitter": "notes_for_sitter",
}

STATUS_TITLES = {
    VisitStatus.ACCEPTED.value: "Your visit was accepted",
    VisitStatus.PAID.value: "Visit marked as paid",
    VisitStatus.COMPLETED.value: "Visit completed",
}


def _visit_slot(visit: Visit) -> str:
    return f"{visit.date.isoformat()} {visit.time_start}-{visit.time_end}"


class VisitService:
    """Service layer for visit business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = VisitRepository()
        self.pet_repo = PetRepository()
        self.profile_repo = SitterProfileRepository()
        self.availability = AvailabilityService(db)

    # ------------------------------------------------------------------
    # Lookups and guards
    # ------------------------------------------------------------------

    def _get_visit(self, visit_id: str) -> Visit:
        visit = self.repo.get_by_id(self.db, visit_id)
        if not visit:
            raise HTTPException(status_code=404, detail="Visit not found")
        return visit

    def _get_owned_visit(self, visit_id: str, user: User, action: str) -> Visit:
        visit = self._get_visit(visit_id)
        if visit.owner_id != user.id:
            logger.warning(f"🚫 User {user.id} tried to {action} visit {visit_id}")
            raise HTTPException(status_code=403, detail=f"You are not allowed to {action} this visit")
        return visit

    def _get_assigned_visit(self, visit_id: str, user: User, action: str) -> Visit:
        visit = self._get_visit(visit_id)
        if visit.sitter_user_id != user.id:
            logger.warning(f"🚫 User {user.id} tried to {action} visit {visit_id}")
            raise HTTPException(status_code=403, detail=f"You are not allowed to {action} this visit")
        return visit

    def get_participant_visit(self, visit_id: str, user: User) -> Visit:
        """Get a visit the caller takes part in, as owner or as sitter"""
        visit = self._get_visit(visit_id)
        if user.id not in (visit.owner_id, visit.sitter_user_id):
            logger.warning(f"🚫 User {user.id} tried to access visit {visit_id}")
            raise HTTPException(status_code=403, detail="You are not allowed to access this visit")
        return visit

    def _assert_pets_owned(self, owner_id: str, pet_ids: list[str]) -> list[str]:
        unique_ids = list(dict.fromkeys(pet_ids))
        if self.pet_repo.count_owned(self.db, owner_id, unique_ids) != len(unique_ids):
            raise HTTPException(status_code=403, detail="One or more pets do not belong to you")
        return unique_ids

    def _assert_time_range(self, time_start: str, time_end: str) -> None:
        if tc.parse_time(time_end) <= tc.parse_time(time_start):
            raise HTTPException(status_code=400, detail="timeEnd must be after timeStart")

    def _assert_slot_free(self, visit: Visit, exclude_visit_id: Optional[str] = None) -> None:
        conflicts = self.availability.find_slot_conflicts(
            visit.sitter_id, visit.date, visit.time_start, visit.time_end, exclude_visit_id
        )
        if conflicts:
            busy = ", ".join(f"{c['timeStart']}-{c['timeEnd']}" for c in conflicts)
            raise HTTPException(
                status_code=409,
                detail=(
                    f"The sitter is busy on {visit.date.isoformat()} ({busy}); keep "
                    f"{self.availability.buffer} minutes between visits"
                ),
            )

    # ------------------------------------------------------------------
    # Owner operations
    # ------------------------------------------------------------------

    def create_visit(self, data: VisitCreate, user: User) -> Visit:
        pet_ids = self._assert_pets_owned(user.id, data.petIds)

        profile = self.profile_repo.get_by_id(self.db, data.sitterProfileId)
        if not profile:
            raise HTTPException(status_code=404, detail="Sitter profile not found")

        self._assert_time_range(data.timeStart, data.timeEnd)

        visit = Visit(
            owner_id=user.id,
            sitter_id=profile.id,
            sitter_user_id=profile.user_id,
            address=data.address.strip(),
            date=data.date,
            time_start=data.timeStart,
            time_end=data.timeEnd,
            services=data.services or [],
            task=data.task,
            total_price=data.totalPrice,
            notes_for_sitter=(data.notesForSitter or "").strip() or None,
            status=VisitStatus.PENDING.value,
        )
        self._assert_slot_free(visit)

        self.repo.add(self.db, visit, pet_ids)
        notification_service.notify(
            self.db,
            profile.user_id,
            notification_service.VISIT_CREATED,
            "New booking request",
            f"{user.name} requested a visit on {_visit_slot(visit)}",
            visit.id,
        )
        visit = self.repo.save(self.db, visit)

        logger.info(f"📅 Visit {visit.id} booked by {user.id} with sitter profile {profile.id}")
        return visit

    def list_bookings(self, user: User) -> list[Visit]:
        return self.repo.list_for_owner(self.db, user.id)

    def cancel_visit(self, visit_id: str, user: User) -> Visit:
        visit = self._get_owned_visit(visit_id, user, "cancel")

        if visit.status in TERMINAL_STATUSES:
            raise HTTPException(
                status_code=409,
                detail=f"A {visit.status.lower()} visit cannot be canceled",
            )

        visit.status = VisitStatus.CANCELED.value
        visit.canceled_by = user.id
        notification_service.notify(
            self.db,
            visit.sitter_user_id,
            notification_service.VISIT_CANCELED,
            "Visit canceled",
            f"{user.name} canceled the visit on {_visit_slot(visit)}",
            visit.id,
        )
        visit = self.repo.save(self.db, visit)

        logger.info(f"❌ Visit {visit_id} canceled by owner {user.id}")
        return visit

    def update_rejected_visit(self, visit_id: str, data: VisitUpdateRejected, user: User) -> Visit:
        visit = self._get_owned_visit(visit_id, user, "edit")

        if visit.status != VisitStatus.REJECTED.value:
            raise HTTPException(status_code=400, detail="Only rejected visits can be edited")

        updates = data.model_dump(exclude_unset=True)
        pet_ids = updates.pop("petIds", None)
        if pet_ids:
            pet_ids = self._assert_pets_owned(user.id, pet_ids)

        for key, value in updates.items():
            # Required columns ignore an explicit null
            if value is None and key in ("address", "date", "timeStart", "timeEnd", "totalPrice"):
                continue
            setattr(visit, UPDATE_FIELD_MAP[key], value)

        self._assert_time_range(visit.time_start, visit.time_end)

        if pet_ids:
            self.repo.replace_pets(self.db, visit, pet_ids)

        visit = self.repo.save(self.db, visit)
        logger.info(f"✏️ Rejected visit {visit_id} edited: {list(updates.keys())}")
        return visit

    def resubmit_visit(self, visit_id: str, user: User) -> Visit:
        visit = self._get_owned_visit(visit_id, user, "resubmit")

        if visit.status != VisitStatus.REJECTED.value:
            raise HTTPException(status_code=400, detail="Only rejected visits can be resubmitted")

        # The sitter may have deleted their profile since the visit was rejected
        if not visit.sitter_id or not self.profile_repo.get_by_id(self.db, visit.sitter_id):
            raise HTTPException(status_code=404, detail="Sitter profile not found")

        self._assert_slot_free(visit, exclude_visit_id=visit.id)

        visit.status = VisitStatus.PENDING.value
        visit.rejection_reason = None
        notification_service.notify(
            self.db,
            visit.sitter_user_id,
            notification_service.VISIT_RESUBMITTED,
            "Booking request resubmitted",
            f"{user.name} resubmitted the visit on {_visit_slot(visit)}",
            visit.id,
        )
        visit = self.repo.save(self.db, visit)

        logger.info(f"🔁 Visit {visit_id} resubmitted by owner {user.id}")
        return visit

    def delete_rejected_visit(self, visit_id: str, user: User) -> dict:
        visit = self._get_owned_visit(visit_id, user, "delete")

        if visit.status != VisitStatus.REJECTED.value:
            raise HTTPException(status_code=400, detail="Only rejected visits can be deleted")

        self.repo.delete(self.db, visit)
        logger.info(f"🗑️ Rejected visit {visit_id} deleted by owner {user.id}")
        return {"success": True}

    # ------------------------------------------------------------------
    # Sitter operations
    # ------------------------------------------------------------------

    def list_jobs(self, user: User) -> list[Visit]:
        return self.repo.list_for_sitter_user(self.db, user.id)

    def update_status(self, visit_id: str, status: VisitStatus, user: User) -> Visit:
        """Move a visit along its workflow; rejecting has its own endpoint"""
        target = status.value if isinstance(status, VisitStatus) else status
        if target == VisitStatus.REJECTED.value:
            raise HTTPException(
                status_code=400, detail="Use the reject endpoint with a reason to reject a visit"
            )

        visit = self._get_assigned_visit(visit_id, user, "update")

        if visit.status == target:
            return visit

        if target not in ALLOWED_TRANSITIONS.get(visit.status, set()):
            raise HTTPException(
                status_code=409,
                detail=f"Cannot change visit status from {visit.status} to {target}",
            )

        previous = visit.status
        visit.status = target
        if target == VisitStatus.PAID.value:
            record_visit_payment(self.db, visit)

        notification_service.notify(
            self.db,
            visit.owner_id,
            notification_service.VISIT_STATUS_CHANGED,
            STATUS_TITLES.get(target, f"Visit {target.lower()}"),
            f"Your visit on {_visit_slot(visit)} is now {target}",
            visit.id,
        )
        visit = self.repo.save(self.db, visit)

        logger.info(f"✅ Visit {visit_id} transitioned: {previous} → {target}")
        return visit

    def reject_visit(self, visit_id: str, reason: str, user: User) -> Visit:
        visit = self._get_assigned_visit(visit_id, user, "reject")

        if visit.status not in REJECTABLE_STATUSES:
            raise HTTPException(status_code=400, detail="This visit can no longer be rejected")

        trimmed_reason = (reason or "").strip()
        if not trimmed_reason:
            raise HTTPException(status_code=400, detail="A rejection reason is required")

        visit.status = VisitStatus.REJECTED.value
        visit.rejection_reason = trimmed_reason
        notification_service.notify(
            self.db,
            visit.owner_id,
            notification_service.VISIT_REJECTED,
            "Your visit was rejected",
            trimmed_reason,
            visit.id,
        )
        visit = self.repo.save(self.db, visit)

        logger.info(f"⛔ Visit {visit_id} rejected by sitter {user.id}")
        return visit

    def add_photo(self, visit_id: str, data: VisitPhotoCreate, user: User) -> VisitPhoto:
        visit = self._get_assigned_visit(visit_id, user, "add photos to")

        if visit.status not in PHOTO_STATUSES:
            raise HTTPException(
                status_code=400, detail="Photos can only be added to accepted or paid visits"
            )

        photo = self.repo.add_photo(self.db, visit, user.id, data.url.strip(), data.caption)
        logger.info(f"📷 Photo {photo.id} added to visit {visit_id}")
        return photo

    def list_photos(self, visit_id: str, user: User) -> list[VisitPhoto]:
        return list(self.get_participant_visit(visit_id, user).photos)

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    def get_busy_slots(self, sitter_profile_id: str, date_from, date_to) -> list[dict]:
        if date_from > date_to:
            raise HTTPException(status_code=400, detail="dateFrom must not be after dateTo")
        return self.availability.get_busy_slots(sitter_profile_id, date_from, date_to)
