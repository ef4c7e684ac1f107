"""
Visit (booking) models: the visit itself, its pets, proof photos and the review left afterwards
"""

import enum
from datetime import datetime

from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base
from .models import generate_id


class VisitStatus(str, enum.Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    PAID = "PAID"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"


class Visit(Base):
    """A single care visit booked by a pet owner with a sitter"""

    __tablename__ = "visits"

    id = Column(String(36), primary_key=True, default=generate_id)

    # Relationships
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    sitter_id = Column(String(36), ForeignKey("sitter_profiles.id"), nullable=True, index=True)
    sitter_user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    # Scheduling
    address = Column(String(500), nullable=False)
    date = Column(Date, nullable=False, index=True)
    time_start = Column(String(5), nullable=False)  # HH:MM format
    time_end = Column(String(5), nullable=False)

    # Visit details
    services = Column(JSON, default=list, nullable=True)  # FEEDING, LITTER, WALKING
    task = Column(Text, nullable=True)
    total_price = Column(Float, nullable=False, default=0)
    notes_for_sitter = Column(Text, nullable=True)

    # Status workflow: PENDING → ACCEPTED/REJECTED → PAID → COMPLETED, or CANCELED by the owner
    status = Column(String(20), default=VisitStatus.PENDING.value, nullable=False, index=True)
    rejection_reason = Column(Text, nullable=True)
    canceled_by = Column(String(36), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())
    updated_at = Column(
        DateTime, default=datetime.utcnow, server_default=func.now(), onupdate=datetime.utcnow
    )

    owner = relationship("User", foreign_keys=[owner_id])
    sitter_user = relationship("User", foreign_keys=[sitter_user_id])
    sitter = relationship("SitterProfile", back_populates="visits")
    visit_pets = relationship("VisitPet", back_populates="visit", cascade="all, delete-orphan")
    photos = relationship(
        "VisitPhoto",
        back_populates="visit",
        cascade="all, delete-orphan",
        order_by="VisitPhoto.created_at",
    )
    review = relationship(
        "Review", back_populates="visit", uselist=False, cascade="all, delete-orphan"
    )
    chat = relationship("Chat", back_populates="visit", uselist=False, cascade="all, delete-orphan")

    @property
    def pets(self):
        return [vp.pet for vp in self.visit_pets if vp.pet is not None]


class VisitPet(Base):
    __tablename__ = "visit_pets"
    __table_args__ = (UniqueConstraint("visit_id", "pet_id", name="uq_visit_pet"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    visit_id = Column(String(36), ForeignKey("visits.id", ondelete="CASCADE"), nullable=False)
    pet_id = Column(String(36), ForeignKey("pets.id", ondelete="CASCADE"), nullable=False)

    visit = relationship("Visit", back_populates="visit_pets")
    pet = relationship("Pet", back_populates="visit_links")


class VisitPhoto(Base):
    """Photo proof of care uploaded by the sitter"""

    __tablename__ = "visit_photos"

    id = Column(String(36), primary_key=True, default=generate_id)
    visit_id = Column(String(36), ForeignKey("visits.id", ondelete="CASCADE"), nullable=False)
    url = Column(String(1000), nullable=False)
    caption = Column(String(500), nullable=True)
    uploaded_by = Column(String(36), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())

    visit = relationship("Visit", back_populates="photos")


class Review(Base):
    """Owner's rating of a completed visit"""

    __tablename__ = "reviews"

    id = Column(String(36), primary_key=True, default=generate_id)
    visit_id = Column(
        String(36), ForeignKey("visits.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    sitter_id = Column(String(36), ForeignKey("sitter_profiles.id"), nullable=True, index=True)
    author_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    rating = Column(Integer, nullable=False)  # 1-5
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())

    visit = relationship("Visit", back_populates="review")
    sitter = relationship("SitterProfile", back_populates="reviews")
    author = relationship("User")
