import enum
import uuid
from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_id():
    """Generate a UUID primary key"""
    return str(uuid.uuid4())


class UserRole(str, enum.Enum):
    OWNER = "OWNER"
    SITTER = "SITTER"
    BOTH = "BOTH"
    ADMIN = "ADMIN"


class PetType(str, enum.Enum):
    DOG = "DOG"
    CAT = "CAT"
    BIRD = "BIRD"
    RABBIT = "RABBIT"
    OTHER = "OTHER"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    address = Column(String(500), nullable=True)
    avatar = Column(String(500), nullable=True)  # URL
    role = Column(String(20), default=UserRole.OWNER.value, nullable=False)
    is_blocked = Column(Boolean, default=False, nullable=False)
    is_email_verified = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())
    updated_at = Column(
        DateTime, default=datetime.utcnow, server_default=func.now(), onupdate=datetime.utcnow
    )

    pets = relationship("Pet", back_populates="owner", cascade="all, delete-orphan")
    sitter_profile = relationship(
        "SitterProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )


class Pet(Base):
    __tablename__ = "pets"

    id = Column(String(36), primary_key=True, default=generate_id)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False)  # DOG, CAT, BIRD, RABBIT, OTHER
    breed = Column(String(255), nullable=True)
    age = Column(Integer, nullable=True)
    photo = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)
    medical_notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())
    updated_at = Column(
        DateTime, default=datetime.utcnow, server_default=func.now(), onupdate=datetime.utcnow
    )

    owner = relationship("User", back_populates="pets")
    visit_links = relationship("VisitPet", back_populates="pet", cascade="all, delete-orphan")


class SitterProfile(Base):
    __tablename__ = "sitter_profiles"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    bio = Column(Text, nullable=True)
    city = Column(String(255), nullable=False, index=True)
    address = Column(String(500), nullable=True)
    hourly_rate = Column(Float, nullable=False)
    services = Column(JSON, default=list, nullable=True)  # DOG_WALKING, PET_SITTING, ...
    photos = Column(JSON, default=list, nullable=True)  # URLs
    availability = Column(JSON, nullable=True)  # Free-form weekly availability
    max_pets = Column(Integer, nullable=True)
    experience_years = Column(Integer, nullable=True)
    is_verified = Column(Boolean, default=False, nullable=False)
    response_time = Column(Integer, nullable=True)  # Typical response time in minutes
    avg_rating = Column(Float, default=0, nullable=False)
    total_reviews = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())
    updated_at = Column(
        DateTime, default=datetime.utcnow, server_default=func.now(), onupdate=datetime.utcnow
    )

    user = relationship("User", back_populates="sitter_profile")
    visits = relationship("Visit", back_populates="sitter")
    reviews = relationship("Review", back_populates="sitter")
