"""
Payment ledger for visits
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, Float, ForeignKey, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base
from .models import generate_id


class Transaction(Base):
    """Money moving from the owner to the sitter for one visit"""

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=generate_id)
    visit_id = Column(String(36), ForeignKey("visits.id"), nullable=False, index=True)
    payer_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    payee_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    currency = Column(String(10), default="EUR", nullable=False)
    status = Column(String(20), default="SUCCEEDED", nullable=False)  # SUCCEEDED, REFUNDED
    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())

    visit = relationship("Visit")
