"""
Messaging models: per-visit chats and in-app notifications
"""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base
from .models import generate_id


class Chat(Base):
    """Conversation between a visit's owner and sitter (one per visit)"""

    __tablename__ = "chats"

    id = Column(String(36), primary_key=True, default=generate_id)
    visit_id = Column(
        String(36), ForeignKey("visits.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())

    visit = relationship("Visit", back_populates="chat")
    messages = relationship(
        "Message",
        back_populates="chat",
        cascade="all, delete-orphan",
        order_by="Message.created_at",
    )


class Message(Base):
    __tablename__ = "messages"

    id = Column(String(36), primary_key=True, default=generate_id)
    chat_id = Column(String(36), ForeignKey("chats.id", ondelete="CASCADE"), nullable=False)
    sender_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    body = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())

    chat = relationship("Chat", back_populates="messages")
    sender = relationship("User")


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    # visit_created, visit_status_changed, visit_rejected, visit_canceled, new_message, new_review
    type = Column(String(50), nullable=False)
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=True)
    visit_id = Column(String(36), ForeignKey("visits.id", ondelete="SET NULL"), nullable=True)
    is_read = Column(Boolean, default=False, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())
