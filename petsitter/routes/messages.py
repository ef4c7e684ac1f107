"""
Visit chat - owner and sitter messaging about one visit
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..database import get_db
from ..models import User
from ..models_messaging import Chat, Message
from ..models_visit import Visit
from ..services import notification_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/visits/{visit_id}/messages", tags=["Messages"])


class MessageCreate(BaseModel):
    body: str = Field(..., min_length=1, max_length=2000)

    @field_validator("body")
    @classmethod
    def validate_body(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Message cannot be empty")
        return v.strip()


class ChatMessageResponse(BaseModel):
    id: str
    chatId: str
    senderId: str
    body: str
    isRead: bool
    createdAt: Optional[datetime] = None


def message_response(message: Message) -> ChatMessageResponse:
    return ChatMessageResponse(
        id=message.id,
        chatId=message.chat_id,
        senderId=message.sender_id,
        body=message.body,
        isRead=message.is_read,
        createdAt=message.created_at,
    )


def get_participant_visit(db: Session, visit_id: str, user: User) -> Visit:
    visit = db.query(Visit).filter(Visit.id == visit_id).first()
    if not visit:
        raise HTTPException(status_code=404, detail="Visit not found")

    if user.id not in (visit.owner_id, visit.sitter_user_id):
        logger.warning(f"🚫 User {user.id} tried to open the chat of visit {visit_id}")
        raise HTTPException(status_code=403, detail="You are not part of this visit")

    return visit


def get_or_create_chat(db: Session, visit: Visit) -> Chat:
    chat = db.query(Chat).filter(Chat.visit_id == visit.id).first()
    if chat:
        return chat

    chat = Chat(visit_id=visit.id)
    db.add(chat)
    db.flush()
    logger.info(f"💬 Chat {chat.id} opened for visit {visit.id}")
    return chat


@router.get("", response_model=list[ChatMessageResponse])
async def list_messages(
    visit_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get the visit's messages oldest first and mark the other side's ones as read"""
    visit = get_participant_visit(db, visit_id, current_user)
    chat = get_or_create_chat(db, visit)

    db.query(Message).filter(
        Message.chat_id == chat.id,
        Message.sender_id != current_user.id,
        Message.is_read.is_(False),
    ).update({Message.is_read: True}, synchronize_session=False)
    db.commit()

    messages = (
        db.query(Message)
        .filter(Message.chat_id == chat.id)
        .order_by(Message.created_at.asc())
        .all()
    )
    return [message_response(m) for m in messages]


@router.post("", response_model=ChatMessageResponse, status_code=201)
async def send_message(
    visit_id: str,
    data: MessageCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    visit = get_participant_visit(db, visit_id, current_user)
    chat = get_or_create_chat(db, visit)

    message = Message(chat_id=chat.id, sender_id=current_user.id, body=data.body)
    db.add(message)

    recipient_id = visit.sitter_user_id if current_user.id == visit.owner_id else visit.owner_id
    preview = data.body if len(data.body) <= 100 else f"{data.body[:97]}..."
    notification_service.notify(
        db,
        recipient_id,
        notification_service.NEW_MESSAGE,
        f"New message from {current_user.name}",
        preview,
        visit.id,
    )

    db.commit()
    db.refresh(message)
    logger.info(f"💬 Message {message.id} sent in chat {chat.id} by {current_user.id}")
    return message_response(message)
