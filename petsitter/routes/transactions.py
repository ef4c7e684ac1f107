from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..database import get_db
from ..models import User
from ..services.transaction_service import list_user_transactions

router = APIRouter(prefix="/transactions", tags=["Transactions"])


class TransactionResponse(BaseModel):
    id: str
    visitId: str
    payerId: str
    payeeId: str
    amount: float
    currency: str
    status: str
    direction: str  # "outgoing" for the payer, "incoming" for the payee
    createdAt: Optional[datetime] = None


@router.get("", response_model=list[TransactionResponse])
async def list_my_transactions(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Payments the user made as an owner or received as a sitter"""
    return [
        TransactionResponse(
            id=t.id,
            visitId=t.visit_id,
            payerId=t.payer_id,
            payeeId=t.payee_id,
            amount=t.amount,
            currency=t.currency,
            status=t.status,
            direction="outgoing" if t.payer_id == current_user.id else "incoming",
            createdAt=t.created_at,
        )
        for t in list_user_transactions(db, current_user.id)
    ]
