"""
Payment ledger service
Records what an owner paid a sitter when a visit is marked paid
"""

import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..config import DEFAULT_CURRENCY
from ..models_transaction import Transaction
from ..models_visit import Visit

logger = logging.getLogger(__name__)

SUCCEEDED = "SUCCEEDED"


def record_visit_payment(db: Session, visit: Visit) -> Transaction:
    """Queue a SUCCEEDED transaction for the visit's full price (committed by the caller)"""
    transaction = Transaction(
        visit_id=visit.id,
        payer_id=visit.owner_id,
        payee_id=visit.sitter_user_id,
        amount=visit.total_price,
        currency=DEFAULT_CURRENCY,
        status=SUCCEEDED,
    )
    db.add(transaction)
    logger.info(
        f"💰 Payment of {visit.total_price:.2f} {DEFAULT_CURRENCY} recorded for visit {visit.id}"
    )
    return transaction


def list_user_transactions(db: Session, user_id: str) -> list[Transaction]:
    """Transactions the user paid or received, newest first"""
    return (
        db.query(Transaction)
        .filter(or_(Transaction.payer_id == user_id, Transaction.payee_id == user_id))
        .order_by(Transaction.created_at.desc())
        .all()
    )
