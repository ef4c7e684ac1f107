"""
In-app notification service
Records notifications for workflow events (visit lifecycle, chat messages, reviews)
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..models_messaging import Notification

logger = logging.getLogger(__name__)

VISIT_CREATED = "visit_created"
VISIT_STATUS_CHANGED = "visit_status_changed"
VISIT_REJECTED = "visit_rejected"
VISIT_CANCELED = "visit_canceled"
VISIT_RESUBMITTED = "visit_resubmitted"
NEW_MESSAGE = "new_message"
NEW_REVIEW = "new_review"


def notify(
    db: Session,
    user_id: str,
    notification_type: str,
    title: str,
    body: Optional[str] = None,
    visit_id: Optional[str] = None,
) -> Notification:
    """
    Queue a notification for a user on the current session.

    The caller commits it together with the change that triggered it.
    """
    notification = Notification(
        user_id=user_id,
        type=notification_type,
        title=title,
        body=body,
        visit_id=visit_id,
    )
    db.add(notification)
    logger.info(f"🔔 {notification_type} notification queued for user {user_id}")
    return notification
