"""
Automated status transitions for visits
Handles accepted/paid → completed once a visit's end time has passed
"""

import logging
from datetime import datetime, time, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from ..models_visit import Visit, VisitStatus
from . import notification_service

logger = logging.getLogger(__name__)


def visit_end(visit: Visit) -> datetime:
    """Datetime at which a visit ends ("24:00" is midnight of the next day)"""
    hours, minutes = (int(part) for part in visit.time_end.split(":"))
    if hours == 24:
        return datetime.combine(visit.date + timedelta(days=1), time(0, 0))
    return datetime.combine(visit.date, time(hours, minutes))


def complete_elapsed_visits(db: Session, now: Optional[datetime] = None) -> dict:
    """
    Mark accepted and paid visits as completed once they have ended
    Should be run as a scheduled job (e.g., every 15 minutes)

    Args:
        db: Database session
        now: Reference time (defaults to the current UTC time)

    Returns:
        dict: Summary of status changes made
    """
    now = now or datetime.utcnow()

    summary = {
        "accepted_to_completed": 0,
        "paid_to_completed": 0,
        "total_updated": 0,
    }

    try:
        candidates = (
            db.query(Visit)
            .filter(
                Visit.status.in_([VisitStatus.ACCEPTED.value, VisitStatus.PAID.value]),
                Visit.date <= now.date(),
            )
            .all()
        )

        for visit in candidates:
            if visit_end(visit) > now:
                continue

            previous = visit.status
            visit.status = VisitStatus.COMPLETED.value
            summary[f"{previous.lower()}_to_completed"] += 1
            notification_service.notify(
                db,
                visit.owner_id,
                notification_service.VISIT_STATUS_CHANGED,
                "Visit completed",
                f"Your visit on {visit.date.isoformat()} {visit.time_start}-{visit.time_end} "
                "is complete. Leave a review for your sitter!",
                visit.id,
            )
            logger.info(f"✅ Visit {visit.id} transitioned: {previous} → COMPLETED")

        total = summary["accepted_to_completed"] + summary["paid_to_completed"]
        if total > 0:
            db.commit()
            summary["total_updated"] = total
            logger.info(f"📊 Status automation summary: {summary}")
        else:
            logger.debug("ℹ️ No visit status updates needed")

        return summary

    except Exception as e:
        logger.error(f"❌ Error completing elapsed visits: {str(e)}")
        db.rollback()
        raise
