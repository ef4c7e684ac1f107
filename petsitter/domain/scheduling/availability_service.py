"""
Availability service - a sitter's busy slots and visit planning on top of them
"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import TRAVEL_BUFFER_MINUTES
from ...models import SitterProfile
from ...models_visit import Visit, VisitStatus
from . import time_calculator as tc
from .schemas import (
    BusySlot,
    DayPlan,
    FreeSlotsResponse,
    PlannedVisit,
    PlanRequest,
    PlanResponse,
    TimeRange,
)

logger = logging.getLogger(__name__)

# Visits that occupy the sitter's time
BUSY_STATUSES = [
    VisitStatus.PENDING.value,
    VisitStatus.ACCEPTED.value,
    VisitStatus.PAID.value,
    VisitStatus.COMPLETED.value,
]


def _time_ranges(intervals: list[tc.Interval]) -> list[TimeRange]:
    return [
        TimeRange(timeStart=tc.format_minutes(start), timeEnd=tc.format_minutes(end))
        for start, end in intervals
    ]


class AvailabilityService:
    """Computes busy and free time for a sitter"""

    def __init__(self, db: Session, buffer: int = TRAVEL_BUFFER_MINUTES):
        self.db = db
        self.buffer = buffer

    def get_sitter_profile(self, sitter_profile_id: str) -> SitterProfile:
        profile = self.db.query(SitterProfile).filter(SitterProfile.id == sitter_profile_id).first()
        if not profile:
            raise HTTPException(status_code=404, detail="Sitter profile not found")
        return profile

    def get_busy_slots(
        self,
        sitter_profile_id: str,
        date_from: date,
        date_to: date,
        exclude_visit_id: Optional[str] = None,
    ) -> list[dict]:
        """
        Blocking visits of a sitter in an inclusive date range.

        Returns de-duplicated ``{"date", "timeStart", "timeEnd"}`` dicts sorted by date then start.
        """
        query = self.db.query(Visit.id, Visit.date, Visit.time_start, Visit.time_end).filter(
            Visit.sitter_id == sitter_profile_id,
            Visit.date >= date_from,
            Visit.date <= date_to,
            Visit.status.in_(BUSY_STATUSES),
        )
        if exclude_visit_id:
            query = query.filter(Visit.id != exclude_visit_id)

        slots = []
        seen = set()
        for _visit_id, visit_date, time_start, time_end in query.order_by(
            Visit.date.asc(), Visit.time_start.asc()
        ):
            key = (visit_date.isoformat(), time_start, time_end)
            if key in seen:
                continue
            seen.add(key)
            slots.append({"date": key[0], "timeStart": time_start, "timeEnd": time_end})

        return slots

    def find_slot_conflicts(
        self,
        sitter_profile_id: str,
        visit_date: date,
        time_start: str,
        time_end: str,
        exclude_visit_id: Optional[str] = None,
    ) -> list[dict]:
        """Busy slots that a new visit on ``visit_date`` would collide with"""
        start, end = tc.parse_time(time_start), tc.parse_time(time_end)
        if start is None or end is None:
            return []

        slots = self.get_busy_slots(sitter_profile_id, visit_date, visit_date, exclude_visit_id)
        busy_by_date = tc.busy_intervals_by_date(slots)
        return tc.find_conflicts(
            busy_by_date, {visit_date.isoformat(): [(start, end)]}, self.buffer
        )

    def get_free_slots(
        self,
        sitter_profile_id: str,
        day: date,
        duration: Optional[int] = None,
        preferred_start: Optional[str] = None,
    ) -> FreeSlotsResponse:
        self.get_sitter_profile(sitter_profile_id)

        day_iso = day.isoformat()
        slots = self.get_busy_slots(sitter_profile_id, day, day)
        busy = tc.busy_intervals_by_date(slots).get(day_iso, [])
        free = tc.free_intervals(tc.blocked_intervals(busy, buffer=self.buffer))

        next_start = None
        if duration:
            preferred = tc.parse_time(preferred_start) if preferred_start else tc.WORKING_DAY_START
            found = tc.find_next_free_start(free, preferred, duration, self.buffer)
            if found is not None:
                next_start = tc.format_minutes(found)

        return FreeSlotsResponse(
            sitterProfileId=sitter_profile_id,
            date=day_iso,
            busy=_time_ranges(busy),
            free=_time_ranges(free),
            nextFreeStart=next_start,
        )

    def plan(self, data: PlanRequest) -> PlanResponse:
        """Suggest or check visits across several days and price them"""
        profile = self.get_sitter_profile(data.sitterProfileId)

        day_isos = data.dates
        slots = self.get_busy_slots(
            profile.id, date.fromisoformat(day_isos[0]), date.fromisoformat(day_isos[-1])
        )
        busy_by_date = tc.busy_intervals_by_date(slots)

        services = data.services or tc.VISIT_PRESETS.get(data.preset or "") or tc.DEFAULT_SERVICES
        duration = tc.duration_for_services(services)
        if data.timeWindow == "custom" and data.customStart:
            preferred = tc.parse_time(data.customStart)
        else:
            preferred = tc.parse_time(tc.TIME_WINDOW_DEFAULTS[data.timeWindow])
        default_task = (data.task or "").strip() or tc.services_label(services)

        explicit = data.intervalsByDate or {}
        visits_by_date: dict[str, list[PlannedVisit]] = {}
        planned_by_date: dict[str, list[tc.Interval]] = {}

        for day_iso in day_isos:
            requested = explicit.get(day_iso) or []
            if requested:
                try:
                    planned = tc.validate_day_intervals(
                        (interval.timeStart, interval.timeEnd) for interval in requested
                    )
                except ValueError as e:
                    raise HTTPException(status_code=400, detail=f"Day {day_iso}: {e}") from e

                visits_by_date[day_iso] = [
                    PlannedVisit(
                        timeStart=interval.timeStart,
                        timeEnd=interval.timeEnd,
                        services=interval.services or [],
                        task=(interval.task or "").strip() or tc.services_label(interval.services),
                    )
                    for interval in sorted(requested, key=lambda i: tc.parse_time(i.timeStart))
                ]
                planned_by_date[day_iso] = planned
                continue

            # Nothing requested for this day: suggest the first free slot after the preferred start
            busy = busy_by_date.get(day_iso, [])
            free = tc.free_intervals(tc.blocked_intervals(busy, buffer=self.buffer))
            start = tc.find_next_free_start(free, preferred, duration, self.buffer)
            if start is None:
                start = preferred
            end = min(start + duration, tc.WORKING_DAY_END)

            visits_by_date[day_iso] = [
                PlannedVisit(
                    timeStart=tc.format_minutes(start),
                    timeEnd=tc.format_minutes(end),
                    services=list(services),
                    task=default_task,
                    suggested=True,
                )
            ]
            planned_by_date[day_iso] = [(start, end)]

        conflicts = tc.find_conflicts(busy_by_date, planned_by_date, self.buffer)

        days = []
        for day_iso in day_isos:
            busy = busy_by_date.get(day_iso, [])
            planned = planned_by_date[day_iso]
            days.append(
                DayPlan(
                    date=day_iso,
                    status=tc.day_status(busy, planned, self.buffer),
                    visits=visits_by_date[day_iso],
                    busy=_time_ranges(busy),
                    freeIntervals=_time_ranges(
                        tc.free_intervals(tc.blocked_intervals(busy, planned, self.buffer))
                    ),
                )
            )

        all_planned = [interval for planned in planned_by_date.values() for interval in planned]
        visits_count = len(all_planned)
        total = tc.suggested_price(profile.hourly_rate, all_planned)

        logger.info(
            f"🗓️ Planned {visits_count} visit(s) over {len(day_isos)} day(s) "
            f"with sitter {profile.id}, {len(conflicts)} conflict(s)"
        )

        return PlanResponse(
            sitterProfileId=profile.id,
            hourlyRate=profile.hourly_rate,
            days=days,
            conflicts=[BusySlot(**slot) for slot in conflicts],
            hasConflicts=bool(conflicts),
            visitsCount=visits_count,
            totalHours=round(tc.total_hours(all_planned), 2),
            suggestedTotalPrice=total,
            pricePerVisit=tc.price_per_visit(total, visits_count),
        )
