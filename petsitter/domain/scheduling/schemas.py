"""Scheduling schemas - busy slots, free slots and visit planning"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import parse_iso_date, validate_time_hhmm


class BusySlot(BaseModel):
    date: str
    timeStart: str
    timeEnd: str


class TimeRange(BaseModel):
    timeStart: str
    timeEnd: str


class FreeSlotsResponse(BaseModel):
    sitterProfileId: str
    date: str
    busy: list[TimeRange]
    free: list[TimeRange]
    nextFreeStart: Optional[str] = None


class PlannedIntervalRequest(BaseModel):
    timeStart: str
    timeEnd: str
    services: Optional[list[str]] = None
    task: Optional[str] = None

    @field_validator("timeStart", "timeEnd")
    @classmethod
    def validate_time(cls, v: str) -> str:
        return validate_time_hhmm(v)


class PlanRequest(BaseModel):
    """
    Plan visits with a sitter over one or more days.

    Days without explicit intervals get one suggested visit built from the
    preset (or services) starting at the first free time after the window's
    preferred start.
    """

    sitterProfileId: str
    dates: list[str] = Field(..., min_length=1)
    intervalsByDate: Optional[dict[str, list[PlannedIntervalRequest]]] = None
    preset: Optional[Literal["short", "walk", "full"]] = None
    services: Optional[list[str]] = None
    timeWindow: Literal["morning", "day", "evening", "custom"] = "day"
    customStart: Optional[str] = None
    task: Optional[str] = None

    @field_validator("dates")
    @classmethod
    def normalize_dates(cls, v: list[str]) -> list[str]:
        return sorted({parse_iso_date(d).isoformat() for d in v})

    @field_validator("intervalsByDate")
    @classmethod
    def normalize_interval_dates(cls, v):
        if v is None:
            return v
        return {parse_iso_date(key).isoformat(): intervals for key, intervals in v.items()}

    @field_validator("customStart")
    @classmethod
    def validate_custom_start(cls, v):
        if v:
            return validate_time_hhmm(v)
        return v


class PlannedVisit(BaseModel):
    timeStart: str
    timeEnd: str
    services: list[str]
    task: str
    suggested: bool = False


class DayPlan(BaseModel):
    date: str
    status: Literal["free", "partial", "full"]
    visits: list[PlannedVisit]
    busy: list[TimeRange]
    freeIntervals: list[TimeRange]


class PlanResponse(BaseModel):
    sitterProfileId: str
    hourlyRate: float
    days: list[DayPlan]
    conflicts: list[BusySlot]
    hasConflicts: bool
    visitsCount: int
    totalHours: float
    suggestedTotalPrice: Optional[float] = None
    pricePerVisit: Optional[float] = None
