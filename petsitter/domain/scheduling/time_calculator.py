"""
Time calculations for visit planning.

All intervals are ``(start, end)`` tuples of minutes since midnight inside a
single working day (00:00 - 24:00). Every visit reserves a travel buffer
before and after itself, so two visits conflict when their *buffered* spans
overlap even if the visits themselves do not.
"""

from collections import defaultdict
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from ...config import TRAVEL_BUFFER_MINUTES

Interval = tuple[int, int]

WORKING_DAY_START = 0
WORKING_DAY_END = 24 * 60

SHORT_SERVICES = {"FEEDING", "LITTER"}
WALKING_SERVICE = "WALKING"

SERVICE_LABELS = {"FEEDING": "Feeding", "LITTER": "Litter", "WALKING": "Walking"}

# Visit presets offered when planning without explicit intervals
VISIT_PRESETS = {
    "short": ["FEEDING", "LITTER"],  # 30 min
    "walk": ["WALKING"],  # 60 min
    "full": ["FEEDING", "LITTER", "WALKING"],  # 90 min
}
DEFAULT_SERVICES = VISIT_PRESETS["short"]

# Preferred start for each time-of-day window
TIME_WINDOW_DEFAULTS = {
    "morning": "09:00",
    "day": "13:00",
    "evening": "18:00",
    "custom": "14:00",
}


def parse_time(value: Optional[str]) -> Optional[int]:
    """Convert "HH:MM" to minutes since midnight. Returns None when unparseable."""
    if not value or not isinstance(value, str):
        return None

    parts = value.strip().split(":")
    if len(parts) != 2:
        return None

    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        return None

    if hours < 0 or minutes < 0 or minutes > 59:
        return None

    total = hours * 60 + minutes
    if total > WORKING_DAY_END:
        return None
    return total


def format_minutes(total_minutes: float) -> str:
    """Convert minutes since midnight to "HH:MM", clamped to the working day"""
    safe = max(WORKING_DAY_START, min(WORKING_DAY_END, int(total_minutes)))
    return f"{safe // 60:02d}:{safe % 60:02d}"


def merge_intervals(intervals: Iterable[Interval]) -> list[Interval]:
    """Sort intervals and merge the ones that overlap or touch"""
    merged: list[list[int]] = []
    for start, end in sorted(intervals):
        if merged and start <= merged[-1][1]:
            merged[-1][1] = max(merged[-1][1], end)
        else:
            merged.append([start, end])
    return [(start, end) for start, end in merged]


def busy_intervals_by_date(slots: Iterable[dict]) -> dict[str, list[Interval]]:
    """
    Group busy slots (``{"date", "timeStart", "timeEnd"}``) by date and merge each day.

    Slots with unparseable or empty time ranges are dropped.
    """
    by_date: dict[str, list[Interval]] = defaultdict(list)
    for slot in slots:
        start = parse_time(slot.get("timeStart"))
        end = parse_time(slot.get("timeEnd"))
        if start is None or end is None or end <= start:
            continue
        by_date[str(slot.get("date"))].append((start, end))

    return {date_iso: merge_intervals(intervals) for date_iso, intervals in by_date.items()}


def buffered(interval: Interval, buffer: int = TRAVEL_BUFFER_MINUTES) -> Interval:
    """Expand an interval by the travel buffer on both sides (never before midnight)"""
    start, end = interval
    return max(WORKING_DAY_START, start - buffer), end + buffer


def blocked_intervals(
    busy: Iterable[Interval],
    planned: Iterable[Interval] = (),
    buffer: int = TRAVEL_BUFFER_MINUTES,
) -> list[Interval]:
    """Buffered busy and planned intervals, clamped to the working day and merged"""
    blocked = []
    for start, end in list(busy) + list(planned):
        if end <= start:
            continue
        buffered_start, buffered_end = buffered((start, end), buffer)
        clamped_start = max(WORKING_DAY_START, buffered_start)
        clamped_end = min(WORKING_DAY_END, buffered_end)
        if clamped_end > clamped_start:
            blocked.append((clamped_start, clamped_end))
    return merge_intervals(blocked)


def free_intervals(blocked: Iterable[Interval]) -> list[Interval]:
    """Complement of the (merged) blocked intervals inside the working day"""
    free = []
    cursor = WORKING_DAY_START

    for start, end in blocked:
        if cursor < start:
            free.append((cursor, start))
        cursor = max(cursor, end)
        if cursor >= WORKING_DAY_END:
            break

    if cursor < WORKING_DAY_END:
        free.append((cursor, WORKING_DAY_END))

    return [(start, end) for start, end in free if start < end]


def find_next_free_start(
    free: Iterable[Interval],
    preferred_start: Optional[int],
    duration: int,
    buffer: int = TRAVEL_BUFFER_MINUTES,
) -> Optional[int]:
    """
    First start at or after ``preferred_start`` where a visit of ``duration``
    minutes fits inside a free interval with the travel buffer kept on both sides.
    """
    if preferred_start is None or duration <= 0:
        return None

    for free_start, free_end in free:
        usable_start = free_start + buffer
        usable_end = free_end - buffer
        if usable_end - usable_start < duration:
            continue

        candidate = max(preferred_start, usable_start)
        if candidate + duration <= usable_end:
            return candidate

    return None


def overlaps(first: Interval, second: Interval, buffer: int = TRAVEL_BUFFER_MINUTES) -> bool:
    """True when the buffered spans of two intervals overlap"""
    first_start, first_end = buffered(first, buffer)
    second_start, second_end = buffered(second, buffer)
    return first_start < second_end and first_end > second_start


def find_conflicts(
    busy_by_date: dict[str, list[Interval]],
    planned_by_date: dict[str, list[Interval]],
    buffer: int = TRAVEL_BUFFER_MINUTES,
) -> list[dict]:
    """
    Busy intervals that collide with any planned interval.

    Returns de-duplicated ``{"date", "timeStart", "timeEnd"}`` dicts sorted by date then start.
    """
    conflicts = []
    seen = set()

    for date_iso, planned in planned_by_date.items():
        day_busy = busy_by_date.get(date_iso, [])
        for interval in planned:
            for busy in day_busy:
                if not overlaps(interval, busy, buffer):
                    continue
                key = (date_iso, format_minutes(busy[0]), format_minutes(busy[1]))
                if key in seen:
                    continue
                seen.add(key)
                conflicts.append({"date": key[0], "timeStart": key[1], "timeEnd": key[2]})

    conflicts.sort(key=lambda slot: (slot["date"], slot["timeStart"]))
    return conflicts


def day_status(
    busy: Iterable[Interval],
    planned: Iterable[Interval],
    buffer: int = TRAVEL_BUFFER_MINUTES,
) -> str:
    """
    Classify a day as "free", "partial" or "full".

    Compares the buffered minutes of the planned visits with how many of those
    minutes overlap the sitter's buffered busy intervals.
    """
    busy = list(busy)
    total_minutes = 0
    conflict_minutes = 0

    for interval in planned:
        planned_start, planned_end = buffered(interval, buffer)
        if planned_end <= planned_start:
            continue
        total_minutes += planned_end - planned_start

        for busy_interval in busy:
            busy_start, busy_end = buffered(busy_interval, buffer)
            overlap = min(planned_end, busy_end) - max(planned_start, busy_start)
            if overlap > 0:
                conflict_minutes += overlap

    if total_minutes == 0 or conflict_minutes == 0:
        return "free"
    if conflict_minutes >= total_minutes:
        return "full"
    return "partial"


def validate_day_intervals(intervals: Iterable[tuple[str, str]]) -> list[Interval]:
    """
    Parse one day's ``(timeStart, timeEnd)`` pairs and check them.

    Returns:
        The parsed intervals sorted by start

    Raises:
        ValueError: On an unparseable time, an end not after its start, or overlapping visits
    """
    parsed = []
    for time_start, time_end in intervals:
        start, end = parse_time(time_start), parse_time(time_end)
        if start is None or end is None:
            raise ValueError(f"Invalid time {time_start}-{time_end}")
        if end <= start:
            raise ValueError(f"Visit {time_start}-{time_end} must end after it starts")
        parsed.append((start, end))

    parsed.sort()
    for previous, current in zip(parsed, parsed[1:]):
        if current[0] < previous[1]:
            raise ValueError(
                f"Visits overlap ({format_minutes(previous[0])}-{format_minutes(previous[1])} "
                f"and {format_minutes(current[0])}-{format_minutes(current[1])})"
            )

    return parsed


def duration_for_services(services: Optional[Iterable[str]]) -> int:
    """Visit length in minutes for a set of services"""
    selected = {s.upper() for s in (services or [])}
    has_short = bool(selected & SHORT_SERVICES)
    has_walking = WALKING_SERVICE in selected

    if has_walking and has_short:
        return 90
    if has_walking:
        return 60
    if has_short:
        return 30
    return 60


def services_label(services: Optional[Iterable[str]]) -> str:
    """Human readable default task for a visit, e.g. "Feeding, Litter" """
    labels = [SERVICE_LABELS[s] for s in (services or []) if s in SERVICE_LABELS]
    return ", ".join(labels) if labels else "Visit"


def total_hours(intervals: Iterable[Interval]) -> float:
    return sum(end - start for start, end in intervals if end > start) / 60


def round_money(value: float) -> float:
    """Round to cents, halves away from zero (6.125 -> 6.13)"""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def suggested_price(hourly_rate: Optional[float], intervals: Iterable[Interval]) -> Optional[float]:
    """Hourly rate times total planned hours, rounded to cents. None when nothing is planned."""
    if hourly_rate is None:
        return None

    hours = total_hours(intervals)
    if hours <= 0:
        return None

    return round_money(float(hourly_rate) * hours)


def price_per_visit(total_price: Optional[float], visits_count: int) -> Optional[float]:
    if total_price is None or visits_count <= 0:
        return None
    return round_money(total_price / visits_count)
