import pytest

from petsitter.domain.scheduling import time_calculator as tc


def test_parse_and_format_times() -> None:
    assert tc.parse_time("09:30") == 570
    assert tc.parse_time("24:00") == 1440
    assert tc.parse_time("24:01") is None
    assert tc.parse_time("9h") is None
    assert tc.parse_time("10:75") is None
    assert tc.parse_time(None) is None

    assert tc.format_minutes(570) == "09:30"
    assert tc.format_minutes(-15) == "00:00"
    assert tc.format_minutes(2000) == "24:00"


def test_merge_intervals_joins_overlapping_and_touching() -> None:
    assert tc.merge_intervals([(300, 360), (60, 120), (100, 200), (200, 240)]) == [(60, 240), (300, 360)]


def test_busy_intervals_by_date_drops_broken_slots() -> None:
    slots = [
        {"date": "2030-06-15", "timeStart": "10:00", "timeEnd": "11:00"},
        {"date": "2030-06-15", "timeStart": "10:30", "timeEnd": "12:00"},
        {"date": "2030-06-15", "timeStart": "13:00", "timeEnd": "13:00"},
        {"date": "2030-06-16", "timeStart": "bad", "timeEnd": "11:00"},
    ]

    assert tc.busy_intervals_by_date(slots) == {"2030-06-15": [(600, 720)]}


def test_blocked_and_free_intervals_keep_the_buffer() -> None:
    blocked = tc.blocked_intervals([(15, 60), (1400, 1440)], buffer=30)

    assert blocked == [(0, 90), (1370, 1440)]
    assert tc.free_intervals(blocked) == [(90, 1370)]
    assert tc.free_intervals([]) == [(0, 1440)]


def test_find_next_free_start() -> None:
    free = [(0, 570), (690, 1440)]

    assert tc.find_next_free_start(free, 480, 60, buffer=30) == 480
    assert tc.find_next_free_start(free, 540, 60, buffer=30) == 720
    assert tc.find_next_free_start(free, 1400, 60, buffer=30) is None
    assert tc.find_next_free_start(free, None, 60) is None


def test_buffered_overlap_and_conflicts() -> None:
    # Adjacent visits collide once the travel buffer is added
    assert tc.overlaps((600, 660), (660, 720), buffer=30)
    assert not tc.overlaps((600, 660), (720, 780), buffer=30)

    busy = {"2030-06-15": [(600, 660), (900, 960)]}
    planned = {"2030-06-15": [(650, 700), (680, 690)], "2030-06-16": [(600, 660)]}

    assert tc.find_conflicts(busy, planned, buffer=30) == [
        {"date": "2030-06-15", "timeStart": "10:00", "timeEnd": "11:00"}
    ]


def test_day_status() -> None:
    busy = [(600, 660)]

    assert tc.day_status(busy, [(900, 960)], buffer=30) == "free"
    assert tc.day_status(busy, [(630, 660)], buffer=30) == "full"
    assert tc.day_status(busy, [(680, 800)], buffer=30) == "partial"
    assert tc.day_status(busy, [], buffer=30) == "free"


def test_validate_day_intervals() -> None:
    assert tc.validate_day_intervals([("12:00", "13:00"), ("09:00", "10:00")]) == [(540, 600), (720, 780)]

    with pytest.raises(ValueError, match="end after"):
        tc.validate_day_intervals([("10:00", "10:00")])
    with pytest.raises(ValueError, match="overlap"):
        tc.validate_day_intervals([("09:00", "10:00"), ("09:59", "11:00")])
    with pytest.raises(ValueError, match="Invalid time"):
        tc.validate_day_intervals([("9am", "10:00")])


@pytest.mark.parametrize(
    ("services", "minutes"),
    [
        (["FEEDING"], 30),
        (["FEEDING", "LITTER"], 30),
        (["WALKING"], 60),
        (["feeding", "walking"], 90),
        ([], 60),
        (None, 60),
    ],
)
def test_duration_for_services(services, minutes) -> None:
    assert tc.duration_for_services(services) == minutes


def test_labels_and_pricing() -> None:
    assert tc.services_label(["FEEDING", "LITTER"]) == "Feeding, Litter"
    assert tc.services_label(["GROOMING"]) == "Visit"

    intervals = [(540, 570), (720, 780)]
    assert tc.total_hours(intervals) == 1.5
    assert tc.suggested_price(12.5, intervals) == 18.75
    assert tc.suggested_price(12, []) is None
    assert tc.suggested_price(None, intervals) is None
    assert tc.price_per_visit(20.0, 3) == 6.67
    assert tc.price_per_visit(None, 3) is None
    assert tc.price_per_visit(20.0, 0) is None


def test_prices_round_half_up_to_cents() -> None:
    # 12.25/h for 30 minutes is 6.125
    assert tc.suggested_price(12.25, [(600, 630)]) == 6.13
    assert tc.price_per_visit(0.25, 2) == 0.13
    assert tc.round_money(2.675) == 2.68
