from datetime import date

import pytest

from salon_api.domain.bookings.availability import (
    conflicts_with_any,
    generate_slots,
    intervals_overlap,
    minutes_to_time,
    time_to_minutes,
    working_window,
)
from salon_api.domain.bookings.state import can_transition, is_terminal


def test_time_conversion_round_trip():
    assert time_to_minutes("09:30") == 570
    assert minutes_to_time(570) == "09:30"
    assert minutes_to_time(0) == "00:00"


@pytest.mark.parametrize(
    "first,second,expected",
    [
        ((600, 660), (630, 690), True),  # partial overlap at the end
        ((630, 690), (600, 660), True),  # partial overlap at the start
        ((600, 720), (630, 660), True),  # containment
        ((630, 660), (600, 720), True),  # contained
        ((600, 660), (660, 720), False),  # touching intervals are free
        ((540, 600), (600, 660), False),
    ],
)
def test_intervals_overlap(first, second, expected):
    assert intervals_overlap(*first, *second) is expected
    assert intervals_overlap(*second, *first) is expected


def test_default_day_hourly_service_slots():
    slots = generate_slots(time_to_minutes("09:00"), time_to_minutes("18:00"), 60, 30)
    assert slots[0] == "09:00"
    assert slots[-1] == "17:00"
    assert len(slots) == 17


def test_existing_booking_blocks_overlapping_candidates():
    occupied = [(time_to_minutes("10:00"), time_to_minutes("11:00"))]
    slots = generate_slots(time_to_minutes("09:00"), time_to_minutes("18:00"), 60, 30, occupied)
    assert "09:00" in slots
    assert "09:30" not in slots
    assert "10:00" not in slots
    assert "10:30" not in slots
    assert "11:00" in slots


def test_conflicts_with_any():
    occupied = [(600, 660)]
    assert conflicts_with_any(630, 690, occupied)
    assert not conflicts_with_any(660, 720, occupied)
    assert not conflicts_with_any(660, 720, [])


def test_generate_slots_rejects_non_positive_duration():
    with pytest.raises(ValueError):
        generate_slots(540, 1080, 0, 30)


def test_working_window_uses_configured_hours():
    monday = date(2030, 1, 7)
    hours = {"monday": {"open": "10:00", "close": "16:00"}, "sunday": {"closed": True}}

    assert working_window(hours, monday, "09:00", "18:00") == (600, 960)
    assert working_window(hours, date(2030, 1, 6), "09:00", "18:00") is None
    # Tuesday is not configured
    assert working_window(hours, date(2030, 1, 8), "09:00", "18:00") == (540, 1080)
    assert working_window(None, monday, "09:00", "18:00") == (540, 1080)


def test_booking_transitions():
    assert can_transition("pending", "confirmed")
    assert can_transition("confirmed", "completed")
    assert can_transition("rescheduled", "rescheduled")
    assert not can_transition("pending", "completed")
    assert not can_transition("completed", "cancelled")
    assert not can_transition("in_progress", "confirmed")


def test_terminal_statuses():
    assert is_terminal("completed")
    assert is_terminal("cancelled")
    assert is_terminal("no_show")
    assert not is_terminal("rescheduled")
