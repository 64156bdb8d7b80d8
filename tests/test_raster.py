from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from gwuptime.models import StateInterval
from gwuptime.series import aggregate, rasterize, render_slots

_START = datetime(2025, 9, 9, 23, 0, tzinfo=UTC)  # 2025-09-10T00:00 in Lisbon
_NOON = _START + timedelta(hours=12)
_END = _START + timedelta(days=1)


def _scenario_b() -> list[StateInterval]:
    return [
        StateInterval(start=_START, end=_NOON, state=1),
        StateInterval(start=_NOON, end=_END, state=0),
    ]


def test_scenario_c_half_up_slot_resolves_up() -> None:
    slot_start = _NOON - timedelta(minutes=30)
    slots = rasterize(_scenario_b(), slot_start, slot_start + timedelta(hours=1), timedelta(minutes=60))
    assert slots == [True]


def test_hourly_raster_of_scenario_b() -> None:
    slots = rasterize(_scenario_b(), _START, _END, timedelta(hours=1))
    assert slots == [True] * 12 + [False] * 12


def test_just_under_half_is_down() -> None:
    intervals = [
        StateInterval(start=_START, end=_START + timedelta(minutes=29, seconds=59), state=1),
        StateInterval(start=_START + timedelta(minutes=29, seconds=59), end=_END, state=0),
    ]
    assert rasterize(intervals, _START, _START + timedelta(hours=1), timedelta(hours=1)) == [False]


def test_truncated_final_slot_is_judged_on_nominal_step() -> None:
    up_from = _START + timedelta(minutes=60)
    intervals = [
        StateInterval(start=_START, end=up_from, state=0),
        StateInterval(start=up_from, end=_START + timedelta(minutes=70), state=1),
    ]
    slots = rasterize(intervals, _START, _START + timedelta(minutes=70), timedelta(hours=1))
    assert slots == [False, False]


def test_truncated_final_slot_up_when_half_step_is_up() -> None:
    intervals = [StateInterval(start=_START, end=_START + timedelta(minutes=90), state=1)]
    slots = rasterize(intervals, _START, _START + timedelta(minutes=90), timedelta(hours=1))
    assert slots == [True, True]


def test_up_overlap_spanning_several_intervals() -> None:
    intervals = [
        StateInterval(start=_START, end=_START + timedelta(minutes=20), state=1),
        StateInterval(start=_START + timedelta(minutes=20), end=_START + timedelta(minutes=40), state=0),
        StateInterval(start=_START + timedelta(minutes=40), end=_START + timedelta(minutes=60), state=1),
    ]
    assert rasterize(intervals, _START, _START + timedelta(hours=1), timedelta(hours=1)) == [True]


def test_no_intervals_is_all_down() -> None:
    assert rasterize([], _START, _START + timedelta(hours=3), timedelta(hours=1)) == [False, False, False]


def test_step_must_be_positive() -> None:
    with pytest.raises(ValueError):
        rasterize(_scenario_b(), _START, _END, timedelta(0))


def test_raster_matches_exact_uptime_within_one_slot() -> None:
    step = timedelta(minutes=45)
    down_from = _START + timedelta(hours=5, minutes=10)
    up_from = _START + timedelta(hours=9, minutes=52)
    intervals = [
        StateInterval(start=_START, end=down_from, state=1),
        StateInterval(start=down_from, end=up_from, state=0),
        StateInterval(start=up_from, end=_END, state=1),
    ]
    slots = rasterize(intervals, _START, _END, step)

    raster_up = timedelta(0)
    for index, up in enumerate(slots):
        slot_start = _START + index * step
        slot_end = min(slot_start + step, _END)
        if up:
            raster_up += slot_end - slot_start
    exact = aggregate(intervals, _START, _END).up_duration
    assert abs(raster_up - exact) <= step


def test_render_slots() -> None:
    assert render_slots([True, False, True]) == "█░█"
    assert render_slots([True, False], up="+", down="-") == "+-"
