from __future__ import annotations

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pytest

from gwuptime.periods import period_bounds, period_key, period_start, periods_between

_LISBON = ZoneInfo("Europe/Lisbon")


def test_period_key_uses_region_calendar() -> None:
    # 23:30 UTC on Aug 31 is already September in Lisbon (UTC+1).
    assert period_key(datetime(2025, 8, 31, 23, 30, tzinfo=UTC), _LISBON) == "2025-09"
    assert period_key(datetime(2025, 8, 31, 22, 59, tzinfo=UTC), _LISBON) == "2025-08"


def test_period_bounds_summer() -> None:
    start, end = period_bounds("2025-09", _LISBON)
    assert start == datetime(2025, 8, 31, 23, 0, tzinfo=UTC)
    assert end == datetime(2025, 9, 30, 23, 0, tzinfo=UTC)


def test_period_bounds_wraps_year() -> None:
    start, end = period_bounds("2025-12", _LISBON)
    assert start == datetime(2025, 12, 1, tzinfo=UTC)
    assert end == datetime(2026, 1, 1, tzinfo=UTC)


def test_period_start_matches_bounds() -> None:
    assert period_start("2025-03", _LISBON) == period_bounds("2025-03", _LISBON)[0]


def test_periods_between_is_inclusive_and_ordered() -> None:
    periods = periods_between(
        datetime(2025, 9, 20, tzinfo=UTC),
        datetime(2025, 11, 2, tzinfo=UTC),
        _LISBON,
    )
    assert periods == ["2025-09", "2025-10", "2025-11"]


def test_periods_between_across_year_boundary() -> None:
    periods = periods_between(
        datetime(2025, 11, 15, tzinfo=UTC),
        datetime(2026, 2, 1, 12, tzinfo=UTC),
        _LISBON,
    )
    assert periods == ["2025-11", "2025-12", "2026-01", "2026-02"]


def test_periods_between_single_period() -> None:
    assert periods_between(
        datetime(2025, 9, 10, tzinfo=UTC),
        datetime(2025, 9, 11, tzinfo=UTC),
        _LISBON,
    ) == ["2025-09"]


@pytest.mark.parametrize("key", ["2025-13", "2025/09", "25-09", "2025-00", ""])
def test_invalid_period_keys(key: str) -> None:
    with pytest.raises(ValueError):
        period_bounds(key, _LISBON)
