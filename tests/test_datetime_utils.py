from datetime import date, datetime

from timetrack.common.datetime_utils import (
    compute_duration_hours,
    current_month_bounds,
    format_duration,
    is_within_period,
    parse_iso_datetime,
    previous_month_bounds,
    round_half_up,
)


def test_duration_full_day():
    assert compute_duration_hours(datetime(2026, 3, 10, 9, 15), datetime(2026, 3, 10, 17, 45)) == 8.5


def test_duration_rounds_to_two_decimals():
    assert compute_duration_hours(datetime(2026, 3, 10, 9, 0), datetime(2026, 3, 10, 9, 20)) == 0.33
    # 1h 0m 18s = 1.005h, rounded half-up
    assert compute_duration_hours(datetime(2026, 3, 10, 9, 0), datetime(2026, 3, 10, 10, 0, 18)) == 1.01


def test_duration_is_zero_when_a_side_is_missing():
    assert compute_duration_hours(None, datetime(2026, 3, 10, 17, 0)) == 0
    assert compute_duration_hours(datetime(2026, 3, 10, 9, 0), None) == 0
    assert compute_duration_hours(None, None) == 0


def test_duration_never_negative():
    assert compute_duration_hours(datetime(2026, 3, 10, 17, 0), datetime(2026, 3, 10, 9, 0)) == 0


def test_is_within_period_is_inclusive():
    start, end = date(2026, 2, 1), date(2026, 2, 28)
    assert is_within_period(date(2026, 2, 1), start, end)
    assert is_within_period(date(2026, 2, 28), start, end)
    assert is_within_period(datetime(2026, 2, 28, 23, 59), start, end)
    assert not is_within_period(date(2026, 3, 1), start, end)
    assert not is_within_period(date(2026, 1, 31), start, end)


def test_current_month_bounds():
    assert current_month_bounds(datetime(2026, 2, 10, 8, 0)) == (date(2026, 2, 1), date(2026, 2, 28))
    assert current_month_bounds(date(2024, 2, 29)) == (date(2024, 2, 1), date(2024, 2, 29))


def test_previous_month_bounds_crosses_year_and_leap_day():
    assert previous_month_bounds(date(2026, 1, 15)) == (date(2025, 12, 1), date(2025, 12, 31))
    assert previous_month_bounds(date(2024, 3, 31)) == (date(2024, 2, 1), date(2024, 2, 29))


def test_format_duration():
    assert format_duration(8.5) == "8h 30m"
    assert format_duration(0) == "0h 0m"
    assert format_duration(7.99) == "7h 59m"


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(80.5) == 81
    assert round_half_up(0.125, 2) == 0.13


def test_parse_iso_datetime_accepts_browser_timestamps():
    assert parse_iso_datetime("2026-03-10T09:15:00.000Z") == datetime(2026, 3, 10, 9, 15)
    assert parse_iso_datetime("2026-03-10T09:15") == datetime(2026, 3, 10, 9, 15)
