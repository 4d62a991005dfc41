from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime, timedelta

import pytest

from bolao_app import schedule
from bolao_app.lotteries import LotteryVariant, VariantConfig
from bolao_app.schedule import (
    draw_status,
    is_valid_draw_date,
    next_draw_number,
    next_valid_draw_date,
    parse_calendar_date,
    previous_valid_draw_date,
    schedule_description,
    upcoming_draw_date,
    valid_draw_dates_in_month,
    weekday_index,
)

MEGASENA_DAYS = {2, 4, 6}


def _wednesdays_only() -> VariantConfig:
    return VariantConfig(
        key=LotteryVariant.MEGASENA,
        name="Quarta",
        api_name="quarta",
        draw_weekdays=frozenset({3}),
        numbers_per_game=6,
        number_range=(1, 60),
        schedule="Quartas",
    )


def _days_of_2024() -> list[date]:
    start = date(2024, 1, 1)
    return [start + timedelta(days=offset) for offset in range(366)]


def test_tuesday_is_valid_and_wednesday_is_not() -> None:
    assert is_valid_draw_date("megasena", "2024-06-04") is True
    assert is_valid_draw_date("megasena", "2024-06-05") is False


def test_validity_matches_weekday_for_every_day_of_a_year() -> None:
    for day in _days_of_2024():
        expected = weekday_index(day) in MEGASENA_DAYS
        assert is_valid_draw_date(LotteryVariant.MEGASENA, day.isoformat()) is expected


def test_time_component_is_ignored() -> None:
    # Late evening in Brasília is already the next day in UTC.
    assert is_valid_draw_date("megasena", "2024-06-04T23:30:00-03:00") is True
    assert is_valid_draw_date("megasena", "2024-06-04 23:59") is True


@pytest.mark.parametrize("value", ["", "garbage", "2024-02-30", "2024/06/04", "04-06-2024x", None])
def test_unparsable_dates_fail_closed(value: object, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="bolao_app.schedule"):
        assert is_valid_draw_date("megasena", value) is False  # type: ignore[arg-type]
    assert caplog.records


def test_parse_calendar_date_accepts_dates_and_datetimes() -> None:
    assert parse_calendar_date("2024-06-04") == date(2024, 6, 4)
    assert parse_calendar_date(date(2024, 6, 4)) == date(2024, 6, 4)
    assert parse_calendar_date(datetime(2024, 6, 4, 23, 59)) == date(2024, 6, 4)


def test_next_valid_draw_date_from_wednesday() -> None:
    assert next_valid_draw_date("megasena", "2024-06-05") == "2024-06-06"


def test_next_valid_draw_date_keeps_a_draw_day() -> None:
    assert next_valid_draw_date("megasena", "2024-06-08") == "2024-06-08"


def test_next_valid_draw_date_crosses_year_boundary() -> None:
    assert next_valid_draw_date("megasena", "2025-01-01") == "2025-01-02"
    assert next_valid_draw_date("megasena", "2023-12-31") == "2024-01-02"


def test_previous_valid_draw_date() -> None:
    assert previous_valid_draw_date("megasena", "2024-06-05") == "2024-06-04"
    assert previous_valid_draw_date("megasena", "2024-06-03") == "2024-06-01"
    assert previous_valid_draw_date("megasena", "2024-06-06") == "2024-06-06"


def test_next_result_is_the_first_valid_date_within_six_days() -> None:
    for day in _days_of_2024():
        result = date.fromisoformat(next_valid_draw_date("megasena", day.isoformat()))
        assert day <= result <= day + timedelta(days=6)
        assert weekday_index(result) in MEGASENA_DAYS
        between = [day + timedelta(days=i) for i in range((result - day).days)]
        assert not any(weekday_index(d) in MEGASENA_DAYS for d in between)


def test_previous_result_is_the_last_valid_date_within_six_days() -> None:
    for day in _days_of_2024():
        result = date.fromisoformat(previous_valid_draw_date("megasena", day.isoformat()))
        assert day - timedelta(days=6) <= result <= day
        assert weekday_index(result) in MEGASENA_DAYS
        between = [result + timedelta(days=i) for i in range(1, (day - result).days + 1)]
        assert not any(weekday_index(d) in MEGASENA_DAYS for d in between)


def test_single_weekday_variant_needs_a_full_week() -> None:
    variant = _wednesdays_only()
    assert next_valid_draw_date(variant, "2024-06-06") == "2024-06-12"
    assert previous_valid_draw_date(variant, "2024-06-04") == "2024-05-29"


def test_default_start_is_the_injected_today() -> None:
    assert next_valid_draw_date("megasena", today="2024-06-05") == "2024-06-06"
    assert previous_valid_draw_date("megasena", today=date(2024, 6, 5)) == "2024-06-04"


def test_exhausted_search_returns_start_date(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setattr(schedule, "SEARCH_WINDOW_DAYS", 0)
    with caplog.at_level(logging.WARNING, logger="bolao_app.schedule"):
        assert next_valid_draw_date("megasena", "2024-06-05") == "2024-06-05"
        assert previous_valid_draw_date("megasena", "2024-06-05") == "2024-06-05"
    assert "returning start date" in caplog.text


@pytest.mark.parametrize(
    ("scan", "start"),
    [
        (next_valid_draw_date, "9999-12-31"),
        (previous_valid_draw_date, "0001-01-01"),
    ],
)
def test_scan_stops_at_the_calendar_edge(
    scan: Callable[..., str], start: str, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING, logger="bolao_app.schedule"):
        assert scan("megasena", start) == start
    assert "returning start date" in caplog.text


def test_unparsable_start_date_is_returned_unchanged() -> None:
    assert next_valid_draw_date("megasena", "not-a-date") == "not-a-date"


def test_valid_draw_dates_in_month() -> None:
    dates = valid_draw_dates_in_month("megasena", 2024, 6)
    assert dates == [
        "2024-06-01",
        "2024-06-04",
        "2024-06-06",
        "2024-06-08",
        "2024-06-11",
        "2024-06-13",
        "2024-06-15",
        "2024-06-18",
        "2024-06-20",
        "2024-06-22",
        "2024-06-25",
        "2024-06-27",
        "2024-06-29",
    ]
    assert dates == sorted(dates)
    assert all(is_valid_draw_date("megasena", d) for d in dates)


def test_valid_draw_dates_in_leap_february() -> None:
    assert valid_draw_dates_in_month(_wednesdays_only(), 2024, 2) == [
        "2024-02-07",
        "2024-02-14",
        "2024-02-21",
        "2024-02-28",
    ]


def test_month_out_of_range_is_empty() -> None:
    assert valid_draw_dates_in_month("megasena", 2024, 13) == []
    assert valid_draw_dates_in_month("megasena", 2024, 0) == []


def test_schedule_description() -> None:
    assert schedule_description("megasena") == "sorteios às terças, quintas e sábados"
    assert schedule_description(_wednesdays_only()) == "sorteios às quartas"


@pytest.mark.parametrize(
    ("target", "days_until", "message"),
    [
        ("2024-06-03", -2, "Sorteio realizado há 2 dias"),
        ("2024-06-04", -1, "Sorteio realizado há 1 dia"),
        ("2024-06-05", 0, "Sorteio acontece hoje"),
        ("2024-06-06", 1, "Sorteio em 1 dia"),
        ("2024-06-08", 3, "Sorteio em 3 dias"),
    ],
)
def test_draw_status(target: str, days_until: int, message: str) -> None:
    status = draw_status(target, today="2024-06-05")
    assert status.days_until == days_until
    assert status.message == message
    assert status.has_occurred is (days_until < 0)
    assert status.is_today is (days_until == 0)
    assert status.is_pending is (days_until > 0)


def test_draw_status_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        draw_status("soon", today="2024-06-05")


def test_upcoming_draw_date_respects_cutoff() -> None:
    assert upcoming_draw_date("megasena", now=datetime(2024, 6, 4, 19, 59)) == "2024-06-04"
    assert upcoming_draw_date("megasena", now=datetime(2024, 6, 4, 20, 0)) == "2024-06-06"
    assert upcoming_draw_date("megasena", now=datetime(2024, 6, 5, 9, 0)) == "2024-06-06"
    assert upcoming_draw_date("megasena", now=datetime(2024, 6, 4, 21, 0), cutoff_hour=22) == "2024-06-04"


def test_next_draw_number() -> None:
    assert next_draw_number(2727) == 2728
    assert next_draw_number("2727") == 2728
