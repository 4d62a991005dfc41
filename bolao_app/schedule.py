"""Draw-date arithmetic for the supported lottery variants.

Every function here is pure: the current date is only read from the host
clock when the caller does not pass ``today``/``now`` explicitly. Calendar
dates travel as ``YYYY-MM-DD`` strings and are parsed component-wise, so a
timestamp such as ``2024-06-04T23:30:00-03:00`` is still read as June 4th.
"""

from __future__ import annotations

import logging
from calendar import monthrange
from datetime import date, datetime, timedelta

from .lotteries import LotteryVariant, VariantConfig, get_variant
from .models import DrawStatus

LOGGER = logging.getLogger(__name__)

# Longest gap between two draw weekdays is 7 days; twice that is always enough.
SEARCH_WINDOW_DAYS = 14
DEFAULT_CUTOFF_HOUR = 20

_WEEKDAY_PLURALS = {
    0: "domingos",
    1: "segundas",
    2: "terças",
    3: "quartas",
    4: "quintas",
    5: "sextas",
    6: "sábados",
}

Variant = LotteryVariant | VariantConfig | str
DateLike = str | date


def parse_calendar_date(value: DateLike) -> date:
    """Parse ``YYYY-MM-DD`` (optionally followed by a time) into a ``date``."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Unsupported date value: {value!r}")
    text = value.strip().split("T", 1)[0].split(" ", 1)[0]
    parts = text.split("-")
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        raise ValueError(f"Invalid calendar date: {value!r}")
    year, month, day = (int(part) for part in parts)
    return date(year, month, day)


def weekday_index(day: date) -> int:
    """Weekday with Sunday=0 through Saturday=6."""

    return day.isoweekday() % 7


def _today(today: DateLike | None) -> date:
    if today is None:
        return date.today()
    return parse_calendar_date(today)


def is_valid_draw_date(variant: Variant, value: DateLike) -> bool:
    config = get_variant(variant)
    try:
        day = parse_calendar_date(value)
    except ValueError as exc:
        LOGGER.warning("Could not validate draw date %r for %s: %s", value, config.key.value, exc)
        return False
    return weekday_index(day) in config.draw_weekdays


def _scan(variant: Variant, from_date: DateLike | None, today: DateLike | None, step: int) -> str:
    config = get_variant(variant)
    if from_date is None:
        start = _today(today)
    else:
        try:
            start = parse_calendar_date(from_date)
        except ValueError as exc:
            LOGGER.warning("Invalid start date %r: %s", from_date, exc)
            return str(from_date)

    for offset in range(SEARCH_WINDOW_DAYS + 1):
        try:
            candidate = start + timedelta(days=offset * step)
        except OverflowError:
            break
        if weekday_index(candidate) in config.draw_weekdays:
            return candidate.isoformat()

    LOGGER.warning(
        "No %s draw within %d days of %s; returning start date",
        config.key.value,
        SEARCH_WINDOW_DAYS,
        start.isoformat(),
    )
    return start.isoformat()


def next_valid_draw_date(
    variant: Variant, from_date: DateLike | None = None, *, today: DateLike | None = None
) -> str:
    """Return ``from_date`` if it is a draw day, otherwise the next one.

    When nothing is found inside the search window the start date is returned
    unchanged, so the result is not guaranteed to be a draw day.
    """

    return _scan(variant, from_date, today, 1)


def previous_valid_draw_date(
    variant: Variant, from_date: DateLike | None = None, *, today: DateLike | None = None
) -> str:
    """Mirror of :func:`next_valid_draw_date`, searching backwards."""

    return _scan(variant, from_date, today, -1)


def valid_draw_dates_in_month(variant: Variant, year: int, month: int) -> list[str]:
    config = get_variant(variant)
    if not 1 <= month <= 12:
        LOGGER.warning("Month out of range: %s-%s", year, month)
        return []
    _, last_day = monthrange(year, month)
    dates: list[str] = []
    for day_number in range(1, last_day + 1):
        day = date(year, month, day_number)
        if weekday_index(day) in config.draw_weekdays:
            dates.append(day.isoformat())
    return dates


def schedule_description(variant: Variant) -> str:
    config = get_variant(variant)
    names = [_WEEKDAY_PLURALS[day] for day in sorted(config.draw_weekdays)]
    if len(names) == 1:
        joined = names[0]
    else:
        joined = ", ".join(names[:-1]) + " e " + names[-1]
    return f"sorteios às {joined}"


def _plural_days(count: int) -> str:
    return "dia" if count == 1 else "dias"


def draw_status(draw_date: DateLike, *, today: DateLike | None = None) -> DrawStatus:
    """Describe whether ``draw_date`` is past, today or upcoming.

    Raises ``ValueError`` for an unparsable ``draw_date``.
    """

    target = parse_calendar_date(draw_date)
    days_until = (target - _today(today)).days

    if days_until < 0:
        message = f"Sorteio realizado há {abs(days_until)} {_plural_days(abs(days_until))}"
    elif days_until == 0:
        message = "Sorteio acontece hoje"
    else:
        message = f"Sorteio em {days_until} {_plural_days(days_until)}"

    return DrawStatus(
        draw_date=target.isoformat(),
        days_until=days_until,
        has_occurred=days_until < 0,
        is_today=days_until == 0,
        is_pending=days_until > 0,
        message=message,
    )


def upcoming_draw_date(
    variant: Variant,
    *,
    now: datetime | None = None,
    cutoff_hour: int = DEFAULT_CUTOFF_HOUR,
) -> str:
    """Next draw a ticket can still be bought for.

    A draw day counts as upcoming until ``cutoff_hour``; after that the search
    starts tomorrow.
    """

    config = get_variant(variant)
    current = now or datetime.now()
    today = current.date()
    if weekday_index(today) in config.draw_weekdays and current.hour < cutoff_hour:
        return today.isoformat()
    return next_valid_draw_date(config, today + timedelta(days=1))


def next_draw_number(last_draw_number: int | str) -> int:
    return int(last_draw_number) + 1
