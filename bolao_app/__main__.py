"""Command-line entry point for draw schedules and ticket checks."""

from __future__ import annotations

import json
import logging
import os
import platform
import random
from datetime import date
from pathlib import Path
from typing import Any

import click

from . import __version__
from .analyzer import analyze_frequencies
from .config import AppConfig
from .contracts import HEALTH, report_header
from .exceptions import BolaoError, ConfigError
from .generator import format_numbers, generate_games
from .lotteries import LotteryVariant, VariantConfig, get_variant, list_variants
from .models import DrawResult, Ticket
from .results import check_pool_results, lookup_draw
from .schedule import (
    draw_status,
    is_valid_draw_date,
    next_valid_draw_date,
    parse_calendar_date,
    previous_valid_draw_date,
    schedule_description,
    upcoming_draw_date,
    valid_draw_dates_in_month,
)
from .simulator import run_simulation
from .sources import convert_api_response, fetch_latest_result

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

LOGGER = logging.getLogger("bolao_app")

lottery_option = click.option(
    "--lottery",
    default=LotteryVariant.MEGASENA.value,
    show_default=True,
    type=click.Choice([variant.value for variant in LotteryVariant]),
    help="Lottery variant.",
)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()), format=LOG_FORMAT, datefmt=LOG_DATEFMT
    )


def _echo_json(payload: Any, *, indent: int | None = 2) -> None:
    click.echo(json.dumps(payload, ensure_ascii=False, indent=indent))


def _today() -> date:
    override = os.environ.get("BOLAO_TODAY", "").strip()
    if override:
        try:
            return parse_calendar_date(override)
        except ValueError as exc:
            raise click.BadParameter("BOLAO_TODAY must be a YYYY-MM-DD date") from exc
    return date.today()


def _app_config(ctx: click.Context) -> AppConfig:
    return ctx.obj["config"]


def _load_json(path: str) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"{path} is not valid JSON: {exc}") from exc


def _load_tickets(path: str) -> list[Ticket]:
    data = _load_json(path)
    if isinstance(data, dict):
        data = data.get("tickets", [])
    if not isinstance(data, list):
        raise click.BadParameter(f"{path} must contain a list of tickets")
    tickets: list[Ticket] = []
    try:
        for index, item in enumerate(data, start=1):
            if isinstance(item, dict):
                tickets.append(Ticket.from_dict(item))
            else:
                tickets.append(Ticket(numbers=[int(n) for n in item], ticket_number=str(index)))
    except (TypeError, ValueError) as exc:
        raise click.BadParameter(f"{path} has a malformed ticket: {exc}") from exc
    return tickets


def _load_draw(path: str, variant: VariantConfig) -> DrawResult:
    data = _load_json(path)
    if isinstance(data, dict) and "dezenas" in data:
        try:
            return convert_api_response(data, variant)
        except BolaoError as exc:
            raise click.BadParameter(f"{path}: {exc}") from exc
    if not isinstance(data, dict):
        raise click.BadParameter(f"{path} must contain a draw object")
    if not str(data.get("draw_number") or "").strip():
        raise click.BadParameter(f"{path} has no draw_number")
    try:
        draw = DrawResult.from_dict(data)
    except (TypeError, ValueError) as exc:
        raise click.BadParameter(f"{path} has a malformed draw: {exc}") from exc
    if len(draw.numbers) != variant.numbers_per_game:
        raise click.BadParameter(
            f"{path} must list {variant.numbers_per_game} drawn numbers, got {len(draw.numbers)}"
        )
    return draw


@click.group()
@click.version_option(__version__, prog_name="bolao")
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Set the logging verbosity.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str) -> None:
    """Command-line interface for bolao_app."""

    _configure_logging(log_level)
    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = AppConfig.from_env()
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc


@cli.command("is-valid")
@click.argument("draw_date")
@lottery_option
def is_valid(draw_date: str, lottery: str) -> None:
    """Check whether DRAW_DATE (YYYY-MM-DD) is a draw day."""

    _echo_json({"lottery": lottery, "date": draw_date, "valid": is_valid_draw_date(lottery, draw_date)})


@cli.command("next-draw")
@click.option("--from", "from_date", default=None, help="Start date (YYYY-MM-DD); defaults to today.")
@lottery_option
def next_draw(from_date: str | None, lottery: str) -> None:
    """Print the first draw date on or after --from."""

    result = next_valid_draw_date(lottery, from_date, today=_today())
    _echo_json({"lottery": lottery, "from": from_date or _today().isoformat(), "date": result})


@cli.command("previous-draw")
@click.option("--from", "from_date", default=None, help="Start date (YYYY-MM-DD); defaults to today.")
@lottery_option
def previous_draw(from_date: str | None, lottery: str) -> None:
    """Print the last draw date on or before --from."""

    result = previous_valid_draw_date(lottery, from_date, today=_today())
    _echo_json({"lottery": lottery, "from": from_date or _today().isoformat(), "date": result})


@cli.command()
@click.argument("year", type=int)
@click.argument("month", type=click.IntRange(1, 12))
@lottery_option
def month(year: int, month: int, lottery: str) -> None:
    """List the draw dates of MONTH in YEAR."""

    _echo_json({"lottery": lottery, "year": year, "month": month, "dates": valid_draw_dates_in_month(lottery, year, month)})


@cli.command()
@lottery_option
@click.pass_context
def schedule(ctx: click.Context, lottery: str) -> None:
    """Describe the draw schedule and the upcoming draw."""

    config = get_variant(lottery)
    _echo_json(
        {
            "lottery": lottery,
            "name": config.name,
            "description": schedule_description(config),
            "schedule": config.schedule,
            "weekdays": sorted(config.draw_weekdays),
            "upcoming": upcoming_draw_date(config, cutoff_hour=_app_config(ctx).schedule.cutoff_hour),
        }
    )


@cli.command()
@click.argument("draw_date")
@click.option("--online/--offline", default=False, show_default=True, help="Also fetch the latest result.")
@lottery_option
@click.pass_context
def status(ctx: click.Context, draw_date: str, online: bool, lottery: str) -> None:
    """Show how far DRAW_DATE is from today."""

    try:
        parse_calendar_date(draw_date)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="DRAW_DATE") from exc

    if not online:
        _echo_json(draw_status(draw_date, today=_today()).to_dict())
        return

    app_config = _app_config(ctx)
    lookup = lookup_draw(
        lottery,
        draw_date,
        today=_today(),
        fetch_latest=lambda variant: fetch_latest_result(variant, config=app_config),
    )
    _echo_json(lookup.to_dict())


@cli.command()
@lottery_option
@click.pass_context
def latest(ctx: click.Context, lottery: str) -> None:
    """Fetch and print the latest official draw."""

    try:
        result = fetch_latest_result(lottery, config=_app_config(ctx))
    except BolaoError as exc:
        exc.log_error(LOGGER)
        _echo_json({"status": "error", "error": str(exc)})
        raise SystemExit(2) from exc
    _echo_json(result.to_dict())


@cli.command()
@click.argument("tickets_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--draw-file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Draw JSON to check against instead of fetching the latest result.",
)
@lottery_option
@click.option("--compact", is_flag=True, help="Emit JSON in a single line.")
@click.pass_context
def check(ctx: click.Context, tickets_file: str, draw_file: str | None, lottery: str, compact: bool) -> None:
    """Check the tickets in TICKETS_FILE against a draw."""

    config = get_variant(lottery)
    tickets = _load_tickets(tickets_file)
    draw = _load_draw(draw_file, config) if draw_file else None
    app_config = _app_config(ctx)

    outcome = check_pool_results(
        config,
        tickets,
        draw=draw,
        fetch_latest=lambda variant: fetch_latest_result(variant, config=app_config),
    )
    _echo_json(outcome.to_dict(), indent=None if compact else 2)
    if not outcome.ok and outcome.status != "no_tickets":
        raise SystemExit(2)


@cli.command()
@click.argument("tickets_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--top", default=6, show_default=True, type=click.IntRange(min=0), help="How many hot numbers to list.")
@click.option("--bottom", default=6, show_default=True, type=click.IntRange(min=0), help="How many cold numbers to list.")
@lottery_option
def frequencies(tickets_file: str, top: int, bottom: int, lottery: str) -> None:
    """Rank the numbers played across TICKETS_FILE."""

    analysis = analyze_frequencies(_load_tickets(tickets_file), lottery, top_count=top, bottom_count=bottom)
    _echo_json(analysis.to_dict())


@cli.command()
@click.argument("numbers", nargs=-1, required=True, type=int)
@click.option("--simulations", default=1000, show_default=True, type=click.IntRange(min=1))
@click.option("--investment", default=5.0, show_default=True, type=click.FloatRange(min=0), help="Cost of one bet.")
@click.option("--seed", default=None, type=int, help="Seed for reproducible runs.")
@lottery_option
def simulate(numbers: tuple[int, ...], simulations: int, investment: float, seed: int | None, lottery: str) -> None:
    """Play NUMBERS against random draws."""

    try:
        report = run_simulation(
            lottery,
            list(numbers),
            investment=investment,
            simulations=simulations,
            rng=random.Random(seed),
        )
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="NUMBERS") from exc
    _echo_json(report.to_dict())


@cli.command()
@click.option("--count", default=1, show_default=True, type=click.IntRange(min=1), help="How many games to generate.")
@click.option("--picks", default=None, type=int, help="Numbers per game; defaults to the minimum bet.")
@click.option("--favorite", "favorites", multiple=True, type=int, help="Number to include (repeatable).")
@click.option("--exclude", "excluded", multiple=True, type=int, help="Number to leave out (repeatable).")
@click.option("--allow-repeats", is_flag=True, help="Allow the same combination twice.")
@click.option("--seed", default=None, type=int, help="Seed for reproducible runs.")
@lottery_option
def generate(
    count: int,
    picks: int | None,
    favorites: tuple[int, ...],
    excluded: tuple[int, ...],
    allow_repeats: bool,
    seed: int | None,
    lottery: str,
) -> None:
    """Generate random games."""

    try:
        games = generate_games(
            lottery,
            count,
            picks=picks,
            favorites=favorites,
            exclude=excluded,
            avoid_repeats=not allow_repeats,
            rng=random.Random(seed),
        )
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    _echo_json(
        {
            "lottery": lottery,
            "games": [
                {"index": game.index, "numbers": list(game.numbers), "text": format_numbers(game.numbers)}
                for game in games
            ],
        }
    )


@cli.command()
@click.pass_context
def health(ctx: click.Context) -> None:
    """Offline self-check."""

    app_config = _app_config(ctx)
    lotteries = {
        variant.key.value: {
            "name": variant.name,
            "description": schedule_description(variant),
        }
        for variant in list_variants()
    }
    _echo_json(
        {
            **report_header(HEALTH),
            "status": "pass",
            "version": __version__,
            "checks": {
                "python": platform.python_version(),
                "lotteries": lotteries,
                "results_api_url": app_config.sources.results_api_url,
            },
        }
    )


if __name__ == "__main__":
    cli()
