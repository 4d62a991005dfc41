"""Compare purchased tickets against an official draw."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .lotteries import LotteryVariant, VariantConfig, get_variant
from .models import BatchSummary, DrawResult, Game, GameResult, Ticket, TicketResult


def split_into_games(ticket: Ticket, numbers_per_game: int) -> list[Game]:
    """Slice a ticket into consecutive games, dropping a trailing partial one."""

    if numbers_per_game < 1:
        return []
    numbers = list(ticket.numbers)
    complete = len(numbers) // numbers_per_game
    return [
        Game(index=i, numbers=tuple(numbers[i * numbers_per_game : (i + 1) * numbers_per_game]))
        for i in range(complete)
    ]


def match_game(game: Game, drawn_numbers: Iterable[int]) -> GameResult:
    # Each occurrence in the game is tested, so a repeated number counts twice.
    drawn = set(drawn_numbers)
    matched = tuple(number for number in game.numbers if number in drawn)
    return GameResult(game=game, hits=len(matched), matched_numbers=matched)


def prize_value(total_hits: int, variant: LotteryVariant | VariantConfig | str) -> int:
    """Fixed prize for an exact hit count; counts without a tier pay nothing."""

    return get_variant(variant).prize_table.get(total_hits, 0)


def match_ticket(
    ticket: Ticket,
    drawn_numbers: Sequence[int],
    numbers_per_game: int,
    *,
    variant: LotteryVariant | VariantConfig | str | None = None,
) -> TicketResult:
    """Match every game of ``ticket``.

    ``total_hits`` is the sum of hits over all games, not the best game. The
    prize is looked up from that sum when a variant is given.
    """

    games = [match_game(game, drawn_numbers) for game in split_into_games(ticket, numbers_per_game)]
    total_hits = sum(result.hits for result in games)
    prize = prize_value(total_hits, variant) if variant is not None else 0
    return TicketResult(ticket=ticket, games=games, total_hits=total_hits, prize_value=prize)


def check_tickets(
    tickets: Iterable[Ticket],
    draw: DrawResult,
    variant: LotteryVariant | VariantConfig | str,
) -> list[TicketResult]:
    config = get_variant(variant)
    return [
        match_ticket(ticket, draw.numbers, config.numbers_per_game, variant=config)
        for ticket in tickets
    ]


def summarize_batch(ticket_results: Sequence[TicketResult]) -> BatchSummary:
    if not ticket_results:
        raise ValueError("Cannot summarize an empty batch of ticket results")
    return BatchSummary(
        max_hits=max(result.total_hits for result in ticket_results),
        prize_winners=sum(1 for result in ticket_results if result.prize_value > 0),
        total_prize=sum(result.prize_value for result in ticket_results),
    )
