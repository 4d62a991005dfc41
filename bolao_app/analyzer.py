"""Number frequency statistics across a pool's tickets."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from .lotteries import LotteryVariant, VariantConfig, get_variant
from .models import Ticket


@dataclass(frozen=True)
class NumberFrequency:
    """How often one number was played."""

    number: int
    frequency: int
    percentage: float
    is_hot: bool
    is_cold: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "number": self.number,
            "frequency": self.frequency,
            "percentage": round(self.percentage, 2),
            "is_hot": self.is_hot,
            "is_cold": self.is_cold,
        }


@dataclass
class FrequencyAnalysis:
    """Most and least played numbers."""

    top_numbers: list[NumberFrequency] = field(default_factory=list)
    cold_numbers: list[NumberFrequency] = field(default_factory=list)
    total_games: int = 0
    total_numbers_tracked: int = 0
    average_frequency: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "top_numbers": [item.to_dict() for item in self.top_numbers],
            "cold_numbers": [item.to_dict() for item in self.cold_numbers],
            "total_games": self.total_games,
            "total_numbers_tracked": self.total_numbers_tracked,
            "average_frequency": self.average_frequency,
        }


def _is_valid_game(numbers: Sequence[int], config: VariantConfig) -> bool:
    return len(numbers) == config.numbers_per_game and all(
        config.min_number <= number <= config.max_number for number in numbers
    )


def analyze_frequencies(
    tickets: Iterable[Ticket],
    variant: LotteryVariant | VariantConfig | str,
    *,
    top_count: int = 6,
    bottom_count: int = 6,
    hot_threshold: float = 1.5,
    cold_threshold: float = 0.5,
) -> FrequencyAnalysis:
    """Count plays per number over every valid game of ``tickets``.

    Every chunk counts toward ``total_games``; only complete, in-range games
    contribute to the frequencies.
    """

    config = get_variant(variant)
    size = config.numbers_per_game
    counts: Counter[int] = Counter()
    total_games = 0
    valid_games = 0

    for ticket in tickets:
        numbers = list(ticket.numbers)
        for start in range(0, len(numbers), size):
            chunk = numbers[start : start + size]
            total_games += 1
            if _is_valid_game(chunk, config):
                valid_games += 1
                counts.update(chunk)

    if not valid_games:
        return FrequencyAnalysis(total_games=total_games)

    average = sum(counts.values()) / len(counts)
    # Ties keep ascending number order.
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    frequencies = [
        NumberFrequency(
            number=number,
            frequency=frequency,
            percentage=frequency / valid_games * 100,
            is_hot=frequency > average * hot_threshold,
            is_cold=frequency < average * cold_threshold,
        )
        for number, frequency in ranked
    ]

    cold = frequencies[-bottom_count:] if bottom_count > 0 else []
    return FrequencyAnalysis(
        top_numbers=frequencies[:top_count] if top_count > 0 else [],
        cold_numbers=list(reversed(cold)),
        total_games=total_games,
        total_numbers_tracked=len(counts),
        average_frequency=round(average, 2),
    )
