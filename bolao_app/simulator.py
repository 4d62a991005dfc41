"""Monte Carlo simulation of repeated bets against random draws."""

from __future__ import annotations

import random
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from .lotteries import LotteryVariant, VariantConfig, get_variant
from .matcher import prize_value

MAX_PICKS = 15


@dataclass(frozen=True)
class HitOutcome:
    hits: int
    prize: int
    occurrences: int
    percentage: float
    probability: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "hits": self.hits,
            "prize": self.prize,
            "occurrences": self.occurrences,
            "percentage": round(self.percentage, 4),
            "probability": self.probability,
        }


@dataclass
class SimulationReport:
    simulations: int
    total_investment: float
    total_prize: int
    outcomes: list[HitOutcome] = field(default_factory=list)

    @property
    def net_result(self) -> float:
        return self.total_prize - self.total_investment

    @property
    def roi(self) -> float:
        if not self.total_investment:
            return 0.0
        return self.net_result / self.total_investment * 100

    def to_dict(self) -> dict[str, Any]:
        return {
            "simulations": self.simulations,
            "total_investment": self.total_investment,
            "total_prize": self.total_prize,
            "net_result": self.net_result,
            "roi": round(self.roi, 2),
            "outcomes": [outcome.to_dict() for outcome in self.outcomes],
        }


def _validate_numbers(numbers: Sequence[int], config: VariantConfig) -> None:
    if len(set(numbers)) != len(numbers):
        raise ValueError("Numbers must not repeat")
    if not config.numbers_per_game <= len(numbers) <= MAX_PICKS:
        raise ValueError(f"Pick between {config.numbers_per_game} and {MAX_PICKS} numbers")
    out_of_range = [n for n in numbers if not config.min_number <= n <= config.max_number]
    if out_of_range:
        raise ValueError(
            f"Numbers must be within {config.min_number}-{config.max_number}: {out_of_range}"
        )


def run_simulation(
    variant: LotteryVariant | VariantConfig | str,
    numbers: Sequence[int],
    *,
    investment: float,
    simulations: int,
    rng: random.Random | None = None,
) -> SimulationReport:
    """Play ``numbers`` against ``simulations`` random draws.

    Outcomes are sorted by hit count, highest first.
    """

    config = get_variant(variant)
    _validate_numbers(numbers, config)
    if simulations < 1:
        raise ValueError("simulations must be >= 1")
    if investment < 0:
        raise ValueError("investment must be >= 0")

    generator = rng or random.Random()
    pool = range(config.min_number, config.max_number + 1)
    picked = set(numbers)
    hit_counts: Counter[int] = Counter()
    total_prize = 0

    for _ in range(simulations):
        drawn = generator.sample(pool, config.numbers_per_game)
        hits = sum(1 for number in drawn if number in picked)
        hit_counts[hits] += 1
        total_prize += prize_value(hits, config)

    outcomes = [
        HitOutcome(
            hits=hits,
            prize=prize_value(hits, config),
            occurrences=count,
            percentage=count / simulations * 100,
            probability=f"1 em {round(simulations / count)}",
        )
        for hits, count in sorted(hit_counts.items(), reverse=True)
    ]
    return SimulationReport(
        simulations=simulations,
        total_investment=investment * simulations,
        total_prize=total_prize,
        outcomes=outcomes,
    )
