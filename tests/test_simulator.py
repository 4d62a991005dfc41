from __future__ import annotations

import random
from collections.abc import Sequence

import pytest

from bolao_app.simulator import run_simulation


class FixedDraws(random.Random):
    def sample(self, population: Sequence[int], k: int, **kwargs: object) -> list[int]:  # type: ignore[override]  # noqa: ARG002
        return [1, 2, 3, 4, 5, 6][:k]


def test_every_draw_a_jackpot() -> None:
    report = run_simulation("megasena", [1, 2, 3, 4, 5, 6], investment=5.0, simulations=10, rng=FixedDraws())

    assert report.total_prize == 500_000_000
    assert report.total_investment == 50.0
    assert report.net_result == 500_000_000 - 50.0
    assert [outcome.hits for outcome in report.outcomes] == [6]
    assert report.outcomes[0].probability == "1 em 1"
    assert report.outcomes[0].percentage == 100.0


def test_seeded_runs_are_reproducible() -> None:
    numbers = [5, 12, 23, 34, 45, 56, 60]
    first = run_simulation("megasena", numbers, investment=6.0, simulations=200, rng=random.Random(7))
    second = run_simulation("megasena", numbers, investment=6.0, simulations=200, rng=random.Random(7))

    assert first.to_dict() == second.to_dict()
    assert sum(outcome.occurrences for outcome in first.outcomes) == 200
    hits = [outcome.hits for outcome in first.outcomes]
    assert hits == sorted(hits, reverse=True)


def test_free_bets_have_zero_roi() -> None:
    report = run_simulation("megasena", [1, 2, 3, 4, 5, 6], investment=0, simulations=1, rng=random.Random(1))
    assert report.roi == 0.0


@pytest.mark.parametrize(
    "numbers",
    [
        [1, 2, 3, 4, 5],
        [1, 1, 2, 3, 4, 5],
        [0, 1, 2, 3, 4, 5],
        [1, 2, 3, 4, 5, 61],
        list(range(1, 17)),
    ],
)
def test_invalid_numbers_are_rejected(numbers: list[int]) -> None:
    with pytest.raises(ValueError):
        run_simulation("megasena", numbers, investment=5.0, simulations=1)


def test_simulations_must_be_positive() -> None:
    with pytest.raises(ValueError):
        run_simulation("megasena", [1, 2, 3, 4, 5, 6], investment=5.0, simulations=0)
