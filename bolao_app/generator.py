"""Random game generation for filling a pool's tickets."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable

from .lotteries import LotteryVariant, VariantConfig, get_variant
from .models import Game
from .simulator import MAX_PICKS

LOGGER = logging.getLogger(__name__)

# Share of each game that favourite numbers may take up.
FAVORITE_SHARE = 0.4
MAX_ATTEMPTS = 100


def _checked(numbers: Iterable[int], config: VariantConfig, label: str) -> list[int]:
    values = list(dict.fromkeys(int(n) for n in numbers))
    out_of_range = [n for n in values if not config.min_number <= n <= config.max_number]
    if out_of_range:
        raise ValueError(
            f"{label} numbers must be within {config.min_number}-{config.max_number}: {out_of_range}"
        )
    return values


def format_numbers(numbers: Iterable[int]) -> str:
    """Render numbers the way they are written on a betting slip: ``01 - 02 - 03``."""

    return " - ".join(f"{n:02d}" for n in numbers)


def generate_games(
    variant: LotteryVariant | VariantConfig | str,
    count: int,
    *,
    picks: int | None = None,
    favorites: Iterable[int] = (),
    exclude: Iterable[int] = (),
    avoid_repeats: bool = True,
    rng: random.Random | None = None,
) -> list[Game]:
    """Generate ``count`` games of unique, sorted numbers.

    Favourite numbers are placed first, up to 40% of ``picks``. Excluded
    numbers never appear. With ``avoid_repeats`` a duplicate combination is
    redrawn up to ``MAX_ATTEMPTS`` times before it is accepted.
    """

    config = get_variant(variant)
    picks = config.numbers_per_game if picks is None else picks
    if count < 1:
        raise ValueError("count must be >= 1")
    if not config.numbers_per_game <= picks <= MAX_PICKS:
        raise ValueError(f"picks must be between {config.numbers_per_game} and {MAX_PICKS}")

    excluded = set(_checked(exclude, config, "Excluded"))
    favored = [n for n in _checked(favorites, config, "Favorite") if n not in excluded]
    fixed = favored[: int(picks * FAVORITE_SHARE)]
    pool = [
        n
        for n in range(config.min_number, config.max_number + 1)
        if n not in excluded and n not in fixed
    ]
    remaining = picks - len(fixed)
    if len(pool) < remaining:
        raise ValueError(f"Only {len(pool) + len(fixed)} numbers are left to pick {picks} from")

    generator = rng or random.Random()
    seen: set[tuple[int, ...]] = set()
    games: list[Game] = []
    for index in range(count):
        for _ in range(MAX_ATTEMPTS):
            numbers = tuple(sorted(fixed + generator.sample(pool, remaining)))
            if not avoid_repeats or numbers not in seen:
                break
        else:
            LOGGER.warning("Accepting repeated game %s after %d attempts", format_numbers(numbers), MAX_ATTEMPTS)
        seen.add(numbers)
        games.append(Game(index=index, numbers=numbers))
    return games
