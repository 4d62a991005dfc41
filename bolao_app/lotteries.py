"""Static configuration for the supported lottery variants."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .exceptions import UnsupportedLotteryError


class LotteryVariant(str, Enum):
    """Closed set of lottery identifiers."""

    MEGASENA = "megasena"


@dataclass(frozen=True)
class VariantConfig:
    """Immutable draw rules for one lottery variant.

    ``draw_weekdays`` uses Sunday=0 through Saturday=6.
    """

    key: LotteryVariant
    name: str
    api_name: str
    draw_weekdays: frozenset[int]
    numbers_per_game: int
    number_range: tuple[int, int]
    schedule: str
    prize_table: Mapping[int, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.draw_weekdays:
            raise ValueError(f"{self.key.value}: draw_weekdays must not be empty")
        invalid = sorted(day for day in self.draw_weekdays if not 0 <= day <= 6)
        if invalid:
            raise ValueError(f"{self.key.value}: weekdays out of range: {invalid}")
        if self.numbers_per_game < 1:
            raise ValueError(f"{self.key.value}: numbers_per_game must be positive")
        low, high = self.number_range
        if low > high:
            raise ValueError(f"{self.key.value}: invalid number range {self.number_range}")
        object.__setattr__(self, "prize_table", MappingProxyType(dict(self.prize_table)))

    @property
    def min_number(self) -> int:
        return self.number_range[0]

    @property
    def max_number(self) -> int:
        return self.number_range[1]


VARIANTS: Mapping[LotteryVariant, VariantConfig] = MappingProxyType(
    {
        LotteryVariant.MEGASENA: VariantConfig(
            key=LotteryVariant.MEGASENA,
            name="Mega-Sena",
            api_name="megasena",
            draw_weekdays=frozenset({2, 4, 6}),
            numbers_per_game=6,
            number_range=(1, 60),
            schedule="Terças, quintas e sábados às 20h",
            prize_table={6: 50_000_000, 5: 50_000, 4: 1_000},
        ),
    }
)


def get_variant(value: LotteryVariant | VariantConfig | str) -> VariantConfig:
    """Resolve a variant member, its string value or a config row."""

    if isinstance(value, VariantConfig):
        return value
    try:
        key = LotteryVariant(value.strip().lower() if isinstance(value, str) else value)
    except ValueError as exc:
        raise UnsupportedLotteryError(value) from exc
    return VARIANTS[key]


def list_variants() -> list[VariantConfig]:
    return [VARIANTS[key] for key in LotteryVariant]
