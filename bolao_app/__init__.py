"""Draw schedules and ticket checking for lottery pools (bolões)."""

__version__ = "1.0.0"

from .exceptions import BolaoError, DrawUnavailableError
from .generator import generate_games
from .lotteries import LotteryVariant, get_variant
from .matcher import match_game, match_ticket, prize_value, split_into_games, summarize_batch
from .models import DrawResult, Ticket
from .results import check_pool_results
from .schedule import (
    is_valid_draw_date,
    next_valid_draw_date,
    previous_valid_draw_date,
    schedule_description,
    valid_draw_dates_in_month,
)

__all__ = [
    "BolaoError",
    "DrawUnavailableError",
    "DrawResult",
    "LotteryVariant",
    "Ticket",
    "check_pool_results",
    "generate_games",
    "get_variant",
    "is_valid_draw_date",
    "match_game",
    "match_ticket",
    "next_valid_draw_date",
    "previous_valid_draw_date",
    "prize_value",
    "schedule_description",
    "split_into_games",
    "summarize_batch",
    "valid_draw_dates_in_month",
]
