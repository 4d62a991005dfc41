"""Data models for tickets, draws and match results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Ticket:
    """A purchased entry: one or more games laid out back to back."""

    numbers: list[int]
    ticket_id: str | None = None
    ticket_number: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Ticket":
        ticket_id = data.get("id")
        ticket_number = data.get("ticket_number", data.get("ticketNumber"))
        return cls(
            numbers=[int(n) for n in data.get("numbers", [])],
            ticket_id=str(ticket_id) if ticket_id is not None else None,
            ticket_number=str(ticket_number) if ticket_number is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.ticket_id, "ticket_number": self.ticket_number, "numbers": list(self.numbers)}


@dataclass(frozen=True)
class Game:
    """A fixed-size slice of a ticket."""

    index: int
    numbers: tuple[int, ...]


@dataclass
class PrizeTier:
    """Winners and prize text reported by the draw for one hit count."""

    hits: str
    winners: int
    prize: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PrizeTier":
        return cls(
            hits=str(data.get("hits", "")).strip(),
            winners=int(data.get("winners", 0) or 0),
            prize=str(data.get("prize", "")).strip(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"hits": self.hits, "winners": self.winners, "prize": self.prize}


@dataclass
class DrawResult:
    """Official result of one draw."""

    draw_number: str
    draw_date: str
    numbers: list[int]
    accumulated: bool = False
    prizes: list[PrizeTier] = field(default_factory=list)
    lottery: str | None = None
    next_draw_number: str | None = None
    next_draw_date: str | None = None

    @property
    def winners(self) -> int:
        return sum(tier.winners for tier in self.prizes)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DrawResult":
        return cls(
            draw_number=str(data.get("draw_number", "")),
            draw_date=str(data.get("draw_date", "")),
            numbers=[int(n) for n in data.get("numbers", [])],
            accumulated=bool(data.get("accumulated", False)),
            prizes=[PrizeTier.from_dict(p) for p in data.get("prizes", []) or []],
            lottery=data.get("lottery"),
            next_draw_number=data.get("next_draw_number"),
            next_draw_date=data.get("next_draw_date"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "lottery": self.lottery,
            "draw_number": self.draw_number,
            "draw_date": self.draw_date,
            "numbers": list(self.numbers),
            "accumulated": self.accumulated,
            "winners": self.winners,
            "prizes": [tier.to_dict() for tier in self.prizes],
            "next_draw_number": self.next_draw_number,
            "next_draw_date": self.next_draw_date,
        }


@dataclass(frozen=True)
class GameResult:
    """One game compared against one draw."""

    game: Game
    hits: int
    matched_numbers: tuple[int, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.game.index,
            "numbers": list(self.game.numbers),
            "hits": self.hits,
            "matched_numbers": list(self.matched_numbers),
        }


@dataclass
class TicketResult:
    """All games of a ticket compared against one draw."""

    ticket: Ticket
    games: list[GameResult]
    total_hits: int
    prize_value: int = 0

    @property
    def matched_numbers(self) -> list[int]:
        return [number for result in self.games for number in result.matched_numbers]

    def to_dict(self) -> dict[str, Any]:
        return {
            "ticket": self.ticket.to_dict(),
            "total_hits": self.total_hits,
            "matched_numbers": self.matched_numbers,
            "prize_value": self.prize_value,
            "games": [result.to_dict() for result in self.games],
        }


@dataclass(frozen=True)
class BatchSummary:
    """Aggregate figures over a batch of ticket results."""

    max_hits: int
    prize_winners: int
    total_prize: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "max_hits": self.max_hits,
            "prize_winners": self.prize_winners,
            "total_prize": self.total_prize,
        }


@dataclass(frozen=True)
class DrawStatus:
    """Where a draw date sits relative to today."""

    draw_date: str
    days_until: int
    has_occurred: bool
    is_today: bool
    is_pending: bool
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "draw_date": self.draw_date,
            "days_until": self.days_until,
            "has_occurred": self.has_occurred,
            "is_today": self.is_today,
            "is_pending": self.is_pending,
            "message": self.message,
        }
