"""Pool-level orchestration: fetch the draw, check every ticket, summarize."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any

from .contracts import DRAW_LOOKUP, POOL_CHECK, report_header
from .exceptions import BolaoError
from .lotteries import LotteryVariant, VariantConfig, get_variant
from .matcher import check_tickets, summarize_batch
from .models import BatchSummary, DrawResult, DrawStatus, Ticket, TicketResult
from .obs import LogEvent, correlation_scope, logger_sink, metric, span
from .schedule import draw_status
from .sources import fetch_latest_result

LOGGER = logging.getLogger(__name__)

LatestFetcher = Callable[[VariantConfig], DrawResult]

STATUS_OK = "ok"
STATUS_ERROR = "error"
STATUS_NO_TICKETS = "no_tickets"


@dataclass
class PoolCheckOutcome:
    """Result of checking a pool's tickets against the latest draw.

    ``status`` keeps an upstream failure (``"error"``) apart from a check that
    simply found no hits (``"ok"`` with ``summary.max_hits == 0``).
    """

    status: str
    lottery: str
    results: list[TicketResult] = field(default_factory=list)
    summary: BatchSummary | None = None
    draw: DrawResult | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

    @property
    def draw_numbers(self) -> list[int]:
        return list(self.draw.numbers) if self.draw else []

    @property
    def draw_number(self) -> str | None:
        return self.draw.draw_number if self.draw else None

    def to_dict(self) -> dict[str, Any]:
        return {
            **report_header(POOL_CHECK),
            "status": self.status,
            "lottery": self.lottery,
            "draw_number": self.draw_number,
            "draw_numbers": self.draw_numbers,
            "summary": self.summary.to_dict() if self.summary else None,
            "results": [result.to_dict() for result in self.results],
            "error": self.error,
        }


def _default_fetcher(config: VariantConfig) -> DrawResult:
    return fetch_latest_result(config)


def check_pool_results(
    variant: LotteryVariant | VariantConfig | str,
    tickets: Iterable[Ticket],
    *,
    fetch_latest: LatestFetcher | None = None,
    draw: DrawResult | None = None,
    log_event: LogEvent | None = None,
) -> PoolCheckOutcome:
    """Check ``tickets`` against ``draw`` or, when omitted, the latest draw."""

    config = get_variant(variant)
    log = log_event or logger_sink(LOGGER)
    ticket_list = list(tickets)
    lottery = config.key.value

    if not ticket_list:
        log({"event": "pool_check_skipped", "reason": STATUS_NO_TICKETS, "lottery": lottery})
        return PoolCheckOutcome(status=STATUS_NO_TICKETS, lottery=lottery)

    attrs = {"lottery": lottery, "tickets": len(ticket_list)}
    with correlation_scope(str(uuid.uuid4())), span("check_pool", log, attrs=attrs):
        if draw is None:
            fetcher = fetch_latest or _default_fetcher
            try:
                draw = fetcher(config)
            except BolaoError as exc:
                exc.log_error(LOGGER)
                metric("draw_fetch_failed", log, tags={"lottery": lottery})
                return PoolCheckOutcome(status=STATUS_ERROR, lottery=lottery, error=str(exc))

        results = check_tickets(ticket_list, draw, config)
        summary = summarize_batch(results)
        metric("tickets_checked", log, value=len(results), tags={"lottery": lottery})
        log(
            {
                "event": "pool_checked",
                "lottery": lottery,
                "draw_number": draw.draw_number,
                **summary.to_dict(),
            }
        )

    return PoolCheckOutcome(
        status=STATUS_OK,
        lottery=lottery,
        results=results,
        summary=summary,
        draw=draw,
    )


@dataclass
class DrawLookup:
    """Draw status for a pool's date plus the result shown alongside it."""

    status: DrawStatus
    result: DrawResult | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            **report_header(DRAW_LOOKUP),
            "status": self.status.to_dict(),
            "result": self.result.to_dict() if self.result else None,
            "error": self.error,
        }


def lookup_draw(
    variant: LotteryVariant | VariantConfig | str,
    draw_date: str | date,
    *,
    today: str | date | None = None,
    fetch_latest: LatestFetcher | None = None,
) -> DrawLookup:
    """Resolve the status of ``draw_date`` and the result to display with it.

    For a pending draw the latest result is only shown for reference, so a
    failed fetch is not reported as an error. Once the draw date has been
    reached a failed fetch is an error.
    """

    config = get_variant(variant)
    status = draw_status(draw_date, today=today)
    fetcher = fetch_latest or _default_fetcher

    if status.is_pending:
        try:
            latest = fetcher(config)
        except BolaoError as exc:
            LOGGER.info("Latest %s result unavailable for reference: %s", config.name, exc)
            return DrawLookup(status=status)
        message = f"{status.message}. Último resultado: Concurso {latest.draw_number}"
        return DrawLookup(status=replace(status, message=message), result=latest)

    try:
        latest = fetcher(config)
    except BolaoError as exc:
        exc.log_error(LOGGER)
        return DrawLookup(
            status=replace(status, message="Erro ao carregar resultado"),
            error=str(exc),
        )

    if status.has_occurred:
        message = f"Resultado do concurso {latest.draw_number}"
    else:
        message = "Resultado disponível"
    return DrawLookup(status=replace(status, message=message), result=latest)
