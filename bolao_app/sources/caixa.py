"""Client for the public Caixa lottery results API."""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Any

import requests

from ..config import AppConfig
from ..exceptions import DrawUnavailableError, NetworkError, ParseError
from ..lotteries import VARIANTS, LotteryVariant, VariantConfig, get_variant
from ..models import DrawResult, PrizeTier
from ..net import fetch_json

LOGGER = logging.getLogger(__name__)

_NON_AMOUNT = re.compile(r"[^\d,]")
_BR_DATE = re.compile(r"^\s*(\d{1,2})/(\d{1,2})/(\d{4})\s*$")


def parse_brl_amount(raw: Any) -> float:
    """Parse a Brazilian currency string into a float.

    Examples:
    - "R$ 1.234,56" -> 1234.56
    - "50.000.000,00" -> 50000000.0
    - "" -> 0.0
    """

    if isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        return float(raw)
    cleaned = _NON_AMOUNT.sub("", str(raw or "")).replace(",", ".")
    try:
        return float(cleaned)
    except ValueError:
        LOGGER.debug("Unable to parse monetary value from %s", raw)
        return 0.0


def _parse_br_date(raw: Any) -> str | None:
    match = _BR_DATE.match(str(raw or ""))
    if not match:
        return None
    day, month, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def _lottery_for_api_name(api_name: Any) -> str | None:
    for key, config in VARIANTS.items():
        if config.api_name == api_name:
            return key.value
    return None


def _prize_tier(raw: dict[str, Any]) -> PrizeTier:
    hits = raw.get("acertos", raw.get("descricao", ""))
    winners = raw.get("vencedores", raw.get("ganhadores", 0))
    prize = raw.get("premio", raw.get("valorPremio", ""))
    try:
        winners_count = int(winners or 0)
    except (TypeError, ValueError) as exc:
        raise ParseError("Invalid winners count in prize tier", exc, context={"tier": raw}) from exc
    return PrizeTier(hits=str(hits).strip(), winners=winners_count, prize=str(prize).strip())


def convert_api_response(
    payload: Any,
    variant: LotteryVariant | VariantConfig | str | None = None,
) -> DrawResult:
    """Normalize a results-API payload into a :class:`DrawResult`."""

    if not isinstance(payload, dict):
        raise ParseError("Results API payload is not an object", context={"type": type(payload).__name__})

    concurso = payload.get("concurso")
    if concurso in (None, ""):
        raise ParseError("Results API payload has no draw number", error_code="missing_concurso")

    draw_date = _parse_br_date(payload.get("data"))
    if draw_date is None:
        raise ParseError(
            "Results API payload has an invalid draw date",
            error_code="invalid_date",
            context={"data": payload.get("data")},
        )

    dezenas = payload.get("dezenas")
    if not isinstance(dezenas, list) or not dezenas:
        raise ParseError("Results API payload has no drawn numbers", error_code="missing_dezenas")
    try:
        numbers = [int(str(value).strip()) for value in dezenas]
    except ValueError as exc:
        raise ParseError("Drawn numbers are not integers", exc, context={"dezenas": dezenas}) from exc

    premiacoes = payload.get("premiacoes") or []
    prizes = [_prize_tier(item) for item in premiacoes if isinstance(item, dict)]

    lottery = get_variant(variant).key.value if variant is not None else _lottery_for_api_name(payload.get("loteria"))
    next_draw = payload.get("proxConcurso")

    return DrawResult(
        draw_number=str(concurso),
        draw_date=draw_date,
        numbers=numbers,
        accumulated=bool(payload.get("acumulou", False)),
        prizes=prizes,
        lottery=lottery,
        next_draw_number=str(next_draw) if next_draw not in (None, "") else None,
        next_draw_date=_parse_br_date(payload.get("dataProxConcurso")),
    )


def _fetch(
    variant: LotteryVariant | VariantConfig | str,
    draw: str,
    config: AppConfig | None,
    session: requests.Session | None,
) -> DrawResult:
    lottery = get_variant(variant)
    cfg = config or AppConfig.create_default()
    url = cfg.sources.result_url(lottery.api_name, draw)
    try:
        metadata = fetch_json(url, cfg.network, session=session)
    except NetworkError as exc:
        raise DrawUnavailableError(
            f"Could not retrieve {lottery.name} draw {draw}",
            exc,
            error_code=exc.error_code,
            context={"url": url, "lottery": lottery.key.value},
        ) from exc
    result = convert_api_response(metadata.payload, lottery)
    LOGGER.info("Fetched %s draw %s (%s)", lottery.name, result.draw_number, result.draw_date)
    return result


def fetch_latest_result(
    variant: LotteryVariant | VariantConfig | str,
    *,
    config: AppConfig | None = None,
    session: requests.Session | None = None,
) -> DrawResult:
    return _fetch(variant, "latest", config, session)


def fetch_result(
    variant: LotteryVariant | VariantConfig | str,
    draw_number: int | str,
    *,
    config: AppConfig | None = None,
    session: requests.Session | None = None,
) -> DrawResult:
    text = str(draw_number).strip()
    if not text.isdigit() or int(text) <= 0:
        raise ValueError(f"Draw number must be a positive integer: {draw_number!r}")
    return _fetch(variant, text, config, session)
