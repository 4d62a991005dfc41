"""Clients for official draw-result sources."""

from .caixa import convert_api_response, fetch_latest_result, fetch_result, parse_brl_amount

__all__ = [
    "convert_api_response",
    "fetch_latest_result",
    "fetch_result",
    "parse_brl_amount",
]
