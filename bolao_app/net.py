"""HTTP helpers for fetching draw results."""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import requests
import tenacity

from .config import NetworkConfig
from .exceptions import NetworkError, ParseError

LOGGER = logging.getLogger(__name__)

_RETRY_STATUS = {429, 500, 502, 503, 504}


@dataclass(frozen=True)
class FetchMetadata:
    """Metadata returned alongside a fetched JSON payload."""

    url: str
    user_agent: str
    fetched_at: datetime
    body: str
    payload: Any

    @property
    def sha256(self) -> str:
        """Return the SHA-256 digest of the response body."""
        return hashlib.sha256(self.body.encode("utf-8")).hexdigest()


class _TransientHTTPError(NetworkError):
    """Retryable upstream status (429 or 5xx)."""


def _headers(network: NetworkConfig) -> dict[str, str]:
    return {
        "User-Agent": network.user_agent,
        "Accept": "application/json",
        "Accept-Language": network.accept_language,
    }


def _get(session: requests.Session, url: str, network: NetworkConfig) -> requests.Response:
    try:
        response = session.get(url, headers=_headers(network), timeout=network.timeout)
    except (requests.ConnectionError, requests.Timeout) as exc:
        raise _TransientHTTPError("Connection to results API failed", exc, context={"url": url}) from exc
    except requests.RequestException as exc:
        # Redirect loops, bad URLs and broken bodies do not improve on retry.
        raise NetworkError(
            "Request to results API failed", exc, error_code="request_failed", context={"url": url}
        ) from exc
    if response.status_code in _RETRY_STATUS:
        raise _TransientHTTPError(
            f"Results API answered {response.status_code}",
            error_code=f"http_{response.status_code}",
            context={"url": url},
        )
    try:
        response.raise_for_status()
    except requests.HTTPError as exc:
        raise NetworkError(
            f"Results API answered {response.status_code}",
            exc,
            error_code=f"http_{response.status_code}",
            context={"url": url},
        ) from exc
    return response


def fetch_json(
    url: str,
    network: NetworkConfig | None = None,
    *,
    session: requests.Session | None = None,
) -> FetchMetadata:
    """GET ``url`` and decode the JSON body.

    Connection failures, timeouts, 429 and 5xx responses are retried with
    exponential back-off; the last failure is raised as ``NetworkError``.
    """

    network = network or NetworkConfig()
    if session is None:
        with requests.Session() as owned:
            response = _get_with_retry(owned, url, network)
    else:
        response = _get_with_retry(session, url, network)

    body = response.text
    try:
        payload = response.json()
    except ValueError as exc:
        raise ParseError("Results API returned invalid JSON", exc, context={"url": url}) from exc

    LOGGER.debug("Fetched %s (%d bytes)", url, len(body))
    return FetchMetadata(
        url=url,
        user_agent=network.user_agent,
        fetched_at=datetime.now(timezone.utc),
        body=body,
        payload=payload,
    )


def _get_with_retry(http: requests.Session, url: str, network: NetworkConfig) -> requests.Response:
    retrying = tenacity.Retrying(
        retry=tenacity.retry_if_exception_type(_TransientHTTPError),
        wait=tenacity.wait_exponential(multiplier=network.backoff_seconds, max=30),
        stop=tenacity.stop_after_attempt(network.retry_attempts),
        reraise=True,
        before_sleep=lambda retry_state: LOGGER.info(
            "Retrying %s in %.1f seconds (attempt %d)...",
            url,
            retry_state.next_action.sleep if retry_state.next_action else 0,
            retry_state.attempt_number,
        ),
    )
    try:
        response = retrying(_get, http, url, network)
    except _TransientHTTPError as exc:
        raise NetworkError(exc.message, exc.original_error or exc, error_code=exc.error_code, context=exc.context) from exc
    return response
