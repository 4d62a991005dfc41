from __future__ import annotations

from typing import Any, Callable

import pytest
import requests

from bolao_app.config import AppConfig
from bolao_app.models import DrawResult, Ticket


@pytest.fixture()
def app_config() -> AppConfig:
    config = AppConfig.create_default()
    config.sources.results_api_url = "https://api.example.test/api"
    config.network.backoff_seconds = 0
    config.network.retry_attempts = 2
    return config


@pytest.fixture()
def api_payload() -> dict[str, Any]:
    return {
        "loteria": "megasena",
        "concurso": "2727",
        "data": "04/06/2024",
        "dezenas": ["01", "02", "03", "04", "05", "06"],
        "premiacoes": [
            {"acertos": "6", "vencedores": 0, "premio": "R$ 0,00"},
            {"acertos": "5", "vencedores": 45, "premio": "R$ 52.431,20"},
            {"acertos": "4", "vencedores": 3120, "premio": "R$ 1.080,31"},
        ],
        "acumulou": True,
        "acumuladaProxConcurso": "R$ 45.000.000,00",
        "dataProxConcurso": "06/06/2024",
        "proxConcurso": "2728",
    }


@pytest.fixture()
def draw() -> DrawResult:
    return DrawResult(
        draw_number="2727",
        draw_date="2024-06-04",
        numbers=[1, 2, 3, 4, 5, 6],
        lottery="megasena",
    )


@pytest.fixture()
def tickets() -> list[Ticket]:
    return [
        Ticket(numbers=[1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12], ticket_id="t1", ticket_number="001"),
        Ticket(numbers=[1, 2, 3, 4, 40, 50], ticket_id="t2", ticket_number="002"),
        Ticket(numbers=[20, 21, 22, 23, 24, 25], ticket_id="t3", ticket_number="003"),
    ]


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else repr(payload)

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)  # type: ignore[arg-type]


class FakeSession:
    """Replays queued responses (or raises queued exceptions) in order."""

    def __init__(self, *responses: FakeResponse | Exception) -> None:
        self.headers: dict[str, str] = {}
        self.calls: list[str] = []
        self.request_headers: list[dict[str, str]] = []
        self._responses = list(responses)
        self.closed = False

    def __enter__(self) -> "FakeSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.closed = True

    def get(
        self, url: str, headers: dict[str, str] | None = None, timeout: int | None = None  # noqa: ARG002
    ) -> FakeResponse:
        self.calls.append(url)
        self.request_headers.append(dict(headers or {}))
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture()
def fake_session() -> Callable[..., FakeSession]:
    return FakeSession


@pytest.fixture()
def fake_response() -> type[FakeResponse]:
    return FakeResponse
