"""Error taxonomy for the bolão toolkit.

Every error carries a machine-readable ``error_code``. Subclasses supply a
default code so callers only pass one when they know something more specific
(``http_404``, ``invalid_env``...).
"""

from __future__ import annotations

import logging
import traceback
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from .obs import get_correlation_id


class BolaoError(Exception):
    """Base error for draw lookups, ticket checks and configuration."""

    default_code: str | None = None

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        *,
        error_code: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.original_error = original_error
        self.error_code = error_code or self.default_code
        self.timestamp = datetime.now()
        self.context = dict(context or {})
        self.traceback = traceback.format_exc() if original_error else None
        super().__init__(self.get_error_message())

    def get_error_message(self) -> str:
        text = f"[{self.error_code}] {self.message}" if self.error_code else self.message
        if self.original_error is not None:
            text += f" (caused by {type(self.original_error).__name__})"
        return text

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "event": "error",
            "timestamp": self.timestamp.isoformat(),
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
        }
        correlation_id = get_correlation_id()
        if correlation_id:
            payload["correlation_id"] = correlation_id
        return payload

    def log_error(self, logger: logging.Logger) -> None:
        logger.error("%s", self.to_dict())
        if self.traceback:
            logger.debug("traceback=%s", self.traceback)


class ConfigError(BolaoError):
    """Bad ``BOLAO_*`` environment value."""

    default_code = "invalid_config"


class NetworkError(BolaoError):
    """The results API could not be reached or answered with an error."""

    default_code = "network_error"


class ParseError(BolaoError):
    """The results API answered with a payload we cannot read."""

    default_code = "invalid_payload"


class DrawUnavailableError(NetworkError):
    """No official draw result could be obtained."""

    default_code = "draw_unavailable"


class UnsupportedLotteryError(ValueError, BolaoError):
    """Unknown lottery variant; still a ``ValueError`` for plain callers."""

    default_code = "unsupported_lottery"

    def __init__(self, value: object) -> None:
        message = f"Unsupported lottery: {value!r}"
        ValueError.__init__(self, message)
        BolaoError.__init__(self, message, context={"lottery": str(value)})
