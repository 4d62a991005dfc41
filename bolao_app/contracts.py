"""Header stamped on every JSON report the CLI prints.

Consumers key on ``kind`` and refuse reports whose ``api_version`` they do
not know.
"""

from __future__ import annotations

API_VERSION = "v1"

POOL_CHECK = "pool_check"
DRAW_LOOKUP = "draw_lookup"
HEALTH = "health"


def report_header(kind: str) -> dict[str, str]:
    return {"api_version": API_VERSION, "kind": kind}
