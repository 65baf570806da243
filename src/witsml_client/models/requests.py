from __future__ import annotations

from dataclasses import dataclass

import httpx

from witsml_client.models.server import Server
from witsml_client.shared.abort import AbortSignal


@dataclass(frozen=True)
class PendingCall:
    """A fully assembled request that may be suspended and resent once.

    Headers are captured at build time and reused verbatim on the retry.
    """

    method: str
    url: httpx.URL
    headers: dict[str, str]
    body: str | None = None
    abort_signal: AbortSignal | None = None
    target_server: Server | None = None
    source_server: Server | None = None

    def describe(self) -> str:
        return f"{self.method} {self.url}"
