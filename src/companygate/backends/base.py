"""Backend transport interface and shared types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

Timeout = tuple[float, float]


@dataclass(frozen=True)
class BackendResponseEnvelope:
    """Raw backend answer: the declared variant plus the undecoded body."""

    content_type: str | None
    body: bytes
    status_code: int | None = None


class Transport(Protocol):
    """Protocol defining the outbound HTTP GET used by the lookup core."""

    def get(self, url: str, *, timeout: Timeout | None = None) -> BackendResponseEnvelope:
        """Fetch ``url`` and return the envelope, raising ``TransportError`` on failure."""

        ...
