"""``requests``-based transport to the jurisdiction backends."""

from __future__ import annotations

from collections.abc import Sequence

import requests

from ..errors import TransportError
from ..utils.logging_setup import setup_logger
from .base import BackendResponseEnvelope, Timeout

_BASE_LOGGER = setup_logger()
LOGGER = _BASE_LOGGER.getChild("backends.http")

DEFAULT_TIMEOUT: Timeout = (5.0, 30.0)


def normalise_timeout(timeout: Sequence[float] | float | None) -> Timeout:
    """Turn a scalar, a one- or two-element sequence into ``(connect, read)``."""

    if timeout is None:
        return DEFAULT_TIMEOUT
    if isinstance(timeout, float | int):
        return (float(timeout), DEFAULT_TIMEOUT[1])
    if len(timeout) == 0:
        return DEFAULT_TIMEOUT
    if len(timeout) == 1:
        return (float(timeout[0]), DEFAULT_TIMEOUT[1])
    return (float(timeout[0]), float(timeout[1]))


class RequestsTransport:
    """Transport that performs a single GET per call, without retries."""

    def __init__(self, timeout: Sequence[float] | float | None = None) -> None:
        self._timeout = normalise_timeout(timeout)

    @property
    def timeout(self) -> Timeout:
        return self._timeout

    def get(self, url: str, *, timeout: Timeout | None = None) -> BackendResponseEnvelope:
        effective_timeout = timeout or self._timeout
        LOGGER.debug("GET %s (timeout=%s)", url, effective_timeout)
        try:
            response = requests.get(url, timeout=effective_timeout)
        except requests.RequestException as exc:
            LOGGER.error("Backend nicht erreichbar: %s (%s)", url, exc)
            raise TransportError(url, str(exc)) from exc

        if response.status_code >= 400:
            LOGGER.warning("Backend %s antwortet mit Status %s", url, response.status_code)

        return BackendResponseEnvelope(
            content_type=response.headers.get("Content-Type"),
            body=response.content,
            status_code=response.status_code,
        )
