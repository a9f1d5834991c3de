"""Lookup core: dispatch to the jurisdiction backend and normalise its answer."""

from __future__ import annotations

from urllib.parse import quote

from .activity import Clock, is_active, utc_now
from .backends.base import Timeout, Transport
from .backends.variants import decode_envelope
from .errors import DispatchError
from .models import CanonicalCompanyResult, LookupRequest
from .registry import BackendRegistry
from .utils.logging_setup import setup_logger

_BASE_LOGGER = setup_logger()
LOGGER = _BASE_LOGGER.getChild("service")

COMPANY_PATH = "/companies/"


class LookupService:
    """Stateless lookup core shared by all requests.

    Only the read-only registry is shared between calls, so :meth:`resolve`
    may run concurrently without locking.
    """

    def __init__(
        self,
        registry: BackendRegistry,
        transport: Transport,
        *,
        clock: Clock | None = None,
        timeout: Timeout | None = None,
    ) -> None:
        self.registry = registry
        self.transport = transport
        self._clock = clock or utc_now
        self._timeout = timeout

    def build_backend_url(self, request: LookupRequest) -> str:
        """Return ``{base}/companies/{id}`` for the request's jurisdiction.

        example: http://localhost:9002/companies/1234
        """

        base = self.registry.lookup(request.jurisdiction_code)
        if base is None:
            raise DispatchError(request.jurisdiction_code)
        return base + COMPANY_PATH + quote(request.id, safe="")

    def resolve(
        self,
        request: LookupRequest,
        *,
        timeout: Timeout | None = None,
    ) -> CanonicalCompanyResult:
        request.validate()

        url = self.build_backend_url(request)
        LOGGER.info(
            "Rufe Firmendaten ab für id=%s country_iso=%s",
            request.id,
            request.jurisdiction_code,
        )

        envelope = self.transport.get(url, timeout=timeout or self._timeout)
        payload = decode_envelope(envelope)

        closure_date = payload.closure_date
        active = is_active(closure_date, now=self._clock())

        LOGGER.debug(
            "Antwort %s normalisiert: name=%s active=%s active_until=%s",
            payload.variant,
            payload.name,
            active,
            closure_date,
        )
        return CanonicalCompanyResult(
            id=request.id,
            name=payload.name,
            active=active,
            active_until=closure_date,
        )
