"""FastAPI application exposing the lookup core over HTTP."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse
from starlette.responses import Response

from .errors import (
    DateFormatError,
    DecodeError,
    DispatchError,
    GatewayError,
    TransportError,
    UnknownVariantError,
    ValidationError,
)
from .models import LookupRequest
from .service import LookupService
from .utils.logging_setup import setup_logger

_BASE_LOGGER = setup_logger()
LOGGER = _BASE_LOGGER.getChild("api")

_STATUS_BY_ERROR: dict[type[GatewayError], int] = {
    ValidationError: 400,
    DispatchError: 404,
    TransportError: 503,
    UnknownVariantError: 502,
    DecodeError: 502,
    DateFormatError: 502,
}


def status_for(exc: GatewayError) -> int:
    """HTTP status for a gateway error, walking the class hierarchy."""

    for cls in type(exc).__mro__:
        status = _STATUS_BY_ERROR.get(cls)  # type: ignore[arg-type]
        if status is not None:
            return status
    return 500


def error_body(exc: GatewayError) -> dict[str, Any]:
    body: dict[str, Any] = {"error": exc.kind, "detail": str(exc)}
    if isinstance(exc, ValidationError):
        body["fields"] = exc.fields
    return body


def create_app(service: LookupService) -> FastAPI:
    app = FastAPI(title="companygate", version="0.1.0")
    app.state.service = service

    @app.exception_handler(GatewayError)
    async def _gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
        status = status_for(exc)
        if status >= 500:
            LOGGER.error("Lookup fehlgeschlagen (%s): %s", exc.kind, exc)
        else:
            LOGGER.info("Lookup abgelehnt (%s): %s", exc.kind, exc)
        return JSONResponse(status_code=status, content=error_body(exc))

    @app.get("/status")
    def get_status() -> Response:
        # Health check only; no backend is contacted.
        return Response(status_code=200)

    @app.get("/company")
    def get_company(
        company_id: str = Query(default="", alias="id"),
        country_iso: str = "",
    ) -> JSONResponse:
        lookup = LookupRequest(id=company_id, jurisdiction_code=country_iso)
        result = app.state.service.resolve(lookup)
        return JSONResponse(content=result.as_dict())

    return app
