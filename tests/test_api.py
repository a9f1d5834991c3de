from __future__ import annotations

from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient

from companygate.api import create_app, status_for
from companygate.backends.base import BackendResponseEnvelope, Timeout
from companygate.backends.variants import VARIANT_V1, VARIANT_V2
from companygate.errors import (
    DateFormatError,
    DecodeError,
    DispatchError,
    TransportError,
    UnknownVariantError,
    ValidationError,
)
from companygate.registry import BackendRegistry
from companygate.service import LookupService

FIXED_NOW = datetime(2023, 6, 1, 12, 0, 0, tzinfo=UTC)


class _RoutingTransport:
    """Serves canned envelopes per URL; unknown URLs fail like a dead backend."""

    def __init__(self, routes: dict[str, BackendResponseEnvelope]) -> None:
        self.routes = routes
        self.urls: list[str] = []

    def get(self, url: str, *, timeout: Timeout | None = None) -> BackendResponseEnvelope:
        self.urls.append(url)
        if url not in self.routes:
            raise TransportError(url, "connection refused")
        return self.routes[url]


@pytest.fixture
def transport() -> _RoutingTransport:
    return _RoutingTransport(
        {
            "http://localhost:9002/companies/1234": BackendResponseEnvelope(
                VARIANT_V1, b'{"cn": "Acme", "created_on": "2001-01-01T00:00:00Z"}'
            ),
            "http://localhost:9001/companies/99": BackendResponseEnvelope(
                VARIANT_V2,
                b'{"company_name": "Beta Ltd", "tin": "1", "dissolved_on": "2021-01-02T15:04:05Z"}',
            ),
            "http://localhost:9001/companies/bad-date": BackendResponseEnvelope(
                VARIANT_V2, b'{"company_name": "Beta Ltd", "dissolved_on": "soon"}'
            ),
            "http://localhost:9001/companies/bad-body": BackendResponseEnvelope(
                VARIANT_V2, b"<html></html>"
            ),
            "http://localhost:9001/companies/html": BackendResponseEnvelope(
                "text/html", b"<html></html>"
            ),
        }
    )


@pytest.fixture
def client(transport: _RoutingTransport) -> TestClient:
    registry = BackendRegistry.from_args(
        ["us=http://localhost:9002", "uk=http://localhost:9001", "ru=http://localhost:9003"]
    )
    service = LookupService(registry, transport, clock=lambda: FIXED_NOW)
    return TestClient(create_app(service))


def test_status(client: TestClient) -> None:
    response = client.get("/status")

    assert response.status_code == 200
    assert response.content == b""


def test_company_v1(client: TestClient) -> None:
    response = client.get("/company", params={"id": "1234", "country_iso": "us"})

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    assert response.json() == {"id": "1234", "name": "Acme", "active": True, "active_until": ""}


def test_company_v2(client: TestClient) -> None:
    response = client.get("/company", params={"id": "99", "country_iso": "uk"})

    assert response.status_code == 200
    assert response.json() == {
        "id": "99",
        "name": "Beta Ltd",
        "active": False,
        "active_until": "2021-01-02T15:04:05Z",
    }


@pytest.mark.parametrize(
    "params",
    [
        {},
        {"id": "1234"},
        {"country_iso": "us"},
        {"id": "", "country_iso": "us"},
        {"id": "1234", "country_iso": "usa"},
    ],
)
def test_invalid_request_is_400(
    client: TestClient, transport: _RoutingTransport, params: dict[str, str]
) -> None:
    response = client.get("/company", params=params)

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"
    assert "fields" in response.json()
    assert transport.urls == []


@pytest.mark.parametrize(
    "params, status, kind",
    [
        ({"id": "1234", "country_iso": "de"}, 404, "dispatch_error"),
        ({"id": "1234", "country_iso": "ru"}, 503, "transport_error"),
        ({"id": "html", "country_iso": "uk"}, 502, "unknown_variant"),
        ({"id": "bad-body", "country_iso": "uk"}, 502, "decode_error"),
        ({"id": "bad-date", "country_iso": "uk"}, 502, "date_format_error"),
    ],
)
def test_errors_are_translated(
    client: TestClient, params: dict[str, str], status: int, kind: str
) -> None:
    response = client.get("/company", params=params)

    assert response.status_code == status
    assert response.json()["error"] == kind


def test_status_for_covers_every_error_kind() -> None:
    assert status_for(ValidationError({"id": "cannot be blank"})) == 400
    assert status_for(DispatchError("de")) == 404
    assert status_for(TransportError("http://x", "boom")) == 503
    assert status_for(UnknownVariantError(None)) == 502
    assert status_for(DecodeError("v1", "boom")) == 502
    assert status_for(DateFormatError("x", "boom")) == 502


def test_company_reads_id_query_key_only(
    client: TestClient, transport: _RoutingTransport
) -> None:
    response = client.get("/company", params={"company_id": "1234", "country_iso": "us"})

    assert response.status_code == 400
    assert "id" in response.json()["fields"]
    assert transport.urls == []
