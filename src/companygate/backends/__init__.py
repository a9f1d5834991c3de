"""Backend-Anbindung für ``companygate``."""

from .base import BackendResponseEnvelope, Transport
from .http import RequestsTransport
from .variants import (
    VARIANT_V1,
    VARIANT_V2,
    CompanyPayload,
    CompanyV1Payload,
    CompanyV2Payload,
    decode_envelope,
)

__all__ = [
    "BackendResponseEnvelope",
    "CompanyPayload",
    "CompanyV1Payload",
    "CompanyV2Payload",
    "RequestsTransport",
    "Transport",
    "VARIANT_V1",
    "VARIANT_V2",
    "decode_envelope",
]
