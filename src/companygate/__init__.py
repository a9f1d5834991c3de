"""Zentrale Exporte für das ``companygate``-Paket."""

from .activity import is_active, parse_timestamp
from .errors import (
    ConfigurationError,
    DateFormatError,
    DecodeError,
    DispatchError,
    GatewayError,
    TransportError,
    UnknownVariantError,
    ValidationError,
)
from .models import CanonicalCompanyResult, LookupRequest
from .registry import BackendRegistry, load_backends_yaml, parse_backend_entry
from .service import LookupService
from .utils.logging_setup import setup_logger

__all__ = [
    "BackendRegistry",
    "CanonicalCompanyResult",
    "ConfigurationError",
    "DateFormatError",
    "DecodeError",
    "DispatchError",
    "GatewayError",
    "LookupRequest",
    "LookupService",
    "TransportError",
    "UnknownVariantError",
    "ValidationError",
    "is_active",
    "load_backends_yaml",
    "parse_backend_entry",
    "parse_timestamp",
    "setup_logger",
]
