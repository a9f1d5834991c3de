"""Error kinds raised by the lookup gateway.

Every per-request failure derives from :class:`GatewayError` and carries a
``kind`` string used by the HTTP layer. None of them terminates the process.
"""

from __future__ import annotations

from collections.abc import Mapping


class GatewayError(Exception):
    """Base class for all gateway errors."""

    kind = "gateway_error"


class ConfigurationError(GatewayError):
    """Invalid startup configuration (backend entries, YAML file, settings)."""

    kind = "configuration_error"


class ValidationError(GatewayError):
    """The inbound request failed validation before any backend was contacted."""

    kind = "validation_error"

    def __init__(self, fields: Mapping[str, str]) -> None:
        self.fields = dict(fields)
        summary = "; ".join(f"{name}: {reason}" for name, reason in self.fields.items())
        super().__init__(f"invalid request: {summary}")


class DispatchError(GatewayError):
    """No backend is configured for the requested jurisdiction."""

    kind = "dispatch_error"

    def __init__(self, jurisdiction_code: str) -> None:
        self.jurisdiction_code = jurisdiction_code
        super().__init__(f"no backend configured for jurisdiction {jurisdiction_code!r}")


class TransportError(GatewayError):
    """The backend could not be reached (connection, DNS, timeout)."""

    kind = "transport_error"

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"backend request to {url} failed: {reason}")


class UnknownVariantError(GatewayError):
    """The backend declared a response variant the gateway does not know."""

    kind = "unknown_variant"

    def __init__(self, content_type: str | None) -> None:
        self.content_type = content_type
        super().__init__(f"unsupported backend response variant: {content_type!r}")


class DecodeError(GatewayError):
    """The backend body is malformed for its declared variant."""

    kind = "decode_error"

    def __init__(self, variant: str, reason: str) -> None:
        self.variant = variant
        self.reason = reason
        super().__init__(f"unable to decode {variant} response: {reason}")


class DateFormatError(GatewayError):
    """A closure or dissolution date is not a valid RFC 3339 timestamp."""

    kind = "date_format_error"

    def __init__(self, value: str, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"error while parsing the date time {value!r}: {reason}")
