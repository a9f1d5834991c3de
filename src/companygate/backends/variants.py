"""Decoding of the two backend response variants.

The backend announces its payload shape through the ``Content-Type`` header.
Exactly one payload model belongs to each recognised value; anything else is
rejected instead of guessed.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import ClassVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..errors import DecodeError, UnknownVariantError
from ..utils.logging_setup import setup_logger
from .base import BackendResponseEnvelope

_BASE_LOGGER = setup_logger()
LOGGER = _BASE_LOGGER.getChild("backends.variants")

VARIANT_V1 = "application/x-company-v1"
VARIANT_V2 = "application/x-company-v2"


class CompanyV1Payload(BaseModel):
    """Variant A: ``cn`` / ``created_on`` / ``closed_on``."""

    variant: ClassVar[str] = VARIANT_V1

    cn: str | None = None
    created_on: str | None = None
    closed_on: str | None = None

    @property
    def name(self) -> str:
        return self.cn or ""

    @property
    def closure_date(self) -> str:
        return self.closed_on or ""


class CompanyV2Payload(BaseModel):
    """Variant B: ``company_name`` / ``tin`` / ``dissolved_on``."""

    variant: ClassVar[str] = VARIANT_V2

    company_name: str | None = None
    tin: str | None = None
    dissolved_on: str | None = None

    @property
    def name(self) -> str:
        return self.company_name or ""

    @property
    def closure_date(self) -> str:
        return self.dissolved_on or ""


CompanyPayload = CompanyV1Payload | CompanyV2Payload

VARIANTS: Mapping[str, type[CompanyPayload]] = MappingProxyType(
    {
        VARIANT_V1: CompanyV1Payload,
        VARIANT_V2: CompanyV2Payload,
    }
)


def decode_envelope(envelope: BackendResponseEnvelope) -> CompanyPayload:
    """Select the payload model from the discriminator and decode the body."""

    content_type = envelope.content_type.strip() if envelope.content_type else None
    model = VARIANTS.get(content_type) if content_type else None
    if model is None:
        LOGGER.warning("Unbekannte Backend-Variante: %s", envelope.content_type)
        raise UnknownVariantError(envelope.content_type)

    try:
        return model.model_validate_json(envelope.body)
    except PydanticValidationError as exc:
        LOGGER.warning("Backend-Antwort (%s) nicht lesbar: %s", model.variant, exc)
        raise DecodeError(model.variant, str(exc)) from exc
