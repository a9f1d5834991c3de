"""Request and result types of the lookup core."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import ValidationError

_CODE_LENGTH = 2


@dataclass(frozen=True)
class LookupRequest:
    """Company lookup as received from the HTTP layer."""

    id: str
    jurisdiction_code: str

    def validate(self) -> None:
        """Raise :class:`ValidationError` listing every invalid field."""

        failures: dict[str, str] = {}
        if not self.id:
            failures["id"] = "cannot be blank"
        if not self.jurisdiction_code:
            failures["country_iso"] = "cannot be blank"
        elif len(self.jurisdiction_code) != _CODE_LENGTH:
            failures["country_iso"] = f"the length must be exactly {_CODE_LENGTH}"
        if failures:
            raise ValidationError(failures)


@dataclass(frozen=True)
class CanonicalCompanyResult:
    id: str
    name: str
    active: bool
    active_until: str = ""

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "active": self.active,
            "active_until": self.active_until,
        }
