"""Immutable mapping from jurisdiction codes to backend base addresses."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from pathlib import Path
from types import MappingProxyType
from urllib.parse import urlparse

import yaml

from .errors import ConfigurationError
from .utils.logging_setup import setup_logger

_BASE_LOGGER = setup_logger()
LOGGER = _BASE_LOGGER.getChild("registry")

_CODE_LENGTH = 2
_ALLOWED_SCHEMES = {"http", "https"}


def _validate_code(code: str) -> str:
    if len(code) != _CODE_LENGTH:
        raise ConfigurationError(
            f"jurisdiction code must be exactly {_CODE_LENGTH} characters, got {code!r}"
        )
    return code


def _validate_address(code: str, address: str) -> str:
    try:
        parsed = urlparse(address)
    except ValueError as exc:
        raise ConfigurationError(
            f"backend address for {code!r} is not a valid URL: {address!r}"
        ) from exc
    if parsed.scheme not in _ALLOWED_SCHEMES or not parsed.netloc:
        raise ConfigurationError(
            f"backend address for {code!r} must be an absolute http(s) URL, got {address!r}"
        )
    return address


def parse_backend_entry(entry: str) -> tuple[str, str]:
    """Split a ``code=address`` entry and validate both halves."""

    code, separator, address = entry.partition("=")
    if not separator:
        raise ConfigurationError(
            f"invalid backend entry {entry!r}, expected the form code=address"
        )
    return _validate_code(code), _validate_address(code, address)


def load_backends_yaml(path: str | Path) -> list[tuple[str, str]]:
    """Read backend entries from a YAML file.

    The file needs a ``backends`` key holding either a mapping
    ``{code: address}`` or a list of ``code=address`` strings. Order is kept.
    """

    yaml_path = Path(path)
    if not yaml_path.exists():
        raise ConfigurationError(f"backend file not found: {yaml_path}")

    try:
        data = yaml.safe_load(yaml_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"backend file {yaml_path} is not valid YAML: {exc}") from exc

    if not isinstance(data, Mapping) or "backends" not in data:
        raise ConfigurationError(f"backend file {yaml_path} needs a 'backends' key")

    backends = data["backends"]
    if isinstance(backends, Mapping):
        entries: list[tuple[str, str]] = []
        for code, address in backends.items():
            # YAML 1.1 reads unquoted scalars such as ``no`` or ``on`` as booleans.
            if not isinstance(code, str) or not isinstance(address, str):
                raise ConfigurationError(
                    f"backend entry {code!r}: {address!r} in {yaml_path} is not a string pair, "
                    f"quote the code and address (e.g. \"no\": \"http://...\")"
                )
            entries.append((code, address))
        return entries
    if isinstance(backends, list):
        for entry in backends:
            if not isinstance(entry, str):
                raise ConfigurationError(
                    f"backend entry {entry!r} in {yaml_path} must be a code=address string"
                )
        return [parse_backend_entry(entry) for entry in backends]
    raise ConfigurationError(
        f"'backends' in {yaml_path} must be a mapping or a list of code=address entries"
    )


class BackendRegistry(Mapping[str, str]):
    """Read-only ``jurisdiction code -> base address`` table.

    Built once at startup and shared by every request; there is no way to
    add or remove entries afterwards.
    """

    def __init__(self, entries: Iterable[tuple[str, str]]) -> None:
        backends: dict[str, str] = {}
        for code, address in entries:
            _validate_code(code)
            _validate_address(code, address)
            if code in backends:
                raise ConfigurationError(f"jurisdiction code {code!r} configured twice")
            backends[code] = address

        if not backends:
            raise ConfigurationError("no backends configured")

        self._backends: Mapping[str, str] = MappingProxyType(backends)
        LOGGER.debug("Backend-Registry aufgebaut: %s", dict(self._backends))

    @classmethod
    def from_args(cls, args: Sequence[str]) -> BackendRegistry:
        """Build the registry from ``code=address`` strings."""

        return cls(parse_backend_entry(arg) for arg in args)

    def lookup(self, code: str) -> str | None:
        """Return the base address for ``code`` or ``None`` when unknown."""

        return self._backends.get(code)

    def codes(self) -> tuple[str, ...]:
        return tuple(self._backends)

    def __getitem__(self, code: str) -> str:
        return self._backends[code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._backends)

    def __len__(self) -> int:
        return len(self._backends)

    def __repr__(self) -> str:
        return f"BackendRegistry({dict(self._backends)!r})"
