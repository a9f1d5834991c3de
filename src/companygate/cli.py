"""Command line entry point that starts the lookup gateway."""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from .api import create_app
from .backends.http import RequestsTransport, normalise_timeout
from .errors import ConfigurationError
from .registry import BackendRegistry, load_backends_yaml, parse_backend_entry
from .service import LookupService
from .utils.logging_setup import setup_logger, uvicorn_log_config

_BASE_LOGGER = setup_logger()
logger = _BASE_LOGGER.getChild("cli")

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 9000


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Company lookup gateway")
    parser.add_argument(
        "backends",
        nargs="*",
        metavar="CODE=URL",
        help="Backend per Ländercode, z.B. us=http://localhost:9002",
    )
    parser.add_argument(
        "--backends-yaml",
        help="YAML-Datei mit 'backends' (Mapping oder Liste von code=url)",
    )
    parser.add_argument("--host", default=None, help="Bind-Adresse (Standard: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Port (Standard: 9000)")
    parser.add_argument(
        "--timeout",
        type=float,
        nargs="+",
        default=None,
        metavar="SECONDS",
        help="Connect- und Read-Timeout zum Backend in Sekunden",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Ausführliche Log-Ausgabe aktivieren"
    )
    return parser.parse_args(argv)


def _split_env_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def _env_timeout(env: Mapping[str, str]) -> list[float] | None:
    parts = _split_env_list(env.get("COMPANYGATE_TIMEOUT"))
    if not parts:
        return None
    try:
        return [float(part) for part in parts]
    except ValueError as exc:
        raise ConfigurationError(f"COMPANYGATE_TIMEOUT ist ungültig: {exc}") from exc


def _env_port(env: Mapping[str, str]) -> int:
    raw = env.get("COMPANYGATE_PORT")
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"COMPANYGATE_PORT ist ungültig: {raw!r}") from exc


def collect_backend_entries(
    args: argparse.Namespace, env: Mapping[str, str]
) -> list[tuple[str, str]]:
    """Gather backend entries: YAML file, then environment, then arguments."""

    entries: list[tuple[str, str]] = []
    if args.backends_yaml:
        entries.extend(load_backends_yaml(args.backends_yaml))
    entries.extend(
        parse_backend_entry(entry) for entry in _split_env_list(env.get("COMPANYGATE_BACKENDS"))
    )
    entries.extend(parse_backend_entry(entry) for entry in args.backends)
    return entries


def build_service(args: argparse.Namespace, env: Mapping[str, str]) -> LookupService:
    registry = BackendRegistry(collect_backend_entries(args, env))
    timeout = args.timeout if args.timeout is not None else _env_timeout(env)
    transport = RequestsTransport(timeout=normalise_timeout(timeout))
    return LookupService(registry, transport)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_logger(log_level)

    dotenv_path = Path(".env")
    if dotenv_path.exists():
        load_dotenv(dotenv_path=dotenv_path)
    env = os.environ

    try:
        service = build_service(args, env)
        port = args.port if args.port is not None else _env_port(env)
    except ConfigurationError as exc:
        logger.error("Ungültige Konfiguration: %s", exc)
        return 2

    host = args.host or env.get("COMPANYGATE_HOST") or DEFAULT_HOST
    logger.info(
        "Starte Lookup-Gateway auf %s:%s mit Backends %s",
        host,
        port,
        ", ".join(service.registry.codes()),
    )
    uvicorn.run(
        create_app(service),
        host=host,
        port=port,
        log_config=uvicorn_log_config(log_level),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
