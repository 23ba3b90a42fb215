"""Shared helpers for CLI commands: settings overrides, logging, wiring."""

from __future__ import annotations

import logging
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler

from enginescout.config import ScoutSettings
from enginescout.core.probe import ExistenceProbe
from enginescout.core.resolver import LatestCommitResolver
from enginescout.models.assets import check_segment

err_console = Console(stderr=True)

EXIT_OK = 0
EXIT_MISSING = 1
EXIT_UPSTREAM = 2
EXIT_CANCELLED = 130


def load_settings(**overrides: Any) -> ScoutSettings:
    """Environment-backed settings with non-``None`` CLI overrides applied."""
    return ScoutSettings(**{k: v for k, v in overrides.items() if v is not None})


def path_segment(value: str | None) -> str | None:
    """Typer callback: reject values that cannot be one download path segment."""
    if value is None:
        return value
    try:
        return check_segment(value, "path segment")
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def configure_logging(level: str) -> None:
    """Route log records to stderr through Rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def build_probe(settings: ScoutSettings) -> ExistenceProbe:
    return ExistenceProbe(
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.read_timeout,
        http_proxy=settings.http_proxy,
        https_proxy=settings.https_proxy,
        pool_size=settings.max_in_flight,
    )


def build_resolver(settings: ScoutSettings, probe: ExistenceProbe) -> LatestCommitResolver:
    return LatestCommitResolver(
        probe,
        settings.matrix(),
        settings.base_url,
        max_in_flight=settings.max_in_flight,
    )
