"""Shared test fixtures for enginescout."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

import pytest

from enginescout.models.assets import EngineMatrix
from enginescout.models.results import ProbeCheck, ProbeStatus

BASE_URL = "https://binaries.example.test"


class FakeProber:
    """In-memory prober: every URL is present unless listed otherwise.

    Records every probed URL and the peak number of concurrent calls.
    """

    def __init__(
        self,
        statuses: dict[str, ProbeStatus] | None = None,
        *,
        default: ProbeStatus = ProbeStatus.PRESENT,
        delay: float = 0.0,
    ) -> None:
        self.statuses = dict(statuses or {})
        self.default = default
        self.delay = delay
        self.calls: list[str] = []
        self.active = 0
        self.peak = 0
        self._lock = threading.Lock()

    def check(self, url: str) -> ProbeCheck:
        with self._lock:
            self.calls.append(url)
            self.active += 1
            self.peak = max(self.peak, self.active)
        try:
            if self.delay:
                time.sleep(self.delay)
            status = self.statuses.get(url, self.default)
            if status is ProbeStatus.PRESENT:
                return ProbeCheck(status=status, status_code=200, content_length=1024)
            if status is ProbeStatus.ABSENT:
                return ProbeCheck(status=status, status_code=404)
            return ProbeCheck(status=status, detail="connection refused")
        finally:
            with self._lock:
                self.active -= 1


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def small_matrix() -> EngineMatrix:
    """Three platforms (one excluded), two binaries, two extensions."""
    return EngineMatrix(
        platforms=("darwin", "windows", "freebsd"),
        excluded_platforms=frozenset({"freebsd"}),
        binaries=("query-engine", "prisma-fmt"),
        extensions=(".gz", ".gz.sha256"),
        branch="master",
    )


@pytest.fixture
def make_prober() -> Callable[..., FakeProber]:
    """Factory fixture: build a FakeProber."""

    def _factory(
        statuses: dict[str, ProbeStatus] | None = None, **kwargs
    ) -> FakeProber:
        return FakeProber(statuses, **kwargs)

    return _factory


@pytest.fixture
def commit() -> str:
    return "a1b2c3d4e5f60718293a4b5c6d7e8f9012345678"
