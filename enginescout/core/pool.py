"""Bounded verification pool — fans probes out over a fixed worker set.

A single global cap limits how many probes are in flight at once across the
whole verification phase.  The pool always joins every dispatched task
before returning, so the caller sees the complete set of outcomes, never a
partial one.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor, wait

from enginescout.core.errors import VerificationCancelled
from enginescout.core.probe import Prober
from enginescout.models.assets import AssetReference, EngineMatrix
from enginescout.models.results import ProbeCheck, ProbeOutcome, ProbeStatus

logger = logging.getLogger(__name__)


class CancelToken:
    """Run-level cancellation flag shared between the caller and the pool."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class BoundedProbePool:
    """Runs one probe per asset with at most ``max_in_flight`` concurrent.

    Parameters
    ----------
    prober:
        Shared, read-only probe implementation.
    max_in_flight:
        Global concurrency cap; also the worker count.
    cancel_token:
        When cancelled, workers stop issuing new probes.  Tasks already in
        flight finish (bounded by the probe's own timeout), the pool joins,
        and ``VerificationCancelled`` is raised.
    """

    def __init__(
        self,
        prober: Prober,
        max_in_flight: int = 30,
        cancel_token: CancelToken | None = None,
    ) -> None:
        if max_in_flight < 1:
            raise ValueError(f"max_in_flight must be >= 1, got {max_in_flight}")
        self._prober = prober
        self._max_in_flight = max_in_flight
        self._cancel = cancel_token or CancelToken()

    @property
    def max_in_flight(self) -> int:
        return self._max_in_flight

    def _probe_one(self, reference: AssetReference, url: str) -> ProbeOutcome | None:
        if self._cancel.cancelled:
            return None
        try:
            check = self._prober.check(url)
        except Exception as exc:
            # probers must not raise; a stray exception counts as inconclusive
            logger.exception("Prober raised for %s", url)
            check = ProbeCheck(status=ProbeStatus.UNKNOWN, detail=repr(exc))
        return ProbeOutcome(
            reference=reference,
            url=url,
            status=check.status,
            status_code=check.status_code,
            content_length=check.content_length,
            detail=check.detail,
        )

    def run(
        self, references: Sequence[AssetReference], base_url: str
    ) -> list[ProbeOutcome]:
        """Probe every reference and return outcomes in input order.

        Completion order is irrelevant: each task writes only to its own
        future, and results are read back by position after the barrier.
        """
        if not references:
            return []

        workers = min(self._max_in_flight, len(references))
        logger.info(
            "Probing %d asset(s) with %d worker(s)", len(references), workers
        )
        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="enginescout-probe"
        ) as executor:
            futures: list[Future[ProbeOutcome | None]] = [
                executor.submit(self._probe_one, ref, ref.url(base_url))
                for ref in references
            ]
            try:
                wait(futures)
            except KeyboardInterrupt:
                logger.warning("Interrupted; draining in-flight probes")
                self._cancel.cancel()
                wait(futures)

        results = [future.result() for future in futures]
        outcomes = [outcome for outcome in results if outcome is not None]
        if self._cancel.cancelled:
            raise VerificationCancelled(len(outcomes), len(references))
        return outcomes

    def verify(
        self, commit: str, matrix: EngineMatrix, base_url: str
    ) -> list[ProbeOutcome]:
        """Probe the full cross product for *commit*, exclusions removed."""
        return self.run(matrix.references(commit), base_url)
