"""Latest-commit resolver — scanner, verification pool, and aggregator in one pass.

Control flow::

    candidates ──► CommitScanner (sequential)
                     │ first commit with the reference artifact
                     ▼
                  BoundedProbePool (concurrent fan-out, full join)
                     │ one outcome per (platform × binary × extension)
                     ▼
                  aggregate / require_complete ──► ResolutionResult
                                                  or MissingAssetsError

The resolver is stateless between calls; every invocation builds a fresh
result from the candidate list it is given.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from enginescout.core.aggregator import aggregate, require_complete
from enginescout.core.pool import BoundedProbePool, CancelToken
from enginescout.core.probe import Prober
from enginescout.core.scanner import CommitScanner
from enginescout.models.assets import EngineMatrix
from enginescout.models.results import ResolutionResult, VerificationReport

logger = logging.getLogger(__name__)


class LatestCommitResolver:
    """Resolves and verifies the newest fully published commit.

    Parameters
    ----------
    prober:
        Existence probe shared by the scan and verification phases.
    matrix:
        Platforms, binaries, extensions, exclusions, and branch.
    base_url:
        Root of the binary distribution host.
    max_in_flight:
        Global cap on concurrently running probes during verification.
    cancel_token:
        Optional caller-owned token to abort a run.
    """

    def __init__(
        self,
        prober: Prober,
        matrix: EngineMatrix,
        base_url: str,
        *,
        max_in_flight: int = 30,
        cancel_token: CancelToken | None = None,
    ) -> None:
        self.matrix = matrix
        self.base_url = base_url
        self.cancel_token = cancel_token or CancelToken()
        self._scanner = CommitScanner(prober, matrix, base_url, self.cancel_token)
        self._pool = BoundedProbePool(prober, max_in_flight, self.cancel_token)

    def resolve_commit(self, candidates: Iterable[str], *, limit: int | None = None) -> str:
        """Scan phase only: the newest candidate with the reference artifact."""
        return self._scanner.resolve(candidates, limit=limit)

    def verify_commit(self, commit: str) -> VerificationReport:
        """Verification phase only: probe the full matrix for *commit*."""
        logger.info(
            "Verifying %d asset(s) for commit %s on branch %s",
            self.matrix.size,
            commit,
            self.matrix.branch,
        )
        outcomes = self._pool.verify(commit, self.matrix, self.base_url)
        return aggregate(commit, outcomes)

    def resolve(
        self, candidates: Iterable[str], *, limit: int | None = None
    ) -> ResolutionResult:
        """Full pass: scan, verify, and require every asset to be present."""
        commit = self.resolve_commit(candidates, limit=limit)
        report = self.verify_commit(commit)
        return require_complete(report, checked_candidates=self._scanner.checked)
