"""Commit candidate scanner — finds the newest commit with a published build.

Candidates are examined one at a time in the order supplied (newest first).
Usually the first candidate already qualifies, so fanning out here would only
waste requests; concurrency is kept for the much larger verification phase.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import ValidationError

from enginescout.core.errors import NoValidCommitFound, VerificationCancelled
from enginescout.core.pool import CancelToken
from enginescout.core.probe import Prober
from enginescout.models.assets import EngineMatrix
from enginescout.models.results import ProbeCheck, ProbeStatus

logger = logging.getLogger(__name__)


class CommitScanner:
    """Sequentially probes each candidate's reference artifact."""

    def __init__(
        self,
        prober: Prober,
        matrix: EngineMatrix,
        base_url: str,
        cancel_token: CancelToken | None = None,
    ) -> None:
        self._prober = prober
        self._matrix = matrix
        self._base_url = base_url
        self._cancel = cancel_token or CancelToken()
        self.checked = 0

    def resolve(self, candidates: Iterable[str], *, limit: int | None = None) -> str:
        """Return the first candidate whose reference artifact exists.

        Raises ``NoValidCommitFound`` when the candidates (or the first
        ``limit`` of them) are exhausted without a hit.

        Candidates that cannot form a download path are logged and skipped
        without counting towards ``limit``.  A prober that raises counts as
        an inconclusive check, as in the verification pool.
        """
        self.checked = 0
        reference_label = ""
        for commit in candidates:
            if limit is not None and self.checked >= limit:
                break
            if self._cancel.cancelled:
                raise VerificationCancelled(self.checked, self.checked)

            try:
                reference = self._matrix.reference_artifact(commit)
            except ValidationError as exc:
                logger.warning(
                    "Skipping candidate %r: not a valid commit (%s)",
                    commit,
                    exc.errors()[0]["msg"],
                )
                continue
            reference_label = reference.label()
            url = reference.url(self._base_url)
            self.checked += 1
            try:
                check = self._prober.check(url)
            except Exception as exc:
                logger.exception("Prober raised for %s", url)
                check = ProbeCheck(status=ProbeStatus.UNKNOWN, detail=repr(exc))
            if check.status is ProbeStatus.PRESENT:
                logger.info(
                    "Commit %s publishes %s (candidate %d)",
                    commit,
                    reference_label,
                    self.checked,
                )
                return commit
            logger.debug("Commit %s skipped: %s is %s", commit, url, check.status.value)

        if not reference_label:
            reference_label = (
                f"{self._matrix.reference_platform}/"
                f"{self._matrix.reference_binary}{self._matrix.reference_extension}"
            )
        raise NoValidCommitFound(self.checked, reference_label)
