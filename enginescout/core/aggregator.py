"""Result aggregation — partitions probe outcomes into present and missing."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from enginescout.core.errors import MissingAssetsError
from enginescout.models.assets import AssetReference
from enginescout.models.results import (
    ProbeOutcome,
    ResolutionResult,
    VerificationReport,
)

logger = logging.getLogger(__name__)


def aggregate(commit: str, outcomes: Iterable[ProbeOutcome]) -> VerificationReport:
    """Collect outcomes for *commit* into a report.

    Outcomes are keyed by asset reference, so the order they arrive in does
    not matter; the report keeps them in the order given.  A reference
    reported twice keeps its first outcome.
    """
    seen: set[AssetReference] = set()
    unique: list[ProbeOutcome] = []
    for outcome in outcomes:
        if outcome.reference.commit != commit:
            raise ValueError(
                f"outcome for commit {outcome.reference.commit} "
                f"cannot be aggregated under {commit}"
            )
        if outcome.reference in seen:
            continue
        seen.add(outcome.reference)
        unique.append(outcome)
    return VerificationReport(commit=commit, outcomes=tuple(unique))


def require_complete(
    report: VerificationReport, *, checked_candidates: int = 1
) -> ResolutionResult:
    """Succeed with the commit, or raise ``MissingAssetsError`` listing every gap."""
    missing = report.missing
    if missing:
        logger.error(
            "Commit %s is missing %d of %d asset(s) (%d unreachable)",
            report.commit,
            len(missing),
            len(report.outcomes),
            len(report.inconclusive),
        )
        raise MissingAssetsError(report.commit, missing)

    logger.info(
        "Commit %s verified: all %d asset(s) present",
        report.commit,
        len(report.outcomes),
    )
    return ResolutionResult(
        commit=report.commit,
        checked_candidates=checked_candidates,
        verified_assets=len(report.outcomes),
    )
