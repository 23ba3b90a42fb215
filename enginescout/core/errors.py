"""Exception taxonomy for commit resolution and asset verification.

Only per-probe transport noise is absorbed (by the existence probe).  Every
exception defined here is fatal to the run and carries enough detail for an
operator to act on it directly.
"""

from __future__ import annotations

from collections.abc import Sequence

from enginescout.models.results import ProbeOutcome, ProbeStatus


class EnginescoutError(RuntimeError):
    """Base class for all enginescout failures."""


class NoValidCommitFound(EnginescoutError):
    """Raised when no candidate commit publishes even the reference artifact."""

    def __init__(self, checked: int, reference_label: str = "") -> None:
        self.checked = checked
        self.reference_label = reference_label
        suffix = f" ({reference_label})" if reference_label else ""
        super().__init__(
            f"No valid commit found: none of {checked} candidate commit(s) "
            f"publish the reference artifact{suffix}"
        )


class MissingAssetsError(EnginescoutError):
    """Raised when the resolved commit lacks one or more required artifacts.

    ``missing`` holds the outcomes in matrix order; ``urls`` is the plain
    list of their download URLs.
    """

    def __init__(self, commit: str, missing: Sequence[ProbeOutcome]) -> None:
        self.commit = commit
        self.missing = list(missing)
        super().__init__(
            f"Commit {commit} is missing {len(self.missing)} asset(s): "
            + ", ".join(self.urls)
        )

    @property
    def urls(self) -> list[str]:
        return [outcome.url for outcome in self.missing]

    def render(self) -> str:
        """Multi-line report, one missing URL per line.

        URLs whose probe never reached the host are marked ``(unreachable)``
        so they can be told apart from artifacts the host reports as absent.
        """
        lines = [
            f"{len(self.missing)} asset(s) missing for commit {self.commit}:"
        ]
        for outcome in self.missing:
            marker = (
                " (unreachable)" if outcome.status is ProbeStatus.UNKNOWN else ""
            )
            lines.append(f"{outcome.url}{marker}")
        return "\n".join(lines)


class VerificationCancelled(EnginescoutError):
    """Raised after the probe pool joins when the run was cancelled."""

    def __init__(self, completed: int, total: int) -> None:
        self.completed = completed
        self.total = total
        super().__init__(
            f"Verification cancelled after {completed} of {total} probe(s)"
        )


class UpstreamListError(EnginescoutError):
    """Raised when the candidate commit list cannot be retrieved."""


class CommitListSchemaError(UpstreamListError):
    """Raised when the commit list response does not match the expected schema."""
