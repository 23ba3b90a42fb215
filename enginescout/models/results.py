"""Probe and verification result models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from enginescout.models.assets import AssetReference


class ProbeStatus(str, Enum):
    """What a single existence probe learned about one URL.

    - ``present``: the host answered with a success status and a positive
      content length.
    - ``absent``: the host answered, but not with a usable artifact.
    - ``unknown``: the host could not be reached (DNS, refused, timeout).
    """

    PRESENT = "present"
    ABSENT = "absent"
    UNKNOWN = "unknown"


class ProbeCheck(BaseModel):
    """What the host said about one URL, before it is tied to an asset."""

    model_config = ConfigDict(frozen=True)

    status: ProbeStatus
    status_code: int | None = None
    content_length: int | None = None
    detail: str = ""


class ProbeOutcome(BaseModel):
    """The result of probing one asset URL."""

    model_config = ConfigDict(frozen=True)

    reference: AssetReference
    url: str
    status: ProbeStatus
    status_code: int | None = None
    content_length: int | None = None
    detail: str = ""

    @property
    def exists(self) -> bool:
        return self.status is ProbeStatus.PRESENT


class VerificationReport(BaseModel):
    """All probe outcomes for one commit, in matrix order."""

    model_config = ConfigDict(frozen=True)

    commit: str
    outcomes: tuple[ProbeOutcome, ...] = ()

    @property
    def present(self) -> list[ProbeOutcome]:
        return [o for o in self.outcomes if o.exists]

    @property
    def missing(self) -> list[ProbeOutcome]:
        """Every outcome that is not confirmed present (absent or unknown)."""
        return [o for o in self.outcomes if not o.exists]

    @property
    def inconclusive(self) -> list[ProbeOutcome]:
        return [o for o in self.outcomes if o.status is ProbeStatus.UNKNOWN]

    @property
    def passed(self) -> bool:
        return not self.missing


class ResolutionResult(BaseModel):
    """A commit whose full artifact matrix is confirmed published."""

    model_config = ConfigDict(frozen=True)

    commit: str
    checked_candidates: int = 1
    verified_assets: int = 0
