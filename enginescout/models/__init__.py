"""enginescout data models — all Pydantic v2, all frozen (immutable)."""

from enginescout.models.assets import (
    DEFAULT_BINARIES,
    DEFAULT_EXCLUDED_PLATFORMS,
    DEFAULT_EXTENSIONS,
    DEFAULT_PLATFORMS,
    AssetReference,
    EngineMatrix,
)
from enginescout.models.results import (
    ProbeCheck,
    ProbeOutcome,
    ProbeStatus,
    ResolutionResult,
    VerificationReport,
)

__all__ = [
    # assets
    "AssetReference",
    "EngineMatrix",
    "DEFAULT_PLATFORMS",
    "DEFAULT_EXCLUDED_PLATFORMS",
    "DEFAULT_BINARIES",
    "DEFAULT_EXTENSIONS",
    # results
    "ProbeStatus",
    "ProbeCheck",
    "ProbeOutcome",
    "VerificationReport",
    "ResolutionResult",
]
