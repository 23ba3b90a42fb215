"""enginescout: resolve the newest engine commit with a complete artifact matrix.

A release pipeline should not trust that a just-pushed commit has finished
publishing its binaries.  enginescout scans candidate commits newest-first
for a cheap reference artifact, then verifies every platform × binary ×
extension asset of the chosen commit with a bounded probe pool:

  - URL builder: deterministic, injective download URLs
  - Existence probe: HEAD + content-length gating, never raises
  - Commit scanner: sequential, stops at the first published commit
  - Bounded pool: global in-flight cap, full join, cancellable
  - Aggregator: the commit, or every missing URL
"""

__version__ = "0.1.0"
__description__ = (
    "Resolve the newest commit whose full release artifact matrix is published"
)

from enginescout.core.resolver import LatestCommitResolver
from enginescout.models.assets import EngineMatrix

__all__ = ["LatestCommitResolver", "EngineMatrix", "__version__"]
