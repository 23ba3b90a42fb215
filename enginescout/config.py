"""Runtime configuration — env-driven via pydantic-settings.

Reads from a ``.env`` file and ``ENGINESCOUT_*`` environment variables.
List-valued settings take JSON arrays.

Examples
--------
Override via environment::

    export ENGINESCOUT_MAX_IN_FLIGHT=10
    export ENGINESCOUT_BASE_URL=https://mirror.example.com/engines
    export ENGINESCOUT_EXCLUDED_PLATFORMS='["freebsd", "arm"]'

Proxy routing follows ``HTTP_PROXY`` / ``HTTPS_PROXY`` / ``NO_PROXY`` unless
``ENGINESCOUT_HTTP_PROXY`` or ``ENGINESCOUT_HTTPS_PROXY`` is set.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from enginescout.models.assets import (
    DEFAULT_BINARIES,
    DEFAULT_EXCLUDED_PLATFORMS,
    DEFAULT_EXTENSIONS,
    DEFAULT_PLATFORMS,
    EngineMatrix,
)


class ScoutSettings(BaseSettings):
    """All externally overridable knobs of a resolution run."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ENGINESCOUT_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "WARNING"

    # Distribution host
    base_url: str = "https://binaries.prisma.sh"

    # Commit list source
    github_api_url: str = "https://api.github.com"
    github_repo: str = "prisma/prisma-engines"
    github_token: str = ""
    commit_page_size: int = Field(default=30, ge=1, le=100)

    # Probing
    max_in_flight: int = Field(default=30, ge=1)
    connect_timeout: float = Field(default=10.0, gt=0)
    read_timeout: float = Field(default=30.0, gt=0)
    http_proxy: str | None = None
    https_proxy: str | None = None

    # Asset matrix
    branch: str = "master"
    platforms: tuple[str, ...] = DEFAULT_PLATFORMS
    excluded_platforms: tuple[str, ...] = DEFAULT_EXCLUDED_PLATFORMS
    binaries: tuple[str, ...] = DEFAULT_BINARIES
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    reference_platform: str = "darwin"
    reference_binary: str = "query-engine"
    reference_extension: str = ".gz"

    def matrix(self) -> EngineMatrix:
        """Build the validated asset matrix from these settings."""
        return EngineMatrix(
            platforms=self.platforms,
            excluded_platforms=frozenset(self.excluded_platforms),
            binaries=self.binaries,
            extensions=self.extensions,
            branch=self.branch,
            reference_platform=self.reference_platform,
            reference_binary=self.reference_binary,
            reference_extension=self.reference_extension,
        )
