"""Asset matrix models — what a commit must publish to be releasable.

The matrix replaces module-level platform/binary/extension constants with an
explicit, frozen configuration value.  Every combination maps to exactly one
``AssetReference`` and, through the URL builder, exactly one download URL.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from enginescout.core.url_builder import build_url

DEFAULT_PLATFORMS: tuple[str, ...] = (
    "darwin",
    "debian-openssl-1.0.x",
    "debian-openssl-1.1.x",
    "rhel-openssl-1.0.x",
    "rhel-openssl-1.1.x",
    "linux-musl",
    "linux-nixos",
    "windows",
    "freebsd",
    "openbsd",
    "netbsd",
    "arm",
)

DEFAULT_EXCLUDED_PLATFORMS: tuple[str, ...] = (
    "freebsd",
    "arm",
    "linux-nixos",
    "openbsd",
    "netbsd",
)

DEFAULT_BINARIES: tuple[str, ...] = (
    "query-engine",
    "introspection-engine",
    "migration-engine",
    "prisma-fmt",
)

DEFAULT_EXTENSIONS: tuple[str, ...] = (
    ".gz",
    ".gz.sha256",
    ".gz.sig",
    ".sig",
    ".sha256",
)


def check_segment(value: str, kind: str) -> str:
    if not value or "/" in value or value.strip() != value:
        raise ValueError(f"invalid {kind} name: {value!r}")
    return value


def _check_binary(value: str) -> str:
    check_segment(value, "binary")
    # a dot in a binary name would let "<binary><extension>" collide
    if "." in value:
        raise ValueError(f"binary name may not contain '.': {value!r}")
    return value


def _check_extension(value: str) -> str:
    if not value.startswith(".") or len(value) < 2:
        raise ValueError(f"extension must start with '.': {value!r}")
    return check_segment(value, "extension")


def _check_unique(values: tuple[str, ...], kind: str) -> tuple[str, ...]:
    seen: set[str] = set()
    for value in values:
        if value in seen:
            raise ValueError(f"duplicate {kind}: {value!r}")
        seen.add(value)
    return values


class AssetReference(BaseModel):
    """One published file: (commit, platform, binary, extension) on a branch."""

    model_config = ConfigDict(frozen=True)

    branch: str
    commit: str
    platform: str
    binary: str
    extension: str

    @field_validator("branch", "commit", "platform")
    @classmethod
    def _segment_is_path_safe(cls, value: str, info) -> str:
        return check_segment(value, info.field_name)

    @field_validator("binary")
    @classmethod
    def _binary_is_path_safe(cls, value: str) -> str:
        return _check_binary(value)

    @field_validator("extension")
    @classmethod
    def _extension_is_suffix(cls, value: str) -> str:
        return _check_extension(value)

    def url(self, base_url: str) -> str:
        """Return the canonical download URL on the given host."""
        return build_url(
            base_url,
            self.branch,
            self.commit,
            self.platform,
            self.binary,
            self.extension,
        )

    def label(self) -> str:
        return f"{self.platform}/{self.binary}{self.extension}"


class EngineMatrix(BaseModel):
    """The full set of artifacts every releasable commit must publish.

    Parameters
    ----------
    platforms:
        Every known build target, in enumeration order.
    excluded_platforms:
        Targets that are never generated, probed, or reported.
    binaries:
        Artifact kinds produced per build.
    extensions:
        The artifact suffix plus its checksum and signature side files.
    branch:
        Channel segment of the download path.
    reference_platform, reference_binary, reference_extension:
        The single, always-produced artifact used as a cheap existence
        signal while scanning candidate commits.
    """

    model_config = ConfigDict(frozen=True)

    platforms: tuple[str, ...] = DEFAULT_PLATFORMS
    excluded_platforms: frozenset[str] = Field(
        default_factory=lambda: frozenset(DEFAULT_EXCLUDED_PLATFORMS)
    )
    binaries: tuple[str, ...] = DEFAULT_BINARIES
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    branch: str = "master"
    reference_platform: str = "darwin"
    reference_binary: str = "query-engine"
    reference_extension: str = ".gz"

    @field_validator("platforms", "binaries")
    @classmethod
    def _names_are_path_safe(cls, values: tuple[str, ...], info) -> tuple[str, ...]:
        if info.field_name == "binaries":
            for value in values:
                _check_binary(value)
            return _check_unique(values, "binary")
        for value in values:
            check_segment(value, "platform")
        return _check_unique(values, "platform")

    @field_validator("extensions")
    @classmethod
    def _extensions_are_suffixes(cls, values: tuple[str, ...]) -> tuple[str, ...]:
        for value in values:
            _check_extension(value)
        return _check_unique(values, "extension")

    @field_validator("branch")
    @classmethod
    def _branch_is_path_safe(cls, value: str) -> str:
        return check_segment(value, "branch")

    @model_validator(mode="after")
    def _reference_is_in_matrix(self) -> EngineMatrix:
        if self.reference_platform in self.excluded_platforms:
            raise ValueError(
                f"reference platform {self.reference_platform!r} is excluded"
            )
        check_segment(self.reference_platform, "platform")
        _check_binary(self.reference_binary)
        _check_extension(self.reference_extension)
        return self

    def relevant_platforms(self) -> list[str]:
        """Platforms minus exclusions, in enumeration order."""
        return [p for p in self.platforms if p not in self.excluded_platforms]

    @property
    def size(self) -> int:
        return (
            len(self.relevant_platforms())
            * len(self.binaries)
            * len(self.extensions)
        )

    def references(self, commit: str) -> list[AssetReference]:
        """Every required artifact for *commit*, platform → binary → extension."""
        return [
            AssetReference(
                branch=self.branch,
                commit=commit,
                platform=platform,
                binary=binary,
                extension=extension,
            )
            for platform in self.relevant_platforms()
            for binary in self.binaries
            for extension in self.extensions
        ]

    def reference_artifact(self, commit: str) -> AssetReference:
        """The single artifact probed while scanning candidate commits."""
        return AssetReference(
            branch=self.branch,
            commit=commit,
            platform=self.reference_platform,
            binary=self.reference_binary,
            extension=self.reference_extension,
        )
