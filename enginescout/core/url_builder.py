"""Canonical download URLs for engine artifacts.

Layout published by the distribution host::

    <base_url>/<branch>/<commit>/<platform>/<binary><extension>

Windows builds carry an ``.exe`` infix ahead of the extension, e.g.
``windows/query-engine.exe.gz.sha256``.
"""

from __future__ import annotations

WINDOWS_PLATFORM = "windows"


def build_url(
    base_url: str,
    branch: str,
    commit: str,
    platform: str,
    binary: str,
    extension: str,
) -> str:
    """Return the download URL for one artifact.

    Pure and deterministic.  Distinct (branch, commit, platform, binary,
    extension) tuples always yield distinct URLs as long as every segment is
    free of ``/`` and binary names are free of ``.``; ``EngineMatrix`` and
    ``AssetReference`` enforce both.
    """
    final_extension = (
        f".exe{extension}" if platform == WINDOWS_PLATFORM else extension
    )
    return (
        f"{base_url.rstrip('/')}/{branch}/{commit}/{platform}/"
        f"{binary}{final_extension}"
    )
