"""GitHub commit list source — candidate commits for the resolver.

Bridge boundary
---------------
The resolver only needs an ordered, newest-first sequence of commit hashes.
This module fetches ``GET /repos/{owner}/{repo}/commits`` and decodes the
payload through a pydantic schema, so malformed responses are rejected here
with ``CommitListSchemaError`` instead of leaking into the core.
"""

from __future__ import annotations

import logging

import requests
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from enginescout.core.errors import CommitListSchemaError, UpstreamListError

logger = logging.getLogger(__name__)


class CommitEntry(BaseModel):
    """The subset of a GitHub commit object the resolver relies on."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    sha: str = Field(min_length=7, pattern=r"^[0-9a-f]+$")


_COMMIT_LIST = TypeAdapter(list[CommitEntry])


def decode_commit_list(payload: bytes | str) -> list[str]:
    """Decode a commits API response body into commit hashes, order preserved."""
    try:
        entries = _COMMIT_LIST.validate_json(payload)
    except ValidationError as exc:
        raise CommitListSchemaError(
            f"Unexpected commit list payload: {exc.error_count()} validation error(s)"
        ) from exc
    return [entry.sha for entry in entries]


class GitHubCommitSource:
    """Fetches recent commits of one repository branch from the GitHub API.

    Parameters
    ----------
    repo:
        ``owner/name`` slug, e.g. ``prisma/prisma-engines``.
    branch:
        Branch (``sha`` query parameter) to list commits from.
    api_url:
        API root; override for GitHub Enterprise.
    per_page:
        Number of candidates to fetch (GitHub caps this at 100).
    token:
        Optional token to lift the anonymous rate limit.
    """

    def __init__(
        self,
        repo: str = "prisma/prisma-engines",
        *,
        branch: str = "master",
        api_url: str = "https://api.github.com",
        per_page: int = 30,
        token: str = "",
        timeout: float = 30.0,
        http_proxy: str | None = None,
        https_proxy: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.repo = repo
        self.branch = branch
        self.api_url = api_url.rstrip("/")
        self.per_page = per_page
        self._timeout = timeout
        self._proxies: dict[str, str] = {}
        if http_proxy:
            self._proxies["http"] = http_proxy
        if https_proxy:
            self._proxies["https"] = https_proxy
        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "application/vnd.github+json"})
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

    @property
    def url(self) -> str:
        return f"{self.api_url}/repos/{self.repo}/commits"

    def list_commits(self) -> list[str]:
        """Return commit hashes, newest first.

        Raises ``UpstreamListError`` on transport or HTTP failures and
        ``CommitListSchemaError`` on malformed payloads.
        """
        logger.info("Fetching commit list from %s (branch=%s)", self.url, self.branch)
        try:
            response = self._session.get(
                self.url,
                params={"sha": self.branch, "per_page": self.per_page},
                timeout=self._timeout,
                proxies=self._proxies or None,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else "?"
            logger.error("Commit list request failed with HTTP %s", status)
            raise UpstreamListError(
                f"GitHub answered HTTP {status} for {self.url}"
            ) from exc
        except requests.RequestException as exc:
            logger.error("Commit list request failed: %s", exc)
            raise UpstreamListError(f"Could not reach {self.url}: {exc}") from exc

        commits = decode_commit_list(response.content)
        logger.debug("Received %d candidate commit(s)", len(commits))
        return commits

    def close(self) -> None:
        self._session.close()
