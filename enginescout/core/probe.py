"""Existence probe — a metadata-only HEAD check against one asset URL.

An artifact counts as present only when the host answers with a definitive
success status (below 300) *and* a positive ``content-length``.  Anything
else is absent; a transport failure is reported as ``unknown`` so callers
can tell "could not ask" apart from "host says no".  The probe never raises.

Proxies are resolved per request from the environment (``HTTP_PROXY``,
``HTTPS_PROXY``, ``NO_PROXY``) through ``requests``; explicit proxy URLs
passed to the constructor take precedence.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

import requests
from requests.adapters import HTTPAdapter

from enginescout.models.results import ProbeCheck, ProbeStatus

logger = logging.getLogger(__name__)

_REDIRECT_THRESHOLD = 300
_PLAIN_SUCCESS = 200


@runtime_checkable
class Prober(Protocol):
    """Anything that can report whether one URL holds a published artifact."""

    def check(self, url: str) -> ProbeCheck:
        """Probe *url*.  Must not raise."""
        ...


def parse_content_length(raw: str | None) -> int | None:
    """Return the header value as an int, or ``None`` when absent/invalid."""
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def evaluate_response(status_code: int, content_length: int | None) -> ProbeStatus:
    """Reduce a HEAD response to present/absent.

    Status and length gate independently: a 200 without a positive length is
    absent, and so is a redirect or error carrying a positive length.
    """
    if content_length is None or content_length <= 0:
        return ProbeStatus.ABSENT
    if status_code < _REDIRECT_THRESHOLD:
        return ProbeStatus.PRESENT
    return ProbeStatus.ABSENT


class ExistenceProbe:
    """HEAD-request prober sharing one ``requests.Session`` across threads.

    Parameters
    ----------
    connect_timeout, read_timeout:
        Per-request bounds in seconds; a hung host degrades to ``unknown``.
    http_proxy, https_proxy:
        Explicit proxy URLs; when unset, the environment decides.
    pool_size:
        Connection pool size; match it to the verification concurrency.
    session:
        Pre-built session (tests).  Closed by ``close()`` only when owned.
    """

    def __init__(
        self,
        *,
        connect_timeout: float = 10.0,
        read_timeout: float = 30.0,
        http_proxy: str | None = None,
        https_proxy: str | None = None,
        pool_size: int = 10,
        session: requests.Session | None = None,
    ) -> None:
        self._timeout = (connect_timeout, read_timeout)
        self._proxies: dict[str, str] = {}
        if http_proxy:
            self._proxies["http"] = http_proxy
        if https_proxy:
            self._proxies["https"] = https_proxy

        self._owns_session = session is None
        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        self._session = session

    def check(self, url: str) -> ProbeCheck:
        """HEAD *url* and classify the answer."""
        try:
            response = self._session.head(
                url,
                allow_redirects=False,
                timeout=self._timeout,
                proxies=self._proxies or None,
            )
        except requests.RequestException as exc:
            logger.warning("Probe transport failure for %s: %s", url, exc)
            return ProbeCheck(status=ProbeStatus.UNKNOWN, detail=str(exc))

        content_length = parse_content_length(response.headers.get("content-length"))
        if response.status_code > _PLAIN_SUCCESS:
            # 404 is the normal answer for an unpublished artifact; anything
            # else usually means a proxy, auth, or rate-limit problem.
            level = logging.DEBUG if response.status_code == 404 else logging.WARNING
            logger.log(
                level,
                "Probe %s answered %d (content-length=%s)",
                url,
                response.status_code,
                response.headers.get("content-length"),
            )

        status = evaluate_response(response.status_code, content_length)
        return ProbeCheck(
            status=status,
            status_code=response.status_code,
            content_length=content_length,
        )

    def exists(self, url: str) -> bool:
        """Boolean view of ``check``: ``True`` only for a confirmed artifact."""
        return self.check(url).status is ProbeStatus.PRESENT

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> ExistenceProbe:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
