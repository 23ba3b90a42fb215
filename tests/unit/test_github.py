"""Tests for the GitHub commit list source — schema decoding and failures."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest
import requests

from enginescout.bridge.github import GitHubCommitSource, decode_commit_list
from enginescout.core.errors import CommitListSchemaError, UpstreamListError

SHA_A = "3f1c2a9b8d7e6f5a4b3c2d1e0f9a8b7c6d5e4f3a"
SHA_B = "0a1b2c3d4e5f60718293a4b5c6d7e8f901234567"


def _payload(*shas: str) -> bytes:
    return json.dumps(
        [{"sha": sha, "commit": {"message": "msg"}, "url": "x"} for sha in shas]
    ).encode()


def _session(content: bytes = b"[]", status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.content = content
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} error", response=response
        )
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    session.get.return_value = response
    return session


class TestDecodeCommitList:
    def test_preserves_order(self):
        assert decode_commit_list(_payload(SHA_A, SHA_B)) == [SHA_A, SHA_B]

    def test_empty_list(self):
        assert decode_commit_list(b"[]") == []

    def test_object_instead_of_list_rejected(self):
        with pytest.raises(CommitListSchemaError):
            decode_commit_list(b'{"message": "API rate limit exceeded"}')

    def test_missing_sha_rejected(self):
        with pytest.raises(CommitListSchemaError):
            decode_commit_list(b'[{"commit": {}}]')

    def test_non_hex_sha_rejected(self):
        with pytest.raises(CommitListSchemaError):
            decode_commit_list(b'[{"sha": "../../etc/passwd"}]')

    def test_invalid_json_rejected(self):
        with pytest.raises(CommitListSchemaError):
            decode_commit_list(b"<html>")

    def test_schema_error_is_upstream_error(self):
        assert issubclass(CommitListSchemaError, UpstreamListError)


class TestGitHubCommitSource:
    def test_list_commits(self):
        session = _session(_payload(SHA_A, SHA_B))
        source = GitHubCommitSource("prisma/prisma-engines", branch="main", session=session)
        assert source.list_commits() == [SHA_A, SHA_B]
        args, kwargs = session.get.call_args
        assert args[0] == "https://api.github.com/repos/prisma/prisma-engines/commits"
        assert kwargs["params"] == {"sha": "main", "per_page": 30}

    def test_token_sets_authorization(self):
        session = _session()
        GitHubCommitSource(token="secret", session=session)
        assert session.headers["Authorization"] == "Bearer secret"

    def test_no_token_no_authorization(self):
        session = _session()
        GitHubCommitSource(session=session)
        assert "Authorization" not in session.headers

    def test_http_error_raises_upstream(self):
        source = GitHubCommitSource(session=_session(status_code=403))
        with pytest.raises(UpstreamListError, match="403"):
            source.list_commits()

    def test_transport_error_raises_upstream(self):
        session = _session()
        session.get.side_effect = requests.ConnectionError("no route")
        source = GitHubCommitSource(session=session)
        with pytest.raises(UpstreamListError, match="no route"):
            source.list_commits()

    def test_malformed_payload_raises_schema_error(self):
        source = GitHubCommitSource(session=_session(b'{"oops": 1}'))
        with pytest.raises(CommitListSchemaError):
            source.list_commits()

    def test_enterprise_api_url(self):
        source = GitHubCommitSource(
            "org/engines", api_url="https://ghe.example.com/api/v3/", session=_session()
        )
        assert source.url == "https://ghe.example.com/api/v3/repos/org/engines/commits"
