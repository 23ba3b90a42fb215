"""Tests for CommitScanner — sequential newest-first scan."""

from __future__ import annotations

import pytest

from enginescout.core.errors import NoValidCommitFound, VerificationCancelled
from enginescout.core.pool import CancelToken
from enginescout.core.scanner import CommitScanner
from enginescout.models.results import ProbeCheck, ProbeStatus

C1, C2, C3 = "c1c1c1c1", "c2c2c2c2", "c3c3c3c3"


def _ref_url(matrix, commit, base_url):
    return matrix.reference_artifact(commit).url(base_url)


class TestCommitScanner:
    def test_returns_first_present_in_order(self, small_matrix, base_url, make_prober):
        prober = make_prober(
            {
                _ref_url(small_matrix, C1, base_url): ProbeStatus.ABSENT,
                _ref_url(small_matrix, C3, base_url): ProbeStatus.ABSENT,
            },
        )
        scanner = CommitScanner(prober, small_matrix, base_url)
        assert scanner.resolve([C1, C2, C3]) == C2
        # C1 checked first, C2 second, C3 never
        assert prober.calls == [
            _ref_url(small_matrix, C1, base_url),
            _ref_url(small_matrix, C2, base_url),
        ]
        assert scanner.checked == 2

    def test_first_candidate_wins(self, small_matrix, base_url, make_prober):
        prober = make_prober()
        scanner = CommitScanner(prober, small_matrix, base_url)
        assert scanner.resolve([C1, C2]) == C1
        assert len(prober.calls) == 1

    def test_unknown_is_not_accepted(self, small_matrix, base_url, make_prober):
        prober = make_prober({_ref_url(small_matrix, C1, base_url): ProbeStatus.UNKNOWN})
        scanner = CommitScanner(prober, small_matrix, base_url)
        assert scanner.resolve([C1, C2]) == C2

    def test_exhaustion_raises(self, small_matrix, base_url, make_prober):
        prober = make_prober(default=ProbeStatus.ABSENT)
        scanner = CommitScanner(prober, small_matrix, base_url)
        with pytest.raises(NoValidCommitFound) as excinfo:
            scanner.resolve([C1, C2, C3])
        assert excinfo.value.checked == 3
        assert "darwin/query-engine.gz" in str(excinfo.value)

    def test_empty_candidates_raise(self, small_matrix, base_url, make_prober):
        scanner = CommitScanner(make_prober(), small_matrix, base_url)
        with pytest.raises(NoValidCommitFound) as excinfo:
            scanner.resolve([])
        assert excinfo.value.checked == 0

    def test_limit_caps_candidates(self, small_matrix, base_url, make_prober):
        prober = make_prober(default=ProbeStatus.ABSENT)
        scanner = CommitScanner(prober, small_matrix, base_url)
        with pytest.raises(NoValidCommitFound):
            scanner.resolve([C1, C2, C3], limit=2)
        assert len(prober.calls) == 2

    def test_accepts_generator(self, small_matrix, base_url, make_prober):
        scanner = CommitScanner(make_prober(), small_matrix, base_url)
        assert scanner.resolve(c for c in [C3, C1]) == C3

    def test_cancelled_before_scan(self, small_matrix, base_url, make_prober):
        token = CancelToken()
        token.cancel()
        prober = make_prober()
        scanner = CommitScanner(prober, small_matrix, base_url, token)
        with pytest.raises(VerificationCancelled):
            scanner.resolve([C1])
        assert prober.calls == []

    def test_malformed_candidate_skipped(self, small_matrix, base_url, make_prober, caplog):
        prober = make_prober()
        scanner = CommitScanner(prober, small_matrix, base_url)
        with caplog.at_level("WARNING", logger="enginescout.core.scanner"):
            assert scanner.resolve(["abc/123", "", C2], limit=1) == C2
        assert prober.calls == [_ref_url(small_matrix, C2, base_url)]
        assert scanner.checked == 1
        assert "abc/123" in caplog.text

    def test_only_malformed_candidates_raise(self, small_matrix, base_url, make_prober):
        prober = make_prober()
        scanner = CommitScanner(prober, small_matrix, base_url)
        with pytest.raises(NoValidCommitFound) as excinfo:
            scanner.resolve(["a/b", " c1c1c1c1"])
        assert excinfo.value.checked == 0
        assert prober.calls == []

    def test_raising_prober_treated_as_unknown(self, small_matrix, base_url, caplog):
        class ExplodesOnce:
            def __init__(self):
                self.calls = []

            def check(self, url: str) -> ProbeCheck:
                self.calls.append(url)
                if len(self.calls) == 1:
                    raise RuntimeError("boom")
                return ProbeCheck(status=ProbeStatus.PRESENT, status_code=200, content_length=1)

        prober = ExplodesOnce()
        scanner = CommitScanner(prober, small_matrix, base_url)
        with caplog.at_level("ERROR", logger="enginescout.core.scanner"):
            assert scanner.resolve([C1, C2]) == C2
        assert scanner.checked == 2
        assert "boom" in caplog.text
