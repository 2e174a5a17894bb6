"""Tests for result persistence in app/db/readiness_results.py."""

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock, patch

import pytest

from app.core.config import get_settings
from app.core.readiness import calculate_ai_readiness, calculate_composite
from app.core.schemas_readiness import DUPLICATE_RESULT
from app.db.readiness_results import (
    build_record,
    get_latest_result,
    is_unique_violation,
    persist,
)
from app.db.supabase_client import get_supabase
from tests.fakes.fake_supabase import FakeAPIError


@pytest.fixture
def result(enterprise_responses, enterprise_metrics):
    return calculate_composite(enterprise_responses, enterprise_metrics, user_id="user-1")


class TestPersist:
    def test_persist_success(self, fake_supabase, result):
        with patch("app.db.readiness_results.get_supabase", return_value=fake_supabase):
            outcome = persist("assessment-1", result)

        assert outcome.success is True
        assert outcome.assessment_id == "assessment-1"
        assert outcome.version == result.meta.version
        assert outcome.code is None

        rows = fake_supabase.rows("enterprise_algorithm_results")
        assert len(rows) == 1
        assert rows[0]["assessment_id"] == "assessment-1"
        assert rows[0]["user_id"] == "user-1"
        assert rows[0]["algorithm_version"] == result.meta.version
        assert rows[0]["scores"]["dsch"] == pytest.approx(result["dsch"].overall_score)

    def test_persist_twice_is_idempotent(self, fake_supabase, result):
        with patch("app.db.readiness_results.get_supabase", return_value=fake_supabase):
            first = persist("assessment-1", result)
            second = persist("assessment-1", result)

        assert first.success is True
        assert second.success is False
        assert second.code == DUPLICATE_RESULT
        assert second.is_duplicate
        assert "duplicate key" in second.error
        assert len(fake_supabase.rows("enterprise_algorithm_results")) == 1

    def test_concurrent_submissions_exactly_one_succeeds(self, fake_supabase, result):
        with patch("app.db.readiness_results.get_supabase", return_value=fake_supabase):
            with ThreadPoolExecutor(max_workers=8) as pool:
                outcomes = list(pool.map(lambda _: persist("assessment-1", result), range(8)))

        assert sum(1 for o in outcomes if o.success) == 1
        assert sum(1 for o in outcomes if o.code == DUPLICATE_RESULT) == 7

    def test_different_user_is_not_a_duplicate(self, fake_supabase, enterprise_responses):
        first = calculate_composite(enterprise_responses, user_id="user-1")
        second = calculate_composite(enterprise_responses, user_id="user-2")

        with patch("app.db.readiness_results.get_supabase", return_value=fake_supabase):
            assert persist("assessment-1", first).success is True
            assert persist("assessment-1", second).success is True

    def test_ai_readiness_results_go_to_their_own_table(self, fake_supabase):
        result = calculate_ai_readiness([{"prompt": "Data quality", "value": 4}])

        with patch("app.db.readiness_results.get_supabase", return_value=fake_supabase):
            outcome = persist("assessment-1", result)

        assert outcome.success is True
        assert len(fake_supabase.rows("ai_readiness_results")) == 1
        assert fake_supabase.rows("enterprise_algorithm_results") == []


class TestPersistFailures:
    def test_generic_store_error_has_no_code(self, fake_supabase, result):
        fake_supabase.fail_with = FakeAPIError("connection reset by peer", code="08006")

        with patch("app.db.readiness_results.get_supabase", return_value=fake_supabase):
            outcome = persist("assessment-1", result)

        assert outcome.success is False
        assert outcome.code is None
        assert outcome.error == "connection reset by peer"

    def test_store_not_configured_is_skipped(self, monkeypatch, result):
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
        # scoring the result fixture cached settings with the store configured
        get_settings.cache_clear()
        get_supabase.cache_clear()

        with patch("app.db.supabase_client.create_client") as mock_create:
            outcome = persist("assessment-1", result)

        mock_create.assert_not_called()
        assert outcome.skipped is True
        assert outcome.success is None
        assert outcome.error is None

    def test_client_initialization_failure_is_skipped(self, result):
        with patch("app.db.readiness_results.get_supabase", side_effect=RuntimeError("unreachable")):
            outcome = persist("assessment-1", result)

        assert outcome.skipped is True

    def test_unique_violation_detection(self):
        assert is_unique_violation(FakeAPIError("whatever", code="23505"))
        assert is_unique_violation(Exception("duplicate key value violates unique constraint"))
        assert not is_unique_violation(Exception("timeout"))
        assert not is_unique_violation(FakeAPIError("permission denied", code="42501"))


class TestBuildRecord:
    def test_build_record_shape(self, result):
        record = build_record("assessment-1", result)

        assert record["suite"] == "enterprise"
        assert record["response_count"] == 5
        assert set(record["indices"]) == {"dsch", "crf", "lei", "oci", "hoci"}
        assert record["computed_at"] == result.meta.computed_at


class TestGetLatestResult:
    def test_get_latest_result(self):
        with patch("app.db.readiness_results.get_supabase") as mock_supabase:
            mock_response = MagicMock()
            mock_response.data = [{"assessment_id": "assessment-1", "algorithm_version": "1.0.0"}]
            (
                mock_supabase.return_value.table.return_value.select.return_value
                .eq.return_value.order.return_value.limit.return_value.execute.return_value
            ) = mock_response

            row = get_latest_result("assessment-1")

            assert row["algorithm_version"] == "1.0.0"
            mock_supabase.return_value.table.assert_called_with("enterprise_algorithm_results")

    def test_get_latest_result_none(self, fake_supabase):
        with patch("app.db.readiness_results.get_supabase", return_value=fake_supabase):
            assert get_latest_result("missing", suite="ai_readiness") is None
