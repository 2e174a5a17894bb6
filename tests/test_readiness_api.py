"""Tests for readiness and document API endpoints."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from app.main import app

client = TestClient(app)


@pytest.fixture
def composite_body(enterprise_responses, enterprise_metrics):
    return {
        "assessment_data": {"responses": enterprise_responses},
        "operational_metrics": enterprise_metrics,
        "user_id": "user-1",
    }


def test_score_composite(composite_body):
    response = client.post("/v1/readiness/composite", json=composite_body)

    assert response.status_code == 200
    data = response.json()
    assert data["meta"]["response_count"] == 5
    assert data["meta"]["user_id"] == "user-1"
    assert data["indices"]["dsch"]["overall_score"] > 0.5


def test_score_composite_tolerates_unrecognized_payload():
    response = client.post("/v1/readiness/composite", json={"assessment_data": "nonsense"})

    assert response.status_code == 200
    assert response.json()["meta"]["response_count"] == 0


def test_score_ai_readiness():
    response = client.post(
        "/v1/readiness/ai",
        json={"assessment_data": [{"prompt": "Data quality", "value": 5}]},
    )

    assert response.status_code == 200
    assert list(response.json()["indices"]) == ["airix", "airs", "aics", "aims", "aips", "aibs"]


def test_score_and_persist_then_duplicate(fake_supabase, composite_body):
    with patch("app.db.readiness_results.get_supabase", return_value=fake_supabase):
        first = client.post("/v1/readiness/assessments/a-1/results", json=composite_body)
        second = client.post("/v1/readiness/assessments/a-1/results", json=composite_body)

    assert first.status_code == 200
    assert first.json()["persistence"]["success"] is True
    assert second.status_code == 409
    body = second.json()
    assert body["persistence"]["code"] == "DUPLICATE_RESULT"
    assert body["result"]["meta"]["response_count"] == 5


def test_score_and_persist_without_store_still_returns_result(composite_body):
    with patch("app.db.readiness_results.get_supabase", side_effect=RuntimeError("not configured")):
        response = client.post("/v1/readiness/assessments/a-1/results", json=composite_body)

    assert response.status_code == 200
    assert response.json()["persistence"]["skipped"] is True
    assert "dsch" in response.json()["result"]["indices"]


def test_get_latest_result(fake_supabase, composite_body):
    with patch("app.db.readiness_results.get_supabase", return_value=fake_supabase):
        client.post("/v1/readiness/assessments/a-1/results", json=composite_body)
        found = client.get("/v1/readiness/assessments/a-1/results/latest")
        missing = client.get("/v1/readiness/assessments/a-2/results/latest")

    assert found.status_code == 200
    assert found.json()["assessment_id"] == "a-1"
    assert missing.status_code == 404


def test_get_latest_result_store_unavailable():
    with patch("app.db.readiness_results.get_supabase", side_effect=RuntimeError("down")):
        response = client.get("/v1/readiness/assessments/a-1/results/latest")

    assert response.status_code == 503


def test_process_document_endpoint():
    response = client.post(
        "/v1/documents/process",
        json={
            "id": "doc-1",
            "filename": "policy.txt",
            "content": "AI risk and security review.\n\nCall 555-123-4567.",
            "institution_type": "K12",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "completed"
    assert data["pii_detections"][0]["compliance_risk"] == "COPPA"
    assert len(data["framework_mappings"]) == 3


def test_scan_pii_endpoint():
    response = client.post("/v1/documents/pii", json={"content": "SSN 123-45-6789"})

    assert response.status_code == 200
    data = response.json()
    assert data["summary"]["by_compliance_risk"] == {"FERPA": 1}
    assert data["redacted"] == "SSN [REDACTED-SSN]"
