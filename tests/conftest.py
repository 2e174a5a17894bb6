"""Pytest configuration and fixtures."""

import os

import pytest

# Set before app modules are imported: loggers read settings at import time
os.environ["SUPABASE_URL"] = "https://test.supabase.co"
os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "test-key"
os.environ["READINESS_ENV"] = "test"
os.environ.pop("ANTHROPIC_API_KEY", None)
os.environ.pop("ALGORITHM_DEBUG", None)
os.environ.pop("SCORING_MAX_WORKERS", None)

from app.core.config import get_settings  # noqa: E402
from app.db.supabase_client import get_supabase  # noqa: E402

from tests.fakes.fake_supabase import FakeSupabase  # noqa: E402


@pytest.fixture(autouse=True)
def clear_cached_clients():
    """Drop cached settings and clients so each test sees its own environment."""
    get_settings.cache_clear()
    get_supabase.cache_clear()
    yield
    get_settings.cache_clear()
    get_supabase.cache_clear()


@pytest.fixture
def fake_supabase():
    """In-memory Supabase with the results tables' unique key enforced."""
    return FakeSupabase(
        unique_keys={
            "enterprise_algorithm_results": ("assessment_id", "user_id", "algorithm_version"),
            "ai_readiness_results": ("assessment_id", "user_id", "algorithm_version"),
        }
    )


@pytest.fixture
def enterprise_responses():
    """Five tagged answers used by the end-to-end enterprise example."""
    return [
        {"prompt": "How clear is our plan?", "section": "Planning", "value": 5, "tags": ["strategy"]},
        {"prompt": "How modern is our stack?", "section": "Systems", "value": 4, "tags": ["technology"]},
        {"prompt": "How engaged are executives?", "section": "People", "value": 3, "tags": ["leadership"]},
        {"prompt": "Do teams share work?", "section": "People", "value": 2, "tags": ["collaboration"]},
        {"prompt": "Do we try new ideas?", "section": "Culture", "value": 4, "tags": ["innovation"]},
    ]


@pytest.fixture
def enterprise_metrics():
    return {
        "digitalMaturity": 0.8,
        "systemIntegration": 0.7,
        "decisionLatency": 0.4,
        "processComplexity": 0.3,
        "operationalRisk": 0.2,
        "technologicalRisk": 0.25,
    }
