"""Readiness scoring package: normalized, weighted composite indices from survey data.

This package provides:
- Normalizers for Likert answers and 0-1 / 0-100 operational metrics
- Versioned keyword tables and the category extractor
- Enterprise index computers (dsch, crf, lei, oci, hoci)
- AI readiness index computers (airix, airs, aics, aims, aips, aibs)
- Composite aggregation with per-index failure isolation

Usage:
    from app.core.readiness import (
        calculate_composite,
        calculate_ai_readiness,
        compute_composite,
        ScoringDefaults,
    )
"""

from app.core.readiness.aggregator import (
    AI_READINESS_SUITE,
    ENTERPRISE_SUITE,
    CompositeOutcome,
    Degraded,
    IndexSuite,
    Scored,
    calculate_ai_readiness,
    calculate_composite,
    compute_composite,
    degraded_detail,
)
from app.core.readiness.ai_readiness import AI_READINESS_SUITE_VERSION
from app.core.readiness.categories import (
    AI_READINESS_KEYWORDS,
    ENTERPRISE_KEYWORDS,
    KeywordTable,
    select_by_category,
)
from app.core.readiness.defaults import DEFAULTS, ScoringDefaults
from app.core.readiness.enterprise import ENTERPRISE_SUITE_VERSION
from app.core.readiness.normalize import (
    average,
    clamp01,
    likert_to_unit,
    metric_to_unit,
    to_unit,
)
from app.core.readiness.responses import Response, collect_responses

__all__ = [
    # Entry points
    "calculate_composite",
    "calculate_ai_readiness",
    "compute_composite",
    # Aggregation types
    "CompositeOutcome",
    "Scored",
    "Degraded",
    "IndexSuite",
    "ENTERPRISE_SUITE",
    "AI_READINESS_SUITE",
    "degraded_detail",
    # Versions
    "ENTERPRISE_SUITE_VERSION",
    "AI_READINESS_SUITE_VERSION",
    # Configuration
    "ScoringDefaults",
    "DEFAULTS",
    # Categories
    "KeywordTable",
    "ENTERPRISE_KEYWORDS",
    "AI_READINESS_KEYWORDS",
    "select_by_category",
    # Normalization
    "likert_to_unit",
    "metric_to_unit",
    "to_unit",
    "clamp01",
    "average",
    # Inputs
    "Response",
    "collect_responses",
]
