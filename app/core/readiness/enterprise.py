"""Enterprise index computers.

Five organizational indices derived from categorized survey responses and
operational metrics:

- dsch: Digital Strategy & Capability Health
- crf:  Change Readiness Framework
- lei:  Leadership Effectiveness Index
- oci:  Organizational Culture Index
- hoci: Hybrid Operating Capability Index

Metrics where lower is better (decision latency, process complexity, operational
and technological risk) are inverted before they enter any index.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from app.core.readiness.categories import ENTERPRISE_KEYWORDS
from app.core.readiness.defaults import DEFAULTS, ScoringDefaults
from app.core.readiness.normalize import average, likert_to_unit, metric_to_unit
from app.core.readiness.responses import Response
from app.core.schemas_readiness import ScoreDetail

ENTERPRISE_SUITE_VERSION = "1.0.0"


def _response_dimension(
    responses: Sequence[Response],
    index: str,
    dimension: str,
    defaults: ScoringDefaults,
    notes: list[str],
) -> float:
    matched = ENTERPRISE_KEYWORDS.select(responses, index, dimension)
    if not matched:
        notes.append(f"no responses matched {dimension}")
    return average((likert_to_unit(r.value) for r in matched), defaults.neutral)


def _detail(factors: dict[str, float], notes: list[str], defaults: ScoringDefaults) -> ScoreDetail:
    return ScoreDetail(
        overall_score=average(factors.values(), defaults.neutral),
        factors=factors,
        notes=notes,
    )


def compute_dsch(
    responses: Sequence[Response],
    metrics: Mapping[str, Any],
    defaults: ScoringDefaults = DEFAULTS,
) -> ScoreDetail:
    """Strategic planning, technology integration and leadership alignment."""
    notes: list[str] = []
    n = defaults.neutral
    factors = {
        "strategic_alignment": _response_dimension(responses, "dsch", "strategic_alignment", defaults, notes),
        "technology_integration": _response_dimension(responses, "dsch", "technology_integration", defaults, notes),
        "leadership_support": _response_dimension(responses, "dsch", "leadership_support", defaults, notes),
        "digital_maturity": metric_to_unit(metrics, "digitalMaturity", n),
        "system_integration": metric_to_unit(metrics, "systemIntegration", n),
    }
    return _detail(factors, notes, defaults)


def compute_crf(
    responses: Sequence[Response],
    metrics: Mapping[str, Any],
    defaults: ScoringDefaults = DEFAULTS,
) -> ScoreDetail:
    """Change practices, collaboration, innovation and agility."""
    notes: list[str] = []
    n = defaults.neutral
    factors = {
        "change_practices": _response_dimension(responses, "crf", "change_practices", defaults, notes),
        "collaboration_index": metric_to_unit(metrics, "collaborationIndex", n),
        "innovation_capacity": metric_to_unit(metrics, "innovationCapacity", n),
        "strategic_agility": metric_to_unit(metrics, "strategicAgility", n),
        "leadership_effectiveness": metric_to_unit(metrics, "leadershipEffectiveness", n),
    }
    return _detail(factors, notes, defaults)


def compute_lei(
    responses: Sequence[Response],
    metrics: Mapping[str, Any],
    defaults: ScoringDefaults = DEFAULTS,
) -> ScoreDetail:
    """Leadership practices and effectiveness, with decision latency inverted."""
    notes: list[str] = []
    n = defaults.neutral
    decision_latency = metric_to_unit(metrics, "decisionLatency", n)
    factors = {
        "leadership_practices": _response_dimension(responses, "lei", "leadership_practices", defaults, notes),
        "leadership_effectiveness": metric_to_unit(metrics, "leadershipEffectiveness", n),
        "decision_efficiency": 1 - decision_latency,
        "communication_efficiency": metric_to_unit(metrics, "communicationEfficiency", n),
    }
    return _detail(factors, notes, defaults)


def compute_oci(
    responses: Sequence[Response],
    metrics: Mapping[str, Any],
    defaults: ScoringDefaults = DEFAULTS,
) -> ScoreDetail:
    """Culture: engagement, collaboration, innovation, change and future readiness."""
    n = defaults.neutral
    factors = {
        "employee_engagement": metric_to_unit(metrics, "employeeEngagement", n),
        "collaboration_index": metric_to_unit(metrics, "collaborationIndex", n),
        "innovation_capacity": metric_to_unit(metrics, "innovationCapacity", n),
        "change_readiness": metric_to_unit(metrics, "changeReadiness", n),
        "future_readiness": metric_to_unit(metrics, "futureReadiness", n),
    }
    return _detail(factors, [], defaults)


def compute_hoci(
    responses: Sequence[Response],
    metrics: Mapping[str, Any],
    defaults: ScoringDefaults = DEFAULTS,
) -> ScoreDetail:
    """Operational and technical execution, penalizing complexity and risk."""
    n = defaults.neutral
    process_complexity = metric_to_unit(metrics, "processComplexity", n)
    operational_risk = metric_to_unit(metrics, "operationalRisk", n)
    technological_risk = metric_to_unit(metrics, "technologicalRisk", n)
    factors = {
        "process_efficiency": 1 - process_complexity,
        "automation": metric_to_unit(metrics, "taskAutomationLevel", n),
        "resource_utilization": metric_to_unit(metrics, "resourceUtilization", n),
        "integration": metric_to_unit(metrics, "systemIntegration", n),
        "cybersecurity": metric_to_unit(metrics, "cybersecurityLevel", n),
        "risk_mitigation": 1 - average([operational_risk, technological_risk], n),
    }
    return _detail(factors, [], defaults)


ENTERPRISE_INDEX_COMPUTERS = {
    "dsch": compute_dsch,
    "crf": compute_crf,
    "lei": compute_lei,
    "oci": compute_oci,
    "hoci": compute_hoci,
}
