"""AI readiness index computers (AIRIX framework).

Five sub-indices plus the overall AIRIX index:

- airs: AI Infrastructure & Resources
- aics: AI Capability & Competence
- aims: AI Implementation Maturity (pilot-phase penalty)
- aips: AI Policy & Ethics (risk-to-score inversion)
- aibs: AI Benefits (net benefit over realization potential)
- airix: fixed-weight combination of the five sub-index scores

All values are on the unit scale; the 0-100 arithmetic of the policy index is
carried out internally and mapped back.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from app.core.readiness.categories import AI_READINESS_KEYWORDS
from app.core.readiness.defaults import DEFAULTS, ScoringDefaults
from app.core.readiness.normalize import (
    average,
    clamp01,
    clamp_0_100,
    likert_to_unit,
    weighted_sum,
)
from app.core.readiness.responses import Response
from app.core.schemas_readiness import ScoreDetail

AI_READINESS_SUITE_VERSION = "1.0.0"

# Sub-index name -> factor name inside airix
AIRIX_FACTOR_NAMES = {
    "airs": "infrastructure",
    "aics": "capability",
    "aims": "maturity",
    "aips": "policy",
    "aibs": "benefits",
}


def _dimensions(
    responses: Sequence[Response],
    index: str,
    defaults: ScoringDefaults,
    notes: list[str],
    fallbacks: Mapping[str, float] | None = None,
) -> dict[str, float]:
    """Average Likert value for every dimension of ``index`` in keyword-table order."""
    factors: dict[str, float] = {}
    for dimension in AI_READINESS_KEYWORDS.dimensions(index):
        fallback = (fallbacks or {}).get(dimension, defaults.neutral)
        matched = AI_READINESS_KEYWORDS.select(responses, index, dimension)
        if not matched:
            notes.append(f"no responses matched {dimension}")
        factors[dimension] = average((likert_to_unit(r.value) for r in matched), fallback)
    return factors


def compute_airs(
    responses: Sequence[Response],
    metrics: Mapping[str, Any] | None = None,
    defaults: ScoringDefaults = DEFAULTS,
) -> ScoreDetail:
    """Data, infrastructure and digital resources, weighted 40/35/25."""
    notes: list[str] = []
    factors = _dimensions(responses, "airs", defaults, notes)
    overall = clamp01(weighted_sum(factors, defaults.airs_weights))
    return ScoreDetail(overall_score=overall, factors=factors, notes=notes)


def compute_aics(
    responses: Sequence[Response],
    metrics: Mapping[str, Any] | None = None,
    defaults: ScoringDefaults = DEFAULTS,
) -> ScoreDetail:
    """Staff, analytical and digital competence."""
    notes: list[str] = []
    factors = _dimensions(responses, "aics", defaults, notes)
    return ScoreDetail(
        overall_score=average(factors.values(), defaults.neutral),
        factors=factors,
        notes=notes,
    )


def compute_aims(
    responses: Sequence[Response],
    metrics: Mapping[str, Any] | None = None,
    defaults: ScoringDefaults = DEFAULTS,
) -> ScoreDetail:
    """Governance and change management, discounted while still in pilot phase."""
    notes: list[str] = []
    factors = _dimensions(responses, "aims", defaults, notes)

    base = average([factors["project_governance"], factors["change_management"]], defaults.neutral)
    multiplier = 1.0
    if factors["implementation_phase"] < defaults.phase_midpoint:
        multiplier = defaults.pilot_phase_multiplier
        notes.append("pilot phase multiplier applied")

    return ScoreDetail(overall_score=clamp01(base * multiplier), factors=factors, notes=notes)


def compute_aips(
    responses: Sequence[Response],
    metrics: Mapping[str, Any] | None = None,
    defaults: ScoringDefaults = DEFAULTS,
) -> ScoreDetail:
    """Policy, ethics, privacy and compliance expressed as inverse risk."""
    notes: list[str] = []
    factors = _dimensions(responses, "aips", defaults, notes)

    # Each factor becomes a 0-5 risk (higher = riskier), then (5 - risk) * 20
    risks = [(100 * (1 - value)) / 20 for value in factors.values()]
    avg_risk = sum(risks) / len(risks) if risks else 5 * (1 - defaults.neutral)
    overall = clamp_0_100((5 - avg_risk) * 20) / 100

    return ScoreDetail(overall_score=overall, factors=factors, notes=notes)


def compute_aibs(
    responses: Sequence[Response],
    metrics: Mapping[str, Any] | None = None,
    defaults: ScoringDefaults = DEFAULTS,
) -> ScoreDetail:
    """Expected benefits net of identified risks, relative to realization potential."""
    notes: list[str] = []
    factors = _dimensions(
        responses,
        "aibs",
        defaults,
        notes,
        fallbacks={"realization_potential": defaults.default_potential},
    )

    benefits = factors["expected_benefits"]
    risks = factors["identified_risks"]
    potential = factors["realization_potential"]
    if potential <= 0:
        potential = defaults.default_potential
        factors["realization_potential"] = potential
        notes.append("realization potential was zero; full scale assumed")

    net_benefit = max(0.0, benefits - risks)
    return ScoreDetail(overall_score=clamp01(net_benefit / potential), factors=factors, notes=notes)


def combine_airix(
    sub_indices: Mapping[str, ScoreDetail],
    defaults: ScoringDefaults = DEFAULTS,
) -> ScoreDetail:
    """
    Overall AI readiness as a fixed-weight combination of the sub-index scores.

    Args:
        sub_indices: ScoreDetail per sub-index name (airs, aics, aims, aips, aibs)
        defaults: Scoring defaults holding ``airix_weights``

    Returns:
        ScoreDetail whose factors are the sub-index scores under readable names

    Raises:
        KeyError: If a weighted sub-index is absent
    """
    scores = {name: sub_indices[name].overall_score for name in defaults.airix_weights}
    factors = {AIRIX_FACTOR_NAMES.get(name, name): score for name, score in scores.items()}
    return ScoreDetail(
        overall_score=clamp01(weighted_sum(scores, defaults.airix_weights)),
        factors=factors,
    )


AI_READINESS_INDEX_COMPUTERS = {
    "airs": compute_airs,
    "aics": compute_aics,
    "aims": compute_aims,
    "aips": compute_aips,
    "aibs": compute_aibs,
}
