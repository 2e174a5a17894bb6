"""Document-level readiness indices on the 0-100 scale.

Derived from how many sections fall in each governance category and from the
framework mappings:

- airix: governance and risk coverage
- airs: risk and data coverage
- aics: instruction and vendor coverage
- aims: governance and instruction alignment
- aips: breadth (distinct categories out of seven)
- aibs: share of controls reviewed as compliant
"""

import math
from collections import Counter

from app.core.schemas_documents import (
    CONTENT_CATEGORIES,
    AlgorithmicScoring,
    FrameworkMapping,
    PrioritizedAction,
    SemanticClassification,
)

ACTION_COUNT = 3
DEFAULT_FEASIBILITY = 75.0
URGENT_THRESHOLD = 50

ACTIONS = {
    "airix": "Establish AI governance committee and policy framework",
    "airs": "Conduct comprehensive AI risk assessment and mitigation planning",
    "aics": "Develop AI implementation capacity through training and resources",
    "aims": "Align AI initiatives with institutional mission and strategic goals",
    "aips": "Create prioritized AI implementation roadmap with clear milestones",
    "aibs": "Implement AI benchmarking and performance measurement systems",
}

RESOURCES = {
    "airix": ["Legal counsel", "Executive leadership", "Policy templates"],
    "airs": ["Risk management team", "IT security", "Compliance officer"],
    "aics": ["Training budget", "Professional development", "Change management"],
    "aims": ["Strategic planning team", "Academic leadership", "Mission alignment"],
    "aips": ["Project management", "Resource allocation", "Timeline planning"],
    "aibs": ["Analytics tools", "Peer data", "Performance metrics"],
}


def _capped(count: int, per_item: int) -> int:
    return min(count * per_item, 100)


def _round(value: float) -> int:
    """Round half up (27.5 -> 28, 26.5 -> 27)."""
    return math.floor(value + 0.5)


def default_scoring() -> AlgorithmicScoring:
    """Neutral scoring (every index 50, no actions) used when processing fails."""
    return AlgorithmicScoring()


def prioritize_actions(scores: dict[str, float]) -> list[PrioritizedAction]:
    """
    Build actions for the weakest indices.

    Feasibility is fixed and priority equals impact, so identical inputs
    always produce identical actions.
    """
    weakest = sorted(scores.items(), key=lambda item: item[1])[:ACTION_COUNT]
    actions = [
        PrioritizedAction(
            index=name,
            action=ACTIONS.get(name, "Improve AI readiness"),
            impact=100 - score,
            feasibility=DEFAULT_FEASIBILITY,
            priority=100 - score,
            timeline="30 days" if score < URGENT_THRESHOLD else "90 days",
            resources=list(RESOURCES.get(name, ["General resources"])),
        )
        for name, score in weakest
    ]
    return sorted(actions, key=lambda a: a.priority, reverse=True)


def score_document(
    classifications: list[SemanticClassification],
    mappings: list[FrameworkMapping],
) -> AlgorithmicScoring:
    """
    Compute the six document indices, their mean and the prioritized actions.

    Args:
        classifications: Classified document sections
        mappings: Framework mappings for the same document

    Returns:
        AlgorithmicScoring with every index in [0, 100]
    """
    counts = Counter(c.category for c in classifications)
    governance = counts["Governance"]
    risk = counts["Risk"]
    instruction = counts["Instruction"]

    total_controls = sum(len(m.controls) for m in mappings)
    compliant_controls = sum(
        1 for m in mappings for c in m.controls if c.current_state == "compliant"
    )

    scores = {
        "airix": _round((_capped(governance, 20) + _capped(risk, 15)) / 2),
        "airs": _round((_capped(risk, 25) + _capped(counts["Data"], 20)) / 2),
        "aics": _round((_capped(instruction, 30) + _capped(counts["Vendor"], 25)) / 2),
        "aims": _round(min(governance * 20 + instruction * 15, 100)),
        "aips": _round(len(counts) / len(CONTENT_CATEGORIES) * 100),
        "aibs": _round(compliant_controls / total_controls * 100) if total_controls else 0,
    }

    return AlgorithmicScoring(
        **scores,
        composite=sum(scores.values()) / len(scores),
        prioritized_actions=prioritize_actions(scores),
    )
