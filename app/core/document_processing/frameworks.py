"""Mapping of classified content onto compliance-framework control catalogs.

Frameworks:
- NIST_AI_RMF: NIST AI Risk Management Framework (Govern/Map/Measure/Manage)
- ED_GUIDANCE: U.S. Department of Education guidance, by institution type
- STATE_AI_GUIDANCE: jurisdiction-specific guidance

The state heuristic only ever yields ``partial`` (a classification key term
appears in the control title) or ``missing``. ``compliant`` comes exclusively
from human review via ``apply_control_review``. State guidance controls are
reported as ``unknown`` until the institution's jurisdiction is reviewed.
"""

from dataclasses import dataclass

from app.core.logging import get_logger
from app.core.schemas_documents import (
    ControlReview,
    FrameworkControl,
    FrameworkMapping,
    SemanticClassification,
)

logger = get_logger(__name__)

MAX_RECOMMENDATIONS = 5


@dataclass(frozen=True)
class CatalogControl:
    """Static definition of a framework control."""

    id: str
    title: str
    description: str


NIST_AI_RMF_CONTROLS = (
    CatalogControl("GV-1.1", "AI Governance Structure", "NIST AI RMF Govern function control"),
    CatalogControl("GV-1.2", "AI Risk Management Strategy", "NIST AI RMF Govern function control"),
    CatalogControl("MP-1.1", "AI System Context Mapping", "NIST AI RMF Map function control"),
    CatalogControl("MS-1.1", "AI Risk Measurement", "NIST AI RMF Measure function control"),
    CatalogControl("MG-1.1", "AI Risk Response", "NIST AI RMF Manage function control"),
)

ED_GUIDANCE_CONTROLS = {
    "K12": (
        CatalogControl("ED-K12-1", "Student Data Privacy Protection", "U.S. Department of Education K12 guidance"),
        CatalogControl("ED-K12-2", "Age-Appropriate AI Use Guidelines", "U.S. Department of Education K12 guidance"),
        CatalogControl("ED-K12-3", "Teacher AI Training Requirements", "U.S. Department of Education K12 guidance"),
    ),
    "HigherEd": (
        CatalogControl("ED-HE-1", "Academic Integrity with AI", "U.S. Department of Education HigherEd guidance"),
        CatalogControl("ED-HE-2", "Research AI Ethics Guidelines", "U.S. Department of Education HigherEd guidance"),
        CatalogControl("ED-HE-3", "Faculty AI Professional Development", "U.S. Department of Education HigherEd guidance"),
    ),
}

STATE_AI_GUIDANCE_CONTROLS = (
    CatalogControl(
        "STATE-1",
        "State AI in Education Requirements",
        "State-specific AI guidance for educational institutions",
    ),
)


def assess_control_state(control: CatalogControl, classifications: list[SemanticClassification]) -> str:
    """``partial`` if any key term occurs in the control title (case-insensitive), else ``missing``."""
    title = control.title.lower()
    for classification in classifications:
        for term in classification.key_terms:
            term = term.strip().lower()
            if term and term in title:
                return "partial"
    return "missing"


def assess_control_priority(control: CatalogControl) -> str:
    if "Risk" in control.title or "Privacy" in control.title:
        return "high"
    if "Training" in control.title or "Professional" in control.title:
        return "medium"
    return "low"


def calculate_gap_score(controls: list[FrameworkControl]) -> int:
    """Percentage of controls in the ``missing`` state, rounded."""
    if not controls:
        return 0
    missing = sum(1 for c in controls if c.current_state == "missing")
    return round(missing / len(controls) * 100)


def generate_recommendations(controls: list[FrameworkControl]) -> list[str]:
    return [
        f"Implement {c.title} controls immediately"
        for c in controls
        if c.current_state == "missing" and c.priority == "high"
    ][:MAX_RECOMMENDATIONS]


def _annotate(
    catalog: tuple[CatalogControl, ...],
    classifications: list[SemanticClassification],
) -> list[FrameworkControl]:
    return [
        FrameworkControl(
            id=control.id,
            title=control.title,
            description=control.description,
            current_state=assess_control_state(control, classifications),
            priority=assess_control_priority(control),
        )
        for control in catalog
    ]


def _state_guidance_controls() -> list[FrameworkControl]:
    return [
        FrameworkControl(
            id=control.id,
            title=control.title,
            description=control.description,
            current_state="unknown",
            priority="medium",
        )
        for control in STATE_AI_GUIDANCE_CONTROLS
    ]


def _mapping(framework: str, controls: list[FrameworkControl]) -> FrameworkMapping:
    return FrameworkMapping(
        framework=framework,
        controls=controls,
        gap_score=calculate_gap_score(controls),
        recommendations=generate_recommendations(controls),
    )


def map_to_frameworks(
    classifications: list[SemanticClassification],
    institution_type: str = "HigherEd",
) -> list[FrameworkMapping]:
    """
    Annotate every framework catalog against a document's classifications.

    Args:
        classifications: Classified sections of the document
        institution_type: "K12" or "HigherEd", selects the ED guidance catalog

    Returns:
        One FrameworkMapping per framework: NIST_AI_RMF, ED_GUIDANCE, STATE_AI_GUIDANCE
    """
    ed_catalog = ED_GUIDANCE_CONTROLS.get(institution_type, ED_GUIDANCE_CONTROLS["HigherEd"])
    mappings = [
        _mapping("NIST_AI_RMF", _annotate(NIST_AI_RMF_CONTROLS, classifications)),
        _mapping("ED_GUIDANCE", _annotate(ed_catalog, classifications)),
        _mapping("STATE_AI_GUIDANCE", _state_guidance_controls()),
    ]

    logger.debug(
        "Framework gaps: "
        + ", ".join(f"{m.framework}={m.gap_score}" for m in mappings)
    )
    return mappings


def apply_control_review(
    mappings: list[FrameworkMapping],
    reviews: list[ControlReview],
) -> list[FrameworkMapping]:
    """
    Apply human review verdicts and recompute gap scores and recommendations.

    This is the only way a control becomes ``compliant`` (or moves out of
    ``unknown``). Reviews for control ids not present are ignored.

    Returns:
        New mappings; the inputs are not modified
    """
    verdicts = {review.control_id: review for review in reviews}
    reviewed = []
    for mapping in mappings:
        controls = []
        for control in mapping.controls:
            review = verdicts.get(control.id)
            if review is None:
                controls.append(control)
                continue
            controls.append(
                control.model_copy(
                    update={
                        "current_state": review.current_state,
                        "evidence": review.evidence or control.evidence,
                    }
                )
            )
        reviewed.append(_mapping(mapping.framework, controls))
    return reviewed
