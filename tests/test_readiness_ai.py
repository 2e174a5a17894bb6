"""Tests for AI readiness index computers (airs, aics, aims, aips, aibs) and airix."""

import math

import pytest

from app.core.readiness import AI_READINESS_SUITE_VERSION, calculate_ai_readiness
from app.core.readiness.ai_readiness import (
    combine_airix,
    compute_aibs,
    compute_aics,
    compute_aims,
    compute_airs,
    compute_aips,
)
from app.core.readiness.defaults import ScoringDefaults
from app.core.readiness.responses import collect_responses
from app.core.schemas_readiness import ScoreDetail


def _answers(*pairs):
    return collect_responses([{"prompt": prompt, "value": value} for prompt, value in pairs])


class TestAirsAndAics:
    def test_airs_uses_weighted_dimensions(self):
        detail = compute_airs(_answers(("Data quality", 5), ("Cloud infrastructure", 1), ("Software platform", 3)))

        assert detail.factors == pytest.approx(
            {"data_readiness": 1.0, "infrastructure_capability": 0.0, "digital_resources": 0.5}
        )
        assert detail.overall_score == pytest.approx(0.40 * 1.0 + 0.35 * 0.0 + 0.25 * 0.5)

    def test_aics_is_mean_and_notes_missing_dimensions(self):
        detail = compute_aics(_answers(("Staff training", 5)))

        assert detail.factors["staff_competence"] == 1.0
        assert detail.factors["analytical_capability"] == 0.5
        assert detail.overall_score == pytest.approx((1.0 + 0.5 + 0.5) / 3)
        assert "no responses matched analytical_capability" in detail.notes
        assert "no responses matched digital_skills" in detail.notes

    def test_digital_skills_answers_do_not_count_as_staff_competence(self):
        detail = compute_aics(_answers(("Rate our digital skills", 5), ("Staff training", 1)))

        assert detail.factors["digital_skills"] == 1.0
        assert detail.factors["staff_competence"] == 0.0

    def test_standalone_skills_mention_still_counts_as_staff_competence(self):
        detail = compute_aics(_answers(("Staff skills and digital skills", 5)))

        assert detail.factors["staff_competence"] == 1.0
        assert detail.factors["digital_skills"] == 1.0


class TestAimsPhaseMultiplier:
    def test_aims_pilot_phase_multiplier(self):
        pilot = compute_aims(_answers(("Project governance", 5), ("Change adoption", 3), ("Pilot stage", 2)))
        scaled = compute_aims(_answers(("Project governance", 5), ("Change adoption", 3), ("Pilot stage", 5)))

        assert pilot.overall_score == pytest.approx(0.75 * 0.7)
        assert "pilot phase multiplier applied" in pilot.notes
        assert scaled.overall_score == pytest.approx(0.75)
        assert "pilot phase multiplier applied" not in scaled.notes

    def test_aims_phase_at_midpoint_is_not_penalized(self):
        detail = compute_aims(_answers(("Project governance", 5), ("Change adoption", 5), ("Pilot stage", 3)))
        assert detail.overall_score == pytest.approx(1.0)


class TestAipsRiskInversion:
    def test_aips_risk_inversion(self):
        detail = compute_aips(
            _answers(("Policy", 5), ("Ethics and bias", 1), ("Privacy", 3), ("Compliance audit", 4))
        )
        # risks 0, 5, 2.5, 1.25 -> avg 2.1875 -> (5 - 2.1875) * 20 = 56.25
        assert detail.overall_score == pytest.approx(0.5625)

    def test_aips_safer_practice_scores_higher(self):
        safe = compute_aips(_answers(("Policy", 5), ("Ethics", 5), ("Privacy", 5), ("Compliance", 5)))
        unsafe = compute_aips(_answers(("Policy", 1), ("Ethics", 1), ("Privacy", 1), ("Compliance", 1)))

        assert safe.overall_score == pytest.approx(1.0)
        assert unsafe.overall_score == pytest.approx(0.0)


class TestAibs:
    def test_aibs_defaults_potential_to_full_scale(self):
        detail = compute_aibs(_answers(("Expected benefit", 5), ("Main risk", 3)))

        assert detail.factors["realization_potential"] == 1.0
        assert detail.overall_score == pytest.approx(0.5)

    def test_aibs_net_benefit_over_potential(self):
        detail = compute_aibs(_answers(("Expected benefit", 5), ("Main risk", 3), ("Growth potential", 3)))
        assert detail.overall_score == pytest.approx(1.0)

    def test_aibs_risks_exceeding_benefits_floor_at_zero(self):
        detail = compute_aibs(_answers(("Expected benefit", 2), ("Main risk", 5)))
        assert detail.overall_score == 0.0

    def test_aibs_zero_potential_is_replaced(self):
        detail = compute_aibs(_answers(("Expected benefit", 5), ("Main risk", 1), ("Growth potential", 1)))

        assert detail.factors["realization_potential"] == 1.0
        assert detail.overall_score == pytest.approx(1.0)
        assert any("realization potential" in note for note in detail.notes)


class TestAirix:
    def test_combine_airix_weights(self):
        ones = {name: ScoreDetail(overall_score=1.0) for name in ("airs", "aics", "aims", "aips", "aibs")}
        assert combine_airix(ones).overall_score == pytest.approx(1.0)

        only_airs = {**{k: ScoreDetail(overall_score=0.0) for k in ones}, "airs": ScoreDetail(overall_score=1.0)}
        combined = combine_airix(only_airs)
        assert combined.overall_score == pytest.approx(0.25)
        assert combined.factors["infrastructure"] == 1.0
        assert combined.factors["benefits"] == 0.0

    def test_combine_airix_missing_sub_index_raises(self):
        with pytest.raises(KeyError):
            combine_airix({"airs": ScoreDetail(overall_score=1.0)})

    def test_weights_must_sum_to_one(self):
        with pytest.raises(ValueError, match="must sum to 1.0"):
            ScoringDefaults(airix_weights={"airs": 0.5, "aics": 0.2})
        with pytest.raises(ValueError, match="negative"):
            ScoringDefaults(airs_weights={"data_readiness": 1.2, "infrastructure_capability": -0.2})
        with pytest.raises(ValueError, match="default_potential"):
            ScoringDefaults(default_potential=0)


class TestCalculateAIReadiness:
    def test_calculate_ai_readiness_bundle(self):
        result = calculate_ai_readiness(
            {"responses": [{"prompt": "Data quality", "value": 4}, {"prompt": "Staff skills", "value": 2}]},
            user_id="user-1",
        )

        assert list(result.indices) == ["airix", "airs", "aics", "aims", "aips", "aibs"]
        assert result.meta.version == AI_READINESS_SUITE_VERSION
        assert result.meta.suite == "ai_readiness"
        assert result.meta.response_count == 2
        assert result.meta.user_id == "user-1"
        for detail in result.indices.values():
            assert 0.0 <= detail.overall_score <= 1.0

    def test_calculate_ai_readiness_unrecognized_input(self):
        result = calculate_ai_readiness("not an assessment")

        assert result.meta.response_count == 0
        assert result.degraded_indices == []
        assert result["aics"].overall_score == pytest.approx(0.5)

    @pytest.mark.parametrize(
        "values",
        [
            (None, "x", float("nan"), 99, -5, 3),
            (float("inf"), "5", 5.5, 0, [], {}),
        ],
    )
    def test_scores_stay_in_range_for_malformed_answers(self, values):
        prompts = ("Data quality", "Staff skills", "Pilot stage", "Privacy policy", "Expected benefit", "Growth potential")
        result = calculate_ai_readiness([{"prompt": p, "value": v} for p, v in zip(prompts, values)])

        assert result.degraded_indices == []
        for detail in result.indices.values():
            scores = [detail.overall_score, *detail.factors.values()]
            assert all(math.isfinite(s) and 0.0 <= s <= 1.0 for s in scores)
