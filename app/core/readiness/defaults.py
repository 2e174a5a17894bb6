"""Scoring constants gathered into one explicit configuration value."""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

DEGRADED_NOTE = "error computing score"


def _frozen(d: dict[str, float]) -> Mapping[str, float]:
    return MappingProxyType(dict(d))


@dataclass(frozen=True)
class ScoringDefaults:
    """Fallbacks, thresholds and weights used by every factor computer.

    Passed explicitly into each computer so that tests and callers can vary one
    constant without patching module state.
    """

    neutral: float = 0.5
    """Value used for any dimension with no contributing data."""

    phase_midpoint: float = 0.5
    """Implementation-phase factor below this counts as pilot rather than scale."""

    pilot_phase_multiplier: float = 0.7

    default_potential: float = 1.0
    """Denominator for the net-benefit ratio when no potential responses exist."""

    airs_weights: Mapping[str, float] = field(
        default_factory=lambda: _frozen(
            {
                "data_readiness": 0.40,
                "infrastructure_capability": 0.35,
                "digital_resources": 0.25,
            }
        )
    )

    airix_weights: Mapping[str, float] = field(
        default_factory=lambda: _frozen(
            {
                "airs": 0.25,  # Infrastructure is foundational
                "aics": 0.20,
                "aims": 0.20,
                "aips": 0.20,
                "aibs": 0.15,
            }
        )
    )

    degraded_note: str = DEGRADED_NOTE

    def __post_init__(self):
        for name in ("airs_weights", "airix_weights"):
            weights = getattr(self, name)
            total = sum(weights.values())
            if not math.isclose(total, 1.0, abs_tol=1e-9):
                raise ValueError(f"{name} must sum to 1.0 (got {total:.4f})")
            if any(w < 0 for w in weights.values()):
                raise ValueError(f"{name} must not contain negative weights")
        if not 0 < self.default_potential <= 1:
            raise ValueError("default_potential must be in (0, 1]")


DEFAULTS = ScoringDefaults()
