"""Pydantic schemas for readiness scoring results and persistence outcomes."""

import math
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

SuiteName = Literal["enterprise", "ai_readiness"]

DUPLICATE_RESULT = "DUPLICATE_RESULT"


def _clamp_unit(value: Any) -> float:
    try:
        n = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(n):
        return 0.0
    return min(1.0, max(0.0, n))


# ============================================================================
# Score results
# ============================================================================


class ScoreDetail(BaseModel):
    """Score for one composite index: overall value plus its contributing factors.

    Factors are exposed as a read-only mapping and notes as a tuple, so a
    detail cannot be changed in place once built.
    """

    model_config = ConfigDict(frozen=True)

    overall_score: float = 0.0
    factors: Mapping[str, float] = Field(default_factory=dict, validate_default=True)
    notes: tuple[str, ...] = ()

    @field_validator("overall_score", mode="before")
    @classmethod
    def _clamp_overall(cls, v: Any) -> float:
        return _clamp_unit(v)

    @field_validator("factors", mode="before")
    @classmethod
    def _clamp_factors(cls, v: Any) -> dict[str, float]:
        if not isinstance(v, Mapping):
            return {}
        return {str(k): _clamp_unit(val) for k, val in v.items()}

    @field_validator("factors", mode="after")
    @classmethod
    def _freeze_factors(cls, v: Mapping[str, float]) -> Mapping[str, float]:
        return MappingProxyType(dict(v))

    @field_serializer("factors")
    def _serialize_factors(self, v: Mapping[str, float]) -> dict[str, float]:
        return dict(v)


class CompositeMeta(BaseModel):
    """Provenance of a scoring invocation."""

    model_config = ConfigDict(frozen=True)

    suite: SuiteName
    version: str
    computed_at: str
    response_count: int
    user_id: str | None = None


class CompositeResult(BaseModel):
    """Named bundle of index scores produced by one scoring call."""

    model_config = ConfigDict(frozen=True)

    indices: Mapping[str, ScoreDetail]
    meta: CompositeMeta

    @field_validator("indices", mode="after")
    @classmethod
    def _freeze_indices(cls, v: Mapping[str, ScoreDetail]) -> Mapping[str, ScoreDetail]:
        return MappingProxyType(dict(v))

    @field_serializer("indices")
    def _serialize_indices(self, v: Mapping[str, ScoreDetail]) -> dict[str, ScoreDetail]:
        return dict(v)

    def __getitem__(self, name: str) -> ScoreDetail:
        return self.indices[name]

    @property
    def degraded_indices(self) -> list[str]:
        """Names of indices that failed to compute."""
        return [
            name
            for name, detail in self.indices.items()
            if detail.overall_score == 0 and not detail.factors and detail.notes
        ]


# ============================================================================
# Persistence
# ============================================================================


class PersistOutcome(BaseModel):
    """Result of a persistence attempt. Never raised, always returned."""

    success: bool | None = None
    skipped: bool | None = None
    assessment_id: str | None = None
    version: str | None = None
    code: str | None = None
    error: str | None = None

    @property
    def is_duplicate(self) -> bool:
        return self.code == DUPLICATE_RESULT


# ============================================================================
# API request models
# ============================================================================


class CompositeRequest(BaseModel):
    """Request body for enterprise composite scoring."""

    assessment_data: Any = None
    operational_metrics: dict[str, Any] | None = None
    user_id: str | None = None


class AIReadinessRequest(BaseModel):
    """Request body for AI readiness scoring."""

    assessment_data: Any = None
    user_id: str | None = None


class PersistedCompositeResponse(BaseModel):
    """Computed composite plus the outcome of persisting it."""

    result: CompositeResult
    persistence: PersistOutcome
