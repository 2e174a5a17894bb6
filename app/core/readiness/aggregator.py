"""Composite aggregation of index computers into a single scoring result.

Each index computer runs in isolation: an exception inside one degrades only
that index. Failures outside the per-index boundary degrade the whole result.
Callers receive an explicit ``Scored | Degraded`` outcome from
``compute_composite``; the public entry points unwrap it and never raise.
"""

import json
import logging
from collections.abc import Callable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from app.core.config import get_settings
from app.core.logging import get_logger, log_with_context
from app.core.readiness.ai_readiness import (
    AI_READINESS_INDEX_COMPUTERS,
    AI_READINESS_SUITE_VERSION,
    combine_airix,
)
from app.core.readiness.defaults import DEFAULTS, ScoringDefaults
from app.core.readiness.enterprise import ENTERPRISE_INDEX_COMPUTERS, ENTERPRISE_SUITE_VERSION
from app.core.readiness.responses import Response, collect_responses
from app.core.schemas_readiness import CompositeMeta, CompositeResult, ScoreDetail, SuiteName

logger = get_logger(__name__)

IndexComputer = Callable[[Sequence[Response], Mapping[str, Any], ScoringDefaults], ScoreDetail]
Combiner = Callable[[Mapping[str, ScoreDetail], ScoringDefaults], ScoreDetail]


@dataclass(frozen=True)
class IndexSuite:
    """A named, versioned set of index computers with an optional overall index."""

    name: SuiteName
    version: str
    computers: Mapping[str, IndexComputer]
    combined_index: str | None = None
    combiner: Combiner | None = None

    def index_names(self) -> list[str]:
        names = list(self.computers)
        if self.combined_index:
            names.insert(0, self.combined_index)
        return names


ENTERPRISE_SUITE = IndexSuite(
    name="enterprise",
    version=ENTERPRISE_SUITE_VERSION,
    computers=ENTERPRISE_INDEX_COMPUTERS,
)

AI_READINESS_SUITE = IndexSuite(
    name="ai_readiness",
    version=AI_READINESS_SUITE_VERSION,
    computers=AI_READINESS_INDEX_COMPUTERS,
    combined_index="airix",
    combiner=combine_airix,
)


# ============================================================================
# Outcome types
# ============================================================================


@dataclass(frozen=True)
class Scored:
    """Aggregation completed; individual indices may still carry degraded notes."""

    result: CompositeResult

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Degraded:
    """Aggregation failed as a whole; every index is zeroed."""

    result: CompositeResult
    error: str

    @property
    def ok(self) -> bool:
        return False


CompositeOutcome = Scored | Degraded


def degraded_detail(defaults: ScoringDefaults = DEFAULTS) -> ScoreDetail:
    """Zero score used in place of an index that could not be computed."""
    return ScoreDetail(overall_score=0, factors={}, notes=[defaults.degraded_note])


def _meta(suite: IndexSuite, response_count: int, user_id: str | None) -> CompositeMeta:
    return CompositeMeta(
        suite=suite.name,
        version=suite.version,
        computed_at=datetime.now(timezone.utc).isoformat(),
        response_count=response_count,
        user_id=user_id,
    )


def _run_index(
    name: str,
    computer: IndexComputer,
    responses: Sequence[Response],
    metrics: Mapping[str, Any],
    defaults: ScoringDefaults,
) -> ScoreDetail:
    try:
        return computer(responses, metrics, defaults)
    except Exception as e:
        log_with_context(
            logger,
            logging.ERROR,
            f"Index computation failed: {e}",
            index=name,
            error_type=type(e).__name__,
        )
        return degraded_detail(defaults)


def _run_all(
    computers: Mapping[str, IndexComputer],
    responses: Sequence[Response],
    metrics: Mapping[str, Any],
    defaults: ScoringDefaults,
    max_workers: int,
) -> dict[str, ScoreDetail]:
    if max_workers <= 1 or len(computers) <= 1:
        return {
            name: _run_index(name, fn, responses, metrics, defaults)
            for name, fn in computers.items()
        }

    # Inputs are shared read-only; computers hold no mutable state
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {
            name: pool.submit(_run_index, name, fn, responses, metrics, defaults)
            for name, fn in computers.items()
        }
        return {name: future.result() for name, future in futures.items()}


def _configured_workers() -> int:
    try:
        return get_settings().SCORING_MAX_WORKERS
    except Exception as e:
        logger.warning(f"Invalid scoring settings, computing indices sequentially: {e}")
        return 1


def compute_composite(
    responses: Sequence[Response],
    metrics: Mapping[str, Any] | None = None,
    suite: IndexSuite = ENTERPRISE_SUITE,
    defaults: ScoringDefaults = DEFAULTS,
    user_id: str | None = None,
    max_workers: int | None = None,
) -> CompositeOutcome:
    """
    Run every index computer of ``suite`` and bundle the results.

    Args:
        responses: Normalized survey responses
        metrics: Operational metrics mapping (missing keys use the neutral default)
        suite: Index suite to evaluate
        defaults: Scoring defaults passed into every computer
        user_id: Optional submitting user, recorded in meta
        max_workers: Threads for index computation (defaults to settings)

    Returns:
        Scored with the result, or Degraded with an all-zero result and the error
    """
    response_count = len(responses)
    if max_workers is None:
        max_workers = _configured_workers()

    try:
        indices = _run_all(suite.computers, responses, metrics or {}, defaults, max_workers)

        if suite.combined_index and suite.combiner:
            combined = suite.combiner(indices, defaults)
            indices = {suite.combined_index: combined, **indices}

        result = CompositeResult(indices=indices, meta=_meta(suite, response_count, user_id))
        return Scored(result=result)

    except Exception as e:
        log_with_context(
            logger,
            logging.ERROR,
            f"Composite aggregation failed: {e}",
            suite=suite.name,
            response_count=response_count,
        )
        result = CompositeResult(
            indices={name: degraded_detail(defaults) for name in suite.index_names()},
            meta=_meta(suite, response_count, user_id),
        )
        return Degraded(result=result, error=str(e))


def _debug_dump(result: CompositeResult) -> None:
    try:
        enabled = get_settings().ALGORITHM_DEBUG
    except Exception:
        enabled = False
    if enabled:
        logger.debug(f"Computed {result.meta.suite} metrics: {json.dumps(result.model_dump(mode='json'))}")


def calculate_composite(
    assessment_data: Any,
    operational_metrics: Mapping[str, Any] | None = None,
    *,
    user_id: str | None = None,
    defaults: ScoringDefaults | None = None,
) -> CompositeResult:
    """
    Compute the enterprise indices (dsch, crf, lei, oci, hoci).

    Args:
        assessment_data: Responses in any supported shape
        operational_metrics: Organizational metrics (0-1 or 0-100 scale)
        user_id: Optional submitting user
        defaults: Override scoring defaults

    Returns:
        CompositeResult, degraded rather than raising on failure
    """
    responses = collect_responses(assessment_data)
    outcome = compute_composite(
        responses,
        operational_metrics,
        suite=ENTERPRISE_SUITE,
        defaults=defaults or DEFAULTS,
        user_id=user_id,
    )
    if not outcome.ok:
        logger.warning(f"Enterprise composite degraded: {outcome.error}")
    _debug_dump(outcome.result)
    return outcome.result


def calculate_ai_readiness(
    assessment_data: Any,
    *,
    user_id: str | None = None,
    defaults: ScoringDefaults | None = None,
) -> CompositeResult:
    """
    Compute the AI readiness indices (airix, airs, aics, aims, aips, aibs).

    Args:
        assessment_data: Responses in any supported shape
        user_id: Optional submitting user
        defaults: Override scoring defaults

    Returns:
        CompositeResult, degraded rather than raising on failure
    """
    responses = collect_responses(assessment_data)
    outcome = compute_composite(
        responses,
        None,
        suite=AI_READINESS_SUITE,
        defaults=defaults or DEFAULTS,
        user_id=user_id,
    )
    if not outcome.ok:
        logger.warning(f"AI readiness composite degraded: {outcome.error}")
    _debug_dump(outcome.result)
    return outcome.result
