"""Database operations for computed readiness results.

Results are insert-only. Each row is unique on
(assessment_id, user_id, algorithm_version); a second insert of the same key
is reported as DUPLICATE_RESULT instead of overwriting.
"""

import logging
from typing import Any

from app.core.config import get_settings
from app.core.logging import get_logger, log_with_context
from app.core.schemas_readiness import (
    DUPLICATE_RESULT,
    CompositeResult,
    PersistOutcome,
    SuiteName,
)
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)

UNIQUE_VIOLATION = "23505"


def results_table(suite: SuiteName) -> str:
    settings = get_settings()
    if suite == "ai_readiness":
        return settings.AI_READINESS_RESULTS_TABLE
    return settings.ENTERPRISE_RESULTS_TABLE


def is_unique_violation(error: Exception) -> bool:
    """Whether a store error is a uniqueness violation (Postgres 23505 / duplicate key)."""
    if str(getattr(error, "code", "") or "") == UNIQUE_VIOLATION:
        return True
    message = str(error).lower()
    return "duplicate" in message or "unique" in message


def build_record(assessment_id: str, result: CompositeResult) -> dict[str, Any]:
    """Flatten a CompositeResult into a results-table row."""
    indices = result.model_dump(mode="json")["indices"]
    return {
        "assessment_id": assessment_id,
        "user_id": result.meta.user_id,
        "algorithm_version": result.meta.version,
        "suite": result.meta.suite,
        "computed_at": result.meta.computed_at,
        "response_count": result.meta.response_count,
        "scores": {name: detail["overall_score"] for name, detail in indices.items()},
        "indices": indices,
    }


def persist(assessment_id: str, result: CompositeResult) -> PersistOutcome:
    """
    Store a computed result with a single insert.

    Args:
        assessment_id: Assessment the result belongs to
        result: Composite result to store

    Returns:
        PersistOutcome:
            success=True with assessment_id and version on insert,
            success=False with code DUPLICATE_RESULT on a uniqueness violation,
            success=False with error on any other store failure,
            skipped=True when no store is configured or reachable
    """
    try:
        supabase = get_supabase()
    except Exception as e:
        logger.warning(f"Result persistence skipped: {e}")
        return PersistOutcome(skipped=True)

    table = results_table(result.meta.suite)
    record = build_record(assessment_id, result)

    try:
        supabase.table(table).insert(record).execute()
    except Exception as e:
        if is_unique_violation(e):
            log_with_context(
                logger,
                logging.INFO,
                "Result already stored for this assessment version",
                assessment_id=assessment_id,
                user_id=result.meta.user_id,
                version=result.meta.version,
            )
            return PersistOutcome(success=False, code=DUPLICATE_RESULT, error=str(e))

        log_with_context(
            logger,
            logging.ERROR,
            f"Failed to persist result: {e}",
            assessment_id=assessment_id,
            table=table,
        )
        return PersistOutcome(success=False, error=str(e))

    log_with_context(
        logger,
        logging.INFO,
        f"Persisted {result.meta.suite} result",
        assessment_id=assessment_id,
        version=result.meta.version,
    )
    return PersistOutcome(success=True, assessment_id=assessment_id, version=result.meta.version)


def get_latest_result(assessment_id: str, suite: SuiteName = "enterprise") -> dict[str, Any] | None:
    """Most recently computed stored result for an assessment, or None."""
    supabase = get_supabase()
    response = (
        supabase.table(results_table(suite))
        .select("*")
        .eq("assessment_id", assessment_id)
        .order("computed_at", desc=True)
        .limit(1)
        .execute()
    )
    rows = response.data or []
    return rows[0] if rows else None
