"""API endpoints for readiness scoring and result persistence."""

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import JSONResponse

from app.core.logging import get_logger
from app.core.readiness import calculate_ai_readiness, calculate_composite
from app.core.schemas_readiness import (
    AIReadinessRequest,
    CompositeRequest,
    CompositeResult,
    PersistedCompositeResponse,
    SuiteName,
)
from app.db.readiness_results import get_latest_result, persist

logger = get_logger(__name__)

router = APIRouter()


@router.post("/readiness/composite", response_model=CompositeResult)
async def score_composite(request: CompositeRequest) -> CompositeResult:
    """
    Compute the enterprise indices (dsch, crf, lei, oci, hoci).

    Never fails on malformed assessment data; unrecognized shapes score as
    an empty response set.
    """
    return calculate_composite(
        request.assessment_data,
        request.operational_metrics,
        user_id=request.user_id,
    )


@router.post("/readiness/ai", response_model=CompositeResult)
async def score_ai_readiness(request: AIReadinessRequest) -> CompositeResult:
    """Compute the AI readiness indices (airix, airs, aics, aims, aips, aibs)."""
    return calculate_ai_readiness(request.assessment_data, user_id=request.user_id)


@router.post(
    "/readiness/assessments/{assessment_id}/results",
    response_model=PersistedCompositeResponse,
)
async def score_and_persist(assessment_id: str, request: CompositeRequest):
    """
    Compute the enterprise composite for an assessment and store it.

    Args:
        assessment_id: Assessment identifier
        request: Assessment data, operational metrics and user

    Returns:
        Computed result plus the persistence outcome. The result is returned
        even when persistence is skipped or fails; a duplicate submission of
        the same assessment, user and version responds with 409.
    """
    result = calculate_composite(
        request.assessment_data,
        request.operational_metrics,
        user_id=request.user_id,
    )
    outcome = persist(assessment_id, result)
    body = PersistedCompositeResponse(result=result, persistence=outcome)

    if outcome.is_duplicate:
        logger.info(f"Duplicate result submission for assessment {assessment_id}")
        return JSONResponse(status_code=409, content=body.model_dump(mode="json"))

    return body


@router.get("/readiness/assessments/{assessment_id}/results/latest")
async def get_latest(
    assessment_id: str,
    suite: SuiteName = Query("enterprise", description="Index suite"),
) -> dict:
    """
    Get the most recently stored result for an assessment.

    Raises:
        HTTPException 404: If no result is stored
        HTTPException 503: If the results store is unavailable
    """
    try:
        row = get_latest_result(assessment_id, suite)
    except Exception:
        logger.exception(f"Failed to load results for assessment {assessment_id}")
        raise HTTPException(status_code=503, detail="Results store unavailable")

    if not row:
        raise HTTPException(status_code=404, detail="No stored result for assessment")

    return row
