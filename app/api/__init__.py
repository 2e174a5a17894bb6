"""API router for v1 endpoints."""

from fastapi import APIRouter

from app.api import documents, readiness

router = APIRouter()

# Survey scoring and result persistence
router.include_router(readiness.router, tags=["readiness"])

# Document analysis (PII, classification, framework mapping)
router.include_router(documents.router, tags=["documents"])
