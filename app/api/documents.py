"""API endpoints for document analysis."""

from fastapi import APIRouter
from pydantic import BaseModel

from app.core.document_processing import (
    DocumentProcessingPipeline,
    detect_pii,
    redact_text,
    summarize_pii,
)
from app.core.logging import get_logger
from app.core.schemas_documents import DocumentUpload, PIIDetection, PIISummary, ProcessingResult

logger = get_logger(__name__)

router = APIRouter()


class PIIScanRequest(BaseModel):
    """Request body for a standalone PII scan."""
    content: str


class PIIScanResponse(BaseModel):
    """Detections, their summary and the redacted text."""
    detections: list[PIIDetection]
    summary: PIISummary
    redacted: str


@router.post("/documents/process", response_model=ProcessingResult)
def process_uploaded_document(upload: DocumentUpload) -> ProcessingResult:
    """
    Run PII detection, classification, framework mapping and scoring on a document.

    Always responds 200; failures are reported through ``status``.
    """
    return DocumentProcessingPipeline().process_document(upload)


@router.post("/documents/pii", response_model=PIIScanResponse)
def scan_pii(request: PIIScanRequest) -> PIIScanResponse:
    """Scan text for PII and return a redacted copy."""
    detections = detect_pii(request.content)
    return PIIScanResponse(
        detections=detections,
        summary=summarize_pii(detections),
        redacted=redact_text(request.content, detections),
    )
