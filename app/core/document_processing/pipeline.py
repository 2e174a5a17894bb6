"""Document processing pipeline.

This module orchestrates document analysis by:
1. Scanning the raw text for PII
2. Classifying sections into governance categories
3. Mapping the classifications onto framework control catalogs
4. Scoring the document

Processing never raises. A classifier failure falls back to keyword
classification and marks the result ``partial``; any other failure yields
``status="error"`` with empty collections and neutral scoring.
"""

import logging
import time
from typing import Any

from app.core.document_processing.classifier import Classifier, KeywordClassifier, get_classifier
from app.core.document_processing.frameworks import map_to_frameworks
from app.core.document_processing.pii import detect_pii
from app.core.document_processing.scoring import default_scoring, score_document
from app.core.logging import get_logger, log_with_context
from app.core.schemas_documents import DocumentUpload, ProcessingResult, SemanticClassification

logger = get_logger(__name__)


class DocumentProcessingPipeline:
    """Runs PII detection, classification, framework mapping and scoring for uploads."""

    def __init__(self, classifier: Classifier | None = None, fallback: Classifier | None = None):
        self._classifier = classifier
        self.fallback = fallback or KeywordClassifier()

    @property
    def classifier(self) -> Classifier:
        if self._classifier is None:
            self._classifier = get_classifier()
        return self._classifier

    def classify(self, content: str) -> tuple[list[SemanticClassification], bool]:
        """Classify with the primary classifier, falling back on failure.

        Returns:
            (classifications, degraded) where degraded is True if the fallback was used
        """
        try:
            return self.classifier.classify(content), False
        except Exception as e:
            logger.warning(f"Classifier failed, using keyword fallback: {e}")
            return self.fallback.classify(content), True

    def process_document(self, upload: DocumentUpload | dict[str, Any]) -> ProcessingResult:
        """
        Process one uploaded document.

        Args:
            upload: DocumentUpload (or a dict with the same fields)

        Returns:
            ProcessingResult; status is completed, partial or error
        """
        start_time = time.time()
        document_id = _document_id(upload)

        try:
            if not isinstance(upload, DocumentUpload):
                upload = DocumentUpload.model_validate(upload)

            pii_detections = detect_pii(upload.content)
            classifications, degraded = self.classify(upload.content)
            mappings = map_to_frameworks(classifications, upload.institution_type)
            scoring = score_document(classifications, mappings)

            duration_ms = int((time.time() - start_time) * 1000)
            status = "partial" if degraded else "completed"

            log_with_context(
                logger,
                logging.INFO,
                f"Processed document {upload.filename}",
                document_id=document_id,
                status=status,
                pii=len(pii_detections),
                sections=len(classifications),
                composite=round(scoring.composite, 1),
                duration_ms=duration_ms,
            )

            return ProcessingResult(
                document_id=document_id,
                pii_detections=pii_detections,
                semantic_classifications=classifications,
                framework_mappings=mappings,
                algorithmic_scoring=scoring,
                processing_time_ms=duration_ms,
                status=status,
            )

        except Exception as e:
            log_with_context(
                logger,
                logging.ERROR,
                f"Document processing error: {e}",
                document_id=document_id,
                error_type=type(e).__name__,
            )
            return ProcessingResult(
                document_id=document_id,
                algorithmic_scoring=default_scoring(),
                processing_time_ms=int((time.time() - start_time) * 1000),
                status="error",
                error=str(e),
            )


def _document_id(upload: Any) -> str:
    if isinstance(upload, DocumentUpload):
        return upload.id
    if isinstance(upload, dict) and upload.get("id") is not None:
        return str(upload["id"])
    return "unknown"


def process_document(
    upload: DocumentUpload | dict[str, Any],
    classifier: Classifier | None = None,
) -> ProcessingResult:
    """Process a document with ``classifier`` (configured default if None)."""
    return DocumentProcessingPipeline(classifier=classifier).process_document(upload)
