"""Document processing package: PII scanning, classification, framework mapping and scoring.

This package provides:
- Pattern-based PII detection with FERPA/COPPA risk tagging and redaction
- Section classification (Claude-backed or deterministic keyword-based)
- Framework control mapping with gap scores and recommendations
- Document-level 0-100 readiness scoring with prioritized actions

Usage:
    from app.core.document_processing import (
        DocumentProcessingPipeline,
        process_document,
        KeywordClassifier,
    )
"""

from app.core.document_processing.classifier import (
    AnthropicClassifier,
    Classifier,
    KeywordClassifier,
    fallback_classifications,
    get_classifier,
    parse_classifications,
)

from app.core.document_processing.frameworks import (
    apply_control_review,
    assess_control_priority,
    assess_control_state,
    calculate_gap_score,
    generate_recommendations,
    map_to_frameworks,
)

from app.core.document_processing.pii import (
    PII_PATTERNS,
    detect_pii,
    redact_text,
    summarize_pii,
)

from app.core.document_processing.pipeline import (
    DocumentProcessingPipeline,
    process_document,
)

from app.core.document_processing.scoring import (
    default_scoring,
    prioritize_actions,
    score_document,
)

__all__ = [
    # Pipeline
    "DocumentProcessingPipeline",
    "process_document",
    # Classification
    "Classifier",
    "AnthropicClassifier",
    "KeywordClassifier",
    "fallback_classifications",
    "get_classifier",
    "parse_classifications",
    # PII
    "PII_PATTERNS",
    "detect_pii",
    "redact_text",
    "summarize_pii",
    # Frameworks
    "map_to_frameworks",
    "apply_control_review",
    "assess_control_state",
    "assess_control_priority",
    "calculate_gap_score",
    "generate_recommendations",
    # Scoring
    "score_document",
    "prioritize_actions",
    "default_scoring",
]
