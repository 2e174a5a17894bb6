"""Pydantic schemas for document analysis: PII, classification, framework mapping, scoring."""

import math
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

PIIType = Literal["SSN", "STUDENT_ID", "EMAIL", "PHONE", "DOB"]
ComplianceRisk = Literal["FERPA", "COPPA"]
ContentCategory = Literal[
    "Governance", "Risk", "Instruction", "Assessment", "Data", "Vendor", "Accessibility"
]
FrameworkName = Literal["NIST_AI_RMF", "ED_GUIDANCE", "STATE_AI_GUIDANCE"]
ControlState = Literal["compliant", "partial", "missing", "unknown"]
ControlPriority = Literal["high", "medium", "low"]
InstitutionType = Literal["K12", "HigherEd"]
ProcessingStatus = Literal["completed", "error", "partial"]

CONTENT_CATEGORIES: tuple[str, ...] = (
    "Governance",
    "Risk",
    "Instruction",
    "Assessment",
    "Data",
    "Vendor",
    "Accessibility",
)


# ============================================================================
# PII
# ============================================================================


class TextSpan(BaseModel):
    """Character offsets of a match within the scanned text (end exclusive)."""
    start: int
    end: int


class PIIDetection(BaseModel):
    """One detected PII span."""
    type: PIIType
    text: str
    position: TextSpan
    confidence: float = Field(ge=0.0, le=1.0)
    suggestions: list[str] = Field(default_factory=list)
    compliance_risk: ComplianceRisk


class PIISummary(BaseModel):
    """Counts of detections by entity type and by compliance regime."""
    has_pii: bool = False
    total: int = 0
    by_type: dict[str, int] = Field(default_factory=dict)
    by_compliance_risk: dict[str, int] = Field(default_factory=dict)


# ============================================================================
# Classification
# ============================================================================


class SemanticClassification(BaseModel):
    """A document section assigned to a governance category."""
    section: str
    category: ContentCategory
    content: str = ""
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)
    key_terms: list[str] = Field(default_factory=list)


# ============================================================================
# Framework mapping
# ============================================================================


class FrameworkControl(BaseModel):
    """A catalog control annotated with its assessed state for one document."""
    id: str
    title: str
    description: str = ""
    current_state: ControlState
    priority: ControlPriority
    evidence: str | None = None


class FrameworkMapping(BaseModel):
    """All controls of one framework plus the resulting gap score."""
    framework: FrameworkName
    controls: list[FrameworkControl] = Field(default_factory=list)
    gap_score: int = Field(default=0, ge=0, le=100)
    recommendations: list[str] = Field(default_factory=list)


class ControlReview(BaseModel):
    """Human review verdict for a single control."""
    control_id: str
    current_state: ControlState
    evidence: str | None = None


# ============================================================================
# Scoring
# ============================================================================


def _clamp_percent(value: Any) -> float:
    try:
        n = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(n):
        return 0.0
    return min(100.0, max(0.0, n))


class PrioritizedAction(BaseModel):
    """Improvement action targeting one of the weakest document indices."""
    index: str
    action: str
    impact: float
    feasibility: float
    priority: float
    timeline: str
    resources: list[str] = Field(default_factory=list)

    @field_validator("impact", "feasibility", "priority", mode="before")
    @classmethod
    def _clamp(cls, v: Any) -> float:
        return _clamp_percent(v)


class AlgorithmicScoring(BaseModel):
    """Document-level indices on the 0-100 scale."""
    airix: float = 50
    airs: float = 50
    aics: float = 50
    aims: float = 50
    aips: float = 50
    aibs: float = 50
    composite: float = 50
    prioritized_actions: list[PrioritizedAction] = Field(default_factory=list)

    @field_validator("airix", "airs", "aics", "aims", "aips", "aibs", "composite", mode="before")
    @classmethod
    def _clamp(cls, v: Any) -> float:
        return _clamp_percent(v)


# ============================================================================
# Pipeline input/output
# ============================================================================


class DocumentMetadata(BaseModel):
    """Optional descriptive metadata about an uploaded document."""
    size: int = 0
    page_count: int | None = None
    author: str | None = None
    created_date: datetime | None = None
    modified_date: datetime | None = None


class DocumentUpload(BaseModel):
    """Request body for document processing."""
    id: str
    filename: str
    type: Literal["pdf", "docx", "pptx", "xlsx", "csv", "html", "image", "text"] = "text"
    content: str = ""
    institution_type: InstitutionType = "HigherEd"
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)
    uploaded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ProcessingResult(BaseModel):
    """Everything produced for one document."""
    document_id: str
    pii_detections: list[PIIDetection] = Field(default_factory=list)
    semantic_classifications: list[SemanticClassification] = Field(default_factory=list)
    framework_mappings: list[FrameworkMapping] = Field(default_factory=list)
    algorithmic_scoring: AlgorithmicScoring = Field(default_factory=AlgorithmicScoring)
    processing_time_ms: int = 0
    status: ProcessingStatus
    error: str | None = None
