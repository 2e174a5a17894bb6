"""Pattern-based PII scanning with FERPA/COPPA risk tagging.

Detection is purely regular-expression driven: fast and auditable, but it will
miss free-form PII such as names and street addresses.
"""

import re
from collections import Counter

from app.core.logging import get_logger
from app.core.schemas_documents import PIIDetection, PIISummary, TextSpan

logger = get_logger(__name__)

PII_CONFIDENCE = 0.9

# Scanned in this order; detections are emitted grouped by type
PII_PATTERNS: dict[str, re.Pattern[str]] = {
    "SSN": re.compile(r"\b\d{3}-\d{2}-\d{4}\b"),
    "STUDENT_ID": re.compile(r"\b(?:student|id|student_id)[\s:]\s*(\d{6,12})\b", re.IGNORECASE),
    "EMAIL": re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"),
    "PHONE": re.compile(r"\b\d{3}[-.]?\d{3}[-.]?\d{4}\b"),
    "DOB": re.compile(r"\b\d{1,2}[/\-]\d{1,2}[/\-]\d{2,4}\b"),
}

REDACTION_SUGGESTIONS: dict[str, list[str]] = {
    "SSN": ["[REDACTED-SSN]", "[Student ID Removed]"],
    "STUDENT_ID": ["[STUDENT-ID]", "[ID-REDACTED]"],
    "EMAIL": ["[EMAIL-REDACTED]", "[Contact Information Removed]"],
    "PHONE": ["[PHONE-REDACTED]", "[Contact Number Removed]"],
    "DOB": ["[DATE-REDACTED]", "[Birth Date Removed]"],
}

COMPLIANCE_RISK: dict[str, str] = {
    "SSN": "FERPA",
    "STUDENT_ID": "FERPA",
    "EMAIL": "COPPA",
    "PHONE": "COPPA",
    "DOB": "COPPA",
}


def redaction_suggestions(pii_type: str) -> list[str]:
    return list(REDACTION_SUGGESTIONS.get(pii_type, ["[REDACTED]", "[Information Removed]"]))


def compliance_risk(pii_type: str) -> str:
    return COMPLIANCE_RISK.get(pii_type, "FERPA")


def detect_pii(content: str | None) -> list[PIIDetection]:
    """
    Scan text for SSN, student ID, email, phone and date-of-birth spans.

    Args:
        content: Raw document text

    Returns:
        One PIIDetection per match, grouped by type in PII_PATTERNS order
    """
    if not content:
        return []

    detections: list[PIIDetection] = []
    for pii_type, pattern in PII_PATTERNS.items():
        for match in pattern.finditer(content):
            detections.append(
                PIIDetection(
                    type=pii_type,
                    text=match.group(0),
                    position=TextSpan(start=match.start(), end=match.end()),
                    confidence=PII_CONFIDENCE,
                    suggestions=redaction_suggestions(pii_type),
                    compliance_risk=compliance_risk(pii_type),
                )
            )

    if detections:
        logger.info(f"Detected {len(detections)} PII spans")
    return detections


def redact_text(content: str, detections: list[PIIDetection]) -> str:
    """
    Replace each detected span with its first redaction suggestion.

    Overlapping spans (a student ID that also looks like a phone number) are
    redacted once, by whichever starts first.
    """
    if not content or not detections:
        return content

    parts: list[str] = []
    cursor = 0
    for detection in sorted(detections, key=lambda d: (d.position.start, -d.position.end)):
        start, end = detection.position.start, detection.position.end
        if start < cursor:
            continue
        replacement = detection.suggestions[0] if detection.suggestions else "[REDACTED]"
        parts.append(content[cursor:start])
        parts.append(replacement)
        cursor = end
    parts.append(content[cursor:])
    return "".join(parts)


def summarize_pii(detections: list[PIIDetection]) -> PIISummary:
    """Count detections by type and by compliance regime."""
    return PIISummary(
        has_pii=bool(detections),
        total=len(detections),
        by_type=dict(Counter(d.type for d in detections)),
        by_compliance_risk=dict(Counter(d.compliance_risk for d in detections)),
    )
