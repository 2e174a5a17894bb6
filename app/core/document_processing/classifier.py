"""Semantic classification of document sections into governance categories.

Two implementations share the ``Classifier`` interface:

- ``AnthropicClassifier`` asks Claude to split and label the document
- ``KeywordClassifier`` is deterministic and offline, used in tests and
  whenever the LLM is not configured or fails
"""

import json
import re
from typing import Any, Protocol

from anthropic import Anthropic

from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.schemas_documents import CONTENT_CATEGORIES, SemanticClassification

logger = get_logger(__name__)


class Classifier(Protocol):
    """Anything that can label document text with governance categories."""

    def classify(self, text: str) -> list[SemanticClassification]: ...


def fallback_classifications(content: str) -> list[SemanticClassification]:
    """Single generic governance section used when nothing else can be derived."""
    return [
        SemanticClassification(
            section="General Content",
            category="Governance",
            content=(content or "")[:500],
            confidence=0.5,
            key_terms=["policy", "governance", "administration"],
        )
    ]


# ============================================================================
# Keyword classifier
# ============================================================================

CATEGORY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Governance": (
        "governance", "leadership", "oversight", "board", "committee",
        "policy", "decision", "administration",
    ),
    "Risk": ("risk", "security", "compliance", "liability", "breach", "threat"),
    "Instruction": ("teaching", "learning", "curriculum", "pedagogy", "instruction", "classroom", "course"),
    "Assessment": ("assessment", "evaluation", "grading", "integrity", "exam", "plagiarism"),
    "Data": ("data", "privacy", "storage", "retention", "record", "information management"),
    "Vendor": ("vendor", "third-party", "third party", "procurement", "contract", "supplier"),
    "Accessibility": ("accessibility", "ada", "inclusive", "accommodation", "disability"),
}

_SECTION_SPLIT = re.compile(r"\n\s*\n")
_HEADING_MARKS = re.compile(r"^[#\s*\-\d.]+")


def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(keyword)}s?\b", re.IGNORECASE)


class KeywordClassifier:
    """Deterministic classifier: one label per paragraph by keyword hits."""

    def __init__(self, keywords: dict[str, tuple[str, ...]] | None = None):
        table = keywords or CATEGORY_KEYWORDS
        self._patterns = {
            category: [(kw, _keyword_pattern(kw)) for kw in words]
            for category, words in table.items()
        }

    def classify(self, text: str) -> list[SemanticClassification]:
        classifications = []
        for index, block in enumerate(_SECTION_SPLIT.split(text or "")):
            block = block.strip()
            if not block:
                continue
            result = self._classify_block(block, index)
            if result:
                classifications.append(result)

        if not classifications:
            return fallback_classifications(text)
        return classifications

    def _classify_block(self, block: str, index: int) -> SemanticClassification | None:
        best_category = None
        best_terms: list[str] = []
        for category, patterns in self._patterns.items():
            terms = [kw for kw, pattern in patterns if pattern.search(block)]
            # Ties keep the earlier category
            if len(terms) > len(best_terms):
                best_category, best_terms = category, terms

        if best_category is None:
            return None

        return SemanticClassification(
            section=_section_title(block, index),
            category=best_category,
            content=block[:500],
            confidence=min(0.9, 0.5 + 0.1 * len(best_terms)),
            key_terms=best_terms,
        )


def _section_title(block: str, index: int) -> str:
    first_line = block.splitlines()[0]
    title = _HEADING_MARKS.sub("", first_line).strip()
    return title[:80] or f"Section {index + 1}"


# ============================================================================
# Anthropic classifier
# ============================================================================

CLASSIFICATION_PROMPT = """Analyze this institutional document and classify each section into these categories:
- Governance: Leadership, oversight, decision-making structures
- Risk: Security, privacy, compliance, liability concerns
- Instruction: Teaching, learning, curriculum, pedagogy
- Assessment: Evaluation, grading, academic integrity
- Data: Information management, privacy, storage, access
- Vendor: Third-party services, procurement, contracts
- Accessibility: ADA compliance, inclusive design, accommodations

Document content:
{content}

Return a JSON array of objects with these fields:

[
  {{
    "section": "...",     // Section heading or short label
    "category": "...",    // One of the categories above
    "content": "...",     // The section text (may be abbreviated)
    "confidence": 0.0,    // 0-1
    "key_terms": [...]    // 3-8 key terms from the section
  }}
]

Return ONLY valid JSON. No explanation or markdown."""


def _strip_fences(response_text: str) -> str:
    if "```json" in response_text:
        return response_text.split("```json")[1].split("```")[0]
    if "```" in response_text:
        return response_text.split("```")[1].split("```")[0]
    return response_text


def _clamp(v: Any, min_v: float = 0.0, max_v: float = 1.0) -> float:
    try:
        return max(min_v, min(max_v, float(v)))
    except (TypeError, ValueError):
        return 0.5


def parse_classifications(response_text: str) -> list[SemanticClassification]:
    """
    Parse and validate the model's JSON array.

    Items with an unknown category or no section label are dropped; scores are
    clamped and text fields truncated.

    Raises:
        ValueError: If the response is not a JSON array
    """
    try:
        raw = json.loads(_strip_fences(response_text).strip())
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse classification response: {e}") from e

    if isinstance(raw, dict):
        raw = raw.get("classifications", raw.get("sections"))
    if not isinstance(raw, list):
        raise ValueError("Classification response is not a JSON array")

    classifications = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        category = item.get("category")
        if category not in CONTENT_CATEGORIES:
            logger.debug(f"Dropping classification with unknown category: {category}")
            continue
        key_terms = item.get("key_terms", item.get("keyTerms", []))
        if not isinstance(key_terms, list):
            key_terms = []
        classifications.append(
            SemanticClassification(
                section=str(item.get("section") or category)[:200],
                category=category,
                content=str(item.get("content") or "")[:500],
                confidence=_clamp(item.get("confidence", 0.5)),
                key_terms=[str(t) for t in key_terms if str(t).strip()][:20],
            )
        )
    return classifications


class AnthropicClassifier:
    """Classifies document sections with Claude."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_chars: int | None = None,
        client: Anthropic | None = None,
    ):
        settings = get_settings()
        api_key = api_key or settings.ANTHROPIC_API_KEY
        if client is None and not api_key:
            raise ValueError("ANTHROPIC_API_KEY not configured for classification")

        self.model = model or settings.CLASSIFIER_MODEL
        self.max_chars = max_chars or settings.CLASSIFIER_MAX_CHARS
        self._client = client or Anthropic(api_key=api_key)

    def classify(self, text: str) -> list[SemanticClassification]:
        """
        Classify document text.

        Raises:
            Exception: If the API call fails or the response cannot be parsed
        """
        prompt = CLASSIFICATION_PROMPT.format(content=(text or "")[: self.max_chars])

        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=4096,
                temperature=0.1,
                messages=[{"role": "user", "content": prompt}],
            )
            response_text = response.content[0].text if response.content else ""
            classifications = parse_classifications(response_text)
        except Exception as e:
            logger.error(f"Semantic classification failed: {e}")
            raise

        logger.info(f"Classified document into {len(classifications)} sections")
        return classifications


def get_classifier() -> Classifier:
    """LLM classifier when an Anthropic key is configured, keyword classifier otherwise."""
    settings = get_settings()
    if settings.ANTHROPIC_API_KEY:
        return AnthropicClassifier(api_key=settings.ANTHROPIC_API_KEY)
    logger.info("ANTHROPIC_API_KEY not set, using keyword classifier")
    return KeywordClassifier()
