"""Keyword-driven assignment of survey responses to semantic categories.

Each composite index owns a set of dimensions, and each dimension owns a set of
keywords. A response belongs to a dimension when any keyword occurs in its
lower-cased prompt, section or tags. Keywords within one index are kept disjoint;
where a keyword sits inside a longer sibling keyword ("skills" in "digital
skills"), occurrences of the longer phrase do not count toward the shorter one.
Overlap across indices is expected (one answer can inform several indices).
"""

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from app.core.readiness.responses import Response


@dataclass(frozen=True)
class KeywordTable:
    """Versioned mapping of index -> dimension -> keywords."""

    version: str
    entries: Mapping[str, Mapping[str, frozenset[str]]]

    def indices(self) -> list[str]:
        return list(self.entries)

    def dimensions(self, index: str) -> list[str]:
        return list(self.entries.get(index, {}))

    def keywords(self, index: str, dimension: str) -> frozenset[str]:
        """Keywords for one dimension. Raises KeyError for unknown names."""
        return self.entries[index][dimension]

    def overlaps(self, index: str) -> dict[tuple[str, str], frozenset[str]]:
        """
        Keywords that collide between dimensions of the same index.

        A collision is a keyword present in both dimensions, or a keyword that
        occurs inside a keyword of the other dimension. Both keywords of a
        containment pair are reported.
        """
        dims = self.entries.get(index, {})
        names = list(dims)
        found: dict[tuple[str, str], frozenset[str]] = {}
        for i, first in enumerate(names):
            for second in names[i + 1:]:
                colliding = set(dims[first] & dims[second])
                for a in dims[first]:
                    for b in dims[second]:
                        if a != b and (a in b or b in a):
                            colliding.update((a, b))
                if colliding:
                    found[(first, second)] = frozenset(colliding)
        return found

    def shadowing(self, index: str, dimension: str) -> frozenset[str]:
        """Sibling keywords that contain one of ``dimension``'s keywords."""
        own = self.keywords(index, dimension)
        return frozenset(
            kw
            for sibling, kws in self.entries[index].items()
            if sibling != dimension
            for kw in kws
            if kw not in own and any(o in kw for o in own)
        )

    def select(self, responses: Sequence[Response], index: str, dimension: str) -> list[Response]:
        """Responses for one dimension, ignoring mentions that belong to a longer sibling keyword."""
        needles = [kw for kw in self.keywords(index, dimension) if kw]
        masks = sorted(self.shadowing(index, dimension), key=len, reverse=True)
        if not masks:
            return select_by_category(responses, needles)

        matched = []
        for r in responses:
            haystack = r.haystack()
            for mask in masks:
                haystack = haystack.replace(mask, " ")
            if any(n in haystack for n in needles):
                matched.append(r)
        return matched


def _table(version: str, raw: Mapping[str, Mapping[str, Iterable[str]]]) -> KeywordTable:
    entries = {
        index: {dim: frozenset(kw.lower() for kw in kws) for dim, kws in dims.items()}
        for index, dims in raw.items()
    }
    return KeywordTable(version=version, entries=entries)


def select_by_category(
    responses: Iterable[Response],
    keywords: re.Pattern[str] | Iterable[str] | str,
) -> list[Response]:
    """
    Filter responses whose prompt/section/tags mention any keyword.

    Args:
        responses: Responses to filter
        keywords: Compiled regular expression, or substrings (case-insensitive)

    Returns:
        Matching responses in input order
    """
    if isinstance(keywords, re.Pattern):
        return [r for r in responses if keywords.search(r.haystack())]

    if isinstance(keywords, str):
        keywords = [keywords]
    needles = [kw.lower() for kw in keywords if kw]
    if not needles:
        return []
    return [r for r in responses if any(n in r.haystack() for n in needles)]


ENTERPRISE_KEYWORDS = _table(
    "1.0.0",
    {
        "dsch": {
            "strategic_alignment": ["strategy", "strategic"],
            "technology_integration": ["tech", "integration", "digital"],
            "leadership_support": ["leader", "governance"],
        },
        "crf": {
            "change_practices": ["change", "adapt", "agile"],
        },
        "lei": {
            "leadership_practices": ["leader", "governance", "reporting"],
        },
    },
)

AI_READINESS_KEYWORDS = _table(
    "1.0.0",
    {
        "airs": {
            "data_readiness": ["data", "database", "storage", "quality", "integration"],
            "infrastructure_capability": ["infrastructure", "cloud", "compute", "network", "hardware"],
            "digital_resources": ["digital", "software", "platform", "tools", "systems"],
        },
        "aics": {
            "staff_competence": ["staff", "skills", "training", "competence", "expertise"],
            "analytical_capability": ["analytical", "analysis", "metrics", "insights", "data science"],
            "digital_skills": ["digital skills", "technology", "ai knowledge", "ml understanding"],
        },
        "aims": {
            "project_governance": ["governance", "project", "management", "oversight", "steering"],
            "change_management": ["change", "adoption", "transformation", "readiness"],
            "implementation_phase": ["maturity", "pilot", "scale", "production", "implementation"],
        },
        "aips": {
            "policy_framework": ["policy", "governance", "guidelines", "framework"],
            "ethical_practices": ["ethics", "bias", "fairness", "responsible"],
            "privacy_protection": ["privacy", "security", "data protection", "confidential"],
            "regulatory_compliance": ["compliance", "regulation", "legal", "audit"],
        },
        "aibs": {
            "expected_benefits": ["benefit", "roi", "value", "improvement", "efficiency"],
            "identified_risks": ["risk", "challenge", "concern", "barrier"],
            "realization_potential": ["potential", "opportunity", "growth", "innovation"],
        },
    },
)
