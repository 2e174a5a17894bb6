"""Survey response model and tolerant extraction from assessment payloads.

Assessment data arrives in several shapes (a bare list, an object holding a
``responses`` list or map, or a database row holding ``assessment_responses``).
Everything is normalized into a list of immutable ``Response`` values; shapes we
do not recognize yield an empty list instead of an error.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Response:
    """A single survey answer."""

    prompt: str | None = None
    section: str | None = None
    value: Any = None
    """Ordinal answer, normally 1-5. Left raw; the normalizer handles junk."""
    tags: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_raw(cls, raw: Any) -> "Response":
        """Build a response from an arbitrary item, defaulting anything malformed."""
        if isinstance(raw, Response):
            return raw
        if not isinstance(raw, Mapping):
            return cls()

        return cls(
            prompt=_text_or_none(raw.get("prompt")),
            section=_text_or_none(raw.get("section")),
            value=raw.get("value"),
            tags=_coerce_tags(raw.get("tags")),
        )

    def haystack(self) -> str:
        """Lower-cased prompt, section and tags joined for keyword matching."""
        return f"{self.prompt or ''} {self.section or ''} {' '.join(self.tags)}".lower()


def _text_or_none(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _coerce_tags(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple, set, frozenset)):
        return tuple(str(t) for t in value if isinstance(t, (str, int, float)))
    return ()


def collect_responses(assessment_data: Any) -> list[Response]:
    """
    Extract responses from any supported assessment payload shape.

    Args:
        assessment_data: List of responses, or a mapping with a ``responses``
            list/map, or a mapping with an ``assessment_responses`` list

    Returns:
        List of Response (empty for unrecognized shapes)
    """
    if not assessment_data:
        return []

    if isinstance(assessment_data, (list, tuple)):
        return [Response.from_raw(item) for item in assessment_data]

    if not isinstance(assessment_data, Mapping):
        return []

    raw = assessment_data.get("responses")
    if isinstance(raw, (list, tuple)):
        return [Response.from_raw(item) for item in raw]
    if isinstance(raw, Mapping):
        return [Response.from_raw(item) for item in raw.values()]

    db_rows = assessment_data.get("assessment_responses")
    if isinstance(db_rows, (list, tuple)):
        return [Response.from_raw(item) for item in db_rows]

    return []
