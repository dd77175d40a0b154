"""Project raw LLM output onto a GuideRecord.

The envelope is strict (the text must decode to one JSON object) while the
fields are lenient: anything missing or of the wrong shape falls back to its
default instead of failing the item.
"""

from __future__ import annotations

import json
from typing import Any

from neta.core.errors import MalformedResponseError
from neta.models.neta import ForeignerAnalogy, GuideRecord, QAPair, RawItem
from neta.utils.json_text import strip_code_fence

DEFAULT_CATEGORY = "general"
DEFAULT_DIFFICULTY = 2
VALID_DIFFICULTIES = frozenset({1, 2, 3})


def decode_json_object(raw_text: str) -> dict[str, Any]:
    """Strip an optional code fence and decode a single JSON object."""
    cleaned = strip_code_fence(raw_text or "")
    if not cleaned:
        raise MalformedResponseError("response was empty after removing code fences")
    try:
        value = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"response is not valid JSON: {e}") from e
    if not isinstance(value, dict):
        raise MalformedResponseError(
            f"response JSON is a {type(value).__name__}, expected an object"
        )
    return value


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _string_list(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(entry.strip() for entry in value if isinstance(entry, str) and entry.strip())


def _pairs(value: Any, first: str, second: str) -> list[tuple[str, str]]:
    if not isinstance(value, list):
        return []
    pairs = []
    for entry in value:
        if not isinstance(entry, dict):
            continue
        a, b = _text(entry.get(first)), _text(entry.get(second))
        if a and b:
            pairs.append((a, b))
    return pairs


def _qa_pairs(value: Any) -> tuple[QAPair, ...]:
    return tuple(QAPair(question=q, answer=a) for q, a in _pairs(value, "question", "answer"))


def _analogies(value: Any) -> tuple[ForeignerAnalogy, ...]:
    return tuple(
        ForeignerAnalogy(country=c, analogy=a) for c, a in _pairs(value, "country", "analogy")
    )


def normalize_difficulty(value: Any) -> int:
    """Keep 1, 2 or 3 (ints or numeric strings); anything else becomes 2."""
    if isinstance(value, bool):
        return DEFAULT_DIFFICULTY
    if isinstance(value, str) and value.strip().isdecimal():
        value = int(value.strip())
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and value in VALID_DIFFICULTIES:
        return value
    return DEFAULT_DIFFICULTY


def resolve_category(value: Any, item: RawItem) -> str:
    category = _text(value)
    if category:
        return category
    if item.source_category_tags:
        return item.source_category_tags[0]
    return DEFAULT_CATEGORY


def parse_guide(item: RawItem, raw_text: str) -> GuideRecord:
    """Build the GuideRecord for ``item`` from the model's raw text.

    Raises:
        MalformedResponseError: If the text is not a single JSON object.
    """
    data = decode_json_object(raw_text)

    return GuideRecord(
        identifier=item.identifier,
        title=item.title,
        source_url=item.link,
        published_at=item.published_at,
        category=resolve_category(data.get("category"), item),
        difficulty_level=normalize_difficulty(data.get("difficultyLevel")),
        casual_phrases=_string_list(data.get("casualPhrases")),
        expanding_questions=_string_list(data.get("expandingQuestions")),
        thirty_second_explanation=_text(data.get("thirtySecondExplanation")),
        why_explanation=_text(data.get("whyExplanation")),
        foreigner_analogies=_analogies(data.get("foreignerAnalogies")),
        talking_hooks=_string_list(data.get("talkingHooks")),
        number_facts=_string_list(data.get("numberFacts")),
        practical_qa=_qa_pairs(data.get("practicalQA")),
        cultural_qa=_qa_pairs(data.get("culturalQA")),
        deep_dive_qa=_qa_pairs(data.get("deepDiveQA")),
        related_areas=_string_list(data.get("relatedAreas")),
    )
