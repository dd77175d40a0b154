"""Pydantic models for raw news items and the conversation guides built from them."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RawItem(BaseModel):
    """Source-neutral news item produced by a SourceAdapter."""

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(..., min_length=1, description="Unique within one fetch")
    title: str = Field(..., min_length=1)
    snippet: str = Field(default="", description="Short description; may be empty")
    link: str = Field(..., description="Canonical article URL used for attribution")
    published_at: str = Field(..., description="ISO-8601 publication timestamp")
    source_category_tags: tuple[str, ...] = Field(default_factory=tuple)


class _GuideModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class ForeignerAnalogy(_GuideModel):
    """Comparison that makes a Japanese topic relatable for someone from ``country``."""

    country: str
    analogy: str


class QAPair(_GuideModel):
    """Question a conversation partner may ask, with a ready answer."""

    question: str
    answer: str


class GuideRecord(_GuideModel):
    """Conversation guide ("neta") for one news item.

    Serialized with camelCase field names. ``identifier`` always equals the
    identifier of the RawItem the guide was built from.
    """

    identifier: str
    title: str
    source_url: str
    published_at: str
    category: str = "general"
    difficulty_level: int = Field(default=2, ge=1, le=3)

    # Conversation starters
    casual_phrases: tuple[str, ...] = ()
    expanding_questions: tuple[str, ...] = ()

    # Background knowledge
    thirty_second_explanation: str = ""
    why_explanation: str = ""
    foreigner_analogies: tuple[ForeignerAnalogy, ...] = ()
    talking_hooks: tuple[str, ...] = ()
    number_facts: tuple[str, ...] = ()

    # Q&A
    practical_qa: tuple[QAPair, ...] = Field(default=(), alias="practicalQA")
    cultural_qa: tuple[QAPair, ...] = Field(default=(), alias="culturalQA")
    deep_dive_qa: tuple[QAPair, ...] = Field(default=(), alias="deepDiveQA")

    related_areas: tuple[str, ...] = ()
