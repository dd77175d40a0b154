import json
import os
import sys

import pytest

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from neta.core.settings import Settings  # noqa: E402
from neta.models.neta import RawItem  # noqa: E402

GUIDE_PAYLOAD = {
    "category": "food",
    "difficultyLevel": 1,
    "casualPhrases": ["Have you tried the new seasonal onigiri?", "It's everywhere this week."],
    "expandingQuestions": ["Do you have seasonal snacks back home?", "What's your favorite?"],
    "thirtySecondExplanation": "コンビニが季節限定のおにぎりを発売しました。",
    "whyExplanation": "日本では季節感を大切にする文化があり、食べ物にもそれが表れます。",
    "foreignerAnalogies": [
        {"country": "USA", "analogy": "Like pumpkin spice lattes in autumn."},
        {"country": "UK", "analogy": "Similar to mince pies at Christmas."},
    ],
    "talkingHooks": ["Onigiri sales peak in autumn."],
    "numberFacts": ["Convenience stores sell about 6 billion onigiri a year."],
    "practicalQA": [{"question": "Where can I buy one?", "answer": "Any convenience store."}],
    "culturalQA": [{"question": "Why seasonal?", "answer": "Seasons matter in Japanese food."}],
    "deepDiveQA": [{"question": "Is it sustainable?", "answer": "Food waste is a concern."}],
    "relatedAreas": ["Tokyo", "Niigata"],
}


@pytest.fixture
def guide_payload() -> dict:
    """A complete, well-formed model response as a dict."""
    return json.loads(json.dumps(GUIDE_PAYLOAD))


@pytest.fixture
def guide_json(guide_payload) -> str:
    return json.dumps(guide_payload, ensure_ascii=False)


@pytest.fixture
def make_item():
    """Factory for RawItems with predictable identifiers."""

    def _make(index: int = 1, **overrides) -> RawItem:
        fields = {
            "identifier": f"a{index}",
            "title": f"Headline {index}",
            "snippet": f"Snippet for story {index}.",
            "link": f"https://news.example.com/story/{index}",
            "published_at": "2026-10-19T08:30:00+00:00",
            "source_category_tags": ("top",),
        }
        fields.update(overrides)
        return RawItem(**fields)

    return _make


@pytest.fixture
def settings() -> Settings:
    """Fully configured settings that do not read the environment's keys."""
    return Settings(
        _env_file=None,
        news_source="newsdata",
        newsdata_api_key="nd-test-key",
        llm_provider="anthropic",
        anthropic_api_key="sk-ant-test",
        openai_api_key=None,
        google_api_key=None,
        llm_model=None,
        batch_size=3,
    )
